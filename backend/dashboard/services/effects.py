from dataclasses import dataclass
from typing import Union

from dashboard.schemas.invoice_schema import InvoiceFormState


@dataclass(frozen=True)
class Redirect:
    """Navigate the caller to `path` instead of rendering a result."""

    path: str


@dataclass(frozen=True)
class Rerender:
    """Render the submitting form again with `state` (field errors and/or a message)."""

    state: InvoiceFormState


ActionResult = Union[Redirect, Rerender]
