from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Union

from pydantic import ValidationError

from dashboard.schemas.invoice_schema import InvoiceForm

FORM_FIELDS = ("customerId", "amount", "status")

FIELD_MESSAGES = {
    "customerId": "Please select a customer.",
    "amount": "Please enter an amount greater than $0.",
    "status": "Please select an invoice status.",
}


class InvoiceServiceException(Exception):
    pass


class InvoiceValidationError(InvoiceServiceException):
    def __init__(self, field_errors: Dict[str, List[str]]):
        self.field_errors = field_errors
        super().__init__(f"Invalid invoice form: {', '.join(sorted(field_errors))}")


@dataclass
class Ok:
    data: InvoiceForm


@dataclass
class Invalid:
    field_errors: Dict[str, List[str]] = field(default_factory=dict)


ValidationResult = Union[Ok, Invalid]


def _field_value(form: Mapping, name: str) -> Optional[str]:
    value = form.get(name)
    if isinstance(value, str):
        value = value.strip()
    return value


def validate_invoice_form(form: Mapping) -> ValidationResult:
    """
    Validate the customerId / amount / status fields of a submitted form.

    Every failing field is reported (one user-facing message each); pydantic's
    own error text never reaches the caller. Missing keys count as absent values.
    """
    raw = {name: _field_value(form, name) for name in FORM_FIELDS}
    try:
        return Ok(InvoiceForm.model_validate(raw))
    except ValidationError as e:
        errors: Dict[str, List[str]] = {}
        for err in e.errors():
            name = err["loc"][0] if err["loc"] else None
            if name == "customer_id":
                name = "customerId"
            if name not in FIELD_MESSAGES or name in errors:
                continue
            errors[name] = [FIELD_MESSAGES[name]]
        return Invalid(errors)


def parse_invoice_form(form: Mapping) -> InvoiceForm:
    """Strict variant: raise InvoiceValidationError instead of returning Invalid."""
    result = validate_invoice_form(form)
    if isinstance(result, Invalid):
        raise InvoiceValidationError(result.field_errors)
    return result.data
