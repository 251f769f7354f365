# backend/dashboard/schemas/invoice_schema.py
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# largest dollar amount whose cent value still fits a signed 64-bit INTEGER column
MAX_AMOUNT = Decimal("92233720368547758")


def _to_cents(amount: Decimal) -> int:
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class InvoiceForm(BaseModel):
    """Parsed create/edit invoice form. Validated by alias (the form field names)."""

    model_config = ConfigDict(populate_by_name=True)

    customer_id: str = Field(..., alias="customerId", min_length=1)
    amount: Decimal = Field(..., gt=0, lt=MAX_AMOUNT, allow_inf_nan=False)
    status: Literal["pending", "paid"]

    @field_validator("amount")
    @classmethod
    def amount_at_least_one_cent(cls, v: Decimal) -> Decimal:
        if _to_cents(v) < 1:
            raise ValueError("amount rounds to zero cents")
        return v

    @property
    def amount_in_cents(self) -> int:
        return _to_cents(self.amount)


class InvoiceFormState(BaseModel):
    errors: Dict[str, List[str]] = Field(default_factory=dict)
    message: Optional[str] = None


class InvoiceOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    customer_id: str
    amount: int
    status: str
    date: str
    name: Optional[str] = None
    email: Optional[str] = None
    image_url: Optional[str] = None


class CustomerOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    name: str
    email: Optional[str] = None
    image_url: Optional[str] = None
