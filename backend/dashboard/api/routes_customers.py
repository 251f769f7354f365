from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from dashboard.db import get_db
from dashboard.repositories.customer_repo import CustomerRepository
from dashboard.schemas.invoice_schema import CustomerOut

router = APIRouter(prefix="/dashboard/customers", tags=["customers"])


@router.get("", summary="List customers for the invoice form picker")
def list_customers(db: Session = Depends(get_db)):
    return [CustomerOut.model_validate(c).model_dump() for c in CustomerRepository(db).list()]
