from typing import Optional

from fastapi import APIRouter, Depends, Form, HTTPException, Query, Request, Response
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.orm import Session

from dashboard.adapters.page_cache import PageCache, get_page_cache
from dashboard.config import settings
from dashboard.db import SessionLocal, get_db
from dashboard.repositories.invoice_repo import InvoiceRepository
from dashboard.schemas.invoice_schema import InvoiceOut
from dashboard.services.effects import ActionResult, Redirect
from dashboard.services.invoice_service import (
    InvoiceDeleteDisabled,
    InvoiceMutationService,
)
from dashboard.services.invoice_validation import (
    InvoiceServiceException,
    InvoiceValidationError,
)
from dashboard.utils.log import get_logger

log = get_logger("routes")

router = APIRouter(prefix=settings.INVOICES_PATH, tags=["invoices"])


def get_invoice_service(cache: PageCache = Depends(get_page_cache)) -> InvoiceMutationService:
    return InvoiceMutationService(SessionLocal, cache)


def _to_out(invoice, customer) -> dict:
    out = InvoiceOut.model_validate(invoice)
    out.name = customer.name
    out.email = customer.email
    out.image_url = customer.image_url
    return out.model_dump()


def _respond(result: ActionResult) -> Response:
    if isinstance(result, Redirect):
        return RedirectResponse(result.path, status_code=303)
    state = result.state
    status_code = 422 if state.errors else 500
    return JSONResponse(status_code=status_code, content=state.model_dump())


@router.get("", summary="List invoices")
def list_invoices(
    request: Request,
    q: Optional[str] = Query(None, description="search term"),
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=200),
    db: Session = Depends(get_db),
    cache: PageCache = Depends(get_page_cache),
):
    key = PageCache.key_for(settings.INVOICES_PATH, request.url.query)
    cached = cache.get(key)
    if cached is not None:
        return cached

    rows, total = InvoiceRepository(db).list(q=q, page=page, size=size)
    body = {
        "items": [_to_out(inv, cust) for inv, cust in rows],
        "total": total,
        "page": page,
        "size": size,
    }
    cache.set(key, body)
    return body


@router.get("/{invoice_id}", summary="Get invoice by id")
def get_invoice(invoice_id: str, db: Session = Depends(get_db)):
    row = InvoiceRepository(db).get(invoice_id)
    if not row:
        raise HTTPException(status_code=404, detail="Invoice not found")
    return _to_out(*row)


@router.post("/create", summary="Create invoice from form")
def create_invoice(
    customerId: Optional[str] = Form(None),
    amount: Optional[str] = Form(None),
    status: Optional[str] = Form(None),
    svc: InvoiceMutationService = Depends(get_invoice_service),
):
    form = {"customerId": customerId, "amount": amount, "status": status}
    return _respond(svc.create_invoice(None, form))


@router.post("/{invoice_id}/edit", summary="Update invoice from form")
def update_invoice(
    invoice_id: str,
    customerId: Optional[str] = Form(None),
    amount: Optional[str] = Form(None),
    status: Optional[str] = Form(None),
    svc: InvoiceMutationService = Depends(get_invoice_service),
):
    form = {"customerId": customerId, "amount": amount, "status": status}
    try:
        result = svc.update_invoice(invoice_id, form)
    except InvoiceValidationError as e:
        raise HTTPException(status_code=422, detail={"errors": e.field_errors})
    return _respond(result)


@router.post("/{invoice_id}/delete", status_code=204, summary="Delete invoice")
def delete_invoice(
    invoice_id: str,
    svc: InvoiceMutationService = Depends(get_invoice_service),
):
    try:
        svc.delete_invoice(invoice_id)
    except InvoiceDeleteDisabled as e:
        raise HTTPException(status_code=403, detail=str(e))
    except InvoiceServiceException as e:
        log.error(f"delete_invoice(): {e}")
        raise HTTPException(status_code=500, detail="Database Error: Failed to Delete Invoice.")
    return Response(status_code=204)
