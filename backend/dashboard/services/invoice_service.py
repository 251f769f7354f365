from datetime import datetime, timezone
from typing import Callable, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from dashboard.adapters.page_cache import PageCache
from dashboard.config import settings
from dashboard.repositories.invoice_repo import InvoiceRepository
from dashboard.schemas.invoice_schema import InvoiceFormState
from dashboard.services.effects import ActionResult, Redirect, Rerender
from dashboard.services.invoice_validation import (
    Invalid,
    InvoiceServiceException,
    parse_invoice_form,
    validate_invoice_form,
)
from dashboard.utils.log import get_logger
from dashboard.utils.transactions import checkout_session, smart_transaction

log = get_logger("invoices")

MISSING_FIELDS_MESSAGE = "Missing Fields. Failed to Create Invoice."
CREATE_FAILED_MESSAGE = "Database Error: Failed to Create Invoice."


class InvoiceDeleteDisabled(InvoiceServiceException):
    pass


class InvoiceMutationService:
    def __init__(
        self,
        session_factory: Callable[[], Session],
        cache: PageCache,
        invoices_path: Optional[str] = None,
        allow_delete: Optional[bool] = None,
    ):
        self.session_factory = session_factory
        self.cache = cache
        self.invoices_path = invoices_path or settings.INVOICES_PATH
        self.allow_delete = (
            settings.ALLOW_INVOICE_DELETE if allow_delete is None else allow_delete
        )

    def _today(self) -> str:
        return datetime.now(timezone.utc).date().isoformat()

    def create_invoice(
        self, prev_state: Optional[InvoiceFormState], form: Mapping
    ) -> ActionResult:
        """
        Validate `form` and insert a new invoice.

        Returns Rerender(state) when validation or the insert fails, otherwise
        revalidates the listing page and returns Redirect(listing path).
        `prev_state` is the state last rendered with the form; it is not consulted.
        """
        with checkout_session(self.session_factory) as db:
            result = validate_invoice_form(form)
            if isinstance(result, Invalid):
                log.info(f"{MISSING_FIELDS_MESSAGE} errors={result.field_errors}")
                return Rerender(
                    InvoiceFormState(
                        errors=result.field_errors, message=MISSING_FIELDS_MESSAGE
                    )
                )

            data = result.data
            amount_cents = data.amount_in_cents
            date = self._today()
            try:
                with smart_transaction(db):
                    InvoiceRepository(db).insert(
                        data.customer_id, amount_cents, data.status, date
                    )
            except SQLAlchemyError:
                log.exception("create_invoice(): insert failed")
                return Rerender(InvoiceFormState(message=CREATE_FAILED_MESSAGE))

        log.info(
            f"create_invoice(): customer_id={data.customer_id!r} amount={amount_cents} status={data.status}"
        )
        self.cache.revalidate_path(self.invoices_path)
        return Redirect(self.invoices_path)

    def update_invoice(self, invoice_id: str, form: Mapping) -> Redirect:
        """
        Strictly parse `form` (InvoiceValidationError before any DB access),
        update the row and redirect to the listing.

        Database errors are logged and do not stop the redirect.
        """
        data = parse_invoice_form(form)
        amount_cents = data.amount_in_cents

        with checkout_session(self.session_factory) as db:
            try:
                with smart_transaction(db):
                    matched = InvoiceRepository(db).update(
                        invoice_id, data.customer_id, amount_cents, data.status
                    )
                if not matched:
                    log.warning(f"update_invoice(): no invoice with id={invoice_id!r}")
            except SQLAlchemyError:
                log.exception(f"update_invoice(): update failed for id={invoice_id!r}")

        self.cache.revalidate_path(self.invoices_path)
        return Redirect(self.invoices_path)

    def delete_invoice(self, invoice_id: str) -> None:
        if not self.allow_delete:
            raise InvoiceDeleteDisabled("Invoice deletion is disabled")

        with checkout_session(self.session_factory) as db:
            try:
                with smart_transaction(db):
                    deleted = InvoiceRepository(db).delete(invoice_id)
            except SQLAlchemyError as e:
                log.exception(f"delete_invoice(): delete failed for id={invoice_id!r}")
                raise InvoiceServiceException(f"Failed to delete invoice: {e}")

        if not deleted:
            log.warning(f"delete_invoice(): no invoice with id={invoice_id!r}")
        self.cache.revalidate_path(self.invoices_path)
