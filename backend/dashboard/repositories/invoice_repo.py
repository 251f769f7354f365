from typing import List, Optional, Tuple

from sqlalchemy import String, cast, delete, func, insert, or_, select, update
from sqlalchemy.orm import Session

from dashboard.models.customer import Customer
from dashboard.models.invoice import Invoice


class InvoiceRepository:
    def __init__(self, db: Session):
        self.db = db

    def insert(self, customer_id: str, amount_cents: int, status: str, date: str) -> None:
        # id comes from the column default
        self.db.execute(
            insert(Invoice).values(
                customer_id=customer_id,
                amount=amount_cents,
                status=status,
                date=date,
            )
        )

    def update(self, invoice_id: str, customer_id: str, amount_cents: int, status: str) -> int:
        """Returns the number of rows matched."""
        result = self.db.execute(
            update(Invoice)
            .where(Invoice.id == invoice_id)
            .values(customer_id=customer_id, amount=amount_cents, status=status)
        )
        return result.rowcount

    def delete(self, invoice_id: str) -> int:
        result = self.db.execute(delete(Invoice).where(Invoice.id == invoice_id))
        return result.rowcount

    def get(self, invoice_id: str) -> Optional[Tuple[Invoice, Customer]]:
        return self.db.execute(
            select(Invoice, Customer)
            .join(Customer, Invoice.customer_id == Customer.id)
            .where(Invoice.id == invoice_id)
        ).first()

    def _search(self, query, q: Optional[str]):
        query = query.join(Customer, Invoice.customer_id == Customer.id)
        if q:
            like = f"%{q}%"
            query = query.where(
                or_(
                    Customer.name.ilike(like),
                    Customer.email.ilike(like),
                    Invoice.status.ilike(like),
                    Invoice.date.ilike(like),
                    cast(Invoice.amount, String).ilike(like),
                )
            )
        return query

    def list(
        self, q: Optional[str] = None, page: int = 1, size: int = 20
    ) -> Tuple[List[Tuple[Invoice, Customer]], int]:
        total = self.db.execute(
            self._search(select(func.count(Invoice.id)), q)
        ).scalar() or 0
        rows = self.db.execute(
            self._search(select(Invoice, Customer), q)
            .order_by(Invoice.date.desc(), Invoice.id)
            .offset((page - 1) * size)
            .limit(size)
        ).all()
        return rows, total
