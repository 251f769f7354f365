from typing import List

from dashboard.models.customer import Customer
from sqlalchemy.orm import Session


class CustomerRepository:
    def __init__(self, db: Session):
        self.db = db

    def list(self) -> List[Customer]:
        return self.db.query(Customer).order_by(Customer.name).all()

    def get_or_create(self, name: str, email: str, image_url: str = None, id: str = None) -> Customer:
        c = self.db.query(Customer).filter(Customer.email == email).first()
        if c:
            return c
        c = Customer(name=name, email=email, image_url=image_url)
        if id:
            c.id = id
        self.db.add(c)
        self.db.flush()
        return c
