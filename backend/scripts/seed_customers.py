#!/usr/bin/env python3
"""
Seed customers (and optionally a few invoices) so the invoice form has something to pick.

Usage:
    python scripts/seed_customers.py
    python scripts/seed_customers.py --file customers.json --with-invoices
"""
import argparse
import json
import os
import sys

# allow running from repo/scripts
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from dashboard.db import SessionLocal, init_db
from dashboard.repositories.customer_repo import CustomerRepository
from dashboard.repositories.invoice_repo import InvoiceRepository

DEFAULT_CUSTOMERS = [
    {"name": "Evil Rabbit", "email": "evil@rabbit.com", "image_url": "/customers/evil-rabbit.png"},
    {"name": "Delba de Oliveira", "email": "delba@oliveira.com", "image_url": "/customers/delba-de-oliveira.png"},
    {"name": "Lee Robinson", "email": "lee@robinson.com", "image_url": "/customers/lee-robinson.png"},
    {"name": "Michael Novotny", "email": "michael@novotny.com", "image_url": "/customers/michael-novotny.png"},
]

SAMPLE_INVOICES = [
    {"amount": 15795, "status": "pending", "date": "2022-12-06"},
    {"amount": 20348, "status": "pending", "date": "2022-11-14"},
    {"amount": 3040, "status": "paid", "date": "2022-10-29"},
    {"amount": 44800, "status": "paid", "date": "2023-09-10"},
]


def seed(entries, with_invoices: bool = False):
    init_db()
    db = SessionLocal()
    repo = CustomerRepository(db)
    try:
        customers = [
            repo.get_or_create(
                name=e["name"], email=e["email"], image_url=e.get("image_url"), id=e.get("id")
            )
            for e in entries
            if e.get("name") and e.get("email")
        ]
        if with_invoices:
            invoices = InvoiceRepository(db)
            for c, inv in zip(customers, SAMPLE_INVOICES):
                invoices.insert(c.id, inv["amount"], inv["status"], inv["date"])
        db.commit()
        print("Seeded customers:", len(customers))
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--file", "-f", default=None, help="JSON list of {name, email, image_url}")
    parser.add_argument("--with-invoices", action="store_true", help="also insert one sample invoice per customer")
    args = parser.parse_args()
    entries = DEFAULT_CUSTOMERS
    if args.file:
        if not os.path.exists(args.file):
            print("File not found:", args.file)
            sys.exit(1)
        with open(args.file, "r", encoding="utf-8") as f:
            entries = json.load(f)
    seed(entries, with_invoices=args.with_invoices)
