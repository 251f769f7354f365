import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from dashboard.adapters.page_cache import PageCache, page_cache
from dashboard.api.routes_invoices import get_invoice_service
from dashboard.db import SessionLocal
from dashboard.main import app
from dashboard.repositories.invoice_repo import InvoiceRepository
from dashboard.services.invoice_service import InvoiceMutationService

client = TestClient(app)


@pytest.fixture(autouse=True)
def fresh_cache():
    page_cache.clear()
    yield
    app.dependency_overrides.clear()


def _create(customer_id, amount, status="pending"):
    return client.post(
        "/dashboard/invoices/create",
        data={"customerId": customer_id, "amount": amount, "status": status},
        follow_redirects=False,
    )


def _listing(q):
    res = client.get("/dashboard/invoices", params={"q": q})
    assert res.status_code == 200
    return res.json()


def test_create_redirects_to_listing():
    res = _create("c1", "15.50")
    assert res.status_code == 303
    assert res.headers["location"] == "/dashboard/invoices"


def test_create_invalid_returns_form_state():
    res = client.post("/dashboard/invoices/create", data={"amount": "0"}, follow_redirects=False)
    assert res.status_code == 422
    body = res.json()
    assert body["message"] == "Missing Fields. Failed to Create Invoice."
    assert body["errors"] == {
        "customerId": ["Please select a customer."],
        "amount": ["Please enter an amount greater than $0."],
        "status": ["Please select an invoice status."],
    }


def test_listing_is_cached_until_revalidated():
    first = _listing("Quinn")
    assert page_cache.get("/dashboard/invoices?q=Quinn") == first

    assert _create("c3", "42.10", "paid").status_code == 303
    assert page_cache.get("/dashboard/invoices?q=Quinn") is None

    second = _listing("Quinn")
    assert second["total"] == first["total"] + 1
    created = second["items"][0]
    assert created["name"] == "Quinn Listing"
    assert created["amount"] == 4210
    assert created["status"] == "paid"


def test_get_edit_and_delete_invoice():
    assert _create("c3", "9.99").status_code == 303
    item = next(it for it in _listing("quinn@listing.com")["items"] if it["amount"] == 999)
    invoice_id = item["id"]

    res = client.get(f"/dashboard/invoices/{invoice_id}")
    assert res.status_code == 200
    assert res.json()["customer_id"] == "c3"

    res = client.post(
        f"/dashboard/invoices/{invoice_id}/edit",
        data={"customerId": "c2", "amount": "100", "status": "paid"},
        follow_redirects=False,
    )
    assert res.status_code == 303
    assert res.headers["location"] == "/dashboard/invoices"
    updated = client.get(f"/dashboard/invoices/{invoice_id}").json()
    assert (updated["customer_id"], updated["amount"], updated["status"]) == ("c2", 10000, "paid")
    assert updated["name"] == "Lee Robinson"

    res = client.post(f"/dashboard/invoices/{invoice_id}/delete")
    assert res.status_code == 204
    assert client.get(f"/dashboard/invoices/{invoice_id}").status_code == 404


def test_edit_invalid_returns_422():
    res = client.post(
        "/dashboard/invoices/any-id/edit",
        data={"customerId": "c1", "amount": "abc", "status": "paid"},
        follow_redirects=False,
    )
    assert res.status_code == 422
    assert res.json()["detail"]["errors"] == {"amount": ["Please enter an amount greater than $0."]}


def test_delete_disabled_returns_403():
    app.dependency_overrides[get_invoice_service] = lambda: InvoiceMutationService(
        SessionLocal, PageCache(), allow_delete=False
    )
    res = client.post("/dashboard/invoices/whatever/delete")
    assert res.status_code == 403


def test_get_missing_invoice_404():
    assert client.get("/dashboard/invoices/does-not-exist").status_code == 404


def test_list_customers():
    res = client.get("/dashboard/customers")
    assert res.status_code == 200
    names = [c["name"] for c in res.json()]
    assert "Evil Rabbit" in names
    assert names == sorted(names)


def _db_down(*args, **kwargs):
    raise OperationalError("statement", {}, Exception("database is down"))


def test_create_database_error_returns_500_with_message(monkeypatch):
    monkeypatch.setattr(InvoiceRepository, "insert", _db_down)
    res = _create("c1", "15.50")
    assert res.status_code == 500
    assert res.json() == {"errors": {}, "message": "Database Error: Failed to Create Invoice."}


def test_create_unknown_customer_returns_500():
    res = _create("no-such-customer", "5")
    assert res.status_code == 500
    assert res.json()["message"] == "Database Error: Failed to Create Invoice."


def test_delete_database_error_returns_500(monkeypatch):
    monkeypatch.setattr(InvoiceRepository, "delete", _db_down)
    res = client.post("/dashboard/invoices/any-id/delete")
    assert res.status_code == 500
    assert res.json()["detail"] == "Database Error: Failed to Delete Invoice."
