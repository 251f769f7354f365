import pytest

from dashboard.services.invoice_validation import (
    FIELD_MESSAGES,
    Invalid,
    InvoiceValidationError,
    Ok,
    parse_invoice_form,
    validate_invoice_form,
)


def test_valid_form_parses_and_converts_to_cents():
    result = validate_invoice_form({"customerId": "c1", "amount": "15.50", "status": "pending"})
    assert isinstance(result, Ok)
    assert result.data.customer_id == "c1"
    assert result.data.status == "pending"
    assert result.data.amount_in_cents == 1550


@pytest.mark.parametrize(
    "amount,cents",
    [("10", 1000), ("0.29", 29), ("19.99", 1999), ("0.005", 1), (" 7.1 ", 710)],
)
def test_amount_in_cents(amount, cents):
    result = validate_invoice_form({"customerId": "c1", "amount": amount, "status": "paid"})
    assert result.data.amount_in_cents == cents


@pytest.mark.parametrize(
    "amount",
    ["0", "-1", "-0.01", "0.00", "", None, "abc", "nan", "inf", "0.001", "0.004", "1e17", "1e30", "92233720368547758"],
)
def test_amount_must_be_positive_number(amount):
    result = validate_invoice_form({"customerId": "c1", "amount": amount, "status": "paid"})
    assert isinstance(result, Invalid)
    assert result.field_errors == {"amount": [FIELD_MESSAGES["amount"]]}


@pytest.mark.parametrize("customer_id", [None, "", "   "])
def test_customer_required(customer_id):
    result = validate_invoice_form({"customerId": customer_id, "amount": "5", "status": "paid"})
    assert isinstance(result, Invalid)
    assert result.field_errors == {"customerId": ["Please select a customer."]}


@pytest.mark.parametrize("status", [None, "", "overdue", "PAID"])
def test_status_must_be_known(status):
    result = validate_invoice_form({"customerId": "c1", "amount": "5", "status": status})
    assert isinstance(result, Invalid)
    assert result.field_errors == {"status": ["Please select an invoice status."]}


def test_all_failures_reported_together():
    result = validate_invoice_form({})
    assert isinstance(result, Invalid)
    assert result.field_errors == {
        "customerId": ["Please select a customer."],
        "amount": ["Please enter an amount greater than $0."],
        "status": ["Please select an invoice status."],
    }


def test_parse_raises_with_field_errors():
    with pytest.raises(InvoiceValidationError) as exc:
        parse_invoice_form({"customerId": "c1", "amount": "-3", "status": "void"})
    assert set(exc.value.field_errors) == {"amount", "status"}


def test_parse_returns_data():
    data = parse_invoice_form({"customerId": "c2", "amount": "1", "status": "paid"})
    assert data.amount_in_cents == 100


def test_largest_amount_fits_signed_64bit_cents():
    result = validate_invoice_form({"customerId": "c1", "amount": "92233720368547757.99", "status": "paid"})
    assert isinstance(result, Ok)
    assert result.data.amount_in_cents == 9223372036854775799
    assert result.data.amount_in_cents < 2**63
