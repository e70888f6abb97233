"""
Shared fixtures for the X-Invoice header tests.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from email_invoice.schemas import InvoiceHeader


CET = timezone(timedelta(hours=1))


@pytest.fixture
def sample_header() -> InvoiceHeader:
    """A fully populated, paid invoice header."""
    return InvoiceHeader(
        issuer="Service Provider",
        filename="bill.pdf",
        invoice_id="XF4321-89",
        paid=True,
        invoice_date=datetime(2015, 1, 10, 0, 0, 0, tzinfo=CET),
        due_date=datetime(2015, 1, 30, 12, 0, 0, tzinfo=CET),
        paid_date=datetime(2015, 1, 10, 8, 35, 12, tzinfo=CET),
        amount=Decimal("39.90"),
        currency="USD",
    )


@pytest.fixture
def minimal_header() -> InvoiceHeader:
    """An unpaid invoice header with only the required fields set."""
    return InvoiceHeader(
        issuer="Service Provider",
        filename="bill.pdf",
        invoice_date=datetime(2015, 1, 10, 0, 0, 0, tzinfo=CET),
        paid=False,
        amount=Decimal("120"),
        currency="EUR",
    )


@pytest.fixture
def sample_payload() -> dict:
    """The decoded JSON object of a well-formed header value."""
    return {
        "version": "1.0",
        "issuer": "Service Provider",
        "filename": "bill.pdf",
        "invoice_id": "XF4321-89",
        "invoice_date": "2015-01-10T00:00:00+01:00",
        "due_date": "2015-01-30T12:00:00+01:00",
        "paid": True,
        "paid_date": "2015-01-10T08:35:12+01:00",
        "amount": Decimal("39.90"),
        "currency": "USD",
        "payUrl": "https://billing.example.com/paybill?id=XF4321-89",
    }
