"""
Pydantic models for the X-Invoice header.

This module defines the data structures carried by the header:
- InvoiceHeader, the invoice metadata attached to one email message
- EncodeOptions, the knobs controlling how a header value is rendered
"""

from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, Field

from .config import SCHEMA_VERSION


class InvoiceHeader(BaseModel):
    """
    Invoice metadata carried in the X-Invoice header of an email.

    Field types are coerced on construction, but no business checks are
    applied: a negative amount, an unknown currency or a due date before
    the invoice date are all representable. Keeping such values out is
    the caller's job.

    Attributes:
        version: Schema revision, always "1.0"
        issuer: Name of the company issuing the invoice
        filename: Filename of the attachment in the email body, matching
            the filename part of its Content-Disposition header
        invoice_id: Issuer's internal reference for the invoice
        invoice_date: Date of invoice issuance
        due_date: Date when the invoice is due
        paid: Whether the invoice is paid
        paid_date: Date when the invoice was paid
        amount: Amount of the invoice
        currency: ISO 4217 three-letter currency code
        pay_url: Direct link to the page where the bill can be paid
    """

    version: Literal["1.0"] = Field(
        SCHEMA_VERSION,
        frozen=True,
        description="Schema revision of the header format"
    )

    # ========================================================================
    # Document
    # ========================================================================
    issuer: str = Field(
        ...,
        description="Name of the company issuing the invoice"
    )
    filename: str = Field(
        ...,
        description="Filename of the invoice attachment"
    )
    invoice_id: Optional[str] = Field(
        None,
        description="Issuer's internal reference for the invoice"
    )

    # ========================================================================
    # Dates
    # ========================================================================
    invoice_date: datetime = Field(
        ...,
        description="Date of invoice issuance"
    )
    due_date: Optional[datetime] = Field(
        None,
        description="Date when the invoice is due"
    )

    # ========================================================================
    # Payment
    # ========================================================================
    paid: bool = Field(
        ...,
        description="Flag telling whether the invoice is paid"
    )
    paid_date: Optional[datetime] = Field(
        None,
        description="Date when the invoice was paid"
    )
    amount: Decimal = Field(
        ...,
        allow_inf_nan=False,
        description="Amount of the invoice"
    )
    currency: str = Field(
        ...,
        description="ISO 4217 three-letter currency code (e.g., USD, EUR)"
    )
    pay_url: Optional[str] = Field(
        None,
        alias="payUrl",
        description="Direct link to the page where the bill can be paid"
    )

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {
                    "version": "1.0",
                    "issuer": "Service Provider",
                    "filename": "bill.pdf",
                    "invoice_id": "XF4321-89",
                    "invoice_date": "2015-01-10T00:00:00+01:00",
                    "due_date": "2015-01-30T12:00:00+01:00",
                    "paid": True,
                    "paid_date": "2015-01-10T08:35:12+01:00",
                    "amount": 39.90,
                    "currency": "USD",
                    "payUrl": "https://billing.example.com/paybill?id=XF4321-89"
                }
            ]
        }
    }


class EncodeOptions(BaseModel):
    """Rendering options for an encoded header value."""
    pretty: bool = Field(
        False,
        description="Indent the JSON object, one key per line"
    )
    escape_html: bool = Field(
        False,
        description="Escape <, >, & and ' inside string values"
    )

    model_config = {"frozen": True}
