"""Invoice Schemas — read models returned by the invoice endpoints.

Invariants:
    - InvoiceView.amount is minor units; amount_display is the formatted major-unit string
    - InvoiceDetail.amount is major units (Decimal, two places) for pre-filling edit forms
    - InvoicePage.invoices never exceeds PAGE_SIZE rows

Design Decisions:
    - Display strings computed once at construction (from_row): the UI never re-derives money
"""

from decimal import Decimal
from typing import Any, Mapping

from pydantic import BaseModel

from app.core.domain_types import CustomerId, InvoiceId, InvoiceStatus
from app.core.format_dates import format_date_to_local
from app.core.money import format_currency, from_minor_units


class InvoiceView(BaseModel):
    """Invoice joined with its customer, for tables and overview widgets."""
    id: InvoiceId
    customer_id: CustomerId
    name: str
    email: str
    image_url: str
    amount: int
    amount_display: str
    date: str
    date_display: str
    status: InvoiceStatus

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "InvoiceView":
        return cls(
            id=row["id"],
            customer_id=row["customer_id"],
            name=row["name"],
            email=row["email"],
            image_url=row["image_url"],
            amount=row["amount"],
            amount_display=format_currency(row["amount"]),
            date=row["date"],
            date_display=format_date_to_local(row["date"]),
            status=InvoiceStatus(row["status"]),
        )


class InvoiceDetail(BaseModel):
    """Single invoice for the edit form. Amount in major units."""
    id: InvoiceId
    customer_id: CustomerId
    amount: Decimal
    date: str
    status: InvoiceStatus

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "InvoiceDetail":
        return cls(
            id=row["id"],
            customer_id=row["customer_id"],
            amount=from_minor_units(row["amount"]),
            date=row["date"],
            status=InvoiceStatus(row["status"]),
        )


class InvoicePage(BaseModel):
    """One page of the invoice table plus what the pager needs."""
    query: str
    page: int
    total_pages: int
    pagination: list[int | str]
    invoices: list[InvoiceView]


class InvoicePageCount(BaseModel):
    query: str
    total_pages: int
