"""Customer Schemas — customer table rows and form select options.

Invariants:
    - Totals are minor units and never None (customers without invoices report 0)
"""

from typing import Any, Mapping

from pydantic import BaseModel

from app.core.money import format_currency


class CustomerSummary(BaseModel):
    """Customer with aggregated invoice statistics."""
    id: str
    name: str
    email: str
    image_url: str
    total_invoices: int
    total_pending: int
    total_paid: int
    total_pending_display: str
    total_paid_display: str

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "CustomerSummary":
        pending = int(row["total_pending"] or 0)
        paid = int(row["total_paid"] or 0)
        return cls(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            image_url=row["image_url"],
            total_invoices=int(row["total_invoices"] or 0),
            total_pending=pending,
            total_paid=paid,
            total_pending_display=format_currency(pending),
            total_paid_display=format_currency(paid),
        )


class CustomerOption(BaseModel):
    """Customer entry for the invoice form's customer select."""
    id: str
    name: str
