"""Dashboard Schemas — overview cards and the revenue chart.

Invariants:
    - CardSummary fields are never None: an empty store reports zeros
    - RevenueChart.months is chronological; y_axis_labels run top → "$0K"
"""

from decimal import Decimal

from pydantic import BaseModel

from app.core.money import format_currency


class CardSummary(BaseModel):
    """Totals for the four overview cards. Money in minor units."""
    invoice_count: int = 0
    customer_count: int = 0
    paid_total: int = 0
    pending_total: int = 0
    paid_total_display: str = "$0.00"
    pending_total_display: str = "$0.00"

    @classmethod
    def build(
        cls, invoice_count: int, customer_count: int, paid_total: int, pending_total: int,
    ) -> "CardSummary":
        return cls(
            invoice_count=invoice_count,
            customer_count=customer_count,
            paid_total=paid_total,
            pending_total=pending_total,
            paid_total_display=format_currency(paid_total),
            pending_total_display=format_currency(pending_total),
        )


class Revenue(BaseModel):
    """Invoice total for one calendar month. Major units."""
    month: str
    year_month: str
    revenue: Decimal


class RevenueChart(BaseModel):
    months: list[Revenue]
    y_axis_labels: list[str]
    top_label: int
