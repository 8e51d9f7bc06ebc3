"""Query Service — filtered, paginated reads and dashboard aggregates.

Invariants:
    - Read-only: no statement issued here writes
    - Filtering, ordering and pagination happen in SQL; result sets are bounded by LIMIT
    - User input reaches the store only as bind parameters (LIKE wildcards escaped)
    - Any store failure surfaces as DataFetchError with a generic message (no retry, no partial result)
    - fetch_card_summary fans out its three queries on separate sessions; one failure fails all

Design Decisions:
    - Multi-column search as ONE disjunctive predicate, not one round trip per column
    - Stable order (date DESC, id ASC): rows never repeat across adjacent pages
    - Store handle injected (SessionProvider): tests swap in failing doubles
"""

import asyncio
import logging
from typing import Any

from sqlalchemy import String, case, cast, func, or_, select, true
from sqlalchemy.sql.elements import ColumnElement

from app.core.domain_types import InvoiceId, InvoiceStatus
from app.core.errors import (
    DatabaseError, DataFetchError, ErrorContext, InputValidationError,
    ResourceNotFoundError,
)
from app.core.format_dates import month_label
from app.core.money import from_minor_units
from app.core.pagination import MAX_ROW_OFFSET, PAGE_SIZE, page_offset, total_pages
from app.core.repository_protocols import SessionProvider
from app.models.customer import Customer
from app.models.invoice import Invoice
from app.schemas.customer import CustomerOption, CustomerSummary
from app.schemas.dashboard import CardSummary, Revenue
from app.schemas.invoice import InvoiceDetail, InvoiceView

logger = logging.getLogger(__name__)

LATEST_INVOICES_LIMIT: int = 5
REVENUE_MONTHS: int = 12

_INVOICE_VIEW_COLUMNS = (
    Invoice.id,
    Invoice.customer_id,
    Invoice.amount,
    Invoice.date,
    Invoice.status,
    Customer.name,
    Customer.email,
    Customer.image_url,
)


def invoice_search_filter(query: str) -> ColumnElement[bool]:
    """Case-insensitive substring match across customer and invoice columns."""
    if not query:
        return true()
    return or_(
        Customer.name.icontains(query, autoescape=True),
        Customer.email.icontains(query, autoescape=True),
        cast(Invoice.amount, String).icontains(query, autoescape=True),
        Invoice.date.icontains(query, autoescape=True),
        Invoice.status.icontains(query, autoescape=True),
    )


def customer_search_filter(query: str) -> ColumnElement[bool]:
    if not query:
        return true()
    return or_(
        Customer.name.icontains(query, autoescape=True),
        Customer.email.icontains(query, autoescape=True),
    )


def _sum_where_status(status: InvoiceStatus):
    return func.coalesce(
        func.sum(case((Invoice.status == status.value, Invoice.amount), else_=0)),
        0,
    )


class QueryService:
    """Read side of the dashboard. One instance per request is fine (stateless)."""

    def __init__(self, store: SessionProvider):
        self._store = store

    async def _fetch(self, stmt, failure_message: str, operation: str) -> list[Any]:
        """Execute a read statement, collapsing store failures to DataFetchError."""
        try:
            async with self._store.session() as db:
                result = await db.execute(stmt)
                return list(result.mappings().all())
        except DatabaseError as e:
            logger.error(
                f"{failure_message} ({e.message})",
                extra={"error_code": e.code, "operation": operation},
            )
            raise DataFetchError(
                failure_message, ErrorContext(operation=operation),
            ) from e

    # ─── Invoices ────────────────────────────────────────────────

    async def list_invoices(self, query: str, page: int) -> list[InvoiceView]:
        """One page (PAGE_SIZE rows) of invoices matching query, newest first."""
        if page < 1:
            raise InputValidationError(
                f"page must be >= 1, got {page}", field="page",
            )
        if page_offset(page) > MAX_ROW_OFFSET:
            return []
        stmt = (
            select(*_INVOICE_VIEW_COLUMNS)
            .join(Customer, Invoice.customer_id == Customer.id)
            .where(invoice_search_filter(query))
            .order_by(Invoice.date.desc(), Invoice.id.asc())
            .limit(PAGE_SIZE)
            .offset(page_offset(page))
        )
        rows = await self._fetch(stmt, "Failed to fetch invoices.", "list_invoices")
        return [InvoiceView.from_row(r) for r in rows]

    async def count_invoice_pages(self, query: str) -> int:
        stmt = (
            select(func.count(Invoice.id).label("count"))
            .join(Customer, Invoice.customer_id == Customer.id)
            .where(invoice_search_filter(query))
        )
        rows = await self._fetch(
            stmt, "Failed to fetch total number of invoices.", "count_invoice_pages",
        )
        count = rows[0]["count"] if rows else 0
        return total_pages(int(count or 0))

    async def fetch_invoice_by_id(self, invoice_id: InvoiceId) -> InvoiceDetail:
        stmt = select(
            Invoice.id, Invoice.customer_id, Invoice.amount,
            Invoice.date, Invoice.status,
        ).where(Invoice.id == invoice_id)
        rows = await self._fetch(stmt, "Failed to fetch invoice.", "fetch_invoice_by_id")
        if not rows:
            raise ResourceNotFoundError(
                "Invoice", invoice_id, ErrorContext(invoice_id=invoice_id),
            )
        return InvoiceDetail.from_row(rows[0])

    async def fetch_latest_invoices(self) -> list[InvoiceView]:
        stmt = (
            select(*_INVOICE_VIEW_COLUMNS)
            .join(Customer, Invoice.customer_id == Customer.id)
            .order_by(Invoice.date.desc(), Invoice.id.asc())
            .limit(LATEST_INVOICES_LIMIT)
        )
        rows = await self._fetch(
            stmt, "Failed to fetch the latest invoices.", "fetch_latest_invoices",
        )
        return [InvoiceView.from_row(r) for r in rows]

    # ─── Customers ───────────────────────────────────────────────

    async def list_customers(self, query: str) -> list[CustomerSummary]:
        """Customers matching query with invoice count and per-status totals.

        LEFT JOIN keeps customers without invoices; their totals come back as 0.
        """
        stmt = (
            select(
                Customer.id,
                Customer.name,
                Customer.email,
                Customer.image_url,
                func.count(Invoice.id).label("total_invoices"),
                _sum_where_status(InvoiceStatus.PENDING).label("total_pending"),
                _sum_where_status(InvoiceStatus.PAID).label("total_paid"),
            )
            .outerjoin(Invoice, Invoice.customer_id == Customer.id)
            .where(customer_search_filter(query))
            .group_by(
                Customer.id, Customer.name, Customer.email, Customer.image_url,
            )
            .order_by(Customer.name.asc(), Customer.id.asc())
        )
        rows = await self._fetch(
            stmt, "Failed to fetch customer table.", "list_customers",
        )
        return [CustomerSummary.from_row(r) for r in rows]

    async def fetch_customer_options(self) -> list[CustomerOption]:
        stmt = select(Customer.id, Customer.name).order_by(
            Customer.name.asc(), Customer.id.asc(),
        )
        rows = await self._fetch(
            stmt, "Failed to fetch all customers.", "fetch_customer_options",
        )
        return [CustomerOption(id=r["id"], name=r["name"]) for r in rows]

    # ─── Dashboard ───────────────────────────────────────────────

    async def fetch_card_summary(self) -> CardSummary:
        """Counts and status totals, queried concurrently.

        Each query runs on its own session (AsyncSession is not safe for
        concurrent use). gather propagates the first failure; no partial summary.
        """
        invoice_count_stmt = select(func.count(Invoice.id).label("count"))
        customer_count_stmt = select(func.count(Customer.id).label("count"))
        status_totals_stmt = select(
            _sum_where_status(InvoiceStatus.PAID).label("paid"),
            _sum_where_status(InvoiceStatus.PENDING).label("pending"),
        )

        invoice_rows, customer_rows, total_rows = await asyncio.gather(
            self._fetch(invoice_count_stmt, "Failed to fetch card data.", "fetch_card_summary"),
            self._fetch(customer_count_stmt, "Failed to fetch card data.", "fetch_card_summary"),
            self._fetch(status_totals_stmt, "Failed to fetch card data.", "fetch_card_summary"),
        )

        totals = total_rows[0] if total_rows else {}
        return CardSummary.build(
            invoice_count=int(invoice_rows[0]["count"] or 0),
            customer_count=int(customer_rows[0]["count"] or 0),
            paid_total=int(totals.get("paid") or 0),
            pending_total=int(totals.get("pending") or 0),
        )

    async def fetch_revenue(self) -> list[Revenue]:
        """Invoice totals per calendar month, chronological, last REVENUE_MONTHS months with data."""
        year_month = func.substr(Invoice.date, 1, 7).label("year_month")
        stmt = (
            select(year_month, func.sum(Invoice.amount).label("total"))
            .group_by(year_month)
            .order_by(year_month.desc())
            .limit(REVENUE_MONTHS)
        )
        rows = await self._fetch(
            stmt, "Failed to fetch revenue data.", "fetch_revenue",
        )
        return [
            Revenue(
                month=month_label(r["year_month"]),
                year_month=r["year_month"],
                revenue=from_minor_units(int(r["total"] or 0)),
            )
            for r in reversed(rows)
        ]
