"""Query Service — search, pagination, aggregates and failure mapping against SQLite.

Invariants:
    - list_invoices returns at most PAGE_SIZE rows; adjacent pages never share a row
    - count_invoice_pages bounds the total row count
    - Empty store: card summary is all zeros, never None
    - Zero-match searches return [] rather than raising
    - Store failures surface as DataFetchError with a generic message
"""

from decimal import Decimal

import pytest

from app.core.domain_types import InvoiceStatus
from app.core.errors import DataFetchError, InputValidationError, ResourceNotFoundError
from app.core.pagination import MAX_ROW_OFFSET, PAGE_SIZE
from app.services.query_service import QueryService

from tests.services.seed_rows import FailingStore, insert_customer, insert_invoice


@pytest.fixture
async def fourteen_invoices(store, customers):
    """14 invoices over 5 distinct dates (many ties) split between Alice and Bob."""
    ids = []
    for i in range(14):
        owner = customers["alice"] if i % 2 == 0 else customers["bob"]
        ids.append(await insert_invoice(
            store,
            owner,
            amount=1000 + i,
            status="paid" if i % 3 == 0 else "pending",
            date=f"2024-01-{i % 5 + 1:02d}",
        ))
    return ids


# ─── list_invoices / count_invoice_pages ─────────────────────────

async def test_pages_are_bounded_and_disjoint(query_service, fourteen_invoices):
    seen: set[str] = set()
    for page in (1, 2, 3):
        rows = await query_service.list_invoices("", page)
        assert len(rows) <= PAGE_SIZE
        ids = {r.id for r in rows}
        assert not ids & seen
        seen |= ids
    assert seen == set(fourteen_invoices)


async def test_page_beyond_data_is_empty(query_service, fourteen_invoices):
    assert await query_service.list_invoices("", 4) == []
    assert await query_service.list_invoices("", 99) == []


async def test_invoices_ordered_newest_first(query_service, fourteen_invoices):
    rows = await query_service.list_invoices("", 1)
    dates = [r.date for r in rows]
    assert dates == sorted(dates, reverse=True)
    assert dates[0] == "2024-01-05"


async def test_page_with_offset_beyond_any_table_is_empty(query_service, fourteen_invoices):
    assert await query_service.list_invoices("", 2**62) == []
    assert await query_service.list_invoices("", MAX_ROW_OFFSET // PAGE_SIZE + 2) == []


async def test_page_below_one_is_rejected(query_service):
    with pytest.raises(InputValidationError):
        await query_service.list_invoices("", 0)


async def test_search_matches_customer_name_case_insensitively(
    query_service, fourteen_invoices,
):
    rows = await query_service.list_invoices("BOB", 1)
    assert rows
    assert {r.name for r in rows} == {"Bob Brown"}


async def test_search_matches_email_amount_date_and_status(
    store, query_service, customers,
):
    await insert_invoice(store, customers["carol"], 12550, "paid", "2023-07-16")
    await insert_invoice(store, customers["alice"], 666, "pending", "2022-12-06")

    assert [r.name for r in await query_service.list_invoices("carol@", 1)] == ["Carol Clark"]
    assert [r.amount for r in await query_service.list_invoices("1255", 1)] == [12550]
    assert [r.date for r in await query_service.list_invoices("2022-12", 1)] == ["2022-12-06"]
    assert [r.status for r in await query_service.list_invoices("pend", 1)] == [
        InvoiceStatus.PENDING,
    ]


async def test_like_wildcards_in_query_are_literal(query_service, fourteen_invoices):
    assert await query_service.list_invoices("%", 1) == []
    assert await query_service.list_invoices("_", 1) == []


async def test_invoice_view_carries_display_strings(store, query_service, customers):
    await insert_invoice(store, customers["alice"], 123456, "paid", "2022-12-06")
    [row] = await query_service.list_invoices("", 1)
    assert row.amount_display == "$1,234.56"
    assert row.date_display == "Dec 6, 2022"
    assert row.email == "alice@example.com"


async def test_count_pages_bounds_total(query_service, fourteen_invoices):
    pages = await query_service.count_invoice_pages("")
    assert pages == 3
    assert pages * PAGE_SIZE >= 14
    assert (pages - 1) * PAGE_SIZE < 14


async def test_count_pages_respects_query(query_service, fourteen_invoices):
    assert await query_service.count_invoice_pages("bob") == 2
    assert await query_service.count_invoice_pages("no such thing") == 0


# ─── fetch_invoice_by_id / fetch_latest_invoices ─────────────────

async def test_fetch_invoice_by_id_returns_major_units(store, query_service, customers):
    invoice_id = await insert_invoice(store, customers["alice"], 12550, "paid", "2024-02-01")
    detail = await query_service.fetch_invoice_by_id(invoice_id)
    assert detail.amount == Decimal("125.50")
    assert detail.customer_id == customers["alice"]
    assert detail.status is InvoiceStatus.PAID


async def test_fetch_invoice_by_id_missing_raises_not_found(query_service):
    with pytest.raises(ResourceNotFoundError):
        await query_service.fetch_invoice_by_id("does-not-exist")


async def test_latest_invoices_limited_to_five(query_service, fourteen_invoices):
    rows = await query_service.fetch_latest_invoices()
    assert len(rows) == 5
    assert [r.date for r in rows] == sorted((r.date for r in rows), reverse=True)


# ─── Customers ───────────────────────────────────────────────────

async def test_customer_totals_grouped_by_status(store, query_service, customers):
    await insert_invoice(store, customers["alice"], 1000, "pending")
    await insert_invoice(store, customers["alice"], 2500, "pending")
    await insert_invoice(store, customers["alice"], 4000, "paid")

    summaries = {s.name: s for s in await query_service.list_customers("")}
    alice = summaries["Alice Anderson"]
    assert alice.total_invoices == 3
    assert alice.total_pending == 3500
    assert alice.total_paid == 4000
    assert alice.total_paid_display == "$40.00"


async def test_customer_without_invoices_has_zero_totals(query_service, customers):
    [carol] = await query_service.list_customers("carol")
    assert carol.total_invoices == 0
    assert carol.total_pending == 0
    assert carol.total_paid == 0


async def test_customers_ordered_by_name(query_service, customers):
    names = [s.name for s in await query_service.list_customers("")]
    assert names == ["Alice Anderson", "Bob Brown", "Carol Clark"]


async def test_customer_search_with_no_match_is_empty(query_service, customers):
    assert await query_service.list_customers("zzz-nobody") == []


async def test_customer_options_sorted_by_name(store, query_service, customers):
    await insert_customer(store, name="Aaron Able", email="aaron@example.com")
    options = await query_service.fetch_customer_options()
    assert [o.name for o in options][:2] == ["Aaron Able", "Alice Anderson"]
    assert len(options) == 4


# ─── Dashboard ───────────────────────────────────────────────────

async def test_card_summary_on_empty_store_is_zero(query_service):
    summary = await query_service.fetch_card_summary()
    assert summary.invoice_count == 0
    assert summary.customer_count == 0
    assert summary.paid_total == 0
    assert summary.pending_total == 0
    assert summary.paid_total_display == "$0.00"


async def test_card_summary_counts_and_totals(store, query_service, customers):
    await insert_invoice(store, customers["alice"], 1500, "paid")
    await insert_invoice(store, customers["bob"], 700, "pending")
    await insert_invoice(store, customers["bob"], 300, "pending")

    summary = await query_service.fetch_card_summary()
    assert summary.invoice_count == 3
    assert summary.customer_count == 3
    assert summary.paid_total == 1500
    assert summary.pending_total == 1000


async def test_revenue_grouped_by_month_chronologically(store, query_service, customers):
    await insert_invoice(store, customers["alice"], 150000, "paid", "2024-02-10")
    await insert_invoice(store, customers["bob"], 50000, "pending", "2024-01-03")
    await insert_invoice(store, customers["bob"], 25050, "paid", "2024-01-28")

    revenue = await query_service.fetch_revenue()
    assert [r.month for r in revenue] == ["Jan", "Feb"]
    assert [r.year_month for r in revenue] == ["2024-01", "2024-02"]
    assert revenue[0].revenue == Decimal("750.50")
    assert revenue[1].revenue == Decimal("1500.00")


async def test_revenue_keeps_last_twelve_months(store, query_service, customers):
    for month in range(1, 13):
        await insert_invoice(store, customers["alice"], 100, "paid", f"2023-{month:02d}-01")
    await insert_invoice(store, customers["alice"], 100, "paid", "2024-01-01")

    revenue = await query_service.fetch_revenue()
    assert len(revenue) == 12
    assert revenue[0].year_month == "2023-02"
    assert revenue[-1].year_month == "2024-01"


# ─── Failure mapping ─────────────────────────────────────────────

async def test_store_failure_surfaces_generic_fetch_error():
    service = QueryService(FailingStore())
    with pytest.raises(DataFetchError) as exc_info:
        await service.list_invoices("", 1)
    assert exc_info.value.message == "Failed to fetch invoices."


async def test_card_summary_fails_whole_call_on_any_failure():
    store = FailingStore()
    with pytest.raises(DataFetchError) as exc_info:
        await QueryService(store).fetch_card_summary()
    assert exc_info.value.message == "Failed to fetch card data."
    assert store.sessions_opened == 3
