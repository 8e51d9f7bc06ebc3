"""Customer, Dashboard and Health Routes — read endpoints and their failure envelope.

Invariants:
    - Empty store: cards report zeros, lists are [], revenue chart bottoms out at "$0K"
    - Store failures surface as 503 FETCH_FAILED with a generic message
    - Readiness reflects whether the store answers
"""

import pytest

import app.infrastructure.database as database
from app.api.dependencies import get_store
from app.main import app

from tests.services.seed_rows import FailingStore, insert_invoice


# ─── Customers ───────────────────────────────────────────────────

async def test_customer_table_includes_totals(client, store, customers):
    await insert_invoice(store, customers["bob"], 2500, "paid")
    await insert_invoice(store, customers["bob"], 500, "pending")

    res = await client.get("/api/v1/customers", params={"query": "BOB"})

    assert res.status_code == 200
    [bob] = res.json()
    assert bob["total_invoices"] == 2
    assert bob["total_paid_display"] == "$25.00"
    assert bob["total_pending_display"] == "$5.00"


async def test_customer_search_without_match_is_empty(client, customers):
    res = await client.get("/api/v1/customers", params={"query": "nobody"})
    assert res.status_code == 200
    assert res.json() == []


async def test_customer_options(client, customers):
    res = await client.get("/api/v1/customers/options")
    assert [c["name"] for c in res.json()] == ["Alice Anderson", "Bob Brown", "Carol Clark"]
    assert set(res.json()[0]) == {"id", "name"}


# ─── Dashboard ───────────────────────────────────────────────────

async def test_cards_on_empty_store(client):
    res = await client.get("/api/v1/dashboard/cards")
    assert res.status_code == 200
    assert res.json() == {
        "invoice_count": 0,
        "customer_count": 0,
        "paid_total": 0,
        "pending_total": 0,
        "paid_total_display": "$0.00",
        "pending_total_display": "$0.00",
    }


async def test_cards_with_data(client, store, customers):
    await insert_invoice(store, customers["alice"], 123456, "paid")
    res = await client.get("/api/v1/dashboard/cards")
    body = res.json()
    assert body["invoice_count"] == 1
    assert body["customer_count"] == 3
    assert body["paid_total_display"] == "$1,234.56"


async def test_revenue_chart(client, store, customers):
    await insert_invoice(store, customers["alice"], 250000, "paid", "2023-05-02")
    await insert_invoice(store, customers["alice"], 120000, "pending", "2023-06-20")

    res = await client.get("/api/v1/dashboard/revenue")

    body = res.json()
    assert [m["month"] for m in body["months"]] == ["May", "Jun"]
    assert body["top_label"] == 3000
    assert body["y_axis_labels"] == ["$3K", "$2K", "$1K", "$0K"]


async def test_revenue_chart_on_empty_store(client):
    body = (await client.get("/api/v1/dashboard/revenue")).json()
    assert body == {"months": [], "y_axis_labels": ["$0K"], "top_label": 0}


async def test_latest_invoices(client, store, customers):
    for day in range(1, 8):
        await insert_invoice(store, customers["carol"], 100, "paid", f"2024-05-{day:02d}")

    res = await client.get("/api/v1/dashboard/latest-invoices")

    dates = [inv["date"] for inv in res.json()]
    assert dates == ["2024-05-07", "2024-05-06", "2024-05-05", "2024-05-04", "2024-05-03"]


# ─── Failure envelope ────────────────────────────────────────────

@pytest.mark.parametrize("path", [
    "/api/v1/invoices",
    "/api/v1/customers",
    "/api/v1/dashboard/cards",
    "/api/v1/dashboard/revenue",
])
async def test_store_failure_returns_fetch_failed(client, path):
    app.dependency_overrides[get_store] = lambda: FailingStore()

    res = await client.get(path)

    assert res.status_code == 503
    error = res.json()["error"]
    assert error["code"] == "FETCH_FAILED"
    assert error["message"].startswith("Failed to fetch")


# ─── Health ──────────────────────────────────────────────────────

async def test_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_without_database(client, monkeypatch):
    monkeypatch.setattr(database, "db_manager", None)
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "database_unavailable"


async def test_readiness_with_database(client, store, monkeypatch):
    monkeypatch.setattr(database, "db_manager", store)
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"
