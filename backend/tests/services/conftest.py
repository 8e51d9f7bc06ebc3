"""Service test fixtures — per-test SQLite store, services, and FastAPI test client.

Invariants:
    - Every test gets a fresh SQLite file database under tmp_path
    - The store is a real DatabaseSessionManager (FK enforcement, error mapping included)
    - get_store / get_render_cache overridden for route tests; overrides cleared afterwards

Design Decisions:
    - File database, not :memory:: fetch_card_summary opens concurrent sessions, and each
      pooled connection to :memory: would see its own empty database
    - No long-lived session fixture: helpers in seed_rows.py open short sessions so
      SQLite never holds a lock across the code under test
"""

from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient

from app.api.dependencies import get_render_cache, get_store
from app.db.base import Base
from app.infrastructure.database import DatabaseSessionManager
from app.infrastructure.render_cache import RenderCache
from app.main import app
from app.services.mutation_pipeline import MutationPipeline
from app.services.query_service import QueryService

from tests.services.seed_rows import insert_customer

FIXED_TODAY = date(2024, 3, 15)


@pytest.fixture
async def store(tmp_path):
    manager = DatabaseSessionManager(
        f"sqlite+aiosqlite:///{tmp_path / 'invoicing.db'}",
    )
    async with manager.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield manager
    await manager.dispose()


@pytest.fixture
def render_cache():
    return RenderCache()


class RecordingInvalidator:
    """PathInvalidator double that remembers every revalidated path."""

    def __init__(self):
        self.paths: list[str] = []

    def revalidate_path(self, path: str) -> None:
        self.paths.append(path)


@pytest.fixture
def invalidator():
    return RecordingInvalidator()


@pytest.fixture
def query_service(store):
    return QueryService(store)


@pytest.fixture
def pipeline(store, invalidator):
    return MutationPipeline(store, invalidator, today=lambda: FIXED_TODAY)


@pytest.fixture
async def customers(store):
    """Three customers; Carol has no invoices unless a test adds some."""
    return {
        "alice": await insert_customer(
            store, name="Alice Anderson", email="alice@example.com",
        ),
        "bob": await insert_customer(
            store, name="Bob Brown", email="bob@example.com",
        ),
        "carol": await insert_customer(
            store, name="Carol Clark", email="carol@example.com",
        ),
    }


@pytest.fixture
async def client(store, render_cache):
    """FastAPI test client with the store and render cache overridden."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_render_cache] = lambda: render_cache

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
