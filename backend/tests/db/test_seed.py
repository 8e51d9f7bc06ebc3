"""Seed Data — placeholder rows load once and match the dashboard's expected totals."""

import pytest
from sqlalchemy import func, select

from app.db.base import Base
from app.db.seed import CUSTOMERS, INVOICES, seed_database
from app.db.session import create_session_factory
from app.models.customer import Customer
from app.models.invoice import Invoice


@pytest.fixture
async def session_factory(tmp_path):
    engine, factory = create_session_factory(
        f"sqlite+aiosqlite:///{tmp_path / 'seed.db'}",
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield factory
    await engine.dispose()


async def test_seed_populates_empty_database(session_factory):
    assert await seed_database(session_factory) is True

    async with session_factory() as db:
        customers = (await db.execute(select(func.count(Customer.id)))).scalar_one()
        invoices = (await db.execute(select(func.count(Invoice.id)))).scalar_one()
    assert customers == len(CUSTOMERS) == 6
    assert invoices == len(INVOICES) == 13


async def test_seed_is_idempotent(session_factory):
    await seed_database(session_factory)
    assert await seed_database(session_factory) is False

    async with session_factory() as db:
        invoices = (await db.execute(select(func.count(Invoice.id)))).scalar_one()
    assert invoices == len(INVOICES)


async def test_seed_status_totals(session_factory):
    await seed_database(session_factory)

    async with session_factory() as db:
        rows = await db.execute(
            select(Invoice.status, func.sum(Invoice.amount)).group_by(Invoice.status),
        )
        totals = dict(rows.all())
    assert totals == {"paid": 100626, "pending": 125632}
