"""Seed Data — placeholder customers and invoices for a fresh database.

Invariants:
    - Seeding is a no-op when any customer already exists (safe to re-run)
    - Customers inserted before invoices (FK order), in one transaction
    - Amounts are minor units, dates ISO YYYY-MM-DD (same shape the pipeline writes)

Usage:
    python -m app.db.seed          # uses DATABASE_URL / .env via Settings
"""

import asyncio
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.config import get_settings
from app.db.session import create_session_factory
from app.infrastructure.observability import setup_logging
from app.models.customer import Customer
from app.models.invoice import Invoice

logger = logging.getLogger(__name__)

CUSTOMERS: list[dict] = [
    {
        "id": "3958dc9e-712f-4377-85e9-fec4b6a6442a",
        "name": "Delba de Oliveira",
        "email": "delba@oliveira.com",
        "image_url": "/customers/delba-de-oliveira.png",
    },
    {
        "id": "3958dc9e-742f-4377-85e9-fec4b6a6442a",
        "name": "Lee Robinson",
        "email": "lee@robinson.com",
        "image_url": "/customers/lee-robinson.png",
    },
    {
        "id": "3958dc9e-737f-4377-85e9-fec4b6a6442a",
        "name": "Hector Simpson",
        "email": "hector@simpson.com",
        "image_url": "/customers/hector-simpson.png",
    },
    {
        "id": "50ca3e18-62cd-11ee-8c99-0242ac120002",
        "name": "Steven Tey",
        "email": "steven@tey.com",
        "image_url": "/customers/steven-tey.png",
    },
    {
        "id": "3958dc9e-787f-4377-85e9-fec4b6a6442a",
        "name": "Steph Dietz",
        "email": "steph@dietz.com",
        "image_url": "/customers/steph-dietz.png",
    },
    {
        "id": "76d65c26-f784-44a2-ac19-586678f7c2f2",
        "name": "Michael Novotny",
        "email": "michael@novotny.com",
        "image_url": "/customers/michael-novotny.png",
    },
]

# (customer index, amount in cents, status, date)
INVOICES: list[tuple[int, int, str, str]] = [
    (0, 15795, "pending", "2022-12-06"),
    (1, 20348, "pending", "2022-11-14"),
    (4, 3040, "paid", "2022-10-29"),
    (3, 44800, "paid", "2023-09-10"),
    (5, 34577, "pending", "2023-08-05"),
    (2, 54246, "pending", "2023-07-16"),
    (0, 666, "pending", "2023-06-27"),
    (3, 32545, "paid", "2023-06-09"),
    (4, 1250, "paid", "2023-06-17"),
    (5, 8546, "paid", "2023-06-07"),
    (1, 500, "paid", "2023-08-19"),
    (5, 8945, "paid", "2023-06-03"),
    (2, 1000, "paid", "2022-06-05"),
]


async def seed_database(session_factory: async_sessionmaker[AsyncSession]) -> bool:
    """Insert placeholder rows into an empty database. Returns True if rows were written."""
    async with session_factory() as db:
        existing = await db.execute(select(Customer.id).limit(1))
        if existing.first() is not None:
            logger.info("Database already seeded, skipping")
            return False

        db.add_all(Customer(**c) for c in CUSTOMERS)
        await db.flush()
        db.add_all(
            Invoice(
                customer_id=CUSTOMERS[idx]["id"],
                amount=amount,
                status=status,
                date=issued_on,
            )
            for idx, amount, status, issued_on in INVOICES
        )
        await db.commit()

    logger.info(f"Seeded {len(CUSTOMERS)} customers and {len(INVOICES)} invoices")
    return True


async def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    engine, factory = create_session_factory(settings.database_url)
    try:
        await seed_database(factory)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
