"""Async Session Factory — DB sessions for direct usage outside FastAPI.

Invariants:
    - Meant for scripts (seeding) and one-off maintenance, never for request handling
    - Caller owns the returned engine's lifetime (dispose when done)

Design Decisions:
    - Separate from infrastructure/database.py: no error mapping, no pool tuning,
      a plain sessionmaker is all a script needs
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)


def create_session_factory(
    database_url: str,
) -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
    """Create an engine and async session factory for the given database URL."""
    engine = create_async_engine(database_url, echo=False)
    factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )
    return engine, factory
