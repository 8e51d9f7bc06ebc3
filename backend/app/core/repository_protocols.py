"""Boundary Protocols — contracts between services and the shell.

Invariants:
    - Services receive their collaborators through these types, never through globals
    - Implementations provided by the shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
    - SessionProvider returns an async context manager: the implementation owns
      rollback and error mapping, callers only see DatabaseError
"""

from contextlib import AbstractAsyncContextManager
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


class SessionProvider(Protocol):
    """Injected store handle — DatabaseSessionManager in production."""
    def session(self) -> AbstractAsyncContextManager["AsyncSession"]: ...


class PathInvalidator(Protocol):
    """One-way invalidation signal for cached renders of a logical path."""
    def revalidate_path(self, path: str) -> None: ...
