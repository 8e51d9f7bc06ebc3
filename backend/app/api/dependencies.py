"""API Dependencies — FastAPI providers for the store handle, render cache and services.

Invariants:
    - Services are built per request from the injected store (no service singletons)
    - get_store reads the module attribute at call time (init_db replaces it on startup)
    - Tests override get_store / get_render_cache via app.dependency_overrides

Design Decisions:
    - Module attribute lookup over `from ... import db_manager`: a from-import would
      freeze the None it saw at import time
"""

from fastapi import Depends

import app.infrastructure.database as database
from app.infrastructure.database import DatabaseSessionManager
from app.infrastructure.render_cache import RenderCache, render_cache
from app.services.mutation_pipeline import MutationPipeline
from app.services.query_service import QueryService


def get_store() -> DatabaseSessionManager:
    """FastAPI dependency for the shared store handle."""
    if not database.db_manager:
        raise RuntimeError("Database not initialized")
    return database.db_manager


def get_render_cache() -> RenderCache:
    return render_cache


def get_query_service(
    store: DatabaseSessionManager = Depends(get_store),
) -> QueryService:
    return QueryService(store)


def get_mutation_pipeline(
    store: DatabaseSessionManager = Depends(get_store),
    cache: RenderCache = Depends(get_render_cache),
) -> MutationPipeline:
    return MutationPipeline(store, cache)
