"""Settings — environment parsing and database URL normalization."""

from app.config import Settings


def test_plain_postgres_url_gets_async_driver():
    settings = Settings(database_url="postgresql://u:p@host:5432/db")
    assert settings.database_url == "postgresql+asyncpg://u:p@host:5432/db"


def test_legacy_postgres_scheme_gets_async_driver():
    settings = Settings(database_url="postgres://u:p@host/db")
    assert settings.database_url == "postgresql+asyncpg://u:p@host/db"


def test_sqlite_url_untouched():
    settings = Settings(database_url="sqlite+aiosqlite:///local.db")
    assert settings.database_url == "sqlite+aiosqlite:///local.db"


def test_render_cache_settings_from_env(monkeypatch):
    monkeypatch.setenv("RENDER_CACHE_ENABLED", "false")
    monkeypatch.setenv("RENDER_CACHE_MAX_ENTRIES", "8")
    settings = Settings()
    assert settings.render_cache_enabled is False
    assert settings.render_cache_max_entries == 8
