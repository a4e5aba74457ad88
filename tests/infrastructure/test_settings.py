"""Settings: environment-driven configuration."""

from library_api.config import Settings


def test_postgresql_url_rewritten_to_asyncpg():
    settings = Settings(database_url="postgresql://u:p@host:5432/db")
    assert settings.database_url == "postgresql+asyncpg://u:p@host:5432/db"


def test_postgres_scheme_rewritten_to_asyncpg():
    settings = Settings(database_url="postgres://u:p@host/db")
    assert settings.database_url == "postgresql+asyncpg://u:p@host/db"


def test_sqlite_url_untouched():
    settings = Settings(database_url="sqlite+aiosqlite:///./local.db")
    assert settings.database_url == "sqlite+aiosqlite:///./local.db"


def test_port_read_from_environment(monkeypatch):
    monkeypatch.setenv("PORT", "8088")
    assert Settings().port == 8088


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.create_tables is False
    assert settings.log_format in ("json", "text")
