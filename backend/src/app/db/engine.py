"""SQLAlchemy engine management for the database-backed handlers."""

from __future__ import annotations

import os
from typing import Any
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.engine import make_url

from app.config import DatabaseSettings
from app.db.connection import with_service_role

# Reused across warm invocations, keyed by the resolved URL.
_ENGINE_CACHE: dict[str, Engine] = {}


def get_engine(
    settings: Optional[DatabaseSettings] = None,
    use_cache: bool = True,
) -> Engine:
    """Get or create a SQLAlchemy engine.

    Args:
        settings: Database credentials; read from the environment when
            omitted (raising ``ConfigurationError`` if incomplete).
        use_cache: Whether to reuse an engine from a previous invocation.

    Returns:
        A configured SQLAlchemy engine.
    """
    settings = settings or DatabaseSettings.from_env()
    database_url = with_service_role(
        settings.database_url, settings.service_role_key
    )

    if use_cache and database_url in _ENGINE_CACHE:
        return _ENGINE_CACHE[database_url]

    engine = create_engine(
        database_url,
        pool_pre_ping=True,
        connect_args=_get_connect_args(database_url),
        **_get_pool_settings(database_url),
    )

    if use_cache:
        _ENGINE_CACHE[database_url] = engine

    return engine


def clear_engine_cache() -> None:
    """Dispose and forget cached engines."""
    for engine in _ENGINE_CACHE.values():
        engine.dispose()
    _ENGINE_CACHE.clear()


def _is_postgres(database_url: str) -> bool:
    return make_url(database_url).get_backend_name() == "postgresql"


def _get_connect_args(database_url: str) -> dict[str, str]:
    """Return connection arguments for the database driver."""
    if not _is_postgres(database_url):
        return {}
    return {"sslmode": os.getenv("DATABASE_SSLMODE", "require")}


def _get_pool_settings(database_url: str) -> dict[str, Any]:
    """Return a minimal pool suited to one request per container."""
    if not _is_postgres(database_url):
        return {}

    return {
        "pool_size": int(os.getenv("DB_POOL_SIZE", "1")),
        "max_overflow": int(os.getenv("DB_MAX_OVERFLOW", "0")),
        "pool_recycle": int(os.getenv("DB_POOL_RECYCLE", "300")),
        "pool_timeout": int(os.getenv("DB_POOL_TIMEOUT", "30")),
    }
