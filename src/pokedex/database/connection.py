"""
Shared async engine and session factory for the pokemons database
"""

import os
import threading
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from ..config import settings
from ..logging import get_logger

logger = get_logger(__name__)

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None
_init_lock = threading.Lock()

# Plain URLs (as used by Alembic and .env files) -> async driver URLs
_ASYNC_DRIVERS = {
    "postgresql://": "postgresql+asyncpg://",
    "sqlite://": "sqlite+aiosqlite://",
}

# Substring of a driver error -> hint shown to whoever runs the service
_CONNECTION_HINTS = (
    (
        "password authentication failed",
        "Database authentication failed; check the credentials in POKEDEX_DATABASE_URL.",
    ),
    ("Connection refused", "Database server is unreachable; is it running?"),
    ("could not connect", "Database server is unreachable; is it running?"),
    (
        "does not exist",
        "Database or role does not exist; create it and run `pokedex-migrate upgrade`.",
    ),
    ("unable to open database file", "SQLite database file cannot be opened; check the path."),
)


def get_database_url() -> str:
    """POKEDEX_DATABASE_URL wins over settings so tests can swap databases late."""
    return os.getenv("POKEDEX_DATABASE_URL") or settings.database_url


def to_async_url(db_url: str) -> str:
    for prefix, async_prefix in _ASYNC_DRIVERS.items():
        if db_url.startswith(prefix):
            return async_prefix + db_url[len(prefix):]
    return db_url


def _engine_options(db_url: str) -> dict[str, Any]:
    options: dict[str, Any] = {"echo": settings.sql_echo}
    # SQLite pools do not take sizing arguments
    if not db_url.startswith("sqlite"):
        options["pool_size"] = settings.database_pool_size
        options["max_overflow"] = settings.database_max_overflow
    return options


def init_database(database_url: str | None = None, force_reinit: bool = False) -> AsyncEngine:
    """Create the shared engine once; an explicit URL or ``force_reinit`` replaces it."""
    global _engine, _session_factory

    with _init_lock:
        if _engine is not None and database_url is None and not force_reinit:
            return _engine

        db_url = database_url or get_database_url()
        _engine = create_async_engine(to_async_url(db_url), **_engine_options(db_url))
        # Rows handed to resolvers outlive the session's commit
        _session_factory = async_sessionmaker(_engine, autoflush=False, expire_on_commit=False)

        logger.info("Database initialized", database_url=db_url)
        return _engine


def reset_database() -> None:
    """Forget the engine without closing it (tests pointing at a fresh database)."""
    global _engine, _session_factory
    _engine = None
    _session_factory = None


async def dispose_database() -> None:
    """Close every pooled connection; the next session starts a new engine."""
    if _engine is not None:
        await _engine.dispose()
        logger.debug("Database connections disposed")
    reset_database()


def describe_connection_error(error: Exception) -> str:
    message = str(error)
    for needle, hint in _CONNECTION_HINTS:
        if needle in message:
            return f"{hint} ({type(error).__name__}: {message})"
    return f"Database connection error ({type(error).__name__}): {message}"


async def check_database_connection() -> tuple[bool, str | None]:
    """Run ``SELECT 1``; on failure return a readable description instead of raising."""
    if _engine is None:
        return False, "Database engine not initialized"

    try:
        async with _engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        return False, describe_connection_error(e)
    return True, None


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Session from the shared pool; commits on success, rolls back and re-raises on error."""
    if _session_factory is None:
        init_database()
    if _session_factory is None:
        raise RuntimeError("Database not initialized")

    async with _session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
