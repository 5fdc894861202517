"""
Shared pytest fixtures and configuration for all tests.
"""

import os
from collections.abc import AsyncGenerator, Generator
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio


@pytest_asyncio.fixture(scope="function")
async def test_database(tmp_path: Path) -> AsyncGenerator[str, None]:
    """Point the shared connection pools at a fresh file-backed SQLite database."""
    from pokedex.database.connection import dispose_database, init_database
    from pokedex.dbmodels import Base

    dsn = f"sqlite:///{tmp_path / 'pokedex.db'}"
    os.environ["POKEDEX_DATABASE_URL"] = dsn

    engine = init_database(dsn, force_reinit=True)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield dsn

    await dispose_database()


@pytest_asyncio.fixture(scope="function")
async def seeded_database(test_database: str) -> AsyncGenerator[str, None]:
    """Test database holding the six starter pokemons (ids 1..6)."""
    from pokedex.database.connection import get_async_session
    from pokedex.database.seed_data import seed_pokemons

    async with get_async_session() as session:
        await seed_pokemons(session)

    yield test_database


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


# Test markers
def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line(  # type: ignore[reportUnknownMemberType]
        "markers", "requires_db: mark test as requiring database connection"
    )
    config.addinivalue_line("markers", "slow: mark test as slow running")  # type: ignore[reportUnknownMemberType]
    config.addinivalue_line("markers", "integration: mark test as integration test")  # type: ignore[reportUnknownMemberType]
    config.addinivalue_line("markers", "unit: mark test as unit test")  # type: ignore[reportUnknownMemberType]
