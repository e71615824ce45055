"""
Shared pytest fixtures and configuration for all tests.
"""

import os
import shutil
from collections.abc import AsyncGenerator, Generator
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
import strawberry
from sqlalchemy.ext.asyncio import AsyncSession

from alembic import command
from alembic.config import Config
from ledgerql.database.connection import Database
from ledgerql.graphql.context import build_context

PROJECT_DIR = Path(__file__).parent.parent


def postgres_available() -> bool:
    """pytest-postgresql starts its own server with pg_ctl."""
    return shutil.which("pg_ctl") is not None


# Mocked store fixtures
@pytest.fixture
def mock_session() -> AsyncMock:
    """An AsyncSession double; configure `execute` per test."""
    return AsyncMock(spec=AsyncSession)


@pytest.fixture
def mock_db(mock_session: AsyncMock) -> MagicMock:
    """A Database double whose `session()` yields `mock_session`."""
    db = MagicMock(spec=Database)
    session_cm = db.session.return_value
    session_cm.__aenter__.return_value = mock_session
    # Let exceptions raised inside `async with db.session()` propagate
    session_cm.__aexit__.return_value = False
    db.ping.return_value = (True, None)
    return db


@pytest.fixture
def mock_info(mock_db: MagicMock) -> MagicMock:
    """Create a mock GraphQL info object carrying the mocked Database."""
    info = MagicMock(spec=strawberry.Info)
    info.context = build_context(mock_db)
    return info


# Real database fixtures (pytest-postgresql)
@pytest.fixture(scope="function")
def test_database(postgresql: Any) -> Generator[str, None, None]:
    """Return the DSN for the running pytest-postgresql database."""
    info = postgresql.info
    dsn = (
        f"postgresql://{info.user}:{getattr(info, 'password', '') or ''}"
        f"@{info.host}:{info.port}/{info.dbname}"
    )
    yield dsn


@pytest.fixture(scope="function")
def alembic_migrate(test_database: str) -> Generator[None, None, None]:
    """Run Alembic upgrade to head against the pytest-postgresql instance."""
    os.environ["LEDGERQL_DATABASE_URL"] = test_database
    cfg = Config(str(PROJECT_DIR / "alembic.ini"))
    command.upgrade(cfg, "head")
    yield
    command.downgrade(cfg, "base")


@pytest_asyncio.fixture(scope="function")
async def database(alembic_migrate: None, test_database: str) -> AsyncGenerator[Database, None]:
    """Provide a migrated Database handle; disposed after the test."""
    _ = alembic_migrate
    db = Database(test_database, pool_size=2, max_overflow=0)
    yield db
    await db.dispose()


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


def pytest_collection_modifyitems(config: Any, items: list[Any]) -> None:
    """Skip database tests when PostgreSQL binaries are not installed."""
    _ = config
    if postgres_available():
        return
    skip_db = pytest.mark.skip(reason="PostgreSQL binaries not available")
    for item in items:
        if "requires_db" in item.keywords:
            item.add_marker(skip_db)
