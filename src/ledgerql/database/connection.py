"""
Database connection management
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

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


def to_async_url(database_url: str) -> str:
    """Rewrite a plain PostgreSQL URL so SQLAlchemy uses the asyncpg driver."""
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if database_url.startswith("postgres://"):
        return database_url.replace("postgres://", "postgresql+asyncpg://", 1)
    return database_url


class Database:
    """Process-lifetime handle to the store.

    Owns the async engine (and its connection pool) plus the session factory.
    One instance is built at startup and handed to every resolver through the
    GraphQL request context; it is safe to share between concurrent requests.
    """

    def __init__(
        self,
        database_url: str,
        *,
        pool_size: int | None = None,
        max_overflow: int | None = None,
        echo: bool | None = None,
    ):
        self.url = database_url
        self.engine: AsyncEngine = create_async_engine(
            to_async_url(database_url),
            pool_size=pool_size if pool_size is not None else settings.database_pool_size,
            max_overflow=(
                max_overflow if max_overflow is not None else settings.database_max_overflow
            ),
            echo=echo if echo is not None else settings.sql_echo,
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            autoflush=False,
            expire_on_commit=False,
        )
        logger.info("Database initialized", database_url=self.engine.url.render_as_string())

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Get a session from the shared pool; commits on success, rolls back on error."""
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def ping(self) -> tuple[bool, str | None]:
        """
        Test the database connection and return helpful error messages.

        Returns:
            tuple: (success: bool, error_message: str | None)
        """
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
                return True, None
        except Exception as e:
            error_str = str(e)
            error_type = type(e).__name__

            if "does not exist" in error_str and "role" in error_str:
                db_name = self.url.split("/")[-1].split("?")[0]
                return False, (
                    f"Cannot connect to database: {error_str}\n"
                    f"This usually means:\n"
                    f"  1. The database server is not running\n"
                    f"  2. The database '{db_name}' doesn't exist\n"
                    f"  3. The database user/role doesn't exist\n"
                    f"Please check your database connection and run migrations if needed."
                )
            elif "Connection refused" in error_str or "could not connect" in error_str:
                return False, (
                    f"Cannot connect to database server: {error_str}\n"
                    f"The database server appears to be down or unreachable.\n"
                    f"Please check that PostgreSQL is running and accessible."
                )
            elif "password authentication failed" in error_str:
                return False, (
                    f"Database authentication failed: {error_str}\n"
                    f"Please check your database credentials."
                )
            else:
                return False, f"Database connection error ({error_type}): {error_str}"

    async def dispose(self) -> None:
        """Close every pooled connection."""
        await self.engine.dispose()
        logger.info("Database connections released")


@asynccontextmanager
async def open_database(database_url: str | None = None) -> AsyncGenerator[Database, None]:
    """Construct a Database and always dispose it on exit, including on errors."""
    db = Database(database_url or settings.database_url)
    try:
        yield db
    finally:
        await db.dispose()
