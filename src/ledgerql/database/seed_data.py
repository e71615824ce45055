"""
Seed data functions for database initialization.

Two kinds of seeding are provided: a single demonstration row, and bulk
loading of CSV exports with PostgreSQL's COPY, one command per table.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

from sqlalchemy import Table, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..dbmodels import Accounts, Categories, Transactions
from ..logging import get_logger

logger = get_logger(__name__)

# Load order follows the foreign keys: transactions reference both
# accounts and categories.
CSV_SEED_FILES: tuple[tuple[Table, str], ...] = (
    (Accounts.__table__, "accounts.csv"),
    (Categories.__table__, "categories.csv"),
    (Transactions.__table__, "transactions_cleaned.csv"),
)

DEMO_CATEGORY = {"id": "1235", "name": "Category 2", "color": "green"}


class CopySource(str, Enum):
    """Where the CSV files are read from during a bulk load."""

    SERVER = "server"  # file path on the database host, read by COPY ... FROM 'path'
    CLIENT = "client"  # local file streamed over the connection


def _sql_literal(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def build_copy_statement(table: Table, path: str) -> str:
    """Build a server-side COPY for `table` reading a comma-delimited CSV with a header row.

    COPY does not accept bind parameters, so the path is inlined as an escaped
    literal. Table and column names come from the ORM metadata.
    """
    columns = ", ".join(column.name for column in table.columns)
    return (
        f"COPY {table.name} ({columns}) FROM {_sql_literal(path)} "
        f"DELIMITER ',' CSV HEADER"
    )


def _rows_from_status(status: str) -> int:
    # asyncpg returns the command tag, e.g. "COPY 42"
    try:
        return int(status.rsplit(" ", 1)[-1])
    except (ValueError, AttributeError):
        return -1


async def _driver_connection(db: AsyncSession) -> Any:
    """Return the asyncpg connection behind the session's current transaction."""
    connection = await db.connection()
    raw_connection = await connection.get_raw_connection()
    return raw_connection.driver_connection


async def copy_from_server_file(db: AsyncSession, table: Table, path: str) -> int:
    """Bulk-load `table` from a CSV file that lives on the database server."""
    # SQLAlchemy reports no rowcount for COPY; asyncpg returns the command tag
    driver_connection = await _driver_connection(db)
    status = await driver_connection.execute(build_copy_statement(table, path))
    return _rows_from_status(status)


async def copy_from_local_file(db: AsyncSession, table: Table, path: str) -> int:
    """Bulk-load `table` by streaming a local CSV file through asyncpg's COPY support."""
    if not Path(path).is_file():
        raise FileNotFoundError(f"CSV file not found: {path}")

    driver_connection = await _driver_connection(db)
    status = await driver_connection.copy_to_table(
        table.name,
        source=path,
        columns=[column.name for column in table.columns],
        format="csv",
        header=True,
        delimiter=",",
    )
    return _rows_from_status(status)


async def seed_from_csv(
    db: AsyncSession,
    data_dir: str | Path,
    source: CopySource = CopySource.SERVER,
) -> dict[str, int]:
    """
    Bulk-load every seed table from CSV files in `data_dir`.

    Tables are loaded in foreign-key order within the caller's transaction,
    so a failure on any table leaves none of them loaded.

    Args:
        db: Database session
        data_dir: Directory holding the CSV exports. For the server source this
            path is interpreted on the database host.
        source: Whether the database server or this process reads the files

    Returns:
        Mapping of table name to rows loaded (-1 when the driver did not report it)
    """
    loaded: dict[str, int] = {}
    for table, filename in CSV_SEED_FILES:
        path = str(Path(data_dir) / filename)
        logger.info("Start seeding table", table=table.name, path=path, source=source.value)

        if source == CopySource.CLIENT:
            rows = await copy_from_local_file(db, table, path)
        else:
            rows = await copy_from_server_file(db, table, path)

        loaded[table.name] = rows
        logger.info("Seeded table", table=table.name, rows=rows)

    logger.info("Seeding finished", tables=list(loaded))
    return loaded


async def seed_demo_category(db: AsyncSession) -> list[Categories]:
    """
    Insert the demonstration category and return every category.

    Args:
        db: Database session

    Returns:
        All categories, ordered by ID
    """
    db.add(Categories(**DEMO_CATEGORY))
    await db.flush()
    logger.info("Created demo category", category_id=DEMO_CATEGORY["id"])

    result = await db.execute(select(Categories).order_by(Categories.id))
    categories = list(result.scalars().all())
    for category in categories:
        logger.info(
            "Category",
            category_id=category.id,
            name=category.name,
            color=category.color,
        )
    return categories
