#!/usr/bin/env python3
"""
CLI entry point for LedgerQL database migrations.
"""

import os
import sys
from collections.abc import Callable
from pathlib import Path

import click

from alembic import command
from alembic.config import Config
from ledgerql import __version__
from ledgerql.logging import configure_logging, get_logger

logger = get_logger(__name__)


def get_alembic_config() -> Config:
    """Get Alembic configuration."""
    # alembic.ini sits at the project root, next to src/
    project_dir = Path(__file__).parent.parent.parent.parent
    alembic_ini = project_dir / "alembic.ini"

    if not alembic_ini.exists():
        raise FileNotFoundError(f"alembic.ini not found at {alembic_ini}")

    config = Config(str(alembic_ini))
    config.set_main_option("script_location", str(project_dir / "alembic"))
    return config


def run_alembic(description: str, action: Callable[[Config], None], **log_fields) -> None:
    """Run one Alembic command, logging failures and exiting with status 1."""
    try:
        config = get_alembic_config()
        logger.info(f"{description} started", **log_fields)
        action(config)
        logger.info(f"{description} completed successfully")
    except Exception as e:
        logger.error(f"{description} failed", error=str(e))
        sys.exit(1)


@click.group()
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
@click.option(
    "--database-url",
    default=None,
    help="Database URL (defaults to LEDGERQL_DATABASE_URL)",
)
@click.version_option(version=__version__, prog_name="ledgerql-migrate")
def main(log_level: str, database_url: str | None) -> None:
    """LedgerQL database migration management."""
    configure_logging(debug=(log_level == "debug"), stream=sys.stderr)
    if database_url:
        # alembic/env.py reads the URL from the environment
        os.environ["LEDGERQL_DATABASE_URL"] = database_url


@main.command()
@click.argument("revision", default="head")
def upgrade(revision: str) -> None:
    """Upgrade database to a revision (default: head)."""
    run_alembic(
        "Database upgrade",
        lambda config: command.upgrade(config, revision),
        revision=revision,
    )


@main.command()
@click.argument("revision", default="-1")
def downgrade(revision: str) -> None:
    """Downgrade database to a revision (default: -1)."""
    run_alembic(
        "Database downgrade",
        lambda config: command.downgrade(config, revision),
        revision=revision,
    )


@main.command()
@click.option("-m", "--message", required=True, help="Revision message")
@click.option("--autogenerate/--no-autogenerate", default=True, help="Auto-generate migration")
def revision(message: str, autogenerate: bool) -> None:
    """Create a new migration revision."""
    run_alembic(
        "Migration creation",
        lambda config: command.revision(config, message=message, autogenerate=autogenerate),
        message=message,
        autogenerate=autogenerate,
    )


@main.command()
def current() -> None:
    """Show current database revision."""
    run_alembic("Current revision lookup", command.current)


@main.command()
def history() -> None:
    """Show migration history."""
    run_alembic("Migration history lookup", command.history)


if __name__ == "__main__":
    main()
