#!/usr/bin/env python3
"""
Main CLI entry point for the LedgerQL server and seed commands.
"""

import asyncio
import os
import sys

import click
import uvicorn

from ledgerql import __version__
from ledgerql.config import settings
from ledgerql.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="ledgerql")
def cli() -> None:
    """LedgerQL CLI - run the GraphQL server and seed the database."""
    pass


@cli.command()
@click.option(
    "--host",
    default=settings.api_host,
    help=f"Host to bind to (default: {settings.api_host})",
)
@click.option(
    "--port",
    default=settings.api_port,
    type=int,
    help=f"Port to bind to (default: {settings.api_port})",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
@click.option(
    "--workers",
    default=1,
    type=int,
    help="Number of worker processes (default: 1)",
)
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(
    host: str,
    port: int,
    reload: bool,
    workers: int,
    log_level: str,
) -> None:
    """Start the LedgerQL API server."""
    configure_logging(debug=(log_level == "debug"))

    logger.info(
        "Starting LedgerQL API server",
        host=host,
        port=port,
        reload=reload,
        workers=workers,
        log_level=log_level,
    )

    # Reload and multi-worker modes re-import the app, so settings go through the env
    if log_level == "debug":
        os.environ["LEDGERQL_DEBUG"] = "true"
        os.environ["LEDGERQL_LOG_LEVEL"] = "debug"
    else:
        os.environ.setdefault("LEDGERQL_DEBUG", "false")
        os.environ.setdefault("LEDGERQL_LOG_LEVEL", log_level)

    try:
        if reload or workers > 1:
            uvicorn.run(
                "ledgerql.api.app:app",
                host=host,
                port=port,
                reload=reload,
                workers=(workers if not reload else 1),  # reload doesn't work with multiple workers
                log_level=log_level,
                access_log=True,
            )
        else:
            from ledgerql.api.app import app

            uvicorn.run(
                app,
                host=host,
                port=port,
                log_level=log_level,
                access_log=True,
            )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


@cli.command("export-schema")
@click.argument("path", default="schema.graphql", type=click.Path(dir_okay=False))
def export_schema(path: str) -> None:
    """Write the GraphQL schema SDL to PATH (default: schema.graphql)."""
    from ledgerql.graphql.schema import export_schema as write_schema

    configure_logging(stream=sys.stderr)
    target = write_schema(path)
    click.echo(f"✓ Schema written to {target}")


@cli.group()
@click.option(
    "--database-url",
    default=None,
    help="Database URL (defaults to LEDGERQL_DATABASE_URL)",
)
@click.pass_context
def seed(ctx: click.Context, database_url: str | None) -> None:
    """Seed the database. Failures exit with status 1."""
    ctx.ensure_object(dict)
    ctx.obj["database_url"] = database_url
    configure_logging(debug=settings.debug, stream=sys.stderr)


@seed.command("demo")
@click.pass_context
def seed_demo(ctx: click.Context) -> None:
    """Insert the demonstration category and list all categories."""
    from ledgerql.database import open_database
    from ledgerql.database.seed_data import seed_demo_category

    async def do_seed() -> int:
        try:
            async with open_database(ctx.obj["database_url"]) as database:
                async with database.session() as db:
                    categories = await seed_demo_category(db)
        except Exception as e:
            logger.error("Failed to seed demo data", error=str(e))
            click.echo(f"✗ Error seeding demo data: {e}", err=True)
            return 1

        click.echo(f"✓ Demo category created ({len(categories)} categories total)")
        for category in categories:
            click.echo(f"  {category.id}: {category.name} ({category.color})")
        return 0

    exit_code = asyncio.run(do_seed())
    if exit_code:
        sys.exit(exit_code)


@seed.command("csv")
@click.option(
    "--data-dir",
    default=settings.seed_data_dir,
    help=f"Directory holding the CSV exports (default: {settings.seed_data_dir})",
)
@click.option(
    "--source",
    default="server",
    type=click.Choice(["server", "client"]),
    help="server: the database reads the files itself; client: stream local files",
)
@click.pass_context
def seed_csv(ctx: click.Context, data_dir: str, source: str) -> None:
    """Bulk-load accounts, categories and transactions from CSV files."""
    from ledgerql.database import open_database
    from ledgerql.database.seed_data import CopySource, seed_from_csv

    async def do_seed() -> int:
        try:
            async with open_database(ctx.obj["database_url"]) as database:
                async with database.session() as db:
                    loaded = await seed_from_csv(db, data_dir, CopySource(source))
        except Exception as e:
            logger.error("Failed to seed database", error=str(e))
            click.echo(f"✗ Error seeding database: {e}", err=True)
            return 1

        click.echo("✓ Database seeded successfully")
        for table_name, rows in loaded.items():
            click.echo(f"  {table_name}: {rows if rows >= 0 else 'unknown'} rows")
        return 0

    exit_code = asyncio.run(do_seed())
    if exit_code:
        sys.exit(exit_code)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    cli()
