"""
Tests for the ledgerql-migrate command line
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner
from sqlalchemy import create_engine, inspect

from ledgerql.database.cli import get_alembic_config, main


@pytest.fixture(autouse=True)
def quiet_logging():
    with patch("ledgerql.database.cli.configure_logging"):
        yield


def test_alembic_config_points_at_project_scripts():
    config = get_alembic_config()

    script_location = Path(config.get_main_option("script_location"))
    assert (script_location / "env.py").is_file()
    assert any((script_location / "versions").glob("*_initial_schema.py"))


def test_database_url_option_is_exported_for_env_py():
    with patch("ledgerql.database.cli.command.current") as current:
        result = CliRunner().invoke(main, ["--database-url", "postgresql://u@h/db", "current"])

    assert result.exit_code == 0, result.output
    current.assert_called_once()
    assert os.environ["LEDGERQL_DATABASE_URL"] == "postgresql://u@h/db"


def test_failed_upgrade_exits_nonzero():
    with patch("ledgerql.database.cli.command.upgrade", side_effect=RuntimeError("boom")):
        result = CliRunner().invoke(main, ["upgrade"])

    assert result.exit_code == 1


@pytest.mark.integration
@pytest.mark.requires_db
def test_upgrade_and_downgrade(test_database):
    runner = CliRunner()

    result = runner.invoke(main, ["--database-url", test_database, "upgrade"])
    assert result.exit_code == 0, result.output

    engine = create_engine(test_database.replace("postgresql://", "postgresql+psycopg://", 1))
    try:
        tables = set(inspect(engine).get_table_names())
        assert {"users", "posts", "accounts", "categories", "transactions"} <= tables

        result = runner.invoke(main, ["--database-url", test_database, "downgrade", "base"])
        assert result.exit_code == 0, result.output
        assert "posts" not in inspect(engine).get_table_names()
    finally:
        engine.dispose()
