"""
Tests for the PostgreSQL availability check that gates `requires_db` tests
"""

import shutil

from conftest import postgres_available


def fake_which(*installed):
    return lambda name: f"/usr/bin/{name}" if name in installed else None


def test_client_tools_alone_do_not_count(monkeypatch):
    monkeypatch.setattr(shutil, "which", fake_which("pg_config", "psql"))

    assert postgres_available() is False


def test_server_control_binary_required(monkeypatch):
    monkeypatch.setattr(shutil, "which", fake_which("pg_ctl"))

    assert postgres_available() is True
