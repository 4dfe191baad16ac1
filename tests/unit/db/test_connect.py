from __future__ import annotations

from typing import Any

import pytest

import record_import.db.connect as db_connect
from record_import.db.connect import APPLICATION_NAME, DEFAULT_DSN, connect, get_connect_timeout


@pytest.fixture()
def captured(monkeypatch: pytest.MonkeyPatch) -> dict[str, Any]:
    """Patches `psycopg.connect` to record its arguments instead of dialing Postgres."""
    calls: dict[str, Any] = {}

    def fake_connect(url: str, **kwargs: Any) -> object:
        calls["url"] = url
        calls.update(kwargs)
        return object()

    monkeypatch.setattr(db_connect.psycopg, "connect", fake_connect)
    return calls


def test_connect_uses_env_dsn_and_ledger_settings(monkeypatch: pytest.MonkeyPatch, captured: dict[str, Any]) -> None:
    monkeypatch.setenv("RECORD_IMPORT_DSN", "postgresql://u:p@db:5432/x")
    monkeypatch.delenv("RECORD_IMPORT_CONNECT_TIMEOUT", raising=False)
    connect()
    assert captured == {
        "url": "postgresql://u:p@db:5432/x",
        "connect_timeout": 5,
        "application_name": APPLICATION_NAME,
    }


def test_connect_explicit_url_wins(monkeypatch: pytest.MonkeyPatch, captured: dict[str, Any]) -> None:
    monkeypatch.delenv("RECORD_IMPORT_DSN", raising=False)
    connect("postgresql://explicit/db")
    assert captured["url"] == "postgresql://explicit/db"

    connect()
    assert captured["url"] == DEFAULT_DSN


def test_connect_timeout_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RECORD_IMPORT_CONNECT_TIMEOUT", "12")
    assert get_connect_timeout() == 12


@pytest.mark.parametrize("raw", ["soon", "0", "-3"])
def test_connect_timeout_rejects_bad_values(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("RECORD_IMPORT_CONNECT_TIMEOUT", raw)
    with pytest.raises(ValueError, match="RECORD_IMPORT_CONNECT_TIMEOUT"):
        get_connect_timeout()
