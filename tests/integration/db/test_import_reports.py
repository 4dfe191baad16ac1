from __future__ import annotations

from uuid import uuid4

import psycopg
import pytest

from record_import.db.import_reports import fetch_import_report, insert_import_report
from record_import.ingest.engine import ImportEngine
from record_import.parsing.profiles.catalog import CATALOG_SAMPLE

pytestmark = pytest.mark.integration


def test_persisted_report_round_trips(conn: psycopg.Connection, catalog_engine: ImportEngine) -> None:
    report = catalog_engine.execute_text(CATALOG_SAMPLE)

    report_id = insert_import_report(conn, report=report, profile="catalog", input_path="produtos.csv")
    conn.commit()

    stored = fetch_import_report(conn, report_id=report_id)
    assert stored.report_id == report_id
    assert stored.profile == "catalog"
    assert stored.input_path == "produtos.csv"
    assert stored.report == report
    assert list(stored.report.errors) == ["Line 4: Preco nao pode ser negativo", "Line 6: Categoria ausente"]


def test_ledger_columns_hold_counts(conn: psycopg.Connection, roster_engine: ImportEngine) -> None:
    report = roster_engine.execute_text("Id,Nome,Turma\n1,Ana,101\n2,,101\n")
    report_id = insert_import_report(conn, report=report, profile="roster", input_path="<text>")
    conn.commit()

    row = conn.execute(
        "SELECT total_processed, total_with_error, category_totals FROM import_reports WHERE report_id = %s",
        (report_id,),
    ).fetchone()
    assert row == (2, 1, {"101": 1})


def test_fetch_unknown_report_raises(conn: psycopg.Connection) -> None:
    with pytest.raises(LookupError):
        fetch_import_report(conn, report_id=uuid4())
