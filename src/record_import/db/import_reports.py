from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from psycopg import Connection
from psycopg.types.json import Jsonb

from record_import.ingest.report import (
    KEY_CATEGORY_TOTALS,
    KEY_ERRORS,
    KEY_TOTAL_PROCESSED,
    KEY_TOTAL_WITH_ERROR,
    Report,
)


@dataclass(frozen=True)
class StoredReport:
    """One `import_reports` row."""
    report_id: UUID
    profile: str
    input_path: str
    created_at: datetime
    report: Report


def insert_import_report(conn: Connection, *, report: Report, profile: str, input_path: str) -> UUID:
    """
    Persist a finished report, returns `report_id`.
    Does not commit: the caller owns the transaction.
    """
    row = conn.execute(
        """
        INSERT INTO import_reports
          (profile, input_path, total_processed, total_with_error, errors, category_totals)
        VALUES (%s, %s, %s, %s, %s, %s)
        RETURNING report_id
        """,
        (
            profile,
            input_path,
            report.total_processed,
            report.total_with_error,
            Jsonb(list(report.errors)),
            Jsonb(dict(report.category_totals)),
        ),
    ).fetchone()
    assert row is not None
    return row[0]       # return only `report_id`


def fetch_import_report(conn: Connection, *, report_id: UUID) -> StoredReport:
    """Load a persisted report back into a sealed `Report`. Raises `LookupError` if absent."""
    row = conn.execute(
        """
        SELECT report_id, profile, input_path, created_at,
               total_processed, total_with_error, errors, category_totals
        FROM import_reports
        WHERE report_id = %s
        """,
        (report_id,),
    ).fetchone()
    if row is None:
        raise LookupError(f"no import report with report_id={report_id}")

    rid, profile, input_path, created_at, processed, with_error, errors, totals = row
    report = Report.from_dict(
        {
            KEY_TOTAL_PROCESSED: processed,
            KEY_TOTAL_WITH_ERROR: with_error,
            KEY_ERRORS: errors,
            KEY_CATEGORY_TOTALS: totals,
        }
    )
    return StoredReport(report_id=rid, profile=profile, input_path=input_path, created_at=created_at, report=report)
