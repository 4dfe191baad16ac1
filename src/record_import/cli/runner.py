from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from uuid import UUID

from record_import.db.connect import connect
from record_import.db.import_reports import insert_import_report
from record_import.ingest.engine import ImportEngine
from record_import.ingest.report import Report
from record_import.ingest.summary import ImportSummary
from record_import.parsing.registry import get_profile
from record_import.sinks.files import default_report_path, write_report

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportResult:
    """Everything the CLI needs to narrate one finished run."""
    report: Report
    summary: ImportSummary
    report_path: Optional[Path]     # `None` when the file sink was skipped
    report_id: Optional[UUID]       # `None` when not persisted to Postgres


def import_file(
    *,
    input_path: Path,
    profile_name: str,
    out_path: Optional[Path] = None,
    write: bool = True,
    persist: bool = False,
) -> ImportResult:
    """
    End-to-end single import:
      - look up the profile's policies,
      - run the engine over `input_path`,
      - hand the sealed report to the sinks:
            - JSON file (`out_path`, default `<stem>.<profile>.report.json` beside the input),
            - `import_reports` ledger in Postgres (only if `persist`).

    Raises on fatal import faults (`InvalidArgument`, `NotFound`) and sink failures.
    Invalid records never raise: they are in `report.errors`.
    """
    profile = get_profile(profile_name)
    engine = ImportEngine.from_profile(profile)

    report = engine.execute(input_path)
    summary = ImportSummary.from_report(report, profile=profile.name, input_path=str(input_path))

    report_path: Optional[Path] = None
    if write:
        report_path = write_report(report, out_path or default_report_path(input_path, profile.name))
        logger.info("report written: %s", report_path)

    report_id: Optional[UUID] = None
    if persist:
        with connect() as conn:
            report_id = insert_import_report(conn, report=report, profile=profile.name, input_path=str(input_path))
            conn.commit()
        logger.info("report persisted: report_id=%s", report_id)

    return ImportResult(report=report, summary=summary, report_path=report_path, report_id=report_id)
