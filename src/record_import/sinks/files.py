from __future__ import annotations

from pathlib import Path

from record_import.ingest.report import Report


def default_report_path(input_path: Path, profile_name: str) -> Path:
    """`data/alunos.csv` + `roster` -> `data/alunos.roster.report.json`."""
    return input_path.with_name(f"{input_path.stem}.{profile_name.lower()}.report.json")


def write_report(report: Report, path: Path) -> Path:
    """Write the report's JSON document (UTF-8), creating parent dirs. Returns `path`."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(report.to_json() + "\n", encoding="utf-8")
    return path


def read_report(path: Path) -> Report:
    """Load a report written by `write_report` (sealed)."""
    return Report.from_json(path.read_text(encoding="utf-8"))


def write_sample(directory: Path, filename: str, text: str) -> Path:
    """Write one sample input file into `directory`. Returns the file's path."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / filename
    path.write_text(text, encoding="utf-8")
    return path
