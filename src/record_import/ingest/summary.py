from __future__ import annotations

from dataclasses import dataclass

from record_import.ingest.report import Report


@dataclass(frozen=True)
class ImportSummary:
    """Schema for all summary data printed after a run."""
    profile: str
    input_path: str
    total: int
    accepted: int
    rejected: int
    categories: int

    @classmethod
    def from_report(cls, report: Report, *, profile: str, input_path: str) -> "ImportSummary":
        return cls(
            profile=profile,
            input_path=input_path,
            total=report.total_processed,
            accepted=report.total_aggregated,
            rejected=report.total_with_error,
            categories=len(report.category_totals),
        )

    def render_one_line(self) -> str:
        """How each line of summary is formatted for the terminal."""
        return (
            f"{self.profile}: total={self.total} accepted={self.accepted} "
            f"rejected={self.rejected} categories={self.categories} input={self.input_path}"
        )
