from __future__ import annotations

import logging
from typing import Optional

from record_import.errors import PolicyContractError, RecordValidationError
from record_import.ingest.readers import NumberedLine, Source, SourceReader, read_source_lines, read_text_lines
from record_import.ingest.report import Report
from record_import.parsing.policies import AggregationPolicy, FinalizeHook, ImportProfile, ValidationPolicy
from record_import.parsing.primitives import split_cells
from record_import.parsing.types import Record

logger = logging.getLogger(__name__)


class ImportEngine:
    """
    Fixed import algorithm with the per-domain decisions injected:
      - `validation` decides which records are rejected (and why),
      - `aggregation` decides which category an accepted record counts towards,
      - `finalize` (optional) post-processes the report once, before it is sealed.

    One engine can run any number of sources; every run gets its own `Report`.
    """

    def __init__(
        self,
        validation: ValidationPolicy,
        aggregation: AggregationPolicy,
        finalize: Optional[FinalizeHook] = None,
        *,
        reader: SourceReader = read_source_lines,
    ) -> None:
        self.validation = validation
        self.aggregation = aggregation
        self.finalize = finalize
        self.reader = reader

    @classmethod
    def from_profile(cls, profile: ImportProfile, *, reader: SourceReader = read_source_lines) -> "ImportEngine":
        return cls(profile.validation, profile.aggregation, profile.finalize, reader=reader)

    def execute(self, source: Source | None) -> Report:
        """
        Import one source (a file path) end to end and return its sealed `Report`.

        Raises `InvalidArgument` for an empty/`None` source and `NotFound` for a missing
        one. Will not raise on invalid records (they are counted and listed in `errors`).
        """
        lines = self.reader(source)     # type: ignore[arg-type]
        return self._run(lines, label=str(source))

    def execute_text(self, text: str | None) -> Report:
        """`execute` over in-memory text instead of a file."""
        return self._run(read_text_lines(text), label="<text>")

    def _run(self, lines: list[NumberedLine], *, label: str) -> Report:
        report = Report()

        # empty (or all blank) source -> empty report, not an error
        if not lines:
            logger.info("import %s: no lines, empty report", label)
            return report.seal()

        _, header_line = lines[0]
        header = split_cells(header_line)

        ## -- per-record loop
        for line_number, line in lines[1:]:
            record = Record.from_cells(header, split_cells(line))

            messages = self.validation.validate(record)
            if not isinstance(messages, list):
                raise PolicyContractError(
                    f"{type(self.validation).__name__}.validate returned {type(messages).__name__}, expected list"
                )

            report.record_processed()

            ## -- route each record to errors vs category totals
            if messages:
                report.record_rejected([RecordValidationError(line_number, m) for m in messages])
                logger.debug("import %s: line %d rejected: %s", label, line_number, "; ".join(messages))
            else:
                self._aggregate(record, report, line_number=line_number)

        if self.finalize is not None:
            self.finalize(report)

        logger.info(
            "import %s: processed=%d with_error=%d categories=%d",
            label,
            report.total_processed,
            report.total_with_error,
            len(report.category_totals),
        )
        return report.seal()

    def _aggregate(self, record: Record, report: Report, *, line_number: int) -> None:
        """Run the aggregation policy and check it moved the totals by exactly one."""
        before_total = report.total_aggregated
        before_counts = (report.total_processed, report.total_with_error, len(report.errors))

        self.aggregation.aggregate(record, report)

        after_counts = (report.total_processed, report.total_with_error, len(report.errors))
        if report.total_aggregated != before_total + 1 or after_counts != before_counts:
            raise PolicyContractError(
                f"{type(self.aggregation).__name__}.aggregate must increment exactly one category by 1 "
                f"(line {line_number})"
            )
