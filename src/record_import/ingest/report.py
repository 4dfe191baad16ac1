from __future__ import annotations

import json
from types import MappingProxyType
from typing import Any, Mapping, Sequence

from record_import.errors import RecordValidationError, ReportFormatError, ReportSealedError


# serialized key names, stable for every consumer of the report document
KEY_TOTAL_PROCESSED = "totalProcessados"
KEY_TOTAL_WITH_ERROR = "totalComErro"
KEY_ERRORS = "erros"
KEY_CATEGORY_TOTALS = "totaisPorCategoria"


class Report:
    """
    Accumulator for one import run.

    Counters and the error list are written by the engine, `category_totals` by the
    aggregation policy (through `increment_category`). Once `seal()` is called every
    mutator raises `ReportSealedError` and the collections are read-only views.
    """

    def __init__(self) -> None:
        self._total_processed = 0
        self._total_with_error = 0
        self._errors: list[str] = []
        self._category_totals: dict[str, int] = {}
        self._sealed = False


    ## -- read side

    @property
    def total_processed(self) -> int:
        return self._total_processed

    @property
    def total_with_error(self) -> int:
        return self._total_with_error

    @property
    def errors(self) -> Sequence[str]:
        """Line-numbered messages in input order. A tuple once sealed."""
        return tuple(self._errors) if self._sealed else self._errors

    @property
    def category_totals(self) -> Mapping[str, int]:
        """Category label -> count. A read-only view once sealed."""
        return MappingProxyType(self._category_totals) if self._sealed else self._category_totals

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def total_aggregated(self) -> int:
        """Sum of all category counts (= number of accepted records)."""
        return sum(self._category_totals.values())


    ## -- write side

    def _check_open(self) -> None:
        if self._sealed:
            raise ReportSealedError("report is sealed")

    def record_processed(self) -> None:
        self._check_open()
        self._total_processed += 1

    def record_rejected(self, failures: Sequence[RecordValidationError]) -> None:
        """Count one failing record and append each of its messages (at least one)."""
        self._check_open()
        if not failures:
            raise ValueError("a rejected record needs at least one failure")
        self._total_with_error += 1
        self._errors.extend(str(f) for f in failures)

    def increment_category(self, key: str) -> None:
        """Increment-or-initialize-to-1."""
        self._check_open()
        self._category_totals[key] = self._category_totals.get(key, 0) + 1

    def seal(self) -> "Report":
        self._sealed = True
        return self


    ## -- serialization

    def to_dict(self) -> dict[str, Any]:
        return {
            KEY_TOTAL_PROCESSED: self._total_processed,
            KEY_TOTAL_WITH_ERROR: self._total_with_error,
            KEY_ERRORS: list(self._errors),
            KEY_CATEGORY_TOTALS: dict(self._category_totals),
        }

    def to_json(self) -> str:
        """Indented JSON document, non-ASCII kept as is."""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any]) -> "Report":
        """
        Reverse of `to_dict`. Returns a sealed report.
        Raises `ReportFormatError` on missing keys, wrong types, or counts that break
        `processed == with_error + sum(totals)`.
        """
        missing = [k for k in (KEY_TOTAL_PROCESSED, KEY_TOTAL_WITH_ERROR, KEY_ERRORS, KEY_CATEGORY_TOTALS) if k not in doc]
        if missing:
            raise ReportFormatError(f"report document missing keys: {missing}")

        processed = doc[KEY_TOTAL_PROCESSED]
        with_error = doc[KEY_TOTAL_WITH_ERROR]
        errors = doc[KEY_ERRORS]
        totals = doc[KEY_CATEGORY_TOTALS]

        # bool is an int subclass, never a valid count
        for name, v in ((KEY_TOTAL_PROCESSED, processed), (KEY_TOTAL_WITH_ERROR, with_error)):
            if not isinstance(v, int) or isinstance(v, bool) or v < 0:
                raise ReportFormatError(f"{name}: expected non-negative int, got {v!r}")
        if not isinstance(errors, list) or not all(isinstance(e, str) for e in errors):
            raise ReportFormatError(f"{KEY_ERRORS}: expected list of strings")
        if not isinstance(totals, Mapping) or not all(
            isinstance(k, str) and isinstance(v, int) and not isinstance(v, bool) for k, v in totals.items()
        ):
            raise ReportFormatError(f"{KEY_CATEGORY_TOTALS}: expected mapping of str -> int")

        ## -- the same invariants a finished run holds
        bad = sorted(k for k, v in totals.items() if v < 1)
        if bad:
            raise ReportFormatError(f"{KEY_CATEGORY_TOTALS}: counts must be >= 1, got {bad}")
        if bool(errors) != (with_error > 0):
            raise ReportFormatError(f"{KEY_ERRORS} must be non-empty exactly when {KEY_TOTAL_WITH_ERROR} > 0")
        if processed != with_error + sum(totals.values()):
            raise ReportFormatError(
                f"{KEY_TOTAL_PROCESSED}={processed} != {KEY_TOTAL_WITH_ERROR}={with_error} "
                f"+ sum({KEY_CATEGORY_TOTALS})={sum(totals.values())}"
            )

        rep = cls()
        rep._total_processed = processed
        rep._total_with_error = with_error
        rep._errors = list(errors)
        rep._category_totals = dict(totals)
        return rep.seal()

    @classmethod
    def from_json(cls, text: str) -> "Report":
        try:
            doc = json.loads(text)
        except json.JSONDecodeError as e:
            raise ReportFormatError(f"report document is not valid JSON: {e}") from e
        if not isinstance(doc, dict):
            raise ReportFormatError("report document must be a JSON object")
        return cls.from_dict(doc)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Report):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return (
            f"Report(total_processed={self._total_processed}, total_with_error={self._total_with_error}, "
            f"errors={len(self._errors)}, category_totals={self._category_totals!r}, sealed={self._sealed})"
        )
