from __future__ import annotations

from dataclasses import dataclass


class ImportFault(Exception):
    """Base for every fault raised by an import run."""


class InvalidArgument(ImportFault, ValueError):
    """The source identifier is empty or `None`. Raised before any reading."""


class NotFound(ImportFault, FileNotFoundError):
    """The source identifier does not resolve to a readable file."""


class PolicyContractError(ImportFault, RuntimeError):
    """A validation/aggregation policy returned or did something outside its contract."""


class ReportSealedError(ImportFault, RuntimeError):
    """A sealed `Report` was mutated."""


class ReportFormatError(ImportFault, ValueError):
    """A serialized report document is missing keys or carries wrong types."""


@dataclass(frozen=True, slots=True)
class RecordValidationError:
    """
    One per-record failure. Never raised: collected into `Report.errors`.
    """
    line_number: int        # 1-based physical line of the input, blank lines counted
    message: str            # e.g. "Nome ausente"

    def __str__(self) -> str:
        return f"Line {self.line_number}: {self.message}"
