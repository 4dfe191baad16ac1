from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional, Protocol, Sequence

from .primitives import ParseError, is_blank
from .types import Record

if TYPE_CHECKING:
    from record_import.ingest.report import Report



# -- Protocols: the variation points the engine calls into


class ValidationPolicy(Protocol):
    """
    Check one record. Returns the error messages in field-declaration order,
    empty list = accepted. Must not mutate the record or anything else.
    """
    def validate(self, record: Record) -> list[str]: ...


class AggregationPolicy(Protocol):
    """
    Called only for records that passed validation.
    Increments exactly one category of `report` by exactly 1, touches nothing else.
    """
    def aggregate(self, record: Record, report: "Report") -> None: ...


FinalizeHook = Callable[["Report"], None]      # optional, runs once before the report is sealed

# a rule returns its message, or `None` when the field is fine
FieldRule = Callable[[Record], Optional[str]]



## -- shared aggregation logic

def category_key(value: str | None, *, sentinel: str) -> str:
    """Blank values collapse onto the `sentinel` label."""
    if is_blank(value):
        return sentinel
    return value.strip()     # type: ignore[union-attr]


def increment_category(report: "Report", value: str | None, *, sentinel: str) -> str:
    """
    Increment-or-initialize-to-1 the category for `value`, `sentinel` when blank.
    Returns the key that was incremented.
    """
    key = category_key(value, sentinel=sentinel)
    report.increment_category(key)
    return key


@dataclass(frozen=True, slots=True)
class CategoryAggregator:
    """Aggregate records by one column, with a sentinel label for blanks."""
    field: str          # column holding the category, case-insensitive
    sentinel: str       # label used when the column is blank

    def aggregate(self, record: Record, report: "Report") -> None:
        increment_category(report, record.get(self.field), sentinel=self.sentinel)



## -- shared validation logic

@dataclass(frozen=True, slots=True)
class RequiredField:
    """Field must be present and non-blank. Message: `"<field> ausente"`."""
    field: str

    def __call__(self, record: Record) -> str | None:
        if is_blank(record.get(self.field)):
            return f"{self.field} ausente"
        return None


@dataclass(frozen=True, slots=True)
class ParsedField:
    """
    Field must survive `parser`. The parser raises `ParseError` whose `detail` is the message.
    Only the first failure of the chain is reported, so one field yields at most one message.
    """
    field: str
    parser: Callable[..., object]      # called as `parser(value, field=...)`

    def __call__(self, record: Record) -> str | None:
        try:
            self.parser(record.get(self.field), field=self.field)
        except ParseError as e:
            return e.detail
        return None


@dataclass(frozen=True, slots=True)
class FieldRulesValidator:
    """
    Run every rule in declaration order, collecting every message (no short-circuit
    across fields).
    """
    rules: Sequence[FieldRule]

    def validate(self, record: Record) -> list[str]:
        errors: list[str] = []
        for rule in self.rules:
            msg = rule(record)
            if msg is not None:
                errors.append(msg)
        return errors



@dataclass(frozen=True)
class ImportProfile:
    """A named pairing of policies for one data domain, plus its sample input."""
    name: str
    validation: ValidationPolicy
    aggregation: AggregationPolicy
    finalize: Optional[FinalizeHook] = None
    sample_filename: str = ""       # where `samples` writes `sample_text`
    sample_text: str = ""
