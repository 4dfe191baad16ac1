from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any


DELIMITER = ","     # the only supported separator


@dataclass(frozen=True, slots=True)
class ParseError(Exception):
    """A cell could not be coerced. `detail` is the message reported for the record."""
    field: str
    detail: str


def is_blank(v: Any) -> bool:
    """`None`, empty and whitespace-only strings are blank."""
    if v is None:
        return True
    return isinstance(v, str) and v.strip() == ""


def split_cells(line: str) -> list[str]:
    """Split one line on the delimiter and trim every cell."""
    return [c.strip() for c in line.split(DELIMITER)]


def parse_decimal(v: Any, *, field: str) -> Decimal:
    """
    Parse a plain decimal number ("2.5", "-10", "1e3").
    Raises `ParseError` on blank input, garbage, and non-finite values (NaN/Infinity).
    """
    if is_blank(v):
        raise ParseError(field, f"{field} ausente")
    try:
        d = Decimal(str(v).strip())
    except (InvalidOperation, ValueError):
        raise ParseError(field, f"{field} invalido")
    if not d.is_finite():
        raise ParseError(field, f"{field} invalido")
    return d


def parse_non_negative_decimal(v: Any, *, field: str) -> Decimal:
    """`parse_decimal`, then reject values below zero."""
    d = parse_decimal(v, field=field)
    if d < 0:
        raise ParseError(field, f"{field} nao pode ser negativo")
    return d
