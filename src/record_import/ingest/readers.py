from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, Iterator, Union

from record_import.errors import InvalidArgument, NotFound


Source = Union[str, Path]
NumberedLine = tuple[int, str]

# reader contract: one call per run, full line sequence, numbering is 1-based physical lines
SourceReader = Callable[[Source], list[NumberedLine]]



def _physical_lines(text: str) -> list[str]:
    """Split on `\\n`, `\\r\\n` and `\\r` only (no form feeds or unicode separators)."""
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


def number_lines(lines: Iterable[str]) -> Iterator[NumberedLine]:
    """
    Yields `(line_number, text)` for non-blank lines.

    `line_number` is 1-based by physical line: blank lines are skipped but still counted,
    so it stays a stable pointer into the input.
    """
    for i, line in enumerate(lines, start=1):
        s = line.rstrip("\r\n")
        if not s.strip():
            continue
        yield i, s


def read_source_lines(source: Source | None) -> list[NumberedLine]:
    """
    Read a whole UTF-8 file (a leading BOM is dropped) as numbered non-blank lines.

    Raises:
    - `InvalidArgument` when `source` is `None` or empty.
    - `NotFound` when `source` is not an existing file, cannot be opened, or is not UTF-8.
    """
    # `Path("")` renders as ".", so test the identifier itself
    if source is None or source == "" or (isinstance(source, Path) and not source.parts):
        raise InvalidArgument("source path must not be empty")

    path = Path(source)
    if not path.is_file():
        raise NotFound(f"source not found: {path}")

    # handle is released before any parsing starts
    try:
        with path.open("r", encoding="utf-8-sig", newline="") as f:
            text = f.read()
    except PermissionError as e:
        raise NotFound(f"source not readable: {path}") from e
    except UnicodeDecodeError as e:
        raise NotFound(f"source is not valid UTF-8: {path} ({e.reason} at byte {e.start})") from e
    return list(number_lines(_physical_lines(text)))


def read_text_lines(text: str | None) -> list[NumberedLine]:
    """In-memory counterpart of `read_source_lines`."""
    if text is None:
        raise InvalidArgument("source text must not be None")
    return list(number_lines(_physical_lines(text.lstrip("\ufeff"))))
