from __future__ import annotations

from pathlib import Path

import pytest

from record_import.errors import InvalidArgument, NotFound
from record_import.ingest.readers import read_source_lines, read_text_lines


def test_read_source_lines_numbers_physical_lines(tmp_path: Path) -> None:
    """Blank lines are dropped but still counted."""
    p = tmp_path / "in.csv"
    p.write_text("Id,Nome\n\n1,Ana\n   \n2,Bruno\n", encoding="utf-8")
    assert read_source_lines(p) == [(1, "Id,Nome"), (3, "1,Ana"), (5, "2,Bruno")]


def test_read_source_lines_accepts_str_path_and_crlf(tmp_path: Path) -> None:
    p = tmp_path / "in.csv"
    p.write_bytes(b"Id,Nome\r\n1,Ana\r\n")
    assert read_source_lines(str(p)) == [(1, "Id,Nome"), (2, "1,Ana")]


def test_read_source_lines_drops_utf8_bom(tmp_path: Path) -> None:
    p = tmp_path / "bom.csv"
    p.write_bytes("Id,Nome\n1,João\n".encode("utf-8-sig"))
    assert read_source_lines(p) == [(1, "Id,Nome"), (2, "1,João")]


@pytest.mark.parametrize("source", [None, "", Path("")])
def test_read_source_lines_empty_identifier(source: object) -> None:
    with pytest.raises(InvalidArgument):
        read_source_lines(source)     # type: ignore[arg-type]


def test_read_source_lines_missing_file(tmp_path: Path) -> None:
    with pytest.raises(NotFound):
        read_source_lines(tmp_path / "nope.csv")


def test_read_source_lines_directory_is_not_found(tmp_path: Path) -> None:
    with pytest.raises(NotFound):
        read_source_lines(tmp_path)


def test_read_text_lines() -> None:
    assert read_text_lines("\n\nId\n1\n") == [(3, "Id"), (4, "1")]
    assert read_text_lines("") == []
    with pytest.raises(InvalidArgument):
        read_text_lines(None)


def test_read_source_lines_latin1_file_is_not_found(tmp_path: Path) -> None:
    """Bytes that are not UTF-8 -> `NotFound`, with the decode error chained."""
    p = tmp_path / "latin1.csv"
    p.write_bytes("Id,Nome,Turma\n1,João,101\n".encode("latin-1"))
    with pytest.raises(NotFound, match="not valid UTF-8") as e:
        read_source_lines(p)
    assert isinstance(e.value.__cause__, UnicodeDecodeError)


def test_read_source_lines_unreadable_file_is_not_found(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    p = tmp_path / "locked.csv"
    p.write_text("Id\n1\n", encoding="utf-8")

    def deny(self: Path, *args: object, **kwargs: object) -> object:
        raise PermissionError(13, "Permission denied", str(self))

    monkeypatch.setattr(Path, "open", deny)
    with pytest.raises(NotFound, match="not readable") as e:
        read_source_lines(p)
    assert isinstance(e.value.__cause__, PermissionError)
