from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from record_import.ingest.engine import ImportEngine
from record_import.parsing.registry import get_profile


def _find_repo_root(start: Path) -> Path:
    marker = "pyproject.toml"
    cur = start.resolve()
    for p in (cur, *cur.parents):
        if (p / marker).exists():
            return p
    raise RuntimeError(f"Could not find repo root from: {start}")


@pytest.fixture(scope="session")
def repo_root() -> Path:
    """The absolute path to the repo root (finds by walking up to `pyproject.toml`)."""
    return _find_repo_root(Path(__file__))


@pytest.fixture()
def roster_engine() -> ImportEngine:
    return ImportEngine.from_profile(get_profile("roster"))


@pytest.fixture()
def catalog_engine() -> ImportEngine:
    return ImportEngine.from_profile(get_profile("catalog"))


@pytest.fixture()
def write_csv(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write `text` to `tmp_path / name` and return the path."""
    def _write(name: str, text: str) -> Path:
        p = tmp_path / name
        p.write_text(text, encoding="utf-8")
        return p
    return _write
