from __future__ import annotations

from typing import Iterator, Mapping, Sequence


class Record(Mapping[str, str]):
    """
    One parsed data row: column name -> cell value.

    Lookups ignore case (`record["id"]` and `record["ID"]` are the same cell).
    Iteration yields the header's own spelling. Columns that got no cell are absent,
    never defaulted, so `record.get("Preco")` is `None` on a short line.
    """

    __slots__ = ("_cells", "_names")

    def __init__(self, cells: Mapping[str, str]) -> None:
        folded: dict[str, str] = {}
        names: dict[str, str] = {}
        for k, v in cells.items():
            key = k.casefold()
            # right-most duplicate column wins
            folded[key] = v
            names[key] = k
        self._cells = folded
        self._names = names

    @classmethod
    def from_cells(cls, header: Sequence[str], cells: Sequence[str]) -> "Record":
        """
        Zip `header` with `cells` positionally.
        Fewer cells -> trailing columns absent. Extra cells -> ignored.
        """
        return cls(dict(zip(header, cells)))

    def __getitem__(self, key: str) -> str:
        if not isinstance(key, str):
            raise KeyError(key)
        return self._cells[key.casefold()]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.casefold() in self._cells

    def __iter__(self) -> Iterator[str]:
        return iter(self._names.values())

    def __len__(self) -> int:
        return len(self._cells)

    def __setattr__(self, name: str, value: object) -> None:
        if hasattr(self, "_names"):
            raise AttributeError("Record is immutable")
        object.__setattr__(self, name, value)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Record):
            return self._cells == other._cells
        return super().__eq__(other)

    def __repr__(self) -> str:
        cells = {self._names[k]: v for k, v in self._cells.items()}
        return f"Record({cells!r})"
