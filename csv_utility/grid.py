from __future__ import annotations

from typing import List, Optional

from .codec import parse_table, serialize_table


class CsvGrid:
    """
    In-memory table edited by one editor session.

    Rows may have different lengths; nothing here forces the grid to be
    rectangular.
    """

    def __init__(self, rows: Optional[List[List[str]]] = None):
        self.rows: List[List[str]] = [list(r) for r in rows] if rows else []

    @classmethod
    def from_text(cls, text: str) -> "CsvGrid":
        return cls(parse_table(text, keep_blank=True))

    def to_text(self) -> str:
        return serialize_table(self.rows)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return max((len(r) for r in self.rows), default=0)

    def is_rectangular(self) -> bool:
        return len({len(r) for r in self.rows}) <= 1

    def clear(self) -> None:
        self.rows.clear()

    def append_row(self) -> None:
        width = len(self.rows[0]) if self.rows else 1
        self.rows.append([""] * width)

    def append_column(self) -> None:
        if not self.rows:
            self.append_row()
            return
        for row in self.rows:
            row.append("")

    def remove_row(self, index: int) -> bool:
        if 0 <= index < len(self.rows):
            del self.rows[index]
            return True
        return False

    def get_cell(self, row: int, col: int) -> str:
        self._check(row, col)
        return self.rows[row][col]

    def set_cell(self, row: int, col: int, value: str) -> None:
        self._check(row, col)
        self.rows[row][col] = value

    def _check(self, row: int, col: int) -> None:
        # Negative indexes would silently address from the end.
        if not 0 <= row < len(self.rows):
            raise IndexError(f"row {row} out of range")
        if not 0 <= col < len(self.rows[row]):
            raise IndexError(f"column {col} out of range for row {row}")
