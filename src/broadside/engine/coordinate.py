"""Board coordinates and row-letter conversion."""

from __future__ import annotations

import string
from dataclasses import dataclass

ROW_LETTERS = string.ascii_uppercase


def row_index_from_letter(letter: str) -> int:
    """Convert a row letter (``A``, ``b``, ...) into a 1-indexed row number."""
    if len(letter) != 1 or letter not in string.ascii_letters:
        raise ValueError(f"Row must be a single letter A-Z, got {letter!r}.")
    return ROW_LETTERS.index(letter.upper()) + 1


def row_letter_from_index(index: int) -> str:
    """Convert a 1-indexed row number back into its letter."""
    if not 1 <= index <= len(ROW_LETTERS):
        raise ValueError(f"Row index must be between 1 and {len(ROW_LETTERS)}, got {index}.")
    return ROW_LETTERS[index - 1]


@dataclass(frozen=True)
class Coordinate:
    """Immutable board coordinate, 1-indexed on both axes."""

    column: int
    row: int

    @classmethod
    def from_label(cls, column: int, row_letter: str) -> Coordinate:
        """Build a coordinate from its human-facing form, e.g. ``(5, "C")``."""
        return cls(column, row_index_from_letter(row_letter))

    @property
    def row_letter(self) -> str:
        return row_letter_from_index(self.row)

    @property
    def label(self) -> str:
        """Return the coordinate as players write it, e.g. ``C5``."""
        return f"{self.row_letter}{self.column}"

    def offset(self, dx: int, dy: int) -> Coordinate:
        """Return a new coordinate moved ``dx`` columns and ``dy`` rows."""
        return Coordinate(self.column + dx, self.row + dy)

    def up(self) -> Coordinate:
        return self.offset(0, -1)

    def down(self) -> Coordinate:
        return self.offset(0, 1)

    def left(self) -> Coordinate:
        return self.offset(-1, 0)

    def right(self) -> Coordinate:
        return self.offset(1, 0)

    def neighbours(self) -> list[Coordinate]:
        """Return the four orthogonal neighbours (up, down, left, right)."""
        return [self.up(), self.down(), self.left(), self.right()]
