"""Position value type: a (row, col) board coordinate.

Layout::

    row 0 -> rank 8 (Black's back rank)
    row 7 -> rank 1 (White's back rank)
    col 0 -> a-file, col 7 -> h-file
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

_FILES = "abcdefgh"


@dataclass(frozen=True, slots=True)
class Position:
    """Immutable board coordinate. May lie off the board; see :attr:`is_valid`."""

    row: int
    col: int

    @property
    def is_valid(self) -> bool:
        return 0 <= self.row < 8 and 0 <= self.col < 8

    # ── Arithmetic ───────────────────────────────────────────────────────

    def __add__(self, other: Position) -> Position:
        return Position(self.row + other.row, self.col + other.col)

    def __sub__(self, other: Position) -> Position:
        return Position(self.row - other.row, self.col - other.col)

    def __mul__(self, factor: int) -> Position:
        return Position(self.row * factor, self.col * factor)

    # ── Notation ─────────────────────────────────────────────────────────

    def __str__(self) -> str:
        """Algebraic name, e.g. Position(6, 4) -> 'e2'."""
        if not self.is_valid:
            return f"({self.row}, {self.col})"
        return f"{_FILES[self.col]}{8 - self.row}"

    @classmethod
    def from_algebraic(cls, name: str) -> Position:
        """Parse square name, e.g. 'e4' -> Position(4, 4)."""
        if len(name) != 2 or name[0] not in _FILES or name[1] not in "12345678":
            raise ValueError(f"Invalid square name: {name!r}")
        return cls(8 - int(name[1]), _FILES.index(name[0]))


def all_positions() -> Iterator[Position]:
    """The 64 on-board positions, row-major from a8 to h1."""
    for row in range(8):
        for col in range(8):
            yield Position(row, col)
