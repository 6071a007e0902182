"""Move history record."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.enums import PieceType
from chessrules.core.piece import Piece
from chessrules.core.position import Position


@dataclass(frozen=True, slots=True)
class Move:
    """One committed move.

    ``piece`` is a snapshot of the mover taken before the move. For an en
    passant capture ``captured_piece`` is the pawn removed from the square
    behind ``to_pos``, not whatever stood on ``to_pos``.
    """

    from_pos: Position
    to_pos: Position
    piece: Piece
    captured_piece: Piece | None = None
    promotion: PieceType | None = None

    @property
    def is_capture(self) -> bool:
        return self.captured_piece is not None

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        capture = "x" if self.captured_piece is not None else ""
        name = self.piece.piece_type.name.capitalize()
        return f"{name} {self.from_pos}{capture}{self.to_pos}"
