"""Core enumerations for the chess domain."""

from __future__ import annotations

from enum import Enum, IntEnum


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def pawn_direction(self) -> int:
        """Row delta of a pawn step (White moves toward row 0)."""
        return -1 if self == Color.WHITE else 1

    @property
    def back_row(self) -> int:
        return 7 if self == Color.WHITE else 0

    @property
    def pawn_row(self) -> int:
        """Row the pawns start on (double step allowed from here)."""
        return 6 if self == Color.WHITE else 1

    @property
    def promotion_row(self) -> int:
        return 0 if self == Color.WHITE else 7

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


class GameState(Enum):
    """Status of a game, always seen from the side to move."""

    PLAYING = "playing"
    CHECK = "check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    DRAW = "draw"

    @property
    def is_terminal(self) -> bool:
        return self in (GameState.CHECKMATE, GameState.STALEMATE, GameState.DRAW)


class GameOutcome(IntEnum):
    """Final result handed to rating / persistence collaborators."""

    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3
    ABANDONED = 4
