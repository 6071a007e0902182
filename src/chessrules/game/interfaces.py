"""Abstract interfaces and value types for the game layer.

Front ends (UI, CLI, network) program against :class:`IGameController`;
the concrete :class:`~chessrules.game.controller.GameController` is one
implementation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from chessrules.core.enums import Color, GameState, PieceType

if TYPE_CHECKING:
    from chessrules.core.board import Board
    from chessrules.core.move import Move
    from chessrules.core.position import Position


# ── Move submission result ───────────────────────────────────────────────────


class MoveResult(IntEnum):
    """Outcome of :meth:`IGameController.submit_move`."""

    APPLIED = auto()
    REJECTED = auto()
    PROMOTION_REQUIRED = auto()  # pawn reached the last rank, no piece chosen


# ── Configuration ────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Immutable game configuration.

    Args:
        default_promotion: Piece a pawn becomes when no choice is made
            (auto-promotion and undo replay).
        auto_promote: When True, :meth:`IGameController.make_move` promotes
            to ``default_promotion`` instead of reporting that a choice is
            required.
    """

    default_promotion: PieceType = PieceType.QUEEN
    auto_promote: bool = False

    def __post_init__(self) -> None:
        if self.default_promotion in (PieceType.PAWN, PieceType.KING):
            raise ValueError(
                f"Invalid default promotion: {self.default_promotion.name}"
            )


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IGameController(ABC):
    """Interface for the turn-based game orchestrator."""

    @abstractmethod
    def select_piece(self, position: Position) -> bool:
        """Select a piece of the side to move. Returns True on success."""

    @abstractmethod
    def submit_move(
        self, to: Position, promotion: PieceType | None = None
    ) -> MoveResult:
        """Move the selected piece to *to*."""

    @abstractmethod
    def make_move(self, to: Position) -> bool:
        """Move the selected piece. False if rejected or a promotion is needed."""

    @abstractmethod
    def make_move_with_promotion(self, to: Position, promoted: PieceType) -> bool:
        """Move the selected pawn to the last rank, promoting to *promoted*."""

    @abstractmethod
    def request_draw(self) -> None:
        """Side to move offers a draw."""

    @abstractmethod
    def accept_draw(self) -> None:
        """The pending draw offer is accepted; the game ends drawn."""

    @abstractmethod
    def undo_move(self) -> bool:
        """Undo the last move. Returns True on success."""

    @abstractmethod
    def new_game(self) -> None:
        """Reset to the starting position."""

    @abstractmethod
    def restore_game_state(
        self,
        board: Board,
        move_history: list[Move],
        en_passant_target: Position | None,
        current_player: Color,
        state: GameState,
    ) -> None:
        """Re-arm the game from externally reconstructed state."""
