"""High-level chess rules: check, checkmate, stalemate, game state."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessrules.core.enums import Color, GameOutcome, GameState
from chessrules.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from chessrules.core.board import Board
    from chessrules.core.position import Position


class Rules:
    """Static rule-checker that operates on a :class:`Board` and a side."""

    # Product policy: no repetition or fifty-move draws; draws come from
    # stalemate or an accepted offer only.

    @staticmethod
    def is_in_check(board: Board, color: Color) -> bool:
        return MoveGenerator(board).is_in_check(color)

    @staticmethod
    def is_checkmate(
        board: Board, color: Color, en_passant_target: Position | None = None
    ) -> bool:
        gen = MoveGenerator(board)
        if not gen.is_in_check(color):
            return False
        return not gen.has_any_legal_move(color, en_passant_target)

    @staticmethod
    def is_stalemate(
        board: Board, color: Color, en_passant_target: Position | None = None
    ) -> bool:
        gen = MoveGenerator(board)
        if gen.is_in_check(color):
            return False
        return not gen.has_any_legal_move(color, en_passant_target)

    @staticmethod
    def evaluate_state(
        board: Board, color: Color, en_passant_target: Position | None = None
    ) -> GameState:
        """State for *color* to move: checkmate > stalemate > check > playing."""
        gen = MoveGenerator(board)
        in_check = gen.is_in_check(color)
        if not gen.has_any_legal_move(color, en_passant_target):
            return GameState.CHECKMATE if in_check else GameState.STALEMATE
        return GameState.CHECK if in_check else GameState.PLAYING

    @staticmethod
    def outcome_for(state: GameState, side_to_move: Color) -> GameOutcome | None:
        """Result of a terminal *state*; ``None`` while the game goes on."""
        if state == GameState.CHECKMATE:
            return (
                GameOutcome.BLACK_WINS
                if side_to_move == Color.WHITE
                else GameOutcome.WHITE_WINS
            )
        if state in (GameState.STALEMATE, GameState.DRAW):
            return GameOutcome.DRAW
        return None
