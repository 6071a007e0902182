"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from chessrules.core import Board, Position

    board = Board.initial()
    e2 = Position.from_algebraic("e2")
    print([str(p) for p in board.legal_moves(e2)])   # ['e3', 'e4']
"""

from chessrules.core.board import Board
from chessrules.core.enums import (
    PROMOTION_TYPES,
    Color,
    GameOutcome,
    GameState,
    PieceType,
)
from chessrules.core.move import Move
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.piece import Piece
from chessrules.core.position import Position, all_positions
from chessrules.core.rules import Rules

__all__ = [
    # Enums
    "Color",
    "GameOutcome",
    "GameState",
    "PROMOTION_TYPES",
    "PieceType",
    # Types / helpers
    "Position",
    "all_positions",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
    "Rules",
]
