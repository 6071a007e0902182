"""Game management layer — turn state machine, events, snapshots.

Quick start::

    from chessrules.core import Position
    from chessrules.game import GameController

    ctrl = GameController()
    ctrl.events.on_move.append(print)
    ctrl.select_piece(Position.from_algebraic("e2"))
    ctrl.make_move(Position.from_algebraic("e4"))

The Qt adapter lives in :mod:`chessrules.game.qt_bridge` and is imported
on demand so the rules engine itself never needs Qt.
"""

from chessrules.game.controller import GameController, GameEvents
from chessrules.game.interfaces import GameConfig, IGameController, MoveResult
from chessrules.game.snapshot import (
    GameSnapshot,
    MoveState,
    SnapshotError,
    SquareState,
    build_board,
    restore_snapshot,
    take_snapshot,
)

__all__ = [
    # Interfaces
    "GameConfig",
    "IGameController",
    "MoveResult",
    # Concrete
    "GameController",
    "GameEvents",
    # Persistence boundary
    "GameSnapshot",
    "MoveState",
    "SnapshotError",
    "SquareState",
    "build_board",
    "restore_snapshot",
    "take_snapshot",
]
