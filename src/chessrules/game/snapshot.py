"""Plain-data snapshots of a game for the persistence collaborator.

No storage happens here: a snapshot is turned into a ``dict`` of JSON-safe
values by :meth:`GameSnapshot.to_dict` and back by
:meth:`GameSnapshot.from_dict`. Boards are rebuilt square by square, never
by replaying moves.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from chessrules.core.board import Board
from chessrules.core.enums import Color, GameState, PieceType
from chessrules.core.move import Move
from chessrules.core.piece import Piece
from chessrules.core.position import Position, all_positions
from chessrules.game.controller import GameController

_LOGGER = logging.getLogger(__name__)


class SnapshotError(ValueError):
    """Raised when snapshot data cannot be decoded."""


@dataclass(frozen=True, slots=True)
class SquareState:
    """Contents of one square. Empty squares carry no piece fields."""

    row: int
    col: int
    piece_type: PieceType | None = None
    color: Color | None = None
    has_moved: bool = False

    @property
    def piece(self) -> Piece | None:
        if self.piece_type is None or self.color is None:
            return None
        return Piece(self.color, self.piece_type, self.has_moved)


@dataclass(frozen=True, slots=True)
class MoveState:
    """One move-history entry."""

    from_row: int
    from_col: int
    to_row: int
    to_col: int
    piece_type: PieceType
    color: Color
    captured_type: PieceType | None = None
    captured_color: Color | None = None
    promotion: PieceType | None = None

    @classmethod
    def from_move(cls, move: Move) -> MoveState:
        captured = move.captured_piece
        return cls(
            from_row=move.from_pos.row,
            from_col=move.from_pos.col,
            to_row=move.to_pos.row,
            to_col=move.to_pos.col,
            piece_type=move.piece.piece_type,
            color=move.piece.color,
            captured_type=captured.piece_type if captured is not None else None,
            captured_color=captured.color if captured is not None else None,
            promotion=move.promotion,
        )

    def to_move(self) -> Move:
        captured = None
        if self.captured_type is not None and self.captured_color is not None:
            captured = Piece(self.captured_color, self.captured_type)
        return Move(
            Position(self.from_row, self.from_col),
            Position(self.to_row, self.to_col),
            Piece(self.color, self.piece_type),
            captured,
            self.promotion,
        )


@dataclass(frozen=True, slots=True)
class GameSnapshot:
    """Everything needed to re-arm a :class:`GameController`."""

    squares: tuple[SquareState, ...]
    moves: tuple[MoveState, ...] = field(default_factory=tuple)
    current_player: Color = Color.WHITE
    state: GameState = GameState.PLAYING
    en_passant_target: Position | None = None

    # ── Serialisation ────────────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        ep = self.en_passant_target
        return {
            "current_player": self.current_player.name,
            "state": self.state.name,
            "en_passant_target": [ep.row, ep.col] if ep is not None else None,
            "squares": [
                {
                    "row": sq.row,
                    "col": sq.col,
                    "piece_type": _name(sq.piece_type),
                    "color": _name(sq.color),
                    "has_moved": sq.has_moved,
                }
                for sq in self.squares
                if sq.piece_type is not None
            ],
            "moves": [
                {
                    "from": [mv.from_row, mv.from_col],
                    "to": [mv.to_row, mv.to_col],
                    "piece_type": mv.piece_type.name,
                    "color": mv.color.name,
                    "captured_type": _name(mv.captured_type),
                    "captured_color": _name(mv.captured_color),
                    "promotion": _name(mv.promotion),
                }
                for mv in self.moves
            ],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GameSnapshot:
        """Decode :meth:`to_dict` output. Missing squares are empty."""
        if not isinstance(data, dict):
            _LOGGER.warning("Rejected snapshot data of type %s", type(data).__name__)
            raise SnapshotError(f"Snapshot must be a mapping, got {type(data).__name__}")
        try:
            occupied = {
                (int(sq["row"]), int(sq["col"])): SquareState(
                    row=int(sq["row"]),
                    col=int(sq["col"]),
                    piece_type=PieceType[sq["piece_type"]],
                    color=Color[sq["color"]],
                    has_moved=bool(sq.get("has_moved", False)),
                )
                for sq in data.get("squares", [])
            }
            moves = tuple(
                MoveState(
                    from_row=int(mv["from"][0]),
                    from_col=int(mv["from"][1]),
                    to_row=int(mv["to"][0]),
                    to_col=int(mv["to"][1]),
                    piece_type=PieceType[mv["piece_type"]],
                    color=Color[mv["color"]],
                    captured_type=_enum_or_none(PieceType, mv.get("captured_type")),
                    captured_color=_enum_or_none(Color, mv.get("captured_color")),
                    promotion=_enum_or_none(PieceType, mv.get("promotion")),
                )
                for mv in data.get("moves", [])
            )
            current_player = Color[data.get("current_player", "WHITE")]
            state = GameState[data.get("state", "PLAYING")]
            ep_raw = data.get("en_passant_target")
            ep = Position(int(ep_raw[0]), int(ep_raw[1])) if ep_raw else None
        except (KeyError, TypeError, IndexError, ValueError) as exc:
            _LOGGER.warning("Rejected snapshot data: %s", exc)
            raise SnapshotError(f"Malformed snapshot: {exc}") from exc

        invalid = [key for key in occupied if not Position(*key).is_valid]
        if invalid:
            raise SnapshotError(f"Square outside the board: {invalid[0]}")

        squares = tuple(
            occupied.get((pos.row, pos.col), SquareState(pos.row, pos.col))
            for pos in all_positions()
        )
        return cls(squares, moves, current_player, state, ep)


def _name(value: PieceType | Color | None) -> str | None:
    return value.name if value is not None else None


def _enum_or_none(enum_cls: Any, name: str | None) -> Any:
    return enum_cls[name] if name is not None else None


# ── Controller boundary ─────────────────────────────────────────────────────


def take_snapshot(controller: GameController) -> GameSnapshot:
    """Read all 64 squares and the move history of *controller*."""
    board = controller.board
    squares = []
    for pos in all_positions():
        piece = board[pos]
        if piece is None:
            squares.append(SquareState(pos.row, pos.col))
        else:
            squares.append(
                SquareState(pos.row, pos.col, piece.piece_type, piece.color, piece.has_moved)
            )
    return GameSnapshot(
        squares=tuple(squares),
        moves=tuple(MoveState.from_move(m) for m in controller.move_history),
        current_player=controller.current_player,
        state=controller.state,
        en_passant_target=controller.en_passant_target,
    )


def build_board(squares: tuple[SquareState, ...] | list[SquareState]) -> Board:
    """Rebuild a board by setting each square directly."""
    board = Board()
    for sq in squares:
        board[Position(sq.row, sq.col)] = sq.piece
    return board


def restore_snapshot(controller: GameController, snapshot: GameSnapshot) -> None:
    """Re-arm *controller* from *snapshot* without re-deriving legality."""
    controller.restore_game_state(
        build_board(snapshot.squares),
        [mv.to_move() for mv in snapshot.moves],
        snapshot.en_passant_target,
        snapshot.current_player,
        snapshot.state,
    )
