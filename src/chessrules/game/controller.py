"""GameController — the turn-based state machine of a chess game.

Coordinates: Board, Rules, move history, selection and draw offers.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chessrules.core.board import Board
from chessrules.core.enums import (
    PROMOTION_TYPES,
    Color,
    GameOutcome,
    GameState,
    PieceType,
)
from chessrules.core.move import Move
from chessrules.core.piece import Piece
from chessrules.core.position import Position
from chessrules.core.rules import Rules
from chessrules.game.interfaces import GameConfig, IGameController, MoveResult

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

PieceSelectedCallback = Callable[[Position, list[Position]], None]
MoveCallback = Callable[[Move], None]
StateChangedCallback = Callable[[GameState, Color], None]  # state, side to move
GameEndedCallback = Callable[[GameOutcome, GameState], None]
DrawRequestedCallback = Callable[[Color], None]  # requesting side
PromotionRequiredCallback = Callable[[Position, Color], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event.

    Handlers run synchronously on the thread that triggered the event.
    """

    on_piece_selected: list[PieceSelectedCallback] = field(default_factory=list)
    on_move: list[MoveCallback] = field(default_factory=list)
    on_state_changed: list[StateChangedCallback] = field(default_factory=list)
    on_game_ended: list[GameEndedCallback] = field(default_factory=list)
    on_draw_requested: list[DrawRequestedCallback] = field(default_factory=list)
    on_promotion_required: list[PromotionRequiredCallback] = field(
        default_factory=list
    )


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Owns one :class:`Board` and drives it turn by turn.

    The board answers every geometry and legality question; the controller
    owns the side to move, the selection, the history, the en passant
    target and the game state.

    Thread-safety: not thread-safe. Call from a single thread (the UI
    thread) or serialise access externally.
    """

    __slots__ = (
        "_board",
        "_current_player",
        "_state",
        "_selected",
        "_valid_moves",
        "_history",
        "_en_passant_target",
        "config",
        "events",
    )

    def __init__(self, config: GameConfig | None = None) -> None:
        self.config = config if config is not None else GameConfig()
        self.events = GameEvents()
        self._board = Board.initial()
        self._current_player = Color.WHITE
        self._state = GameState.PLAYING
        self._selected: Position | None = None
        self._valid_moves: list[Position] = []
        self._history: list[Move] = []
        self._en_passant_target: Position | None = None

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self._board

    @property
    def current_player(self) -> Color:
        return self._current_player

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def selected_position(self) -> Position | None:
        return self._selected

    @property
    def valid_moves(self) -> list[Position]:
        return list(self._valid_moves)

    @property
    def move_history(self) -> list[Move]:
        return list(self._history)

    @property
    def en_passant_target(self) -> Position | None:
        return self._en_passant_target

    @property
    def is_game_over(self) -> bool:
        return self._state.is_terminal

    @property
    def outcome(self) -> GameOutcome | None:
        return Rules.outcome_for(self._state, self._current_player)

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self._history)

    @property
    def last_move(self) -> Move | None:
        return self._history[-1] if self._history else None

    # ── Selection ────────────────────────────────────────────────────────

    def select_piece(self, position: Position) -> bool:
        if self._state.is_terminal:
            return False

        piece = self._board[position]
        if piece is None or piece.color != self._current_player:
            _LOGGER.debug("Selection refused at %s", position)
            return False

        self._selected = position
        self._valid_moves = self._board.legal_moves(position, self._en_passant_target)
        _LOGGER.debug(
            "Selected %s on %s: %d legal moves",
            piece.piece_type.name,
            position,
            len(self._valid_moves),
        )
        self._emit_piece_selected(position, list(self._valid_moves))
        return True

    def clear_selection(self) -> None:
        self._selected = None
        self._valid_moves = []

    def needs_promotion(self, to: Position) -> bool:
        """Would moving the selected piece to *to* promote a pawn?"""
        if self._selected is None:
            return False
        piece = self._board[self._selected]
        return (
            piece is not None
            and piece.piece_type == PieceType.PAWN
            and to.row in (0, 7)
        )

    # ── Moves ────────────────────────────────────────────────────────────

    def submit_move(
        self, to: Position, promotion: PieceType | None = None
    ) -> MoveResult:
        if self._state.is_terminal:
            return MoveResult.REJECTED

        from_pos = self._selected
        if from_pos is None or to not in self._valid_moves:
            _LOGGER.debug("Move to %s rejected: not a valid destination", to)
            return MoveResult.REJECTED

        piece = self._board[from_pos]
        if piece is None or piece.color != self._current_player:
            return MoveResult.REJECTED

        if piece.piece_type == PieceType.PAWN and to.row in (0, 7):
            if promotion is not None and promotion not in PROMOTION_TYPES:
                return MoveResult.REJECTED
            if promotion is None:
                if not self.config.auto_promote:
                    self._emit_promotion_required(to, piece.color)
                    return MoveResult.PROMOTION_REQUIRED
                promotion = self.config.default_promotion
        else:
            promotion = None

        self._commit(from_pos, to, piece, promotion)
        return MoveResult.APPLIED

    def make_move(self, to: Position) -> bool:
        return self.submit_move(to) is MoveResult.APPLIED

    def make_move_with_promotion(self, to: Position, promoted: PieceType) -> bool:
        return self.submit_move(to, promoted) is MoveResult.APPLIED

    # ── Draws ────────────────────────────────────────────────────────────

    def request_draw(self) -> None:
        if self._state != GameState.PLAYING:
            return
        _LOGGER.debug("%s requests a draw", self._current_player.name)
        for cb in self.events.on_draw_requested:
            cb(self._current_player)

    def accept_draw(self) -> None:
        if self._state != GameState.PLAYING:
            return
        self._state = GameState.DRAW
        self.clear_selection()
        _LOGGER.debug("Draw agreed")
        self._emit_state_changed()
        self._emit_game_ended()

    # ── Undo / reset / restore ───────────────────────────────────────────

    def can_undo(self) -> bool:
        return bool(self._history)

    def undo_move(self) -> bool:
        if not self._history:
            return False

        undone = self._history.pop()
        board = Board.initial()
        for record in self._history:
            self._replay(board, record)
        self._board = board
        self._en_passant_target = (
            self._en_passant_after(self._history[-1]) if self._history else None
        )
        self._current_player = self._current_player.opposite
        self.clear_selection()
        _LOGGER.debug("Undid %s", undone)
        self.update_game_state()
        return True

    def new_game(self) -> None:
        self._board = Board.initial()
        self._current_player = Color.WHITE
        self._state = GameState.PLAYING
        self._history = []
        self._en_passant_target = None
        self.clear_selection()
        self._emit_state_changed()

    def restore_game_state(
        self,
        board: Board,
        move_history: list[Move],
        en_passant_target: Position | None,
        current_player: Color,
        state: GameState,
    ) -> None:
        if board.find_king(Color.WHITE) is None or board.find_king(Color.BLACK) is None:
            _LOGGER.warning("Restoring a board without both kings")
        self._board = board
        self._history = list(move_history)
        self._en_passant_target = en_passant_target
        self._current_player = current_player
        self._state = state
        self.clear_selection()

    def update_game_state(self) -> GameState:
        """Recompute the state for the side to move, notifying on change."""
        previous = self._state
        self._state = Rules.evaluate_state(
            self._board, self._current_player, self._en_passant_target
        )
        if self._state != previous:
            _LOGGER.debug("State %s -> %s", previous.name, self._state.name)
            self._emit_state_changed()
        return self._state

    # ── Internal helpers ─────────────────────────────────────────────────

    def _commit(
        self,
        from_pos: Position,
        to: Position,
        piece: Piece,
        promotion: PieceType | None,
    ) -> None:
        board = self._board
        mover = piece.clone()
        captured = board[to]

        if piece.piece_type == PieceType.PAWN and to == self._en_passant_target:
            victim_pos = Position(from_pos.row, to.col)
            captured = board[victim_pos]
            board[victim_pos] = None

        board.make_move(from_pos, to, promotion or self.config.default_promotion)

        move = Move(from_pos, to, mover, captured, promotion)
        self._en_passant_target = self._en_passant_after(move)
        self._history.append(move)
        self.clear_selection()
        self._current_player = self._current_player.opposite
        _LOGGER.debug("Played %s", move)

        self.update_game_state()
        for cb in self.events.on_move:
            cb(move)
        if self._state.is_terminal:
            self._emit_game_ended()

    def _replay(self, board: Board, record: Move) -> None:
        piece = board[record.from_pos]
        if (
            piece is not None
            and piece.piece_type == PieceType.PAWN
            and record.from_pos.col != record.to_pos.col
            and board[record.to_pos] is None
        ):
            # Diagonal pawn step onto an empty square: en passant.
            board[Position(record.from_pos.row, record.to_pos.col)] = None
        board.make_move(record.from_pos, record.to_pos, self.config.default_promotion)

    @staticmethod
    def _en_passant_after(move: Move) -> Position | None:
        if (
            move.piece.piece_type == PieceType.PAWN
            and abs(move.to_pos.row - move.from_pos.row) == 2
        ):
            return Position((move.from_pos.row + move.to_pos.row) // 2, move.to_pos.col)
        return None

    def _emit_piece_selected(self, position: Position, moves: list[Position]) -> None:
        for cb in self.events.on_piece_selected:
            cb(position, moves)

    def _emit_state_changed(self) -> None:
        for cb in self.events.on_state_changed:
            cb(self._state, self._current_player)

    def _emit_game_ended(self) -> None:
        outcome = self.outcome
        if outcome is None:
            return
        _LOGGER.debug("Game over: %s (%s)", outcome.name, self._state.name)
        for cb in self.events.on_game_ended:
            cb(outcome, self._state)

    def _emit_promotion_required(self, to: Position, color: Color) -> None:
        for cb in self.events.on_promotion_required:
            cb(to, color)
