"""Qt bridge re-emitting controller callbacks as Qt signals."""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal

from chessrules.core.enums import Color, GameOutcome, GameState
from chessrules.core.move import Move
from chessrules.core.position import Position
from chessrules.game.controller import GameController


class GameSignals(QObject):
    """Signal mirror of :class:`~chessrules.game.controller.GameEvents`.

    Emission is synchronous: a directly connected slot runs before the
    controller operation that triggered it returns.
    """

    piece_selected = pyqtSignal(object, list)  # position, valid moves
    move_made = pyqtSignal(object)  # Move
    state_changed = pyqtSignal(object, object)  # GameState, side to move
    game_ended = pyqtSignal(object, object)  # GameOutcome, GameState
    draw_requested = pyqtSignal(object)  # requesting Color
    promotion_required = pyqtSignal(object, object)  # destination, Color

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._controller: GameController | None = None

    @property
    def controller(self) -> GameController | None:
        return self._controller

    def attach(self, controller: GameController) -> None:
        """Subscribe to *controller*; detaches from any previous one."""
        self.detach()
        events = controller.events
        events.on_piece_selected.append(self._on_piece_selected)
        events.on_move.append(self._on_move)
        events.on_state_changed.append(self._on_state_changed)
        events.on_game_ended.append(self._on_game_ended)
        events.on_draw_requested.append(self._on_draw_requested)
        events.on_promotion_required.append(self._on_promotion_required)
        self._controller = controller

    def detach(self) -> None:
        if self._controller is None:
            return
        events = self._controller.events
        for handlers, handler in (
            (events.on_piece_selected, self._on_piece_selected),
            (events.on_move, self._on_move),
            (events.on_state_changed, self._on_state_changed),
            (events.on_game_ended, self._on_game_ended),
            (events.on_draw_requested, self._on_draw_requested),
            (events.on_promotion_required, self._on_promotion_required),
        ):
            if handler in handlers:
                handlers.remove(handler)
        self._controller = None

    # ── Callback adapters ────────────────────────────────────────────────

    def _on_piece_selected(self, position: Position, moves: list[Position]) -> None:
        self.piece_selected.emit(position, moves)

    def _on_move(self, move: Move) -> None:
        self.move_made.emit(move)

    def _on_state_changed(self, state: GameState, color: Color) -> None:
        self.state_changed.emit(state, color)

    def _on_game_ended(self, outcome: GameOutcome, state: GameState) -> None:
        self.game_ended.emit(outcome, state)

    def _on_draw_requested(self, color: Color) -> None:
        self.draw_requested.emit(color)

    def _on_promotion_required(self, to: Position, color: Color) -> None:
        self.promotion_required.emit(to, color)
