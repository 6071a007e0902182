"""Pseudo-legal and legal move generation + attack detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessrules.core.enums import Color, PieceType
from chessrules.core.piece import Piece
from chessrules.core.position import Position

if TYPE_CHECKING:
    from chessrules.core.board import Board


KNIGHT_OFFSETS: tuple[Position, ...] = (
    Position(-2, -1),
    Position(-2, 1),
    Position(-1, -2),
    Position(-1, 2),
    Position(1, -2),
    Position(1, 2),
    Position(2, -1),
    Position(2, 1),
)

KING_OFFSETS: tuple[Position, ...] = (
    Position(-1, -1),
    Position(-1, 0),
    Position(-1, 1),
    Position(0, -1),
    Position(0, 1),
    Position(1, -1),
    Position(1, 0),
    Position(1, 1),
)

BISHOP_DIRS: tuple[Position, ...] = (
    Position(1, 1),
    Position(1, -1),
    Position(-1, 1),
    Position(-1, -1),
)
ROOK_DIRS: tuple[Position, ...] = (
    Position(0, 1),
    Position(0, -1),
    Position(1, 0),
    Position(-1, 0),
)
QUEEN_DIRS: tuple[Position, ...] = ROOK_DIRS + BISHOP_DIRS

_KING_HOME_COL = 4


class MoveGenerator:
    """Answers move and attack questions about a :class:`Board`.

    Never mutates the board it wraps; look-ahead happens on clones.
    """

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    # -- Public API ---------------------------------------------------------

    def raw_moves(
        self,
        from_pos: Position,
        en_passant_target: Position | None = None,
        *,
        include_castling: bool = True,
    ) -> list[Position]:
        """Pseudo-legal destinations for the piece on *from_pos*.

        ``include_castling=False`` is the recursion guard used by attack
        detection: castling legality itself asks whether squares are
        attacked, and an attacked square is never reached by castling.
        """
        piece = self._board[from_pos]
        if piece is None:
            return []

        moves: list[Position] = []
        ptype = piece.piece_type
        if ptype == PieceType.PAWN:
            self._gen_pawn(from_pos, piece.color, en_passant_target, moves)
        elif ptype == PieceType.KNIGHT:
            self._gen_step(from_pos, piece.color, KNIGHT_OFFSETS, moves)
        elif ptype == PieceType.BISHOP:
            self._gen_sliding(from_pos, piece.color, BISHOP_DIRS, moves)
        elif ptype == PieceType.ROOK:
            self._gen_sliding(from_pos, piece.color, ROOK_DIRS, moves)
        elif ptype == PieceType.QUEEN:
            self._gen_sliding(from_pos, piece.color, QUEEN_DIRS, moves)
        else:
            self._gen_step(from_pos, piece.color, KING_OFFSETS, moves)
            if include_castling:
                self._gen_castling(from_pos, piece, moves)
        return moves

    def legal_moves(
        self, from_pos: Position, en_passant_target: Position | None = None
    ) -> list[Position]:
        """Raw moves that do not leave the mover's own king in check."""
        if self._board[from_pos] is None:
            return []
        return [
            to_pos
            for to_pos in self.raw_moves(from_pos, en_passant_target)
            if not self.leaves_king_in_check(from_pos, to_pos, en_passant_target)
        ]

    def leaves_king_in_check(
        self,
        from_pos: Position,
        to_pos: Position,
        en_passant_target: Position | None = None,
    ) -> bool:
        """Play the move on a scratch board and report whether the mover is in check."""
        piece = self._board[from_pos]
        if piece is None:
            return False

        scratch = self._board.copy()
        if (
            piece.piece_type == PieceType.PAWN
            and to_pos == en_passant_target
            and scratch[to_pos] is None
        ):
            scratch[Position(from_pos.row, to_pos.col)] = None
        scratch.make_move(from_pos, to_pos)
        return MoveGenerator(scratch).is_in_check(piece.color)

    def has_any_legal_move(
        self, color: Color, en_passant_target: Position | None = None
    ) -> bool:
        for pos in self._board.pieces(color):
            if self.legal_moves(pos, en_passant_target):
                return True
        return False

    # -- Attack detection (public) -----------------------------------------

    def attacks(self, from_pos: Position) -> list[Position]:
        """Squares the piece on *from_pos* attacks.

        Pawns attack both forward diagonals whether or not anything stands
        there, and never attack with a push. Kings never attack by castling.
        """
        piece = self._board[from_pos]
        if piece is None:
            return []
        if piece.piece_type == PieceType.PAWN:
            row = from_pos.row + piece.color.pawn_direction
            diagonals = (Position(row, from_pos.col - 1), Position(row, from_pos.col + 1))
            return [pos for pos in diagonals if pos.is_valid]
        return self.raw_moves(from_pos, include_castling=False)

    def is_position_under_attack(self, pos: Position, by_color: Color) -> bool:
        """Is *pos* attacked by any piece of *by_color*?"""
        for from_pos, piece in self._board.occupied():
            if piece.color == by_color and pos in self.attacks(from_pos):
                return True
        return False

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked? False when that king is missing."""
        king_pos = self._board.find_king(color)
        if king_pos is None:
            return False
        return self.is_position_under_attack(king_pos, color.opposite)

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(
        self,
        from_pos: Position,
        color: Color,
        en_passant_target: Position | None,
        moves: list[Position],
    ) -> None:
        board = self._board
        step = Position(color.pawn_direction, 0)

        one_step = from_pos + step
        if one_step.is_valid and board.is_empty(one_step):
            moves.append(one_step)
            if from_pos.row == color.pawn_row:
                two_step = one_step + step
                if board.is_empty(two_step):
                    moves.append(two_step)

        for dc in (-1, 1):
            cap = Position(from_pos.row + color.pawn_direction, from_pos.col + dc)
            if not cap.is_valid:
                continue
            target = board[cap]
            if target is not None:
                if target.color != color:
                    moves.append(cap)
            elif cap == en_passant_target:
                moves.append(cap)

    def _gen_step(
        self,
        from_pos: Position,
        color: Color,
        offsets: tuple[Position, ...],
        moves: list[Position],
    ) -> None:
        board = self._board
        for offset in offsets:
            to_pos = from_pos + offset
            if not to_pos.is_valid:
                continue
            target = board[to_pos]
            if target is None or target.color != color:
                moves.append(to_pos)

    def _gen_sliding(
        self,
        from_pos: Position,
        color: Color,
        directions: tuple[Position, ...],
        moves: list[Position],
    ) -> None:
        board = self._board
        for direction in directions:
            for distance in range(1, 8):
                to_pos = from_pos + direction * distance
                if not to_pos.is_valid:
                    break
                target = board[to_pos]
                if target is None:
                    moves.append(to_pos)
                    continue
                if target.color != color:
                    moves.append(to_pos)
                break

    def _gen_castling(self, king_pos: Position, king: Piece, moves: list[Position]) -> None:
        color = king.color
        if king.has_moved or king_pos != Position(color.back_row, _KING_HOME_COL):
            return

        opponent = color.opposite
        if self.is_position_under_attack(king_pos, opponent):
            return

        board = self._board
        row = king_pos.row
        for rook_col, step in ((7, 1), (0, -1)):
            rook = board[Position(row, rook_col)]
            if (
                rook is None
                or rook.piece_type != PieceType.ROOK
                or rook.color != color
                or rook.has_moved
            ):
                continue

            lo, hi = sorted((king_pos.col, rook_col))
            if any(not board.is_empty(Position(row, col)) for col in range(lo + 1, hi)):
                continue

            transit = king_pos + Position(0, step)
            destination = king_pos + Position(0, 2 * step)
            if self.is_position_under_attack(
                transit, opponent
            ) or self.is_position_under_attack(destination, opponent):
                continue
            moves.append(destination)
