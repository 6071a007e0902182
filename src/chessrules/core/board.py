"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator

from chessrules.core.enums import Color, PieceType
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.piece import Piece
from chessrules.core.position import Position, all_positions
from chessrules.core.rules import Rules

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable 8x8 board of optional pieces.

    Off-board reads return ``None`` and off-board writes are ignored, so
    callers never have to guard indexing with :attr:`Position.is_valid`.
    """

    __slots__ = ("_grid",)

    def __init__(self) -> None:
        self._grid: list[list[Piece | None]] = [[None] * 8 for _ in range(8)]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, pos: Position) -> Piece | None:
        if not pos.is_valid:
            return None
        return self._grid[pos.row][pos.col]

    def __setitem__(self, pos: Position, piece: Piece | None) -> None:
        if pos.is_valid:
            self._grid[pos.row][pos.col] = piece

    def is_empty(self, pos: Position) -> bool:
        return self[pos] is None

    # -- Query helpers ------------------------------------------------------

    def occupied(self) -> Iterator[tuple[Position, Piece]]:
        """All (position, piece) pairs, row-major."""
        for pos in all_positions():
            piece = self._grid[pos.row][pos.col]
            if piece is not None:
                yield pos, piece

    def pieces(self, color: Color) -> list[Position]:
        """Positions occupied by *color*."""
        return [pos for pos, piece in self.occupied() if piece.color == color]

    def find_king(self, color: Color) -> Position | None:
        for pos, piece in self.occupied():
            if piece.piece_type == PieceType.KING and piece.color == color:
                return pos
        return None

    # -- Move generation facade --------------------------------------------

    def raw_moves(
        self, from_pos: Position, en_passant_target: Position | None = None
    ) -> list[Position]:
        """Pseudo-legal destinations (may leave own king in check)."""
        return MoveGenerator(self).raw_moves(from_pos, en_passant_target)

    def legal_moves(
        self, from_pos: Position, en_passant_target: Position | None = None
    ) -> list[Position]:
        """Destinations that do not leave the mover's king in check."""
        return MoveGenerator(self).legal_moves(from_pos, en_passant_target)

    def is_position_under_attack(self, pos: Position, by_color: Color) -> bool:
        return MoveGenerator(self).is_position_under_attack(pos, by_color)

    def is_in_check(self, color: Color) -> bool:
        return MoveGenerator(self).is_in_check(color)

    def is_checkmate(self, color: Color) -> bool:
        return Rules.is_checkmate(self, color)

    def is_stalemate(self, color: Color) -> bool:
        return Rules.is_stalemate(self, color)

    # -- Mutation / copying -------------------------------------------------

    def make_move(
        self,
        from_pos: Position,
        to_pos: Position,
        promotion: PieceType = PieceType.QUEEN,
    ) -> None:
        """Apply a move without any legality check.

        Handles the castling rook and pawn promotion. An en passant victim
        is *not* removed here; the caller knows the en passant target, the
        board does not.
        """
        piece = self[from_pos]
        if piece is None:
            return

        if piece.piece_type == PieceType.KING and abs(to_pos.col - from_pos.col) == 2:
            if to_pos.col > from_pos.col:
                rook_from = Position(from_pos.row, 7)
                rook_to = Position(from_pos.row, 5)
            else:
                rook_from = Position(from_pos.row, 0)
                rook_to = Position(from_pos.row, 3)
            rook = self[rook_from]
            if rook is not None:
                self[rook_from] = None
                self[rook_to] = rook
                rook.has_moved = True

        self[from_pos] = None
        self[to_pos] = piece
        piece.has_moved = True

        if piece.piece_type == PieceType.PAWN and to_pos.row in (0, 7):
            self[to_pos] = Piece(piece.color, promotion, has_moved=True)

    def copy(self) -> Board:
        """Deep copy; pieces are cloned so look-ahead never aliases."""
        b = Board()
        b._grid = [
            [piece.clone() if piece is not None else None for piece in row]
            for row in self._grid
        ]
        return b

    clone = copy

    def clear(self) -> None:
        self._grid = [[None] * 8 for _ in range(8)]

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for col, pt in enumerate(_BACK_RANK):
            b._grid[Color.BLACK.back_row][col] = Piece(Color.BLACK, pt)
            b._grid[Color.BLACK.pawn_row][col] = Piece(Color.BLACK, PieceType.PAWN)
            b._grid[Color.WHITE.pawn_row][col] = Piece(Color.WHITE, PieceType.PAWN)
            b._grid[Color.WHITE.back_row][col] = Piece(Color.WHITE, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(8):
            cells = [str(p) if p else "." for p in self._grid[row]]
            rows.append(f"{8 - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
