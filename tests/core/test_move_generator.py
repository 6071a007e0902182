"""Tests for raw / legal move generation and attack detection."""

from chessrules.core.board import Board
from chessrules.core.enums import Color
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.piece import Piece
from chessrules.core.position import Position


def _sq(name: str) -> Position:
    return Position.from_algebraic(name)


def _squares(*names: str) -> set[Position]:
    return {_sq(n) for n in names}


def _board(layout: dict[str, str], moved: bool = False) -> Board:
    """Build a board from {'e1': 'K', 'e8': 'k', ...}."""
    board = Board()
    for name, char in layout.items():
        piece = Piece.from_char(char)
        piece.has_moved = moved
        board[_sq(name)] = piece
    return board


def _legal(board: Board, name: str, ep: str | None = None) -> set[Position]:
    target = _sq(ep) if ep else None
    return set(MoveGenerator(board).legal_moves(_sq(name), target))


class TestStartingPosition:
    def test_pawn_single_and_double(self) -> None:
        assert _legal(Board.initial(), "e2") == _squares("e3", "e4")

    def test_knight(self) -> None:
        assert _legal(Board.initial(), "g1") == _squares("f3", "h3")

    def test_blocked_bishop(self) -> None:
        assert _legal(Board.initial(), "c1") == set()

    def test_twenty_moves(self) -> None:
        board = Board.initial()
        gen = MoveGenerator(board)
        total = sum(len(gen.legal_moves(pos)) for pos in board.pieces(Color.WHITE))
        assert total == 20

    def test_empty_square_has_no_moves(self) -> None:
        assert MoveGenerator(Board.initial()).raw_moves(_sq("e4")) == []


class TestPawn:
    def test_blocked_single(self) -> None:
        board = Board.initial()
        board[_sq("e3")] = Piece.from_char("n")
        assert _legal(board, "e2") == set()

    def test_blocked_double(self) -> None:
        board = Board.initial()
        board[_sq("e4")] = Piece.from_char("n")
        assert _legal(board, "e2") == _squares("e3")

    def test_captures_only_opponents(self) -> None:
        board = _board({"e1": "K", "e8": "k", "e4": "P", "d5": "p", "f5": "P"}, moved=True)
        assert _legal(board, "e4") == _squares("e5", "d5")

    def test_no_diagonal_onto_empty(self) -> None:
        board = _board({"e1": "K", "e8": "k", "c4": "P"}, moved=True)
        assert _legal(board, "c4") == _squares("c5")

    def test_black_moves_down(self) -> None:
        assert _legal(Board.initial(), "d7") == _squares("d6", "d5")

    def test_en_passant_target_included(self) -> None:
        board = _board({"e1": "K", "e8": "k", "e5": "P", "d5": "p"}, moved=True)
        assert _legal(board, "e5", ep="d6") == _squares("e6", "d6")

    def test_en_passant_ignored_without_target(self) -> None:
        board = _board({"e1": "K", "e8": "k", "e5": "P", "d5": "p"}, moved=True)
        assert _legal(board, "e5") == _squares("e6")

    def test_en_passant_exposing_king_is_illegal(self) -> None:
        # Both pawns leave rank 5, opening the a5 rook onto the h5 king.
        board = _board(
            {"h5": "K", "a8": "k", "e5": "P", "d5": "p", "a5": "r"}, moved=True
        )
        assert _legal(board, "e5", ep="d6") == _squares("e6")


class TestPieces:
    def test_knight_in_corner(self) -> None:
        board = _board({"a1": "N", "h8": "k", "h1": "K"})
        assert _legal(board, "a1") == _squares("b3", "c2")

    def test_rook_rays_stop_at_pieces(self) -> None:
        board = _board({"d4": "R", "d6": "P", "f4": "p", "h1": "K", "h8": "k"})
        assert _legal(board, "d4") == _squares(
            "d5", "e4", "f4", "c4", "b4", "a4", "d3", "d2", "d1"
        )

    def test_rook_open_board(self) -> None:
        board = _board({"d4": "R", "h1": "K", "a8": "k"})
        assert len(_legal(board, "d4")) == 14

    def test_bishop_open_board(self) -> None:
        board = _board({"d4": "B", "h8": "K", "a2": "k"})
        # h8 is occupied by the own king, so one diagonal square is lost.
        assert len(_legal(board, "d4")) == 12

    def test_queen_open_board(self) -> None:
        board = _board({"d4": "Q", "h2": "K", "b8": "k"})
        assert len(_legal(board, "d4")) == 27

    def test_king_avoids_attacked_squares(self) -> None:
        board = _board({"e1": "K", "d8": "r", "a8": "k"}, moved=True)
        assert _legal(board, "e1") == _squares("e2", "f1", "f2")

    def test_pinned_piece_cannot_move(self) -> None:
        board = _board({"e1": "K", "e2": "B", "e8": "r", "a8": "k"}, moved=True)
        gen = MoveGenerator(board)
        assert gen.raw_moves(_sq("e2"))
        assert gen.legal_moves(_sq("e2")) == []


class TestCastling:
    def _castle_board(self, extra: dict[str, str] | None = None) -> Board:
        layout = {"e1": "K", "h1": "R", "a1": "R", "e8": "k"}
        layout.update(extra or {})
        return _board(layout)

    def test_both_sides_available(self) -> None:
        moves = _legal(self._castle_board(), "e1")
        assert _squares("g1", "c1") <= moves

    def test_king_moved(self) -> None:
        board = self._castle_board()
        board[_sq("e1")].has_moved = True
        assert not _squares("g1", "c1") & _legal(board, "e1")

    def test_rook_moved(self) -> None:
        board = self._castle_board()
        board[_sq("h1")].has_moved = True
        moves = _legal(board, "e1")
        assert _sq("g1") not in moves
        assert _sq("c1") in moves

    def test_blocked_path(self) -> None:
        moves = _legal(self._castle_board({"b1": "N"}), "e1")
        assert _sq("c1") not in moves
        assert _sq("g1") in moves

    def test_transit_square_attacked(self) -> None:
        moves = _legal(self._castle_board({"f8": "r"}), "e1")
        assert _sq("g1") not in moves
        assert _sq("c1") in moves

    def test_destination_attacked(self) -> None:
        moves = _legal(self._castle_board({"g8": "r"}), "e1")
        assert _sq("g1") not in moves

    def test_attacked_b_file_does_not_block_queenside(self) -> None:
        moves = _legal(self._castle_board({"b8": "r"}), "e1")
        assert _sq("c1") in moves

    def test_not_out_of_check(self) -> None:
        moves = _legal(self._castle_board({"e5": "r"}), "e1")
        assert not _squares("g1", "c1") & moves

    def test_enemy_rook_in_corner(self) -> None:
        board = _board({"e1": "K", "h1": "r", "e8": "k"})
        assert _sq("g1") not in _legal(board, "e1")

    def test_black_kingside(self) -> None:
        board = _board({"e8": "k", "h8": "r", "e1": "K"})
        assert _sq("g8") in _legal(board, "e8")


class TestAttacks:
    def test_pawn_attacks_empty_diagonals(self) -> None:
        board = _board({"e4": "P", "a1": "K", "h8": "k"}, moved=True)
        gen = MoveGenerator(board)
        assert gen.is_position_under_attack(_sq("d5"), Color.WHITE)
        assert gen.is_position_under_attack(_sq("f5"), Color.WHITE)
        assert not gen.is_position_under_attack(_sq("e5"), Color.WHITE)

    def test_pawn_push_is_not_an_attack(self) -> None:
        # e3 is a legal push for the e2 pawn but not a square it attacks.
        board = _board({"e2": "P", "a1": "K", "h8": "k"})
        gen = MoveGenerator(board)
        assert _sq("e3") in gen.raw_moves(_sq("e2"))
        assert _sq("e3") not in gen.attacks(_sq("e2"))
        assert not gen.is_position_under_attack(_sq("e3"), Color.WHITE)
        assert not gen.is_position_under_attack(_sq("e4"), Color.WHITE)
        assert gen.is_position_under_attack(_sq("d3"), Color.WHITE)

    def test_defended_piece_counts_after_capture(self) -> None:
        # The black rook on d2 is defended by the rook on d8: Kxd2 is illegal.
        board = _board({"e1": "K", "d2": "r", "d8": "r", "h8": "k"}, moved=True)
        assert _sq("d2") not in _legal(board, "e1")

    def test_is_in_check(self) -> None:
        board = _board({"e1": "K", "e8": "r", "a8": "k"}, moved=True)
        gen = MoveGenerator(board)
        assert gen.is_in_check(Color.WHITE)
        assert not gen.is_in_check(Color.BLACK)

    def test_missing_king_never_in_check(self) -> None:
        board = _board({"e8": "r"})
        assert not MoveGenerator(board).is_in_check(Color.WHITE)


class TestLegalityInvariant:
    def test_no_legal_move_leaves_king_in_check(self) -> None:
        board = _board(
            {
                "e1": "K", "d1": "Q", "a1": "R", "h1": "R", "c4": "B", "f3": "N",
                "e4": "P", "d2": "P",
                "e8": "k", "b4": "b", "h4": "q", "e7": "r", "g6": "n", "d5": "p",
            }
        )
        gen = MoveGenerator(board)
        for from_pos in board.pieces(Color.WHITE):
            for to_pos in gen.legal_moves(from_pos):
                scratch = board.copy()
                scratch.make_move(from_pos, to_pos)
                assert not MoveGenerator(scratch).is_in_check(Color.WHITE), (
                    f"{from_pos}->{to_pos}"
                )

    def test_legal_moves_do_not_mutate_board(self) -> None:
        board = Board.initial()
        before = board.copy()
        gen = MoveGenerator(board)
        for pos in board.pieces(Color.WHITE):
            gen.legal_moves(pos)
        assert board == before
        assert not any(p.has_moved for _, p in board.occupied())
