"""Unit tests for /src/chess/board.py"""

from typing import Callable

import pytest

from src.chess.board import (
    EMPTY_POSITION,
    STARTING_POSITION,
    Board,
    is_valid_position,
)
from src.chess.pieces import PIECE_TO_FEN, Color, Piece, PieceType
from src.chess.square import Square
from src.core.exceptions import InvalidFENError


@pytest.fixture
def board_with_single_piece() -> Callable[[PieceType, Color, str], Board]:
    """Call the inner function that will be returned with the desired piece type, color, and square"""

    def _create_board(piece_type: PieceType, color: Color, square_name: str = "d4") -> Board:
        board = Board.empty()
        board.place_piece(Piece(piece_type, color), Square.from_algebraic(square_name))
        return board

    return _create_board


# --- CREATION / FEN ---
def test_starting_position() -> None:
    """Black pieces on rows 0 and 1, white pieces on rows 6 and 7"""
    board = Board.starting_position()
    back_rank = [
        PieceType.ROOK,
        PieceType.KNIGHT,
        PieceType.BISHOP,
        PieceType.QUEEN,
        PieceType.KING,
        PieceType.BISHOP,
        PieceType.KNIGHT,
        PieceType.ROOK,
    ]
    for col, piece_type in enumerate(back_rank):
        assert board.piece(Square(0, col)) == Piece(piece_type, Color.BLACK)
        assert board.piece(Square(1, col)) == Piece(PieceType.PAWN, Color.BLACK)
        assert board.piece(Square(6, col)) == Piece(PieceType.PAWN, Color.WHITE)
        assert board.piece(Square(7, col)) == Piece(piece_type, Color.WHITE)
    for row in range(2, 6):
        assert all(board.is_empty(Square(row, col)) for col in range(8))


@pytest.mark.parametrize(
    "fen",
    [
        STARTING_POSITION,
        EMPTY_POSITION,
        "k7/1Q6/2K5/8/8/8/8/8",
        "r3k2r/pppq1ppp/2npbn2/4p3/2B1P3/2NP1N2/PPP2PPP/R1BQ1RK1",
    ],
)
def test_fen_roundtrip(fen: str) -> None:
    assert Board.from_fen(fen).to_fen() == fen


@pytest.mark.parametrize(
    "fen",
    [
        "",
        "8/8/8/8/8/8/8",  # only 7 rows
        "8/8/8/8/8/8/8/8/8",  # 9 rows
        "9/8/8/8/8/8/8/8",  # too many squares in a row
        "7/8/8/8/8/8/8/8",  # too few squares in a row
        "x7/8/8/8/8/8/8/8",  # unknown piece
        "²/8/8/8/8/8/8/8",  # unicode digit
        "٨/8/8/8/8/8/8/8",  # unicode digit that int() does accept
        "08/8/8/8/8/8/8/8",  # zero is not an empty-square count
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w - - 0 1",  # full FEN, not just the board
    ],
)
def test_invalid_fen(fen: str) -> None:
    assert not is_valid_position(fen)
    with pytest.raises(InvalidFENError):
        Board.from_fen(fen)


def test_glyph_rows() -> None:
    board = Board.starting_position()
    rows = board.to_glyph_rows()
    assert rows[0] == "♜♞♝♛♚♝♞♜"
    assert rows[1] == "♟" * 8
    assert rows[4] == "." * 8
    assert rows[7] == "♖♘♗♕♔♗♘♖"


# --- LOOKUPS ---
@pytest.mark.parametrize("piece_type", [p for p in PieceType])
@pytest.mark.parametrize("color", [c for c in Color])
def test_single_piece(
    piece_type: PieceType,
    color: Color,
    board_with_single_piece: Callable[[PieceType, Color, str], Board],
) -> None:
    board = board_with_single_piece(piece_type, color, "d4")
    d4 = Square.from_algebraic("d4")
    assert board.piece(d4) == Piece(piece_type, color)
    assert board.locate_color(color) == [d4]
    assert board.locate_color(color.opponent) == []
    assert board.to_fen().count(
        PIECE_TO_FEN[piece_type].upper() if color == Color.WHITE else PIECE_TO_FEN[piece_type]
    ) == 1


def test_locate_king() -> None:
    board = Board.starting_position()
    assert board.locate_king(Color.WHITE) == Square(7, 4)
    assert board.locate_king(Color.BLACK) == Square(0, 4)


def test_locate_missing_king() -> None:
    board = Board.from_fen("k7/8/8/8/8/8/8/8")
    assert board.locate_king(Color.WHITE) is None
    assert board.locate_king(Color.BLACK) == Square(0, 0)


def test_locate_color_row_major() -> None:
    board = Board.starting_position()
    white_squares = board.locate_color(Color.WHITE)
    assert len(white_squares) == 16
    assert white_squares[0] == Square(6, 0)
    assert white_squares[-1] == Square(7, 7)


# --- MUTATION ---
def test_move_piece_to_empty_square() -> None:
    board = Board.starting_position()
    captured = board.move_piece(Square(6, 4), Square(4, 4))
    assert captured is None
    assert board.is_empty(Square(6, 4))
    assert board.piece(Square(4, 4)) == Piece(PieceType.PAWN, Color.WHITE)


def test_move_piece_captures() -> None:
    board = Board.from_fen("8/8/8/3p4/4P3/8/8/8")
    d5 = Square.from_algebraic("d5")
    e4 = Square.from_algebraic("e4")
    captured = board.move_piece(e4, d5)
    assert captured == Piece(PieceType.PAWN, Color.BLACK)
    assert board.piece(d5) == Piece(PieceType.PAWN, Color.WHITE)
    assert board.is_empty(e4)


def test_remove_piece() -> None:
    board = Board.starting_position()
    removed = board.remove_piece(Square(0, 3))
    assert removed == Piece(PieceType.QUEEN, Color.BLACK)
    assert board.is_empty(Square(0, 3))
    assert board.remove_piece(Square(0, 3)) is None


def test_copy_is_independent() -> None:
    """Changing the copy must not leak into the original (needed for simulating moves)"""
    board = Board.starting_position()
    scratch = board.copy()
    assert scratch == board

    scratch.move_piece(Square(6, 4), Square(4, 4))
    assert scratch != board
    assert board == Board.starting_position()


# --- MATERIAL ---
def test_count_material_starting_position() -> None:
    """8 pawns + 2 knights + 2 bishops + 2 rooks + queen = 8 + 6 + 6 + 10 + 9 = 39"""
    board = Board.starting_position()
    assert board.count_material() == {Color.WHITE: 39, Color.BLACK: 39}
    assert board.material_balance(Color.WHITE) == 0


def test_material_balance() -> None:
    board = Board.starting_position()
    board.remove_piece(Square(0, 3))  # black queen
    assert board.material_balance(Color.WHITE) == 9
    assert board.material_balance(Color.BLACK) == -9
