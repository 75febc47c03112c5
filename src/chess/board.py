"""The Game board stores the `position` (in chess: the configuration of pieces on the board). Pure data: rules live in moves.py / rules.py"""

from copy import deepcopy
from dataclasses import dataclass
from typing import Optional, Self

from src.chess.pieces import FEN_TO_PIECE, Color, Piece, PieceType
from src.chess.square import BOARD_DIMENSIONS, Square
from src.core.exceptions import InvalidFENError

STARTING_POSITION = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
EMPTY_POSITION = "/".join(["8"] * BOARD_DIMENSIONS[0])
# a digit in a FEN row counts consecutive empty squares
EMPTY_RUNS = "12345678"

Grid = list[list[Optional[Piece]]]


def is_valid_position(position: str) -> bool:
    """Only check the part of the FEN encoding for the board position."""
    num_rows, num_cols = BOARD_DIMENSIONS
    row_fens = position.split("/")
    if len(row_fens) != num_rows:
        return False

    for row_fen in row_fens:
        col_count = 0
        for character in row_fen:
            # make sure every character is valid
            if character in EMPTY_RUNS:
                col_count += int(character)
            elif character.lower() in FEN_TO_PIECE:
                col_count += 1
            else:
                # immediately invalidate if the character is anything else
                return False
        if col_count != num_cols:
            return False
    return True


@dataclass
class Board:
    grid: Grid

    @classmethod
    def empty(cls) -> Self:
        return cls([[None] * BOARD_DIMENSIONS[1] for _ in range(BOARD_DIMENSIONS[0])])

    @classmethod
    def starting_position(cls) -> Self:
        return cls.from_fen(STARTING_POSITION)

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using the first part of a FEN string (the one that denotes the board position).

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on row 0 (the 8th rank), starting with a rook in column 0 (a8), knight in column 1 (b8), etc.
        * black pawns cover row 1 entirely
        * rows 2 through 5 have 8 consecutive empty squares
        * row 6 holds the white pawns (capital letters)
        * row 7 holds the white pieces.

        FEN reads top to bottom, which is the same order as our rows.
        """
        if not is_valid_position(fen_str):
            raise InvalidFENError(f"Invalid board position: {fen_str!r}")

        board = cls.empty()
        for row, fen_one_row in enumerate(fen_str.split("/")):
            col = 0
            for character in fen_one_row:
                if character.isalpha():
                    # simple case: a letter directly denotes the piece that should be created
                    board.grid[row][col] = Piece.from_fen(character)
                    col += 1
                else:
                    # A number denotes the amount of empty squares after each other
                    col += int(character)
        return board

    def to_fen(self) -> str:
        """Rows are separated by slashes in FEN string."""
        return "/".join(self._row_to_fen(row) for row in self.grid)

    def _row_to_fen(self, row: list[Optional[Piece]]) -> str:
        """FEN string of a single row"""
        fen_characters: list[str] = []
        empty_count = 0
        for piece in row:
            if piece is not None:
                if empty_count > 0:
                    fen_characters.append(str(empty_count))
                    empty_count = 0
                fen_characters.append(piece.to_fen())
            else:
                empty_count += 1

        # if the entire row is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    def to_glyph_rows(self) -> list[str]:
        """Row-by-row display of the board (row 0 first). Empty squares are shown as '.'"""
        return [
            "".join(piece.to_glyph() if piece else "." for piece in row)
            for row in self.grid
        ]

    def piece(self, square: Square) -> Optional[Piece]:
        return self.grid[square.row][square.col]

    def is_empty(self, square: Square) -> bool:
        return self.piece(square) is None

    def squares(self) -> list[Square]:
        """All squares in row-major order"""
        return [
            Square(row, col)
            for row in range(BOARD_DIMENSIONS[0])
            for col in range(BOARD_DIMENSIONS[1])
        ]

    def locate_color(self, color: Color) -> list[Square]:
        """Squares holding a piece of the given color, in row-major order."""
        return [
            square
            for square in self.squares()
            if (piece := self.piece(square)) is not None and piece.color == color
        ]

    def locate_king(self, color: Color) -> Optional[Square]:
        """None if the king has been captured."""
        king = Piece(PieceType.KING, color)
        return next(
            (square for square in self.squares() if self.piece(square) == king), None
        )

    def place_piece(self, piece: Optional[Piece], square: Square) -> None:
        self.grid[square.row][square.col] = piece

    def remove_piece(self, square: Square) -> Optional[Piece]:
        piece = self.piece(square)
        self.grid[square.row][square.col] = None
        return piece

    def move_piece(self, from_square: Square, to_square: Square) -> Optional[Piece]:
        """Update the position on the board. Returns whatever was standing on the target square."""
        piece_that_moved = self.remove_piece(from_square)
        captured = self.piece(to_square)
        self.place_piece(piece_that_moved, to_square)
        return captured

    def copy(self) -> Self:
        """Independent copy (scratch board to simulate moves on)"""
        return deepcopy(self)

    def count_material(self) -> dict[Color, int]:
        """Tally the points of material each player has on the board"""
        return {color: self._count_material_player(color) for color in Color}

    def material_balance(self, color: Color) -> int:
        """Material advantage of `color` over the opponent. Positive means `color` is ahead."""
        material = self.count_material()
        return material[color] - material[color.opponent]

    def _player_pieces(self, color: Color) -> list[Piece]:
        """find all pieces of a given color"""
        return [
            piece
            for row in self.grid
            for piece in row
            if piece is not None and piece.color == color
        ]

    def _count_material_player(self, color: Color) -> int:
        """Tally the points of material for a specific player"""
        return sum([piece.points for piece in self._player_pieces(color)])
