"""Defines the types of chess pieces"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Self

from src.core.exceptions import InvalidPieceError


class PieceType(Enum):
    PAWN = auto()
    KNIGHT = auto()
    BISHOP = auto()
    ROOK = auto()
    QUEEN = auto()
    KING = auto()


class Color(Enum):
    WHITE = auto()
    BLACK = auto()

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE


FEN_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_FEN: dict[PieceType, str] = {value: key for key, value in FEN_TO_PIECE.items()}

# Display glyphs. Only used at the presentation boundary, the engine itself works with Piece values.
PIECE_TO_GLYPH: dict[tuple[PieceType, Color], str] = {
    (PieceType.KING, Color.WHITE): "♔",
    (PieceType.QUEEN, Color.WHITE): "♕",
    (PieceType.ROOK, Color.WHITE): "♖",
    (PieceType.BISHOP, Color.WHITE): "♗",
    (PieceType.KNIGHT, Color.WHITE): "♘",
    (PieceType.PAWN, Color.WHITE): "♙",
    (PieceType.KING, Color.BLACK): "♚",
    (PieceType.QUEEN, Color.BLACK): "♛",
    (PieceType.ROOK, Color.BLACK): "♜",
    (PieceType.BISHOP, Color.BLACK): "♝",
    (PieceType.KNIGHT, Color.BLACK): "♞",
    (PieceType.PAWN, Color.BLACK): "♟",
}

GLYPH_TO_PIECE: dict[str, tuple[PieceType, Color]] = {
    value: key for key, value in PIECE_TO_GLYPH.items()
}


PIECE_POINTS: dict[PieceType, int] = {
    PieceType.PAWN: 1,
    PieceType.KNIGHT: 3,
    PieceType.BISHOP: 3,
    PieceType.ROOK: 5,
    PieceType.QUEEN: 9,
    PieceType.KING: 0,
}


@dataclass(frozen=True)
class Piece:
    kind: PieceType
    color: Color

    @property
    def points(self) -> int:
        # NOTE: The King is worth nothing. Capturing it ends the game by itself.
        return PIECE_POINTS[self.kind]

    @classmethod
    def from_fen(cls, character: str) -> Self:
        # lower case: Black pieces, upper case: White pieces
        if character.lower() not in FEN_TO_PIECE:
            raise InvalidPieceError(f"Not a FEN piece character: {character!r}")
        color = Color.WHITE if character.isupper() else Color.BLACK
        piece_type = FEN_TO_PIECE[character.lower()]
        return cls(piece_type, color)

    def to_fen(self) -> str:
        return (
            PIECE_TO_FEN[self.kind].upper()
            if self.color == Color.WHITE
            else PIECE_TO_FEN[self.kind].lower()
        )

    @classmethod
    def from_glyph(cls, glyph: str) -> Self:
        if glyph not in GLYPH_TO_PIECE:
            raise InvalidPieceError(f"Not a chess piece glyph: {glyph!r}")
        return cls(*GLYPH_TO_PIECE[glyph])

    def to_glyph(self) -> str:
        return PIECE_TO_GLYPH[(self.kind, self.color)]


def piece_color(symbol: str) -> Color:
    """Color lookup for a piece symbol (a glyph or a FEN character)."""
    if symbol in GLYPH_TO_PIECE:
        return Piece.from_glyph(symbol).color
    return Piece.from_fen(symbol).color
