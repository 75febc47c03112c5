"""
Geometry/Base movement and capturing rules

Key idea: Use strategy pattern to define the pseudo-legal destinations for each piece type.

Pseudo-legal means: follows the movement rules of the piece and does not capture a piece of its own color.
Whether the move exposes the mover's own king is not considered here (see rules.py).
"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Self

from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import Square


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece(self, square: Square) -> Optional[Piece]: ...
    def is_empty(self, square: Square) -> bool: ...


Vector = tuple[int, int]

# Directions are (d_row, d_col). Row numbers grow towards white's side of the board.
STRAIGHTS: list[Vector] = [(0, 1), (0, -1), (1, 0), (-1, 0)]
DIAGONALS: list[Vector] = [(1, 1), (1, -1), (-1, 1), (-1, -1)]
KNIGHT_DELTAS: list[Vector] = [
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
]
KING_DELTAS: list[Vector] = STRAIGHTS + DIAGONALS

# White pawns move up the board (towards row 0), black pawns move down.
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}
PAWN_HOME_ROW: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_square: Square
    to_square: Square

    @classmethod
    def from_uci(cls, uci: str) -> Self:
        """
        Universal Chess Interface style notation: <from_square><to_square>

        examples:
        * "e2e4": move the piece that was on e2 to e4
        * "g8f6": move the piece that was on g8 to f6
        """
        from_sq = Square.from_algebraic(uci[:2])
        to_sq = Square.from_algebraic(uci[2:4])
        return cls(from_sq, to_sq)

    def to_uci(self) -> str:
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}"


@dataclass(frozen=True)
class MoveRecord:
    """
    Snapshot of an applied move. Everything needed to take it back again.

    `mover` is stored explicitly, so undo does not have to infer whose turn it was.
    """

    move: Move
    piece: Piece
    captured: Optional[Piece]
    mover: Color

    @property
    def is_capture(self) -> bool:
        return self.captured is not None


# --- MOVEMENT RULES ---
def raycasting_move(
    square: Square, board: Board, directions: list[Vector]
) -> list[Square]:
    """
    Raycasting algorithm
    -----

    ---
    The main trick we use to check the 'line of sight of a piece'.
    We define move directions and move along them until we hit another piece or
    the edge of the board.

    ---
    The first occupied square ends the ray: it is included when the opponent stands there (capture), excluded when it is your own piece.
    """
    player_color = board.piece(square).color

    destinations: list[Square] = []
    for d_row, d_col in directions:
        target_square = square.offset(d_row, d_col)
        while target_square.is_within_bounds():
            if not board.is_empty(target_square):
                if board.piece(target_square).color != player_color:
                    destinations.append(target_square)
                break

            destinations.append(target_square)
            target_square = target_square.offset(d_row, d_col)
    return destinations


def single_step_move(
    square: Square, board: Board, deltas: list[Vector]
) -> list[Square]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just make a single jump along a direction"""
    player_color = board.piece(square).color

    destinations: list[Square] = []
    for d_row, d_col in deltas:
        target_square = square.offset(d_row, d_col)
        if not target_square.is_within_bounds():
            continue

        target_piece = board.piece(target_square)
        if target_piece is None or target_piece.color != player_color:
            destinations.append(target_square)
    return destinations


def candidate_pawn_moves(square: Square, board: Board) -> list[Square]:
    """
    A pawn:
    - moves by a single square forward (onto an empty square only).
    - It can move by two in their first move (so when on their home row), if both squares are empty
    - takes diagonally (and only moves diagonally when taking)

    No en passant, no promotion in this variant.
    """
    player_color = board.piece(square).color
    direction = PAWN_DIRECTION[player_color]

    destinations: list[Square] = []
    one_step = square.offset(direction, 0)
    if one_step.is_within_bounds() and board.is_empty(one_step):
        destinations.append(one_step)

        two_steps = square.offset(2 * direction, 0)
        if square.row == PAWN_HOME_ROW[player_color] and board.is_empty(two_steps):
            destinations.append(two_steps)

    for d_col in (-1, 1):
        target_square = square.offset(direction, d_col)
        if not target_square.is_within_bounds():
            continue
        target_piece = board.piece(target_square)
        if target_piece is not None and target_piece.color != player_color:
            destinations.append(target_square)
    return destinations


def candidate_knight_moves(square: Square, board: Board) -> list[Square]:
    """Knights always move such that |delta_row| + |delta_col| = 3"""
    return single_step_move(square, board, KNIGHT_DELTAS)


def candidate_bishop_moves(square: Square, board: Board) -> list[Square]:
    """Bishops move diagonally: |delta_row| = |delta_col|"""
    return raycasting_move(square, board, DIAGONALS)


def candidate_rook_moves(square: Square, board: Board) -> list[Square]:
    """Rooks move either horizontally or vertically"""
    return raycasting_move(square, board, STRAIGHTS)


def candidate_queen_moves(square: Square, board: Board) -> list[Square]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return raycasting_move(square, board, STRAIGHTS + DIAGONALS)


def candidate_king_moves(square: Square, board: Board) -> list[Square]:
    """The king can move by a single square at the time."""
    return single_step_move(square, board, KING_DELTAS)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Square, Board], list[Square]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}


def pseudo_legal_moves(board: Board, square: Square) -> list[Square]:
    """Destinations of the piece standing on `square`. An empty (or off-board) square has none."""
    if not square.is_within_bounds():
        return []
    piece = board.piece(square)
    if piece is None:
        return []
    movement_rule = MOVEMENT_RULES[piece.kind]
    return movement_rule(square, board)
