"""
Rules on top of the movement rules: the legality filter and the check / checkmate / stalemate oracle.

Functions take the board (and the color they reason about) explicitly, so they work equally well on the
game's own board and on a scratch copy.
"""

from src.chess.board import Board
from src.chess.moves import Move, pseudo_legal_moves
from src.chess.pieces import Color
from src.chess.square import Square


# --- LEGALITY FILTER ---
def is_legal_move(
    board: Board, color: Color, from_square: Square, to_square: Square
) -> bool:
    """
    A move passes the filter when
    1. both squares are on the board
    2. a piece of `color` (the player to move) stands on the starting square
    3. the target square does not hold a piece of that same color
    4. the target square is one of the piece's pseudo-legal destinations

    NOTE: The resulting position is NOT simulated. A move that leaves your own king attacked passes.
    """
    if not (from_square.is_within_bounds() and to_square.is_within_bounds()):
        return False

    piece = board.piece(from_square)
    if piece is None or piece.color != color:
        return False

    target_piece = board.piece(to_square)
    if target_piece is not None and target_piece.color == color:
        return False

    return to_square in pseudo_legal_moves(board, from_square)


def legal_destinations(board: Board, color: Color, square: Square) -> list[Square]:
    """The squares the piece on `square` may move to (empty when it is not a piece of `color`)."""
    return [
        destination
        for destination in pseudo_legal_moves(board, square)
        if is_legal_move(board, color, square, destination)
    ]


def enumerate_moves(board: Board, color: Color) -> list[Move]:
    """Every move of `color` passing the legality filter. Board order (row-major), then generation order."""
    return [
        Move(from_square, to_square)
        for from_square in board.locate_color(color)
        for to_square in legal_destinations(board, color, from_square)
    ]


# --- CHECK / MATE / STALEMATE ORACLE ---
def is_king_in_check(board: Board, color: Color) -> bool:
    """
    Is the king of `color` attacked?
    ----

    A king is attacked when its square is one of the pseudo-legal destinations of any opponent piece.

    NOTE: no king on the board means 'not in check'. A captured king is an end condition of its own (see Game.missing_king).
    """
    king_square = board.locate_king(color)
    if king_square is None:
        return False

    return any(
        king_square in pseudo_legal_moves(board, square)
        for square in board.locate_color(color.opponent)
    )


def simulate_move(board: Board, move: Move) -> Board:
    """Play the move on a scratch copy of the board. The board passed in is left untouched."""
    scratch_board = board.copy()
    scratch_board.move_piece(move.from_square, move.to_square)
    return scratch_board


def is_putting_yourself_in_check(board: Board, color: Color, move: Move) -> bool:
    """Return True if the move leaves (or puts) the king of `color` in check"""
    return is_king_in_check(simulate_move(board, move), color)


def has_any_legal_move(board: Board, color: Color) -> bool:
    """
    Does `color` have at least one move that does not leave its own king in check?

    Stops at the first such move found.
    """
    return any(
        not is_putting_yourself_in_check(board, color, move)
        for move in enumerate_moves(board, color)
    )


def is_checkmate(board: Board, color: Color) -> bool:
    return is_king_in_check(board, color) and not has_any_legal_move(board, color)


def is_stalemate(board: Board, color: Color) -> bool:
    return not is_king_in_check(board, color) and not has_any_legal_move(board, color)
