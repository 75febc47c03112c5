"""Unit tests for /src/chess/square.py"""

import pytest

from src.chess.square import BOARD_DIMENSIONS, Square
from src.core.exceptions import InvalidRequestError


@pytest.mark.parametrize(
    "name, row, col",
    [
        ("a8", 0, 0),
        ("h8", 0, 7),
        ("a1", 7, 0),
        ("h1", 7, 7),
        ("e2", 6, 4),
        ("d5", 3, 3),
    ],
)
def test_from_algebraic(name: str, row: int, col: int) -> None:
    """Row 0 is the 8th rank (black's back rank), column 0 is the a-file"""
    assert Square.from_algebraic(name) == Square(row, col)


@pytest.mark.parametrize("name", ["a1", "b7", "e4", "h8"])
def test_algebraic_roundtrip(name: str) -> None:
    assert Square.from_algebraic(name).to_algebraic() == name


@pytest.mark.parametrize("name", ["", "e", "e44", "i1", "a9", "a0", "44", "a²", "e٣"])
def test_invalid_algebraic(name: str) -> None:
    with pytest.raises(InvalidRequestError):
        Square.from_algebraic(name)


def test_within_bounds() -> None:
    rows, cols = BOARD_DIMENSIONS
    assert all(Square(row, col).is_within_bounds() for row in range(rows) for col in range(cols))


@pytest.mark.parametrize("row, col", [(-1, 0), (0, -1), (8, 0), (0, 8), (8, 8), (-3, 12)])
def test_out_of_bounds(row: int, col: int) -> None:
    assert not Square(row, col).is_within_bounds()


def test_offset() -> None:
    """Offsets may end up off the board. Checking is up to the caller."""
    assert Square(6, 4).offset(-2, 0) == Square(4, 4)
    assert Square(0, 0).offset(-1, -1) == Square(-1, -1)
