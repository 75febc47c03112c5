"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    KING_CAPTURED = "king captured"


# --- NOTE The domain layer (src/chess/pieces.py) has its own Color enum.
# --- These string versions are what crosses the boundaries (API models, database records).


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"
