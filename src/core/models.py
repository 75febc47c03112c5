"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass
from typing import Optional

# Type aliases to make GameModel easier to read
PieceColor = str
BoardFEN = str


@dataclass
class GameModel:
    """
    Transport-safe representation of a game used between Service, DB, and Game layers.

    NOTE: captured pieces and scores are not stored. They follow from replaying `moves_uci` on `starting_position`.
    """

    starting_position: BoardFEN
    moves_uci: list[str]
    first_player: PieceColor
    ai_color: Optional[PieceColor]
    status: str
