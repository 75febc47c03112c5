"""Repository protocol. The service only talks to this interface (SQLAlchemy implementation in sql_repository.py)."""

from typing import Protocol
from uuid import UUID

from src.core.models import GameModel


class GameRepository(Protocol):
    """
    Persistence of games as replayable records.

    A record holds the starting board position, the moves played so far (UCI), who moved first, the side of the
    automated opponent and the last known status. Captures and scores are never stored: they follow from the replay.
    """

    def get_game(self, game_id: UUID) -> GameModel | None:
        """The stored record, or None for an unknown ID."""
        ...

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store a new record under a fresh ID. Returns the stored data and that ID."""
        ...

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Overwrite the move list / status (an undo shortens the move list again). None for an unknown ID."""
        ...

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record. Returns the removed data (None if there was no such record)."""
        ...
