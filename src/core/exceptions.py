"""
Custom exceptions shared across layers.

Everything derives from GameError so the service layer (and whatever sits on top of it) can catch a single type.
NOTE: none of these subclass ValueError, so a pydantic validator raising one of them propagates it unchanged.
"""


class GameError(Exception):
    """Top-level exception for anything going wrong while playing a game."""


class GameStateError(GameError):
    """The request does not fit the current state of the game (game over, not your turn, nothing to undo, ...)."""


class IllegalMoveError(GameError):
    """The move does not pass the legality filter."""


class InvalidPieceError(GameError):
    """A symbol that does not denote any of the 12 pieces."""


class InvalidFENError(GameError):
    """Board position string could not be parsed."""


class InvalidRequestError(GameError):
    """Request data that cannot be interpreted (raised from the pydantic validators)."""


class RepositoryError(GameError):
    """Persistence layer could not find/store the requested record."""


class ConfigError(GameError):
    """Environment supplied a setting that cannot be used."""
