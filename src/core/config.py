"""
Application settings and logging setup.

Settings are read from environment variables (all prefixed with CHESS_). Anything not set falls back to the defaults below.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional, Self

from src.core.exceptions import ConfigError
from src.core.shared_types import Color

DEFAULT_DATABASE_URL = "sqlite:///chess.db"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    sql_echo: bool = False
    # which side the automated opponent plays in a new game (None: two human players)
    ai_color: Optional[Color] = Color.BLACK
    # upper bound of the random term added to a move's score by the greedy opponent
    ai_tie_breaker: float = 0.5
    ai_seed: Optional[int] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Self:
        """Load from environment variables"""
        ai_color_name = os.getenv("CHESS_AI_COLOR", Color.BLACK.value).lower()
        if ai_color_name in ("", "none"):
            ai_color = None
        elif ai_color_name in Color._value2member_map_:
            ai_color = Color(ai_color_name)
        else:
            raise ConfigError(
                f"CHESS_AI_COLOR must be one of {','.join(c.value for c in Color)} or 'none'. Got {ai_color_name!r}"
            )

        try:
            tie_breaker = float(os.getenv("CHESS_AI_TIE_BREAKER", "0.5"))
            seed_str = os.getenv("CHESS_AI_SEED")
            ai_seed = int(seed_str) if seed_str else None
        except ValueError as exc:
            raise ConfigError(f"Cannot parse numeric AI setting: {exc}") from exc
        if tie_breaker < 0:
            raise ConfigError(f"CHESS_AI_TIE_BREAKER cannot be negative: {tie_breaker}")

        log_level = os.getenv("CHESS_LOG_LEVEL", "INFO").upper()
        if log_level not in logging.getLevelNamesMapping():
            raise ConfigError(f"Unknown log level: {log_level!r}")

        return cls(
            database_url=os.getenv("CHESS_DATABASE_URL", DEFAULT_DATABASE_URL),
            sql_echo=os.getenv("CHESS_SQL_ECHO", "false").lower() == "true",
            ai_color=ai_color,
            ai_tie_breaker=tie_breaker,
            ai_seed=ai_seed,
            log_level=log_level,
        )


def configure_logging(level: str = "INFO") -> None:
    """Root logger setup. Call once from whatever process drives the game."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
