"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.chess.board import is_valid_position
from src.chess.square import FILES, RANKS
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, Status

PieceColor = str
SquareName = str


def _is_algebraic_notation(value: str) -> bool:
    """'a1' - 'h8'"""
    if len(value) != 2:
        return False
    return value[0] in FILES and value[1] in RANKS


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    ai_color: Optional[Color] = None
    first_player: Color = Color.WHITE
    starting_position: Optional[str] = None

    @field_validator("starting_position")
    @classmethod
    def validate_starting_position(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value

        value = value.strip()
        if not is_valid_position(value):
            raise InvalidRequestError(
                f"Cannot interpret {value!r} as a board position. Expected 8 '/'-separated rows of 8 squares each."
            )
        return value


class GetGameRequest(BaseModel):
    game_id: UUID


class LegalMovesRequest(BaseModel):
    game_id: UUID
    square: SquareName

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        if not _is_algebraic_notation(value):
            raise InvalidRequestError(
                f"Cannot interpret square: {value!r} as a valid square name."
            )
        return value


class MoveRequest(BaseModel):
    game_id: UUID
    from_square: SquareName
    to_square: SquareName

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        if not _is_algebraic_notation(value):
            raise InvalidRequestError(
                f"Cannot interpret {value!r} as a valid square name."
            )
        return value


class AIMoveRequest(BaseModel):
    game_id: UUID


class UndoRequest(BaseModel):
    game_id: UUID
    # take back the automated opponent's reply as well, so it is the human player's turn again
    full_turn: bool = True


class HintRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    board: list[str]
    current_player: Color
    status: Status
    winner: Optional[Color]
    in_check: bool
    scores: dict[PieceColor, int]
    # material on the board, white minus black (positive: white is ahead)
    material_balance: int
    captured_pieces: dict[PieceColor, list[str]]
    move_history: list[str]
    last_move: Optional[str]
    ai_color: Optional[Color]


class LegalMovesResponse(BaseModel):
    game_id: UUID
    square: SquareName
    color: Color
    legal_moves: list[SquareName]


class MoveSuggestionResponse(BaseModel):
    game_id: UUID
    color: Color
    move: Optional[str]
    score: Optional[float]
