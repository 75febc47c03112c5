"""Orchestration of communication from API models to business logic and persistence layers (and the reverse direction)."""

import logging
import random
from typing import Optional
from uuid import UUID

from src.api.models import (
    AIMoveRequest,
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    HintRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    MoveSuggestionResponse,
    UndoRequest,
)
from src.chess import pieces
from src.chess.game import Game, color_from_name
from src.chess.square import Square
from src.chess.strategies import GreedyCaptureStrategy, MoveStrategy
from src.core.config import Settings
from src.core.exceptions import GameStateError, IllegalMoveError, RepositoryError
from src.core.shared_types import Color, Status
from src.db.repository import GameRepository

logger = logging.getLogger(__name__)


def to_shared_color(color: pieces.Color) -> Color:
    """Domain color -> color used across the boundaries"""
    return Color(color.name.lower())


class ChessService:
    """Orchestration of layers for a chess game (human vs human, or human vs the automated opponent)."""

    def __init__(
        self,
        repository: GameRepository,
        settings: Optional[Settings] = None,
        strategy: Optional[MoveStrategy] = None,
    ) -> None:
        self.repo = repository
        self.settings = settings or Settings()
        self.strategy = strategy or GreedyCaptureStrategy(
            rng=random.Random(self.settings.ai_seed),
            tie_breaker=self.settings.ai_tie_breaker,
        )

    # -- Game logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """
        Start a new game. Every game gets its own record.

        Without an explicit `ai_color` in the request, the configured default applies (explicit None: two human players).
        """
        ai_color = (
            request.ai_color
            if "ai_color" in request.model_fields_set
            else self.settings.ai_color
        )
        new_game = Game.new_game(
            starting_position=request.starting_position,
            current_player=color_from_name(request.first_player),
            ai_color=color_from_name(ai_color) if ai_color else None,
        )
        _, game_id = self.repo.create_game(new_game.to_model())
        logger.info("New game %s (automated opponent: %s)", game_id, ai_color)
        return self._create_game_response(game_id, new_game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn, whether the game ended, etc.
        """
        game = self._load_game(request.game_id)
        return self._create_game_response(request.game_id, game)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """Where can the piece on the requested square go (empty list if it is not the piece of the player to move)"""
        game = self._load_game(request.game_id)
        square = Square.from_algebraic(request.square)
        destinations = (
            [] if game.is_over else game.legal_destinations(square.row, square.col)
        )
        return LegalMovesResponse(
            game_id=request.game_id,
            square=request.square,
            color=to_shared_color(game.current_player),
            legal_moves=[destination.to_algebraic() for destination in destinations],
        )

    def make_move(self, request: MoveRequest) -> GameResponse:
        """
        Make a move attempt (by a human player).

        The legality filter is applied here: the Game itself expects only legal moves.
        """
        game = self._load_game(request.game_id)
        self._assert_in_progress(game)
        if game.ai_color is not None and game.current_player == game.ai_color:
            raise GameStateError(
                "It is the automated opponent's turn. Request its move first."
            )

        from_square = Square.from_algebraic(request.from_square)
        to_square = Square.from_algebraic(request.to_square)
        if not game.is_legal_move(
            from_square.row, from_square.col, to_square.row, to_square.col
        ):
            raise IllegalMoveError(
                f"Move not allowed: {request.from_square}{request.to_square}"
            )

        game.apply_move(from_square.row, from_square.col, to_square.row, to_square.col)
        self._save_game(request.game_id, game)
        return self._create_game_response(request.game_id, game)

    def ai_move(self, request: AIMoveRequest) -> GameResponse:
        """
        Let the automated opponent make its move.

        NOTE: any delay to pace the game for a human observer is up to the caller. This returns immediately.
        If the automated side has no move at all, the game is returned unchanged.
        """
        game = self._load_game(request.game_id)
        self._assert_in_progress(game)
        if game.ai_color is None:
            raise GameStateError("This game has no automated opponent.")
        if game.current_player != game.ai_color:
            raise GameStateError("It is not the automated opponent's turn.")

        candidate = game.select_move(game.ai_color, self.strategy)
        if candidate is None:
            logger.info("Automated opponent has no valid moves in game %s", request.game_id)
            return self._create_game_response(request.game_id, game)

        move = candidate.move
        game.apply_move(
            move.from_square.row,
            move.from_square.col,
            move.to_square.row,
            move.to_square.col,
        )
        logger.info(
            "Automated opponent played %s (score %.2f) in game %s",
            move.to_uci(),
            candidate.score,
            request.game_id,
        )
        self._save_game(request.game_id, game)
        return self._create_game_response(request.game_id, game)

    def undo(self, request: UndoRequest) -> GameResponse:
        """Take back the last move (or the last full turn against the automated opponent)."""
        game = self._load_game(request.game_id)
        if request.full_turn:
            undone = game.undo_turn()
        else:
            record = game.undo_last_move()
            undone = [record] if record else []

        if not undone:
            raise GameStateError("No moves to undo!")

        self._save_game(request.game_id, game)
        return self._create_game_response(request.game_id, game)

    def hint(self, request: HintRequest) -> MoveSuggestionResponse:
        """Suggest a move for the player to move (the biggest capture on offer)."""
        game = self._load_game(request.game_id)
        candidate = None if game.is_over else game.hint()
        return MoveSuggestionResponse(
            game_id=request.game_id,
            color=to_shared_color(game.current_player),
            move=candidate.move.to_uci() if candidate else None,
            score=candidate.score if candidate else None,
        )

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        deleted = self.repo.delete_game(request.game_id)
        if deleted is None:
            raise RepositoryError(f"Game with {request.game_id=} not found.")

    # -- Internal helpers --
    def _create_game_response(self, game_id: UUID, game: Game) -> GameResponse:
        """Convert the Game into a GameResponse (for game with given ID.)"""
        last_move = game.last_move
        return GameResponse(
            game_id=game_id,
            board=game.board.to_glyph_rows(),
            current_player=to_shared_color(game.current_player),
            status=Status[game.status.name],
            winner=to_shared_color(game.winner) if game.winner else None,
            in_check=game.king_in_check(),
            scores={
                color.name.lower(): score for color, score in game.scores.items()
            },
            material_balance=game.board.material_balance(pieces.Color.WHITE),
            captured_pieces={
                color.name.lower(): [piece.to_glyph() for piece in captured]
                for color, captured in game.captured_pieces.items()
            },
            move_history=[record.move.to_uci() for record in game.move_history],
            last_move=last_move.move.to_uci() if last_move else None,
            ai_color=to_shared_color(game.ai_color) if game.ai_color else None,
        )

    def _load_game(self, game_id: UUID) -> Game:
        """Attempt to find the game in the repository (raise error if it fails) and rebuild it."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return Game.from_model(game_model)

    def _save_game(self, game_id: UUID, game: Game) -> None:
        stored = self.repo.update_game(game_id, game.to_model())
        if stored is None:
            raise RepositoryError(f"Game with {game_id=} not found.")

    @staticmethod
    def _assert_in_progress(game: Game) -> None:
        if game.is_over:
            raise GameStateError(
                f"Game is not in progress. status: {game.status.name.lower()}"
            )
