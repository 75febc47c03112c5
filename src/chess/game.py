"""
The Game class will be the entrypoint into the domain layer for the service layer.
It owns the board, whose turn it is, the captured pieces/scores and the move history --> applies and reverts moves,
and reports when the game has ended.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Self

from src.chess import rules
from src.chess.board import Board
from src.chess.moves import Move, MoveRecord
from src.chess.pieces import Color, Piece
from src.chess.square import Square
from src.chess.strategies import (
    GreedyCaptureStrategy,
    MaterialHintStrategy,
    MoveCandidate,
    MoveStrategy,
    select_move,
)
from src.core.exceptions import GameStateError, InvalidRequestError
from src.core.models import GameModel

logger = logging.getLogger(__name__)


class Status(Enum):
    IN_PROGRESS = auto()
    CHECKMATE = auto()
    STALEMATE = auto()
    KING_CAPTURED = auto()


def color_from_name(name: str) -> Color:
    """'white' / 'black' (any capitalization) to Color"""
    if name.upper() not in Color.__members__:
        raise InvalidRequestError(
            f"Unknown color {name!r}. Pick one from {','.join(c.name.lower() for c in Color)}"
        )
    return Color[name.upper()]


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    current_player: Color = Color.WHITE
    move_history: list[MoveRecord] = field(default_factory=list)
    captured_pieces: dict[Color, list[Piece]] = field(
        default_factory=lambda: {color: [] for color in Color}
    )
    scores: dict[Color, int] = field(default_factory=lambda: {color: 0 for color in Color})
    status: Status = Status.IN_PROGRESS
    ai_color: Optional[Color] = None
    # the position the game started from (needed to store / rebuild the game by replaying the moves)
    starting_position: str = ""

    def __post_init__(self) -> None:
        if not self.starting_position:
            self.starting_position = self.board.to_fen()

    @classmethod
    def new_game(
        cls,
        starting_position: Optional[str] = None,
        current_player: Color = Color.WHITE,
        ai_color: Optional[Color] = None,
    ) -> Self:
        """Start from the standard starting position, unless another board position (FEN notation) is supplied."""
        board = (
            Board.from_fen(starting_position)
            if starting_position
            else Board.starting_position()
        )
        game = cls(board=board, current_player=current_player, ai_color=ai_color)
        game._update_game_status()
        return game

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """
        Define how to construct a Game from the information the Service layer actually has.

        Replays the stored moves on the starting position, which recreates captures, scores and history.
        NOTE: `first_player` in the model is the player that was to move at the START of the game.
        """
        status_name = model.status.replace(" ", "_").upper()
        if status_name not in Status.__members__:
            raise GameStateError(
                f"Invalid status code: {model.status!r}. \nPick one from {','.join([status.name.lower() for status in Status])}"
            )

        ai_color = color_from_name(model.ai_color) if model.ai_color else None
        game = cls.new_game(
            starting_position=model.starting_position,
            current_player=color_from_name(model.first_player),
            ai_color=ai_color,
        )
        for uci in model.moves_uci:
            move = Move.from_uci(uci)
            if not game._is_legal(move):
                raise GameStateError(
                    f"Stored move {uci!r} is not legal in the replayed position."
                )
            game._play(move)

        if game.status != Status[status_name]:
            logger.warning(
                "Stored status %r differs from replayed status %r",
                model.status,
                game.status.name.lower(),
            )
        return game

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        starting_player = (
            self.move_history[0].mover if self.move_history else self.current_player
        )
        return GameModel(
            starting_position=self.starting_position,
            moves_uci=[record.move.to_uci() for record in self.move_history],
            first_player=starting_player.name.lower(),
            ai_color=self.ai_color.name.lower() if self.ai_color else None,
            status=self.status.name.lower(),
        )

    # --- QUERIES ---
    def is_legal_move(
        self, from_row: int, from_col: int, to_row: int, to_col: int
    ) -> bool:
        """Legality filter for the player to move. Off-board coordinates are simply not legal."""
        return self._is_legal(Move(Square(from_row, from_col), Square(to_row, to_col)))

    def legal_destinations(self, row: int, col: int) -> list[Square]:
        """Where can the piece on (row, col) go? Used to highlight the options of the selected piece."""
        square = Square(row, col)
        if not square.is_within_bounds():
            return []
        return rules.legal_destinations(self.board, self.current_player, square)

    def legal_moves(self) -> list[Move]:
        return rules.enumerate_moves(self.board, self.current_player)

    @property
    def last_move(self) -> Optional[MoveRecord]:
        return self.move_history[-1] if self.move_history else None

    @property
    def is_over(self) -> bool:
        return self.status != Status.IN_PROGRESS

    @property
    def winner(self) -> Optional[Color]:
        """
        * King captured: the side that still has its king (nobody if neither king is left).
        * Checkmate: the player to move just got mated, so the opponent wins.
        * Otherwise (in progress / stalemate): nobody.
        """
        if self.status == Status.KING_CAPTURED:
            survivors = [color for color in Color if self.board.locate_king(color) is not None]
            return survivors[0] if len(survivors) == 1 else None
        if self.status == Status.CHECKMATE:
            return self.current_player.opponent
        return None

    # --- COMMANDS ---
    def apply_move(
        self, from_row: int, from_col: int, to_row: int, to_col: int
    ) -> MoveRecord:
        """
        Make the move
        -----

        NOTE: the caller must have checked `is_legal_move` first. The move is not validated again here.

        1. update the board
        2. record the capture (captured pieces + score of the player making the move)
        3. update the (history of) moves
        4. hand over the turn
        5. update game status (if needed)
        """
        return self._play(Move(Square(from_row, from_col), Square(to_row, to_col)))

    def undo_last_move(self) -> Optional[MoveRecord]:
        """Take back the last move. Returns None if there is nothing to undo."""
        if not self.move_history:
            logger.debug("Nothing to undo")
            return None

        record = self.move_history.pop()
        self.board.place_piece(record.piece, record.move.from_square)
        self.board.place_piece(record.captured, record.move.to_square)

        if record.captured is not None:
            self.captured_pieces[record.mover].pop()
            self.scores[record.mover] -= record.captured.points

        self.current_player = record.mover
        self._update_game_status()
        logger.debug("Undid %s by %s", record.move.to_uci(), record.mover.name.lower())
        return record

    def undo_turn(self) -> list[MoveRecord]:
        """
        Undo until it is a human player's turn again.
        ----

        Against the automated opponent, undoing only its reply would just make it move again.
        So if after one undo the automated side is to move, take back its previous move as well.
        """
        undone: list[MoveRecord] = []
        record = self.undo_last_move()
        if record is None:
            return undone
        undone.append(record)

        if self.ai_color is not None and self.current_player == self.ai_color:
            second = self.undo_last_move()
            if second is not None:
                undone.append(second)
        return undone

    # --- CHECK / MATE / STALEMATE ---
    def king_in_check(self, color: Optional[Color] = None) -> bool:
        return rules.is_king_in_check(self.board, color or self.current_player)

    def has_any_legal_move(self, color: Optional[Color] = None) -> bool:
        return rules.has_any_legal_move(self.board, color or self.current_player)

    def is_checkmate(self) -> bool:
        return rules.is_checkmate(self.board, self.current_player)

    def is_stalemate(self) -> bool:
        return rules.is_stalemate(self.board, self.current_player)

    def missing_king(self) -> Optional[Color]:
        """The color whose king is no longer on the board (None while both kings stand)."""
        return next(
            (color for color in Color if self.board.locate_king(color) is None), None
        )

    # --- AUTOMATED OPPONENT ---
    def select_move(
        self,
        color: Optional[Color] = None,
        strategy: Optional[MoveStrategy] = None,
    ) -> Optional[MoveCandidate]:
        """Let the strategy (default: greedy capture) pick a move for `color` (default: player to move)."""
        return select_move(
            self.board, color or self.current_player, strategy or GreedyCaptureStrategy()
        )

    def hint(self, strategy: Optional[MoveStrategy] = None) -> Optional[MoveCandidate]:
        """Suggestion for the player to move: the biggest capture available."""
        return select_move(
            self.board, self.current_player, strategy or MaterialHintStrategy()
        )

    # -- PRIVATE HELPERS ---
    def _is_legal(self, move: Move) -> bool:
        return rules.is_legal_move(
            self.board, self.current_player, move.from_square, move.to_square
        )

    def _play(self, move: Move) -> MoveRecord:
        piece = self.board.piece(move.from_square)
        if piece is None:
            raise GameStateError(f"No piece to move on {move.from_square.to_algebraic()}")

        captured = self._update_board(move)
        record = MoveRecord(move, piece, captured, self.current_player)
        self._update_captures(record)
        self._update_moves(record)
        self._switch_turn()
        self._update_game_status()
        logger.debug(
            "%s played %s%s",
            record.mover.name.lower(),
            move.to_uci(),
            f" capturing {captured.to_glyph()}" if captured else "",
        )
        return record

    def _update_board(self, move: Move) -> Optional[Piece]:
        return self.board.move_piece(move.from_square, move.to_square)

    def _update_captures(self, record: MoveRecord) -> None:
        if record.captured is None:
            return
        self.captured_pieces[record.mover].append(record.captured)
        self.scores[record.mover] += record.captured.points

    def _update_moves(self, record: MoveRecord) -> None:
        self.move_history.append(record)

    def _switch_turn(self) -> None:
        self.current_player = self.current_player.opponent

    def _update_game_status(self) -> None:
        """
        Performs checks to see if game has ended and changes status accordingly.

        NOTE the turn has already been handed over. The checks are about the player that is now to move.
        A captured king ends the game before checkmate/stalemate are even considered.
        """
        if self.missing_king() is not None:
            new_status = Status.KING_CAPTURED
        elif not self.has_any_legal_move():
            new_status = (
                Status.CHECKMATE if self.king_in_check() else Status.STALEMATE
            )
        else:
            new_status = Status.IN_PROGRESS

        if new_status != self.status and new_status != Status.IN_PROGRESS:
            logger.info("Game over: %s", new_status.name.lower())
        self.status = new_status
