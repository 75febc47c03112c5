"""
Move selection for the automated opponent (and for hints).

Key idea: same strategy pattern as the movement rules. A strategy ranks a list of moves, `select_move` takes the best one.
A deeper search can be plugged in later without touching the rules engine.
"""

import random
from dataclasses import dataclass
from typing import Optional, Protocol

from src.chess.board import Board
from src.chess.moves import Move
from src.chess.pieces import Color
from src.chess.rules import enumerate_moves


@dataclass(frozen=True)
class MoveCandidate:
    move: Move
    score: float


class MoveStrategy(Protocol):
    """Given the moves available, return them ranked (best first)."""

    def rank(self, board: Board, moves: list[Move]) -> list[MoveCandidate]: ...


def captured_value(board: Board, move: Move) -> int:
    """Material won by the move (0 if the target square is empty)"""
    target_piece = board.piece(move.to_square)
    return target_piece.points if target_piece is not None else 0


class GreedyCaptureStrategy:
    """
    One-ply greedy search
    ----

    score = value of the captured piece + uniform random number in [0, tie_breaker]

    The random term only reorders moves that win the same material (as long as tie_breaker < 1).
    Pass a seeded random.Random to make the choice reproducible.
    """

    def __init__(
        self, rng: Optional[random.Random] = None, tie_breaker: float = 0.5
    ) -> None:
        self.rng = rng or random.Random()
        self.tie_breaker = tie_breaker

    def rank(self, board: Board, moves: list[Move]) -> list[MoveCandidate]:
        candidates = [
            MoveCandidate(
                move, captured_value(board, move) + self.rng.uniform(0, self.tie_breaker)
            )
            for move in moves
        ]
        return sorted(candidates, key=lambda candidate: candidate.score, reverse=True)


class MaterialHintStrategy:
    """Biggest capture first. No randomness: equal captures keep generation order."""

    def rank(self, board: Board, moves: list[Move]) -> list[MoveCandidate]:
        candidates = [MoveCandidate(move, captured_value(board, move)) for move in moves]
        return sorted(candidates, key=lambda candidate: candidate.score, reverse=True)


def select_move(
    board: Board, color: Color, strategy: MoveStrategy
) -> Optional[MoveCandidate]:
    """Best ranked move for `color`, or None when it has no move at all."""
    moves = enumerate_moves(board, color)
    if not moves:
        return None
    return strategy.rank(board, moves)[0]
