from __future__ import annotations

import random
from enum import Enum
from typing import Optional, Protocol, Sequence

from infinity_othello.othello.board import Board
from infinity_othello.othello.position import Position
from infinity_othello.othello.rules import get_flips


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXPERT = "expert"


class MoveStrategy(Protocol):
    name: str

    def select_move(
        self, legal_moves: Sequence[Position], board: Board, player: int
    ) -> Position:
        ...


class RandomStrategy:
    name = "Random"

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    def select_move(
        self, legal_moves: Sequence[Position], board: Board, player: int
    ) -> Position:
        if not legal_moves:
            raise ValueError("No valid moves.")
        return self.rng.choice(list(legal_moves))


class GreedyStrategy:
    """
    Picks the move that converts the most discs. Ties go to the move listed
    first. Flips are counted on the board as given, no look-ahead.
    """

    name = "Greedy"

    def select_move(
        self, legal_moves: Sequence[Position], board: Board, player: int
    ) -> Position:
        if not legal_moves:
            raise ValueError("No valid moves.")

        best_move = legal_moves[0]
        best_count = -1

        for move in legal_moves:
            count = len(get_flips(board, move, player))
            if count > best_count:
                best_move = move
                best_count = count

        return best_move


class CornerStrategy:
    name = "Corner"

    def __init__(self) -> None:
        self.fallback = GreedyStrategy()

    def select_move(
        self, legal_moves: Sequence[Position], board: Board, player: int
    ) -> Position:
        if not legal_moves:
            raise ValueError("No valid moves.")

        for move in legal_moves:
            if move.is_corner():
                return move

        return self.fallback.select_move(legal_moves, board, player)


def get_strategy(
    difficulty: Difficulty, rng: Optional[random.Random] = None
) -> MoveStrategy:
    if difficulty == Difficulty.EASY:
        return RandomStrategy(rng)
    if difficulty == Difficulty.MEDIUM:
        return GreedyStrategy()
    if difficulty in [Difficulty.HARD, Difficulty.EXPERT]:
        return CornerStrategy()
    raise ValueError(f"Unknown difficulty {difficulty}")


def select_move(
    legal_moves: Sequence[Position],
    board: Board,
    player: int,
    difficulty: Difficulty,
    rng: Optional[random.Random] = None,
) -> Position:
    return get_strategy(difficulty, rng).select_move(legal_moves, board, player)
