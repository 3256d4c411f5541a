from infinity_othello.ai.strategy import (
    CornerStrategy,
    Difficulty,
    GreedyStrategy,
    MoveStrategy,
    RandomStrategy,
    get_strategy,
    select_move,
)

__all__ = [
    "CornerStrategy",
    "Difficulty",
    "GreedyStrategy",
    "MoveStrategy",
    "RandomStrategy",
    "get_strategy",
    "select_move",
]
