from infinity_othello.session.game_session import GameSession
from infinity_othello.session.models import (
    GameEvent,
    GameMode,
    GameSettings,
    GameStats,
    GameStatus,
    HistoryEntry,
    MoveRecord,
    MoveResult,
    RejectReason,
)

__all__ = [
    "GameEvent",
    "GameMode",
    "GameSession",
    "GameSettings",
    "GameStats",
    "GameStatus",
    "HistoryEntry",
    "MoveRecord",
    "MoveResult",
    "RejectReason",
]
