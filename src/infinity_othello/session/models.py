from __future__ import annotations

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import NamedTuple, Optional

from infinity_othello.ai import Difficulty
from infinity_othello.config import (
    get_ai_move_delay,
    get_difficulty,
    get_game_mode,
    get_time_limit,
)
from infinity_othello.othello.board import BLACK, WHITE, Board
from infinity_othello.othello.position import Position
from infinity_othello.storage.models import StoredMove


class GameStatus(str, Enum):
    WAITING = "waiting"
    PLAYING = "playing"
    PAUSED = "paused"
    FINISHED = "finished"


class GameMode(str, Enum):
    SINGLE = "single"
    LOCAL = "local"
    ONLINE = "online"
    AI = "ai"


class RejectReason(str, Enum):
    GAME_NOT_PLAYING = "game_not_playing"
    AI_THINKING = "ai_thinking"
    OUT_OF_BOUNDS = "out_of_bounds"
    OCCUPIED = "occupied"
    NOT_LEGAL = "not_legal"


class GameEvent(str, Enum):
    GAME_STARTED = "game_started"
    GAME_RESET = "game_reset"
    MOVE_MADE = "move_made"
    MOVE_UNDONE = "move_undone"
    TURN_PASSED = "turn_passed"
    AI_THINKING_STARTED = "ai_thinking_started"
    AI_THINKING_STOPPED = "ai_thinking_stopped"
    GAME_FINISHED = "game_finished"


class GameSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    mode: GameMode = GameMode.SINGLE
    difficulty: Difficulty = Difficulty.MEDIUM

    # Seconds, None means unlimited.
    time_limit: Optional[int] = Field(default=None, gt=0)

    # Milliseconds of simulated AI thinking.
    ai_move_delay: int = Field(default=1000, ge=0)

    @classmethod
    def from_env(cls) -> GameSettings:
        return cls(
            mode=GameMode(get_game_mode()),
            difficulty=Difficulty(get_difficulty()),
            time_limit=get_time_limit(),
            ai_move_delay=get_ai_move_delay(),
        )


class MoveRecord(NamedTuple):
    position: Position
    player: int
    flipped: tuple[Position, ...]
    move_number: int
    timestamp: float

    def to_stored(self) -> StoredMove:
        return StoredMove.from_move(
            position=self.position,
            player=self.player,
            timestamp=self.timestamp,
            flipped=list(self.flipped),
            move_number=self.move_number,
        )


class HistoryEntry(NamedTuple):
    # Frozen snapshot of the board before `move` was played.
    prior_board: Board
    player: int
    move: MoveRecord


class MoveResult:
    def __init__(
        self,
        *,
        move: Optional[MoveRecord] = None,
        reason: Optional[RejectReason] = None,
    ) -> None:
        assert (move is None) != (reason is None)

        self.move = move
        self.reason = reason

    @property
    def success(self) -> bool:
        return self.move is not None

    def __repr__(self) -> str:
        if self.move is not None:
            return f"MoveResult(move={self.move})"
        return f"MoveResult(reason={self.reason})"


class GameStats:
    def __init__(self) -> None:
        self.total_moves = 0
        self.captures = {BLACK: 0, WHITE: 0}
        self.game_start_time: Optional[float] = None
        self.game_end_time: Optional[float] = None

    def record_move(self, move: MoveRecord) -> None:
        self.total_moves += 1
        self.captures[move.player] += len(move.flipped)

    def revert_move(self, move: MoveRecord) -> None:
        self.total_moves = max(0, self.total_moves - 1)
        self.captures[move.player] -= len(move.flipped)
