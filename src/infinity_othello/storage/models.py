from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Literal, Optional

from infinity_othello.othello.board import BLACK, WHITE, Board
from infinity_othello.othello.position import Position
from infinity_othello.othello.replay import ReplayMove, reconstruct_game_from_moves

PlayerName = Literal["black", "white"]


def player_to_str(player: int) -> PlayerName:
    if player == BLACK:
        return "black"
    if player == WHITE:
        return "white"
    raise ValueError(f"Invalid player {player}")


def player_from_str(name: str) -> int:
    if name == "black":
        return BLACK
    if name == "white":
        return WHITE
    raise ValueError(f'Invalid player "{name}"')


class StoredDisc(BaseModel):
    x: int = Field(ge=0, le=7)
    y: int = Field(ge=0, le=7)

    def to_position(self) -> Position:
        return Position(self.x, self.y)

    @classmethod
    def from_position(cls, position: Position) -> StoredDisc:
        return cls(x=position.x, y=position.y)


class StoredMove(BaseModel):
    """
    A move as the replay storage keeps it. Timestamps are unix milliseconds.
    """

    model_config = ConfigDict(populate_by_name=True)

    x: int = Field(ge=0, le=7)
    y: int = Field(ge=0, le=7)
    player: PlayerName
    timestamp: int
    flipped_discs: list[StoredDisc] = Field(default_factory=list, alias="flippedDiscs")
    move_number: Optional[int] = Field(default=None, alias="moveNumber")

    def to_position(self) -> Position:
        return Position(self.x, self.y)

    def to_replay_move(self) -> ReplayMove:
        return ReplayMove(self.to_position(), player_from_str(self.player))

    @classmethod
    def from_move(
        cls,
        *,
        position: Position,
        player: int,
        timestamp: float,
        flipped: list[Position],
        move_number: Optional[int] = None,
    ) -> StoredMove:
        return cls(
            x=position.x,
            y=position.y,
            player=player_to_str(player),
            timestamp=int(timestamp * 1000),
            flipped_discs=[StoredDisc.from_position(flip) for flip in flipped],
            move_number=move_number,
        )


class StoredGame(BaseModel):
    moves: list[StoredMove]

    @field_validator("moves")
    @classmethod
    def validate_moves_length(cls, v: list[StoredMove]) -> list[StoredMove]:
        # 60 empty squares at the start, one disc per move.
        if len(v) > 60:
            raise ValueError("A game cannot have more than 60 moves")
        return v

    def to_replay_moves(self) -> list[ReplayMove]:
        return [move.to_replay_move() for move in self.moves]

    def reconstruct(self) -> list[Board]:
        return reconstruct_game_from_moves(self.to_replay_moves()).snapshots
