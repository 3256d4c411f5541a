from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, NamedTuple, Optional

from infinity_othello.othello.board import BLACK, COLOR_NAMES, WHITE, Board, opponent
from infinity_othello.othello.position import Position
from infinity_othello.othello.rules import apply, has_moves, is_legal

logger = logging.getLogger(__name__)

metadata_regex = re.compile(r'\[(.*) "(.*)"\]')


class ReplayMove(NamedTuple):
    position: Position
    player: int


class Reconstruction:
    """
    Board snapshots of a recorded game. `snapshots[0]` is the start position
    and `snapshots[i]` is the board after move `i - 1`. Moves that were not
    legal at their point in the game are listed in `invalid_steps` by their
    index in the move list; their snapshot repeats the previous one.
    """

    def __init__(self, snapshots: list[Board], invalid_steps: list[int]) -> None:
        self.snapshots = snapshots
        self.invalid_steps = invalid_steps

    def __len__(self) -> int:
        return len(self.snapshots)

    def is_valid(self) -> bool:
        return not self.invalid_steps

    def final_board(self) -> Board:
        return self.snapshots[-1]


def reconstruct_game_from_moves(moves: Iterable[ReplayMove]) -> Reconstruction:
    board = Board.start()
    snapshots = [board.snapshot()]
    invalid_steps: list[int] = []

    for step, (position, player) in enumerate(moves):
        if player not in [BLACK, WHITE] or not is_legal(board, position, player):
            logger.warning(
                f"Invalid move {step + 1} in replay: {position} for {COLOR_NAMES.get(player, player)}"
            )
            invalid_steps.append(step)
        else:
            apply(board, position, player)

        snapshots.append(board.snapshot())

    return Reconstruction(snapshots, invalid_steps)


class Replay:
    """
    A recorded game as a list of moves with the color that played each one.
    """

    def __init__(self, moves: Optional[list[ReplayMove]] = None) -> None:
        self.metadata: dict[str, str] = {}
        self.moves: list[ReplayMove] = moves if moves is not None else []

    @classmethod
    def from_file(cls, file: Path) -> Replay:
        return cls.from_string(file.read_text(errors="ignore"))

    @classmethod
    def from_positions(cls, positions: Iterable[Position]) -> Replay:
        """
        Assign colors to an uncolored move list by playing it out. Passed turns
        may be missing from the list, so when the side to move cannot play a
        move but the other side can, the turn is passed first.
        """
        board = Board.start()
        turn = BLACK
        moves: list[ReplayMove] = []

        for position in positions:
            if not is_legal(board, position, turn):
                if is_legal(board, position, opponent(turn)):
                    turn = opponent(turn)
                else:
                    # Keep the move so reconstruction can flag it.
                    moves.append(ReplayMove(position, turn))
                    continue

            apply(board, position, turn)
            moves.append(ReplayMove(position, turn))

            if has_moves(board, opponent(turn)) or not has_moves(board, turn):
                turn = opponent(turn)

        return Replay(moves)

    @classmethod
    def from_string(cls, string: str) -> Replay:
        metadata: dict[str, str] = {}

        lines = string.split("\n")
        line_offset = 0
        for line_offset, line in enumerate(lines):
            if not line.startswith("["):
                break

            match = metadata_regex.match(line)

            if not match:
                raise ValueError("Could not parse metadata")

            metadata[match.group(1)] = match.group(2)
        else:
            line_offset = len(lines)

        positions: list[Position] = []
        for line in lines[line_offset:]:
            for word in line.split():
                # Move numbers such as "1." are skipped.
                if word[0].isdigit():
                    continue

                position = Position.from_field(word)
                if position is not None:
                    positions.append(position)

        replay = cls.from_positions(positions)
        replay.metadata = metadata
        return replay

    def positions(self) -> list[Position]:
        return [move.position for move in self.moves]

    def reconstruct(self) -> Reconstruction:
        return reconstruct_game_from_moves(self.moves)

    def get_black_player(self) -> Optional[str]:
        return self.metadata.get("Black")

    def get_white_player(self) -> Optional[str]:
        return self.metadata.get("White")
