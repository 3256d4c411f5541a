from __future__ import annotations

from typing import NamedTuple, Optional

from infinity_othello.othello.board import BLACK, EMPTY, WHITE, Board, opponent
from infinity_othello.othello.position import DIRECTIONS, Position, all_positions

# Result of get_winner() when both colors end with the same disc count.
TIE = 0


class InvalidMove(Exception):
    pass


class Score(NamedTuple):
    black: int
    white: int

    def total(self) -> int:
        return self.black + self.white


def _flips_in_direction(
    board: Board, position: Position, dx: int, dy: int, player: int
) -> list[Position]:
    run: list[Position] = []
    other = opponent(player)

    current = Position(position.x + dx, position.y + dy)
    while current.is_on_board():
        square = board.get_square(current)

        if square == other:
            run.append(current)
            current = Position(current.x + dx, current.y + dy)
            continue

        if square == player:
            return run

        # Empty square ends the run without converting it.
        break

    return []


def get_flips(board: Board, position: Position, player: int) -> list[Position]:
    """
    Returns the opponent discs that placing `player` on `position` would
    convert, without changing the board. An empty list means the move is not
    legal.
    """
    assert player in [BLACK, WHITE]

    if not position.is_on_board() or board.get_square(position) != EMPTY:
        return []

    flipped: list[Position] = []
    for dx, dy in DIRECTIONS:
        flipped += _flips_in_direction(board, position, dx, dy, player)

    return flipped


def is_legal(board: Board, position: Position, player: int) -> bool:
    assert player in [BLACK, WHITE]

    if not position.is_on_board() or board.get_square(position) != EMPTY:
        return False

    for dx, dy in DIRECTIONS:
        if _flips_in_direction(board, position, dx, dy, player):
            return True

    return False


def apply(board: Board, position: Position, player: int) -> list[Position]:
    """
    Places a disc for `player` and converts every bounded opponent run.
    Mutates `board` and returns the converted positions.

    Raises InvalidMove and leaves the board untouched if the move converts
    nothing.
    """
    flipped = get_flips(board, position, player)

    if not flipped:
        raise InvalidMove(f"{position} is not a legal move")

    board.place_disc(position, player)
    for flip in flipped:
        board.place_disc(flip, player)

    return flipped


def legal_moves(board: Board, player: int) -> list[Position]:
    return [
        position for position in all_positions() if is_legal(board, position, player)
    ]


def has_moves(board: Board, player: int) -> bool:
    return any(is_legal(board, position, player) for position in all_positions())


def is_game_over(board: Board) -> bool:
    return not (has_moves(board, BLACK) or has_moves(board, WHITE))


def get_score(board: Board) -> Score:
    return Score(black=board.count(BLACK), white=board.count(WHITE))


def get_winner(board: Board) -> Optional[int]:
    """
    Returns BLACK, WHITE or TIE once neither color can move, None before that.
    """
    if not is_game_over(board):
        return None

    score = get_score(board)

    if score.black > score.white:
        return BLACK
    if score.white > score.black:
        return WHITE
    return TIE
