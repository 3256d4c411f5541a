from __future__ import annotations

from typing import Iterable, Optional

from infinity_othello.othello import rules
from infinity_othello.othello.board import Board
from infinity_othello.othello.position import Position
from infinity_othello.othello.replay import ReplayMove, reconstruct_game_from_moves
from infinity_othello.othello.rules import InvalidMove, Score


class OthelloEngine:
    """
    Rules engine that owns a single board. This is the surface used by board
    renderers and replay viewers; turn order is the caller's business.
    """

    def __init__(self, board: Optional[Board] = None) -> None:
        self.board = board.copy() if board is not None else Board.start()

    def reset_board(self) -> None:
        self.board = Board.start()

    def get_board(self) -> Board:
        return self.board.copy()

    def set_board(self, board: Board) -> None:
        self.board = board.copy()

    def is_valid_move(self, x: int, y: int, player: int) -> bool:
        return rules.is_legal(self.board, Position(x, y), player)

    def make_move(self, x: int, y: int, player: int) -> list[Position]:
        """
        Plays a move and returns the converted discs. An empty list means the
        move was rejected and the board is unchanged.
        """
        try:
            return rules.apply(self.board, Position(x, y), player)
        except InvalidMove:
            return []

    def get_valid_moves(self, player: int) -> list[Position]:
        return rules.legal_moves(self.board, player)

    def is_game_over(self, board: Optional[Board] = None) -> bool:
        return rules.is_game_over(self.board if board is None else board)

    def get_score(self, board: Optional[Board] = None) -> Score:
        return rules.get_score(self.board if board is None else board)

    def get_winner(self, board: Optional[Board] = None) -> Optional[int]:
        return rules.get_winner(self.board if board is None else board)

    def reconstruct_game_from_moves(self, moves: Iterable[ReplayMove]) -> list[Board]:
        # Replays never touch the engine's own board.
        return reconstruct_game_from_moves(moves).snapshots
