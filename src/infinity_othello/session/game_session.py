from __future__ import annotations

import asyncio
import logging
import random
import time
from typing import Any, Callable, Optional

from infinity_othello.ai import select_move
from infinity_othello.othello import rules
from infinity_othello.othello.board import BLACK, COLOR_NAMES, Board, opponent
from infinity_othello.othello.position import Position
from infinity_othello.othello.replay import (
    Reconstruction,
    ReplayMove,
    reconstruct_game_from_moves,
)
from infinity_othello.othello.rules import Score
from infinity_othello.session.models import (
    GameEvent,
    GameSettings,
    GameStats,
    GameStatus,
    HistoryEntry,
    MoveRecord,
    MoveResult,
    RejectReason,
)
from infinity_othello.storage.models import StoredGame

logger = logging.getLogger(__name__)

Listener = Callable[[GameEvent, "GameSession"], None]


class GameSession:
    """
    One game of othello between two sides taking turns.

    All state changes go through the methods below. Rejected actions return
    False (or an unsuccessful MoveResult) and leave the session unchanged.

    After every board change `legal_moves` holds the legal moves of
    `current_player` on `board`, and `score` matches the disc counts.
    """

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        *,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.settings = settings if settings is not None else GameSettings.from_env()
        self.rng = rng or random.Random()
        self.clock = clock

        self._listeners: list[Listener] = []
        self._ai_task: Optional[asyncio.Task[None]] = None

        self._clear(GameStatus.WAITING)

    def _clear(self, status: GameStatus) -> None:
        self.board = Board.start()
        self.current_player = BLACK
        self.legal_moves: list[Position] = rules.legal_moves(self.board, BLACK)
        self.must_pass = False
        self.history: list[HistoryEntry] = []
        self.redo_stack: list[MoveRecord] = []
        self.score: Score = rules.get_score(self.board)
        self.status = status
        self.ai_thinking = False
        self.stats = GameStats()

    # --- events ---

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def _emit(self, event: GameEvent) -> None:
        for listener in list(self._listeners):
            listener(event, self)

    # --- lifecycle ---

    def initialize_game(self) -> None:
        self.cancel_ai_move()
        self._clear(GameStatus.PLAYING)
        self.stats.game_start_time = self.clock()
        logger.debug("Started new game")
        self._emit(GameEvent.GAME_STARTED)

    def reset_game(self) -> None:
        self.initialize_game()
        self._emit(GameEvent.GAME_RESET)

    def pause_game(self) -> bool:
        if self.status != GameStatus.PLAYING:
            return False
        self.status = GameStatus.PAUSED
        return True

    def resume_game(self) -> bool:
        if self.status != GameStatus.PAUSED:
            return False
        self.status = GameStatus.PLAYING
        return True

    def finish_game(self) -> bool:
        if self.status == GameStatus.FINISHED:
            return False

        self.cancel_ai_move()
        self._finish()
        self._emit(GameEvent.GAME_FINISHED)
        return True

    def _finish(self) -> None:
        self.status = GameStatus.FINISHED
        self.stats.game_end_time = self.clock()
        logger.info(f"Game finished with score {self.score.black}-{self.score.white}")

    def update_game_settings(self, **changes: Any) -> None:
        # Validates the merged settings, raises pydantic.ValidationError.
        self.settings = GameSettings.model_validate(
            {**self.settings.model_dump(), **changes}
        )

    # --- moves ---

    def make_move(self, x: int, y: int) -> bool:
        return self.play(Position(x, y)).success

    def play(self, position: Position) -> MoveResult:
        if self.status != GameStatus.PLAYING:
            return MoveResult(reason=RejectReason.GAME_NOT_PLAYING)

        if self.ai_thinking:
            return MoveResult(reason=RejectReason.AI_THINKING)

        return self._play(position)

    def _play(self, position: Position, *, clear_redo: bool = True) -> MoveResult:
        if self.status != GameStatus.PLAYING:
            return MoveResult(reason=RejectReason.GAME_NOT_PLAYING)

        if not position.is_on_board():
            return MoveResult(reason=RejectReason.OUT_OF_BOUNDS)

        if position not in self.legal_moves:
            if not self.board.is_empty_square(position):
                return MoveResult(reason=RejectReason.OCCUPIED)
            return MoveResult(reason=RejectReason.NOT_LEGAL)

        mover = self.current_player
        prior_board = self.board.snapshot()

        flipped = rules.apply(self.board, position, mover)
        assert flipped, f"Legal move {position} converted no discs"

        move = MoveRecord(
            position=position,
            player=mover,
            flipped=tuple(flipped),
            move_number=len(self.history) + 1,
            timestamp=self.clock(),
        )
        self.history.append(HistoryEntry(prior_board, mover, move))

        if clear_redo:
            self.redo_stack.clear()

        self.score = rules.get_score(self.board)
        self.stats.record_move(move)

        outcome = self._advance_turn(mover)

        self._emit(GameEvent.MOVE_MADE)
        if outcome is not None:
            self._emit(outcome)

        return MoveResult(move=move)

    def _advance_turn(self, mover: int) -> Optional[GameEvent]:
        other = opponent(mover)
        other_moves = rules.legal_moves(self.board, other)
        self.must_pass = False

        if other_moves:
            self.current_player = other
            self.legal_moves = other_moves
            return None

        mover_moves = rules.legal_moves(self.board, mover)

        if not mover_moves:
            self.current_player = other
            self.legal_moves = []
            self._finish()
            return GameEvent.GAME_FINISHED

        # The opponent cannot move, so the turn passes straight back.
        logger.debug(f"{COLOR_NAMES[other]} has no moves and passes")
        self.current_player = mover
        self.legal_moves = mover_moves
        return GameEvent.TURN_PASSED

    def pass_move(self) -> bool:
        if self.status != GameStatus.PLAYING or not self.must_pass:
            return False

        self.current_player = opponent(self.current_player)
        self.legal_moves = rules.legal_moves(self.board, self.current_player)
        self.must_pass = False

        if not self.legal_moves:
            self._finish()

        self._emit(GameEvent.TURN_PASSED)
        if self.status == GameStatus.FINISHED:
            self._emit(GameEvent.GAME_FINISHED)

        return True

    @property
    def can_undo(self) -> bool:
        if not self.history:
            return False

        # A game ended by its last move can be taken back, finish_game() on a
        # position with moves left cannot.
        if self.status == GameStatus.FINISHED:
            return rules.is_game_over(self.board)

        return True

    @property
    def can_redo(self) -> bool:
        return bool(self.redo_stack) and self.status == GameStatus.PLAYING

    def undo_move(self) -> bool:
        if not self.can_undo or self.ai_thinking:
            return False

        entry = self.history.pop()
        self.redo_stack.append(entry.move)

        self.board = entry.prior_board.copy()
        self.current_player = entry.player
        self.score = rules.get_score(self.board)
        self.stats.revert_move(entry.move)

        if self.status == GameStatus.FINISHED:
            self.status = GameStatus.PLAYING
            self.stats.game_end_time = None

        # Recomputed for the restored player, the cache is not restored.
        self._refresh_legal_moves()

        self._emit(GameEvent.MOVE_UNDONE)
        return True

    def redo_move(self) -> bool:
        if not self.can_redo or self.ai_thinking:
            return False

        move = self.redo_stack[-1]
        if move.player != self.current_player:
            return False

        if not self._play(move.position, clear_redo=False).success:
            return False

        self.redo_stack.pop()
        return True

    def _refresh_legal_moves(self) -> None:
        self.legal_moves = rules.legal_moves(self.board, self.current_player)
        self.must_pass = not self.legal_moves and not rules.is_game_over(self.board)

    def calculate_valid_moves(self, player: int) -> list[Position]:
        if player == self.current_player:
            self._refresh_legal_moves()
            return list(self.legal_moves)
        return rules.legal_moves(self.board, player)

    def set_board_state(self, board: Board, current_player: Optional[int] = None) -> bool:
        """
        Replace the position being played, mainly for tests and puzzles.
        History is cleared since it no longer leads to this board.
        Rejected while the AI is thinking.
        """
        if self.ai_thinking:
            return False

        self.board = board.copy()
        if current_player is not None:
            self.current_player = current_player
        self.history = []
        self.redo_stack = []
        self.score = rules.get_score(self.board)
        self._refresh_legal_moves()

        if self.status == GameStatus.PLAYING and rules.is_game_over(self.board):
            self.finish_game()

        return True

    # --- queries ---

    def is_game_over(self) -> bool:
        return rules.is_game_over(self.board)

    def get_winner(self) -> Optional[int]:
        return rules.get_winner(self.board)

    def moves(self) -> list[MoveRecord]:
        return [entry.move for entry in self.history]

    def replay(self) -> Reconstruction:
        return reconstruct_game_from_moves(
            ReplayMove(move.position, move.player) for move in self.moves()
        )

    def to_stored_game(self) -> StoredGame:
        return StoredGame(moves=[move.to_stored() for move in self.moves()])

    # --- AI ---

    def set_ai_thinking(self, thinking: bool) -> None:
        if thinking == self.ai_thinking:
            return

        self.ai_thinking = thinking

        if thinking:
            self._emit(GameEvent.AI_THINKING_STARTED)
        else:
            self._emit(GameEvent.AI_THINKING_STOPPED)

    async def make_ai_move(self) -> bool:
        """
        Waits `ai_move_delay` milliseconds, then plays the move picked for the
        configured difficulty. Moves, undo and board changes are rejected
        while this runs.
        Returns False if no move was made, including when cancelled.
        """
        if self.status != GameStatus.PLAYING or self.ai_thinking:
            return False

        if not self.legal_moves:
            return False

        player = self.current_player
        self.set_ai_thinking(True)
        delay = asyncio.create_task(asyncio.sleep(self.settings.ai_move_delay / 1000))
        self._ai_task = delay

        try:
            await delay

            if self.status != GameStatus.PLAYING or not self.legal_moves:
                return False

            if self.current_player != player:
                logger.info("Turn changed while the AI was thinking")
                return False

            position = select_move(
                self.legal_moves,
                self.board,
                self.current_player,
                self.settings.difficulty,
                self.rng,
            )
            return self._play(position).success

        except asyncio.CancelledError:
            task = asyncio.current_task()
            if task is not None and task.cancelling():
                raise

            logger.info("AI move cancelled")
            return False

        finally:
            # A reset may already have replaced the pending task.
            if self._ai_task is delay:
                self._ai_task = None
                self.set_ai_thinking(False)

    def cancel_ai_move(self) -> bool:
        if self._ai_task is None:
            return False

        self._ai_task.cancel()
        self._ai_task = None
        self.set_ai_thinking(False)
        return True
