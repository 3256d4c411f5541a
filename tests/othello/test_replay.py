import logging
import pytest
from pathlib import Path

from infinity_othello.othello.board import BLACK, WHITE, Board
from infinity_othello.othello.position import Position
from infinity_othello.othello.replay import (
    Replay,
    ReplayMove,
    reconstruct_game_from_moves,
)

OPENING = [
    ReplayMove(Position(5, 4), BLACK),
    ReplayMove(Position(3, 5), WHITE),
    ReplayMove(Position(2, 2), BLACK),
    ReplayMove(Position(3, 2), WHITE),
]


def test_reconstruct_length() -> None:
    reconstruction = reconstruct_game_from_moves(OPENING)

    assert len(reconstruction) == len(OPENING) + 1
    assert reconstruction.snapshots[0] == Board.start()
    assert reconstruction.is_valid()
    assert reconstruction.final_board().count_discs() == 8


def test_reconstruct_empty() -> None:
    reconstruction = reconstruct_game_from_moves([])
    assert reconstruction.snapshots == [Board.start()]


def test_reconstruct_is_idempotent() -> None:
    first = reconstruct_game_from_moves(OPENING)
    second = reconstruct_game_from_moves(OPENING)

    assert [board.rows() for board in first.snapshots] == [
        board.rows() for board in second.snapshots
    ]


def test_reconstruct_snapshots_are_frozen() -> None:
    reconstruction = reconstruct_game_from_moves(OPENING)

    assert all(snapshot.frozen for snapshot in reconstruction.snapshots)

    # Every snapshot differs from the next, nothing is shared.
    for before, after in zip(reconstruction.snapshots, reconstruction.snapshots[1:]):
        assert before != after


def test_reconstruct_invalid_step(caplog: pytest.LogCaptureFixture) -> None:
    moves = [
        ReplayMove(Position(0, 0), BLACK),
        ReplayMove(Position(2, 3), BLACK),
        ReplayMove(Position(2, 3), WHITE),
    ]

    with caplog.at_level(logging.WARNING):
        reconstruction = reconstruct_game_from_moves(moves)

    assert len(reconstruction) == 4
    assert reconstruction.invalid_steps == [0, 2]
    assert not reconstruction.is_valid()

    assert reconstruction.snapshots[1] == reconstruction.snapshots[0]
    assert reconstruction.snapshots[2].get_square(Position(3, 3)) == BLACK
    assert reconstruction.snapshots[3] == reconstruction.snapshots[2]

    assert len(caplog.records) == 2


def test_replay_from_string() -> None:
    replay = Replay.from_string("f5 d6 c3 d3")
    assert replay.moves == OPENING


def test_replay_from_string_with_metadata() -> None:
    replay = Replay.from_string(
        '[Black "alice"]\n[White "bob"]\n1. f5 d6 2. c3 d3\n'
    )

    assert replay.get_black_player() == "alice"
    assert replay.get_white_player() == "bob"
    assert replay.moves == OPENING


def test_replay_from_string_bad_metadata() -> None:
    with pytest.raises(ValueError):
        Replay.from_string("[Black alice]\nf5")


def test_replay_from_string_skips_pass_markers() -> None:
    replay = Replay.from_string("f5 -- d6")
    assert replay.positions() == [Position(5, 4), Position(3, 5)]


def test_replay_keeps_unplayable_move() -> None:
    replay = Replay.from_string("f5 a1")

    assert replay.moves[1] == ReplayMove(Position(0, 0), WHITE)
    assert replay.reconstruct().invalid_steps == [1]


def test_replay_from_file(tmp_path: Path) -> None:
    file = tmp_path / "game.txt"
    file.write_text("f5 d6 c3 d3\n")

    replay = Replay.from_file(file)
    assert replay.reconstruct().final_board() == reconstruct_game_from_moves(
        OPENING
    ).final_board()
