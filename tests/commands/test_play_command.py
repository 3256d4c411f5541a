import asyncio
import pytest
from typer.testing import CliRunner

from infinity_othello.ai import Difficulty
from infinity_othello.commands.play import app, ask_move
from infinity_othello.othello.board import BLACK, WHITE, Board
from infinity_othello.othello.position import Position
from infinity_othello.session import GameSession, GameSettings

runner = CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in [
        "OTHELLO_AI_MOVE_DELAY",
        "OTHELLO_DIFFICULTY",
        "OTHELLO_GAME_MODE",
        "OTHELLO_TIME_LIMIT",
    ]:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def session() -> GameSession:
    session = GameSession(GameSettings(difficulty=Difficulty.MEDIUM, ai_move_delay=0))
    session.initialize_game()
    return session


def test_play_command() -> None:
    result = runner.invoke(app, ["--delay", "0"], input="a1\nzz\nd3\nundo\nquit\n")

    assert result.exit_code == 0
    assert "Move rejected: not_legal" in result.output
    assert 'Invalid field "zz"' in result.output
    assert "White is thinking..." in result.output


def test_play_command_pass_with_moves() -> None:
    result = runner.invoke(app, ["--delay", "0"], input="pass\nquit\n")

    assert result.exit_code == 0
    assert "You can only pass when you have no moves." in result.output


def test_ask_move_quit(session: GameSession, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("builtins.input", lambda _: "quit")

    assert not ask_move(session)


def test_ask_move_plays_field(
    session: GameSession, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr("builtins.input", lambda _: "d3")

    assert ask_move(session)
    assert session.history[-1].move.position == Position(3, 2)
    assert session.current_player == WHITE


def test_ask_move_undo_takes_back_ai_reply(
    session: GameSession, monkeypatch: pytest.MonkeyPatch
) -> None:
    session.make_move(3, 2)
    assert asyncio.run(session.make_ai_move())
    assert session.current_player == BLACK

    monkeypatch.setattr("builtins.input", lambda _: "undo")

    assert ask_move(session)
    assert session.history == []
    assert session.current_player == BLACK
    assert session.board == Board.start()


def test_ask_move_rejected(session: GameSession, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("builtins.input", lambda _: "a1")

    assert ask_move(session)
    assert session.history == []
    assert session.current_player == BLACK
