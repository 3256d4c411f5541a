import asyncio
import logging
import typer
from typing import Annotated, Optional

from infinity_othello.ai import Difficulty
from infinity_othello.othello.board import BLACK, COLOR_NAMES, WHITE
from infinity_othello.othello.position import Position
from infinity_othello.othello.rules import TIE
from infinity_othello.session import GameSession, GameSettings, GameStatus

app = typer.Typer()


def show(session: GameSession) -> None:
    session.board.show(session.legal_moves)
    print(f"Black {session.score.black} - {session.score.white} White")


def ask_move(session: GameSession) -> bool:
    """
    Handles one line of input. Returns False when the player wants to stop.
    """
    command = input(f"{COLOR_NAMES[session.current_player]} to move: ").strip()

    if command == "quit":
        return False

    if command == "undo":
        # Undo the AI reply as well so it is the human's turn again.
        session.undo_move()
        while session.history and session.current_player != BLACK:
            session.undo_move()
        return True

    if command == "pass":
        if not session.pass_move():
            print("You can only pass when you have no moves.")
        return True

    try:
        position = Position.from_field(command)
    except ValueError as e:
        print(e)
        return True

    if position is None:
        if not session.pass_move():
            print("You can only pass when you have no moves.")
        return True

    result = session.play(position)
    if not result.success:
        print(f"Move rejected: {result.reason.value if result.reason else ''}")
    return True


@app.command()
def main(
    difficulty: Annotated[Difficulty, typer.Option("-d")] = Difficulty.MEDIUM,
    delay: Annotated[Optional[int], typer.Option("--delay")] = None,
    verbose: Annotated[bool, typer.Option("-v", "--verbose")] = False,
) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    settings = GameSettings.from_env()
    session = GameSession(settings)

    changes: dict[str, object] = {"difficulty": difficulty}
    if delay is not None:
        changes["ai_move_delay"] = delay
    session.update_game_settings(**changes)

    session.initialize_game()

    while session.status == GameStatus.PLAYING:
        show(session)

        if session.current_player == WHITE:
            print("White is thinking...")
            asyncio.run(session.make_ai_move())
            continue

        if not ask_move(session):
            return

    show(session)

    winner = session.get_winner()
    if winner == TIE:
        print("Game over, it's a tie!")
    elif winner is not None:
        print(f"Game over, {COLOR_NAMES[winner]} wins!")


if __name__ == "__main__":
    app()
