import logging
import typer
from pathlib import Path
from typing import Annotated, Optional

from infinity_othello.othello.replay import Reconstruction, Replay, ReplayMove
from infinity_othello.othello.rules import get_score
from infinity_othello.storage.models import StoredGame

app = typer.Typer(pretty_exceptions_enable=False)


def load_moves(moves: Optional[str], file: Optional[Path]) -> list[ReplayMove]:
    try:
        if file is not None:
            if file.suffix == ".json":
                return StoredGame.model_validate_json(file.read_text()).to_replay_moves()
            return Replay.from_file(file).moves

        if moves is not None:
            return Replay.from_string(moves).moves

    # Also covers pydantic.ValidationError.
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e

    raise typer.BadParameter("Pass a move string or a file with -f")


def show(moves: list[ReplayMove], reconstruction: Reconstruction) -> None:
    for step, snapshot in enumerate(reconstruction.snapshots):
        if step == 0:
            print("Start")
        else:
            position, _ = moves[step - 1]
            marker = " (invalid, skipped)" if step - 1 in reconstruction.invalid_steps else ""
            print(f"Move {step}: {position.to_field()}{marker}")

        snapshot.show()

    score = get_score(reconstruction.final_board())
    print(f"Final score: black {score.black} - {score.white} white")


@app.command()
def main(
    moves: Annotated[Optional[str], typer.Argument()] = None,
    file: Annotated[Optional[Path], typer.Option("-f")] = None,
    verbose: Annotated[bool, typer.Option("-v", "--verbose")] = False,
) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)

    replay_moves = load_moves(moves, file)
    reconstruction = Replay(replay_moves).reconstruct()
    show(replay_moves, reconstruction)

    if not reconstruction.is_valid():
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
