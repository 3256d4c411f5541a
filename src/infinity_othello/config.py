import os
from dotenv import load_dotenv
from typing import Optional

load_dotenv()


def get_ai_move_delay() -> int:
    # Milliseconds of simulated thinking before the AI plays.
    return int(os.getenv("OTHELLO_AI_MOVE_DELAY", "1000"))


def get_difficulty() -> str:
    return os.getenv("OTHELLO_DIFFICULTY", "medium")


def get_game_mode() -> str:
    return os.getenv("OTHELLO_GAME_MODE", "single")


def get_time_limit() -> Optional[int]:
    value = os.getenv("OTHELLO_TIME_LIMIT", "")
    if value == "":
        return None
    return int(value)
