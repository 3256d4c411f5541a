from __future__ import annotations

from typing import Iterable, NamedTuple, Optional

ROWS = 8
COLS = 8

DIRECTIONS = [
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
]

CORNERS = [(0, 0), (0, 7), (7, 0), (7, 7)]

PASS_FIELDS = ["--", "ps", "pa"]


class Position(NamedTuple):
    """
    Square on the board. `x` is the column, `y` is the row, both in [0, 7].
    """

    x: int
    y: int

    def is_on_board(self) -> bool:
        return self.x in range(COLS) and self.y in range(ROWS)

    def is_corner(self) -> bool:
        return (self.x, self.y) in CORNERS

    def to_index(self) -> int:
        if not self.is_on_board():
            raise ValueError(f"Position {self} is not on the board")
        return self.y * COLS + self.x

    @classmethod
    def from_index(cls, index: int) -> Position:
        if index not in range(ROWS * COLS):
            raise ValueError
        return Position(index % COLS, index // COLS)

    def to_field(self) -> str:
        if not self.is_on_board():
            raise ValueError
        return "abcdefgh"[self.x] + "12345678"[self.y]

    @classmethod
    def from_field(cls, field: str) -> Optional[Position]:
        """
        Parse a field such as `c4`. Returns None for a pass marker.
        """
        if len(field) != 2:
            raise ValueError(f'Invalid move length "{len(field)}"')

        field = field.lower()

        if field in PASS_FIELDS:
            return None

        if not ("a" <= field[0] <= "h" and "1" <= field[1] <= "8"):
            raise ValueError(f'Invalid field "{field}"')

        x = ord(field[0]) - ord("a")
        y = ord(field[1]) - ord("1")
        return Position(x, y)


def all_positions() -> list[Position]:
    # Row-major, matches the scan order of legal move generation.
    return [Position(x, y) for y in range(ROWS) for x in range(COLS)]


def positions_to_fields(positions: Iterable[Position]) -> str:
    return " ".join(position.to_field() for position in positions)


def fields_to_positions(string: str) -> list[Optional[Position]]:
    return [Position.from_field(word) for word in string.split()]
