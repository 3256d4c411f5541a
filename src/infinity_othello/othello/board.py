from __future__ import annotations

from typing import Iterable

from infinity_othello.othello.position import COLS, ROWS, Position

BLACK = -1
WHITE = 1
EMPTY = 0

COLOR_NAMES = {BLACK: "black", WHITE: "white"}


def opponent(color: int) -> int:
    assert color in [BLACK, WHITE]
    return -color


class FrozenBoard(Exception):
    pass


class Board:
    """
    Board stores the 8x8 grid only, it knows nothing about whose turn it is
    or which moves are legal. Squares are stored row-major.

    A frozen board is a snapshot: it can be read and copied but never changed.
    """

    def __init__(self, squares: Iterable[int], *, frozen: bool = False) -> None:
        squares = list(squares)

        if len(squares) != ROWS * COLS:
            raise ValueError(f"Expected {ROWS * COLS} squares, got {len(squares)}")

        for square in squares:
            if square not in [BLACK, WHITE, EMPTY]:
                raise ValueError(f"Invalid square value {square}")

        self.__squares = squares
        self.__frozen = frozen

    @classmethod
    def empty(cls) -> Board:
        return Board([EMPTY] * ROWS * COLS)

    @classmethod
    def start(cls) -> Board:
        board = cls.empty()
        board.__squares[Position(3, 3).to_index()] = WHITE
        board.__squares[Position(4, 4).to_index()] = WHITE
        board.__squares[Position(4, 3).to_index()] = BLACK
        board.__squares[Position(3, 4).to_index()] = BLACK
        return board

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[int]]) -> Board:
        squares: list[int] = []
        row_count = 0

        for row in rows:
            row = list(row)
            if len(row) != COLS:
                raise ValueError(f"Expected {COLS} columns, got {len(row)}")
            squares += row
            row_count += 1

        if row_count != ROWS:
            raise ValueError(f"Expected {ROWS} rows, got {row_count}")

        return Board(squares)

    @classmethod
    def from_string(cls, string: str) -> Board:
        """
        Parse a board drawn as 8 lines of `X` (black), `O` (white) and `-`.
        Whitespace inside lines is ignored.
        """
        values = {"X": BLACK, "O": WHITE, "-": EMPTY, ".": EMPTY}

        rows: list[list[int]] = []
        for line in string.strip().splitlines():
            line = "".join(line.split())
            if not line:
                continue

            try:
                rows.append([values[char.upper()] for char in line])
            except KeyError as e:
                raise ValueError(f"Invalid square character {e}") from e

        return cls.from_rows(rows)

    def __repr__(self) -> str:
        return f"Board({self.to_problem()!r})"

    @property
    def frozen(self) -> bool:
        return self.__frozen

    def get_square(self, position: Position) -> int:
        return self.__squares[position.to_index()]

    def is_empty_square(self, position: Position) -> bool:
        return self.get_square(position) == EMPTY

    def place_disc(self, position: Position, color: int) -> None:
        assert color in [BLACK, WHITE]

        if self.__frozen:
            raise FrozenBoard

        self.__squares[position.to_index()] = color

    def copy(self) -> Board:
        return Board(self.__squares)

    def snapshot(self) -> Board:
        if self.__frozen:
            return self
        return Board(self.__squares, frozen=True)

    def rows(self) -> tuple[tuple[int, ...], ...]:
        return tuple(
            tuple(self.__squares[y * COLS : (y + 1) * COLS]) for y in range(ROWS)
        )

    def count(self, color: int) -> int:
        assert color in [BLACK, WHITE, EMPTY]
        return self.__squares.count(color)

    def count_discs(self) -> int:
        return ROWS * COLS - self.count(EMPTY)

    def count_empties(self) -> int:
        return self.count(EMPTY)

    def is_full(self) -> bool:
        return self.count(EMPTY) == 0

    def as_tuple(self) -> tuple[int, ...]:
        return tuple(self.__squares)

    def __hash__(self) -> int:
        return hash(self.as_tuple())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            raise TypeError(f"Cannot compare Board with {type(other)}")

        return self.as_tuple() == other.as_tuple()

    def to_problem(self) -> str:
        squares = ""
        for square in self.__squares:
            if square == BLACK:
                squares += "X"
            elif square == WHITE:
                squares += "O"
            else:
                squares += "-"
        return squares

    def format(self, highlight: Iterable[Position] = ()) -> str:
        highlighted = set(highlight)
        lines = ["+-a-b-c-d-e-f-g-h-+"]

        for y in range(ROWS):
            line = "{} ".format(y + 1)

            for x in range(COLS):
                position = Position(x, y)
                square = self.get_square(position)

                if square == BLACK:
                    line += "○ "
                elif square == WHITE:
                    line += "● "
                elif position in highlighted:
                    line += "· "
                else:
                    line += "  "
            lines.append(line + "|")

        lines.append("+-----------------+")
        return "\n".join(lines)

    def show(self, highlight: Iterable[Position] = ()) -> None:
        print(self.format(highlight))
