import pytest
from typing import Optional

from infinity_othello.othello.position import (
    Position,
    all_positions,
    fields_to_positions,
    positions_to_fields,
)


@pytest.mark.parametrize(
    ["position", "expected"],
    [
        pytest.param(Position(0, 0), "a1", id="a1"),
        pytest.param(Position(7, 0), "h1", id="h1"),
        pytest.param(Position(0, 7), "a8", id="a8"),
        pytest.param(Position(7, 7), "h8", id="h8"),
        pytest.param(Position(1, 2), "b3", id="b3"),
    ],
)
def test_to_field_ok(position: Position, expected: str) -> None:
    assert position.to_field() == expected


@pytest.mark.parametrize(
    ["position"],
    [
        pytest.param(Position(-1, 0), id="x-too-small"),
        pytest.param(Position(8, 0), id="x-too-big"),
        pytest.param(Position(0, 8), id="y-too-big"),
    ],
)
def test_to_field_error(position: Position) -> None:
    with pytest.raises(ValueError):
        position.to_field()


@pytest.mark.parametrize(
    ["field", "expected"],
    [
        pytest.param("a1", Position(0, 0), id="field-a1"),
        pytest.param("h1", Position(7, 0), id="field-h1"),
        pytest.param("a8", Position(0, 7), id="field-a8"),
        pytest.param("B3", Position(1, 2), id="field-B3"),
        pytest.param("--", None, id="field---"),
        pytest.param("ps", None, id="field-ps"),
        pytest.param("PA", None, id="field-PA"),
    ],
)
def test_from_field_ok(field: str, expected: Optional[Position]) -> None:
    assert Position.from_field(field) == expected


@pytest.mark.parametrize(
    ["field"],
    [
        pytest.param("", id="empty"),
        pytest.param("a", id="too-short"),
        pytest.param("aaa", id="too-long"),
        pytest.param("a9", id="invalid-row"),
        pytest.param("i8", id="invalid-column"),
    ],
)
def test_from_field_error(field: str) -> None:
    with pytest.raises(ValueError):
        Position.from_field(field)


def test_index_conversion() -> None:
    assert Position(3, 4).to_index() == 35
    assert Position.from_index(35) == Position(3, 4)

    with pytest.raises(ValueError):
        Position.from_index(64)


def test_is_corner() -> None:
    corners = [position for position in all_positions() if position.is_corner()]
    assert corners == [Position(0, 0), Position(7, 0), Position(0, 7), Position(7, 7)]


def test_all_positions_row_major() -> None:
    positions = all_positions()
    assert len(positions) == 64
    assert positions[:2] == [Position(0, 0), Position(1, 0)]
    assert positions[8] == Position(0, 1)


def test_fields_round_trip() -> None:
    positions = [Position(5, 4), Position(3, 5)]
    assert positions_to_fields(positions) == "f5 d6"
    assert fields_to_positions("f5 d6 --") == positions + [None]
