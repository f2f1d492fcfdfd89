import pytest

from hnefatafl.core import Coordinate, Move, MoveFormatError
from hnefatafl.notation import (
    PASS,
    coord_from_string,
    coord_to_string,
    format_move,
    parse_move,
    parse_move_sequence,
    parse_move_strict,
)


def test_coordinate_corners() -> None:
    assert coord_from_string("A11") == Coordinate(0, 0)
    assert coord_from_string("K1") == Coordinate(10, 10)
    assert coord_from_string("a1") == Coordinate(0, 10)
    assert coord_to_string(Coordinate(3, 0)) == "D11"


@pytest.mark.parametrize("text", ["L1", "A12", "A0", "", "11A", "AA1"])
def test_invalid_coordinates(text: str) -> None:
    assert coord_from_string(text) is None


def test_coordinates_on_smaller_boards() -> None:
    assert coord_from_string("B1", size=7) == Coordinate(1, 6)
    assert coord_from_string("H1", size=7) is None
    assert coord_to_string(Coordinate(0, 3), size=7) == "A4"


def test_parse_simple_move() -> None:
    move = parse_move("D11-D9")
    assert move == Move(Coordinate(3, 0), Coordinate(3, 2))


def test_parse_move_with_captures_and_whitespace() -> None:
    move = parse_move(" e6 - e8 ( e7 f8 ) ")

    assert move is not None
    assert move.from_ == Coordinate(4, 5)
    assert move.to == Coordinate(4, 3)
    assert move.captures == (Coordinate(4, 4), Coordinate(5, 3))


def test_parse_move_with_adjacent_captures() -> None:
    move = parse_move("B1-B3(A4A3)", size=7)
    assert move.captures == (Coordinate(0, 3), Coordinate(0, 4))


@pytest.mark.parametrize("text", ["D11D9", "D11-", "D11-Z9", "D11-D9(Z1)", "hello", "D11-D9-D8"])
def test_invalid_moves_return_none(text: str) -> None:
    assert parse_move(text) is None


def test_parse_move_strict_raises() -> None:
    with pytest.raises(MoveFormatError, match="Invalid move format"):
        parse_move_strict("nonsense")
    assert parse_move_strict("A4-B4") == Move(Coordinate(0, 7), Coordinate(1, 7))


def test_format_move_round_trip() -> None:
    move = Move(Coordinate(1, 6), Coordinate(1, 4), (Coordinate(0, 3), Coordinate(0, 4)))
    text = format_move(move, size=7)

    assert text == "B1-B3(A4A3)"
    assert parse_move(text, size=7) == move


def test_parse_move_sequence_handles_passes_and_junk() -> None:
    parsed = parse_move_sequence("D11-D9, p, junk, ,E6-E8(E7)")

    assert parsed[0] == Move(Coordinate(3, 0), Coordinate(3, 2))
    assert parsed[1] == PASS
    assert parsed[2] == Move(Coordinate(4, 5), Coordinate(4, 3), (Coordinate(4, 4),))
    assert len(parsed) == 3
