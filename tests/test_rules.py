import pytest

from hnefatafl.core import (
    Coordinate,
    Move,
    Player,
    Square,
    build_position,
    get_captures,
    is_hostile_to,
    is_king_captured,
    is_king_escaped,
)
from hnefatafl.core.state import ATTACKER_PIECE, DEFENDER_PIECE, KING_PIECE
from hnefatafl.features import all_transforms, swap_sides_layout, transform_coordinate, transform_layout, transform_move


def c(x: int, y: int) -> Coordinate:
    return Coordinate(x, y)


def captures_for(layout, from_, to, side):
    return get_captures(build_position(layout), Move(c(*from_), c(*to)), side)


SHIELDWALL = [
    "R     R",
    "       ",
    "A      ",
    "DA K   ",
    "D      ",
    "A      ",
    "RA    R",
]

SHIELDWALL_CORNER = [
    "R     R",
    "       ",
    "A      ",
    "DA K   ",
    "DA     ",
    "D      ",
    "RA    R",
]

KING_SURROUNDED = [
    "R         R",
    "           ",
    "           ",
    "           ",
    "     A     ",
    "   A KA    ",
    "     A     ",
    "           ",
    "           ",
    "           ",
    "R         R",
]

SANDWICH = [
    "R     R",
    "     k ",
    "  D    ",
    "  A    ",
    "    D  ",
    "       ",
    "R     R",
]


# ---------------------------------------------------------------------------
# Hostility
# ---------------------------------------------------------------------------


def test_empty_restricted_square_is_hostile_to_both_sides() -> None:
    corner = Square(is_restricted=True)
    assert is_hostile_to(corner, Player.ATTACKER, None)
    assert is_hostile_to(corner, Player.DEFENDER, None)


def test_empty_throne_is_hostile_to_both_sides() -> None:
    throne = Square(is_throne=True)
    assert throne.is_restricted
    assert is_hostile_to(throne, Player.ATTACKER, None)
    assert is_hostile_to(throne, Player.DEFENDER, None)


def test_occupied_throne_only_threatens_attackers() -> None:
    throne = Square(KING_PIECE, is_throne=True)
    assert is_hostile_to(throne, Player.ATTACKER, KING_PIECE)
    assert not is_hostile_to(throne, Player.DEFENDER, KING_PIECE)


def test_plain_squares_are_hostile_only_through_enemies() -> None:
    plain = Square()
    assert not is_hostile_to(plain, Player.ATTACKER, None)
    assert is_hostile_to(plain, Player.ATTACKER, DEFENDER_PIECE)
    assert is_hostile_to(plain, Player.ATTACKER, KING_PIECE)
    assert not is_hostile_to(plain, Player.ATTACKER, ATTACKER_PIECE)
    assert is_hostile_to(plain, Player.DEFENDER, ATTACKER_PIECE)


# ---------------------------------------------------------------------------
# Sandwich captures
# ---------------------------------------------------------------------------


def test_defender_sandwiches_attacker() -> None:
    assert captures_for(SANDWICH, (4, 4), (2, 4), Player.DEFENDER) == {c(2, 3)}


def test_no_capture_without_anvil() -> None:
    layout = list(SANDWICH)
    layout[2] = "       "
    assert captures_for(layout, (4, 4), (2, 4), Player.DEFENDER) == frozenset()


def test_restricted_corner_acts_as_anvil() -> None:
    layout = [
        "RA    R",
        "       ",
        "       ",
        "  D    ",
        "       ",
        "   k   ",
        "R     R",
    ]
    assert captures_for(layout, (2, 3), (2, 0), Player.DEFENDER) == {c(1, 0)}


def test_empty_throne_acts_as_anvil_against_defenders() -> None:
    layout = [
        "R  A  R",
        "       ",
        "   D   ",
        "   T   ",
        "       ",
        "     k ",
        "R     R",
    ]
    assert captures_for(layout, (3, 0), (3, 1), Player.ATTACKER) == {c(3, 2)}


def test_occupied_throne_is_not_hostile_to_defenders() -> None:
    layout = ["R   R", "A    ", " DK  ", "     ", "R   R"]
    assert captures_for(layout, (0, 1), (0, 2), Player.ATTACKER) == frozenset()


def test_occupied_throne_is_hostile_to_attackers() -> None:
    layout = ["R   R", "D    ", " AK  ", "     ", "R   R"]
    assert captures_for(layout, (0, 1), (0, 2), Player.DEFENDER) == {c(1, 2)}


def test_king_participates_in_captures() -> None:
    layout = [
        "R     R",
        "       ",
        "  k    ",
        "  A    ",
        "    D  ",
        "       ",
        "R     R",
    ]
    assert captures_for(layout, (4, 4), (2, 4), Player.DEFENDER) == {c(2, 3)}


def test_moving_into_a_sandwich_is_safe() -> None:
    layout = [
        "R     R",
        "       ",
        "  D    ",
        "     A ",
        "  D    ",
        "       ",
        "R   k R",
    ]
    assert captures_for(layout, (5, 3), (2, 3), Player.ATTACKER) == frozenset()


# ---------------------------------------------------------------------------
# King capture
# ---------------------------------------------------------------------------


def test_king_captured_by_four_attackers() -> None:
    assert captures_for(KING_SURROUNDED, (3, 5), (4, 5), Player.ATTACKER) == {c(5, 5)}


def test_king_captured_by_three_attackers_against_throne() -> None:
    layout = list(KING_SURROUNDED)
    layout[4] = "     T     "
    layout[5] = "   A kA    "
    assert captures_for(layout, (3, 5), (4, 5), Player.ATTACKER) == {c(5, 5)}


def test_king_not_captured_by_three_attackers() -> None:
    layout = list(KING_SURROUNDED)
    layout[6] = "           "
    assert captures_for(layout, (3, 5), (4, 5), Player.ATTACKER) == frozenset()


def test_king_not_captured_by_two_attackers() -> None:
    layout = [
        "R     R",
        "       ",
        "       ",
        "A  k A ",
        "       ",
        "       ",
        "R     R",
    ]
    assert captures_for(layout, (0, 3), (2, 3), Player.ATTACKER) == frozenset()


def test_board_edge_protects_the_king() -> None:
    layout = [
        "R         R",
        "           ",
        "           ",
        "           ",
        "           ",
        "           ",
        "           ",
        "    A      ",
        "           ",
        "     A     ",
        "R    kA   R",
    ]
    assert captures_for(layout, (4, 7), (4, 10), Player.ATTACKER) == frozenset()


def test_defenders_cannot_capture_their_own_king() -> None:
    layout = [
        "R     R",
        "       ",
        "  D    ",
        "  k    ",
        "    D  ",
        "       ",
        "R     R",
    ]
    assert captures_for(layout, (4, 4), (2, 4), Player.DEFENDER) == frozenset()


# ---------------------------------------------------------------------------
# Edge enclosures
# ---------------------------------------------------------------------------


def test_edge_enclosure_captures_whole_run() -> None:
    assert captures_for(SHIELDWALL, (1, 6), (1, 4), Player.ATTACKER) == {c(0, 3), c(0, 4)}


def test_edge_enclosure_closed_by_restricted_corner() -> None:
    captured = captures_for(SHIELDWALL_CORNER, (1, 6), (1, 5), Player.ATTACKER)
    assert captured == {c(0, 3), c(0, 4), c(0, 5)}


def test_edge_enclosure_requires_every_inward_square() -> None:
    layout = list(SHIELDWALL)
    layout[3] = "D  K   "
    assert captures_for(layout, (1, 6), (1, 4), Player.ATTACKER) == frozenset()


def test_existing_enclosure_is_not_recaptured() -> None:
    layout = [
        "R     R",
        "       ",
        "A      ",
        "DA K   ",
        "DA     ",
        "A      ",
        "R    AR",
    ]
    assert captures_for(layout, (5, 6), (5, 5), Player.ATTACKER) == frozenset()


def test_sandwich_and_enclosure_do_not_double_count() -> None:
    layout = [
        "R     R",
        "       ",
        "A      ",
        "DA     ",
        "   A   ",
        "       ",
        "R  k  R",
    ]
    captured = captures_for(layout, (3, 4), (0, 4), Player.ATTACKER)
    assert captured == {c(0, 3)}


def test_king_on_the_edge_breaks_an_enclosure() -> None:
    layout = [
        "R     R",
        "       ",
        "A      ",
        "kA     ",
        "D  A   ",
        "A      ",
        "R     R",
    ]
    assert captures_for(layout, (3, 4), (1, 4), Player.ATTACKER) == frozenset()


# ---------------------------------------------------------------------------
# Outcome helpers
# ---------------------------------------------------------------------------


def test_king_escape_needs_non_throne_restricted_square() -> None:
    assert is_king_escaped(build_position(["k R", "   ", "R R"])) is False
    escaped = build_position(["R  ", "   ", "   "])
    escaped[0][0].occupant = KING_PIECE
    assert is_king_escaped(escaped)
    assert not is_king_escaped(build_position(["   ", " K ", "   "]))


def test_king_captured_when_absent() -> None:
    assert is_king_captured(build_position(["A  ", " D ", "   "]))
    assert not is_king_captured(build_position(["A  ", " k ", "   "]))


# ---------------------------------------------------------------------------
# Symmetry
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "layout, from_, to, side",
    [
        (SHIELDWALL, (1, 6), (1, 4), Player.ATTACKER),
        (SHIELDWALL_CORNER, (1, 6), (1, 5), Player.ATTACKER),
        (KING_SURROUNDED, (3, 5), (4, 5), Player.ATTACKER),
        (SANDWICH, (4, 4), (2, 4), Player.DEFENDER),
    ],
)
def test_captures_are_invariant_under_board_symmetries(layout, from_, to, side) -> None:
    size = len(layout)
    move = Move(c(*from_), c(*to))
    baseline = get_captures(build_position(layout), move, side)
    assert baseline

    for transform in all_transforms():
        moved_layout = transform_layout(layout, transform)
        moved_move = transform_move(transform, move, size)
        expected = {transform_coordinate(transform, coord, size) for coord in baseline}
        assert get_captures(build_position(moved_layout), moved_move, side) == expected, transform


@pytest.mark.parametrize(
    "layout, from_, to, side",
    [
        ([row.replace("K", " ") for row in SHIELDWALL], (1, 6), (1, 4), Player.ATTACKER),
        ([row.replace("k", " ") for row in SANDWICH], (4, 4), (2, 4), Player.DEFENDER),
    ],
)
def test_captures_are_symmetric_between_sides_without_king(layout, from_, to, side) -> None:
    move = Move(c(*from_), c(*to))
    baseline = get_captures(build_position(layout), move, side)
    swapped = get_captures(build_position(swap_sides_layout(layout)), move, side.opponent)

    assert baseline
    assert swapped == baseline


def test_swap_sides_rejects_layouts_with_king() -> None:
    with pytest.raises(ValueError):
        swap_sides_layout(SHIELDWALL)
