from hnefatafl.core import (
    STANDARD_BOARD,
    Coordinate,
    GameStatus,
    Move,
    Player,
    apply_move,
    attacker_reachable,
    build_position,
    capturable_defenders,
    defenders_have_fort,
    initialize_position,
    king_region,
    safe_squares,
    validate_move,
)

EDGE_FORT = [
    "R DkD R",
    "  DDD  ",
    "       ",
    "       ",
    "       ",
    "   A   ",
    "R     R",
]

OPEN_FORT = [
    "R DkD R",
    "  D D  ",
    "       ",
    "   D   ",
    "       ",
    "   A   ",
    "R     R",
]


def test_attacker_reach_stops_at_defender_wall() -> None:
    position = build_position(
        [
            "R   R",
            "DDDDD",
            "     ",
            "  A  ",
            "R   R",
        ]
    )
    reachable = attacker_reachable(position)

    assert Coordinate(2, 3) in reachable
    assert Coordinate(0, 2) in reachable
    assert Coordinate(2, 4) in reachable
    assert Coordinate(1, 0) not in reachable
    assert Coordinate(0, 4) not in reachable  # restricted


def test_attacker_reach_crosses_restricted_squares() -> None:
    position = build_position(
        [
            "DDR  ",
            "DD DD",
            "  A  ",
            "     ",
            "     ",
        ]
    )
    reachable = attacker_reachable(position)

    assert Coordinate(2, 0) not in reachable
    assert Coordinate(3, 0) in reachable


def test_lone_defender_in_reach_is_capturable() -> None:
    position = build_position(
        [
            "R   R",
            "     ",
            "  D  ",
            "  A  ",
            "R  kR",
        ]
    )
    reachable = attacker_reachable(position)
    assert Coordinate(2, 2) in capturable_defenders(position, reachable)


def test_edge_fort_is_detected() -> None:
    position = build_position(EDGE_FORT)
    reachable = attacker_reachable(position)
    capturable = capturable_defenders(position, reachable)
    safe = safe_squares(position, reachable, capturable)

    assert capturable == frozenset()
    assert Coordinate(3, 0) in king_region(position, safe)
    assert defenders_have_fort(position)


def test_fort_completed_by_defender_move_wins() -> None:
    position = initialize_position(OPEN_FORT)
    move = Move(Coordinate(3, 3), Coordinate(3, 1))

    assert not defenders_have_fort(position)
    assert defenders_have_fort(apply_move(position, move))

    result = validate_move(position, Player.DEFENDER, move)
    assert result.is_valid
    assert result.status == GameStatus.DEFENDER_WIN


def test_no_fort_without_attackers() -> None:
    layout = [row.replace("A", " ") for row in EDGE_FORT]
    assert not defenders_have_fort(build_position(layout))


def test_no_fort_without_king() -> None:
    layout = [row.replace("k", "D") for row in EDGE_FORT]
    assert not defenders_have_fort(build_position(layout))


def test_starting_position_is_not_a_fort() -> None:
    assert not defenders_have_fort(initialize_position(STANDARD_BOARD))


def test_lone_king_on_edge_is_not_a_fort() -> None:
    position = build_position(
        [
            "  k  ",
            "     ",
            "     ",
            "  A  ",
            "     ",
        ]
    )
    assert not defenders_have_fort(position)
