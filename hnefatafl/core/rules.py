from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, FrozenSet, List, Optional, Set, Tuple

from .board import find_king, in_bounds, square_at
from .state import (
    DIRECTIONS,
    Coordinate,
    Move,
    Piece,
    PieceKind,
    Player,
    Position,
    Square,
)

OccupantLookup = Callable[[Coordinate], Optional[Piece]]


def is_hostile_to(square: Square, side: Player, occupant: Optional[Piece]) -> bool:
    """Return True if ``square`` (holding ``occupant``) is hostile to ``side``.

    Every capture rule goes through this predicate. A restricted square is
    hostile to both sides, except the throne while the king sits on it, which
    only threatens attackers. Otherwise an enemy occupant is hostile.
    """
    if square.is_restricted:
        if square.is_throne and occupant is not None and occupant.is_king:
            return side is Player.ATTACKER
        return True
    if occupant is not None:
        return occupant.owner is not side
    return False


def occupant_before(position: Position) -> OccupantLookup:
    def lookup(coord: Coordinate) -> Optional[Piece]:
        return square_at(position, coord).occupant

    return lookup


def occupant_after(position: Position, move: Move) -> OccupantLookup:
    """Occupancy of ``position`` as if ``move`` had been played (captures not removed)."""
    moving = square_at(position, move.from_).occupant

    def lookup(coord: Coordinate) -> Optional[Piece]:
        if coord == move.from_:
            return None
        if coord == move.to:
            return moving
        return square_at(position, coord).occupant

    return lookup


def hostile_at(position: Position, coord: Coordinate, side: Player, occupant_of: OccupantLookup) -> bool:
    if not in_bounds(position, coord):
        return False
    return is_hostile_to(square_at(position, coord), side, occupant_of(coord))


def _opponent_kinds(side: Player) -> Tuple[PieceKind, ...]:
    if side is Player.ATTACKER:
        return (PieceKind.DEFENDER, PieceKind.KING)
    if side is Player.DEFENDER:
        return (PieceKind.ATTACKER,)
    raise ValueError(f"Unhandled player {side!r}")


# ---------------------------------------------------------------------------
# Standard (sandwich) captures
# ---------------------------------------------------------------------------


def king_can_be_captured(position: Position, at: Coordinate, occupant_of: OccupantLookup) -> bool:
    """The king falls only when all four neighbours are on the board and hostile to him.

    A neighbour counts when it is the throne, any restricted square, or holds
    an attacker. The board edge protects the king.
    """
    for neighbour in at.neighbours():
        if not in_bounds(position, neighbour):
            return False
        square = square_at(position, neighbour)
        occupant = occupant_of(neighbour)
        if square.is_throne or square.is_restricted:
            continue
        if occupant is not None and occupant.kind is PieceKind.ATTACKER:
            continue
        return False
    return True


def standard_captures(position: Position, move: Move, side: Player) -> Set[Coordinate]:
    occupant_of = occupant_after(position, move)
    opponent_kinds = _opponent_kinds(side)
    captures: Set[Coordinate] = set()

    for dx, dy in DIRECTIONS:
        mid = move.to.offset(dx, dy)
        beyond = move.to.offset(2 * dx, 2 * dy)
        if not in_bounds(position, mid) or not in_bounds(position, beyond):
            continue

        piece = occupant_of(mid)
        if piece is None or piece.kind not in opponent_kinds:
            continue

        if piece.is_king:
            if side is Player.ATTACKER and king_can_be_captured(position, mid, occupant_of):
                captures.add(mid)
        elif hostile_at(position, beyond, piece.owner, occupant_of):
            captures.add(mid)
    return captures


# ---------------------------------------------------------------------------
# Edge / shieldwall enclosures
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Edge:
    squares: Tuple[Coordinate, ...]
    inward: Tuple[int, int]


def board_edges(size: int) -> Tuple[Edge, ...]:
    last = size - 1
    return (
        Edge(tuple(Coordinate(0, i) for i in range(size)), (1, 0)),
        Edge(tuple(Coordinate(last, i) for i in range(size)), (-1, 0)),
        Edge(tuple(Coordinate(i, 0) for i in range(size)), (0, 1)),
        Edge(tuple(Coordinate(i, last) for i in range(size)), (0, -1)),
    )


def edge_runs(edge: Edge, belongs: Callable[[Coordinate], bool]) -> List[Tuple[int, int]]:
    """Return ``(start, end)`` index pairs of maximal runs of squares matching ``belongs``."""
    runs: List[Tuple[int, int]] = []
    i = 0
    length = len(edge.squares)
    while i < length:
        while i < length and not belongs(edge.squares[i]):
            i += 1
        if i >= length:
            break
        start = i
        while i < length and belongs(edge.squares[i]):
            i += 1
        runs.append((start, i - 1))
    return runs


def run_boundary(edge: Edge, start: int, end: int) -> List[Coordinate]:
    """Squares that must be hostile for the run ``edge.squares[start:end + 1]`` to be enclosed."""
    dx, dy = edge.inward
    boundary = [edge.squares[j].offset(dx, dy) for j in range(start, end + 1)]
    if start - 1 >= 0:
        boundary.append(edge.squares[start - 1])
    if end + 1 < len(edge.squares):
        boundary.append(edge.squares[end + 1])
    return boundary


def edge_enclosure_captures(position: Position, move: Move, side: Player) -> Set[Coordinate]:
    victim = side.opponent
    after = occupant_after(position, move)
    before = occupant_before(position)
    captures: Set[Coordinate] = set()

    def belongs(coord: Coordinate) -> bool:
        piece = after(coord)
        return piece is not None and piece.owner is victim and not piece.is_king

    for edge in board_edges(len(position)):
        for start, end in edge_runs(edge, belongs):
            boundary = run_boundary(edge, start, end)
            enclosed_after = all(hostile_at(position, c, victim, after) for c in boundary)
            if not enclosed_after:
                continue
            enclosed_before = all(hostile_at(position, c, victim, before) for c in boundary)
            if not enclosed_before:
                captures.update(edge.squares[start : end + 1])
    return captures


def get_captures(
    position: Position,
    move: Move,
    side: Player,
    edge_squares: Optional[FrozenSet[Coordinate]] = None,
) -> FrozenSet[Coordinate]:
    """Every square ``side`` captures by playing ``move`` on ``position``.

    Enclosures are found from the board edges themselves, so ``edge_squares``
    is optional and only accepted to match the validator signature.
    """
    captures = standard_captures(position, move, side)
    captures |= edge_enclosure_captures(position, move, side)
    return frozenset(captures)


# ---------------------------------------------------------------------------
# Outcome helpers
# ---------------------------------------------------------------------------


def is_king_captured(position: Position) -> bool:
    return find_king(position) is None


def is_king_escaped(position: Position) -> bool:
    king = find_king(position)
    if king is None:
        return False
    square = square_at(position, king)
    return square.is_restricted and not square.is_throne
