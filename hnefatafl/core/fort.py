"""King fort detection.

The defenders hold a fort when the king, together with an escort of
defenders that can never be captured, forms a region touching the board
edge that attackers cannot break into. Detection runs in three stages,
each a plain function so it can be inspected on its own:

1. ``attacker_reachable``: squares attackers could eventually occupy.
2. ``capturable_defenders``: defender/king squares an attacker could still
   capture given that reach.
3. ``king_region``: flood fill from the king through safe squares.
"""

from __future__ import annotations

from collections import deque
from typing import FrozenSet, Iterable, Set

from .board import find_king, in_bounds, is_perimeter, iter_pieces, square_at
from .rules import board_edges, edge_runs, is_hostile_to, run_boundary
from .state import Coordinate, Player, PieceKind, Position


def attacker_reachable(position: Position) -> FrozenSet[Coordinate]:
    """Squares attackers stand on or could move onto.

    Empty restricted squares are crossed during the search (attackers may
    pass through them) but are left out of the result since no attacker can
    stop there.
    """
    starts = [coord for coord, _ in iter_pieces(position, Player.ATTACKER)]
    seen: Set[Coordinate] = set(starts)
    queue = deque(starts)
    while queue:
        coord = queue.popleft()
        for neighbour in coord.neighbours():
            if neighbour in seen or not in_bounds(position, neighbour):
                continue
            occupant = square_at(position, neighbour).occupant
            if occupant is None or occupant.kind is PieceKind.ATTACKER:
                seen.add(neighbour)
                queue.append(neighbour)
    return frozenset(c for c in seen if not square_at(position, c).is_restricted)


def _threatened(position: Position, coord: Coordinate, reachable: FrozenSet[Coordinate]) -> bool:
    """Whether ``coord`` is, or could become, hostile to the defenders."""
    if not in_bounds(position, coord):
        return False
    square = square_at(position, coord)
    if is_hostile_to(square, Player.DEFENDER, square.occupant):
        return True
    return square.occupant is None and coord in reachable


def _king_threatened(position: Position, king: Coordinate, reachable: FrozenSet[Coordinate]) -> bool:
    for neighbour in king.neighbours():
        if not in_bounds(position, neighbour):
            return False
        square = square_at(position, neighbour)
        if square.is_throne or square.is_restricted:
            continue
        occupant = square.occupant
        if occupant is not None and occupant.kind is PieceKind.ATTACKER:
            continue
        if occupant is None and neighbour in reachable:
            continue
        return False
    return True


def _sandwich_threatened(position: Position, coord: Coordinate, reachable: FrozenSet[Coordinate]) -> bool:
    for dx, dy in ((1, 0), (0, 1)):
        first = coord.offset(-dx, -dy)
        second = coord.offset(dx, dy)
        if _threatened(position, first, reachable) and _threatened(position, second, reachable):
            return True
    return False


def _enclosure_threatened(position: Position, reachable: FrozenSet[Coordinate]) -> Set[Coordinate]:
    def belongs(coord: Coordinate) -> bool:
        piece = square_at(position, coord).occupant
        return piece is not None and piece.owner is Player.DEFENDER and not piece.is_king

    threatened: Set[Coordinate] = set()
    for edge in board_edges(len(position)):
        for start, end in edge_runs(edge, belongs):
            boundary = run_boundary(edge, start, end)
            if all(_threatened(position, c, reachable) for c in boundary):
                threatened.update(edge.squares[start : end + 1])
    return threatened


def capturable_defenders(position: Position, reachable: FrozenSet[Coordinate]) -> FrozenSet[Coordinate]:
    capturable = _enclosure_threatened(position, reachable)
    for coord, piece in iter_pieces(position, Player.DEFENDER):
        if coord in capturable:
            continue
        if piece.is_king:
            if _king_threatened(position, coord, reachable):
                capturable.add(coord)
        elif _sandwich_threatened(position, coord, reachable):
            capturable.add(coord)
    return frozenset(capturable)


def safe_squares(
    position: Position,
    reachable: FrozenSet[Coordinate],
    capturable: FrozenSet[Coordinate],
) -> FrozenSet[Coordinate]:
    safe: Set[Coordinate] = set()
    for y, row in enumerate(position):
        for x, square in enumerate(row):
            coord = Coordinate(x, y)
            occupant = square.occupant
            if occupant is None:
                if coord not in reachable:
                    safe.add(coord)
            elif occupant.owner is Player.DEFENDER and coord not in capturable:
                safe.add(coord)
    return frozenset(safe)


def flood_fill(position: Position, starts: Iterable[Coordinate], passable: FrozenSet[Coordinate]) -> FrozenSet[Coordinate]:
    region = {c for c in starts if c in passable}
    queue = deque(region)
    while queue:
        coord = queue.popleft()
        for neighbour in coord.neighbours():
            if neighbour in passable and neighbour not in region:
                region.add(neighbour)
                queue.append(neighbour)
    return frozenset(region)


def king_region(position: Position, safe: FrozenSet[Coordinate]) -> FrozenSet[Coordinate]:
    king = find_king(position)
    if king is None:
        return frozenset()
    return flood_fill(position, [king], safe)


def defenders_have_fort(position: Position) -> bool:
    king = find_king(position)
    if king is None:
        return False
    if next(iter_pieces(position, Player.ATTACKER), None) is None:
        return False

    reachable = attacker_reachable(position)
    capturable = capturable_defenders(position, reachable)
    safe = safe_squares(position, reachable, capturable)
    if king not in safe:
        return False
    for neighbour in king.neighbours():
        if in_bounds(position, neighbour) and neighbour not in safe:
            return False

    return any(is_perimeter(position, c) for c in king_region(position, safe))
