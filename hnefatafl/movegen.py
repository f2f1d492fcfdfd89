from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Sequence, Tuple

from .core.board import extract_edge_squares, in_bounds, iter_pieces, square_at
from .core.rules import get_captures
from .core.state import DIRECTIONS, Coordinate, DefenderFingerprint, Move, Player, Position
from .core.validator import owns_piece, sort_coordinates, validate_move


@dataclass(frozen=True)
class PossibleMove:
    to: Coordinate
    captures: Tuple[Coordinate, ...]


def generate_possible_moves(
    position: Position,
    from_: Coordinate,
    player: Player,
    edge_squares: Optional[FrozenSet[Coordinate]] = None,
) -> List[PossibleMove]:
    """Destinations reachable by the piece on ``from_`` with the captures each would make.

    Repetition is not checked here; see ``enumerate_legal_moves``.
    """
    if not in_bounds(position, from_) or not owns_piece(position, player, from_):
        return []
    piece = square_at(position, from_).occupant
    if edge_squares is None:
        edge_squares = extract_edge_squares(position)

    moves: List[PossibleMove] = []
    for dx, dy in DIRECTIONS:
        to = from_.offset(dx, dy)
        while in_bounds(position, to):
            square = square_at(position, to)
            if square.occupant is not None:
                break
            # Non-king pieces pass over restricted squares without stopping.
            if square.is_restricted and not piece.is_king:
                to = to.offset(dx, dy)
                continue
            captures = get_captures(position, Move(from_, to), player, edge_squares)
            moves.append(PossibleMove(to, sort_coordinates(captures)))
            to = to.offset(dx, dy)
    return moves


def enumerate_legal_moves(
    position: Position,
    player: Player,
    edge_squares: Optional[FrozenSet[Coordinate]] = None,
    defender_positions: Sequence[DefenderFingerprint] = (),
) -> List[Move]:
    if edge_squares is None:
        edge_squares = extract_edge_squares(position)
    legal: List[Move] = []
    for coord, _ in iter_pieces(position, player):
        for candidate in generate_possible_moves(position, coord, player, edge_squares):
            move = Move(coord, candidate.to, candidate.captures)
            result = validate_move(position, player, move, edge_squares, defender_positions)
            if result.is_valid:
                legal.append(move)
    return legal
