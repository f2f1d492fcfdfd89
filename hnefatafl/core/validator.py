from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterable, Optional, Sequence, Set, Tuple

from .board import (
    apply_move,
    extract_defender_fingerprint,
    extract_edge_squares,
    in_bounds,
    iter_pieces,
    square_at,
)
from .fort import defenders_have_fort
from .rules import get_captures, is_king_captured, is_king_escaped
from .state import (
    Coordinate,
    DefenderFingerprint,
    GameStatus,
    Move,
    Player,
    Position,
)

logger = logging.getLogger(__name__)


class InvalidReason(Enum):
    GAME_OVER = "Game is not in progress"
    INVALID_FORMAT = "Invalid move format"
    OUT_OF_BOUNDS = "Coordinates are outside the board"
    NO_PIECE_AT_SOURCE = "No piece at source"
    NOT_YOUR_PIECE = "Not your piece"
    DESTINATION_OCCUPIED = "Destination is occupied"
    PATH_BLOCKED = "Path is blocked"
    RESTRICTED_DESTINATION = "Cannot move to restricted square"
    INVALID_CAPTURES = "Invalid captures"
    REPEATED_POSITION = "Move would repeat defender board position"


@dataclass(frozen=True)
class MoveValidationResult:
    is_valid: bool
    reason: Optional[InvalidReason] = None
    message: str = ""
    expected_captures: Tuple[Coordinate, ...] = field(default_factory=tuple)
    status: GameStatus = GameStatus.IN_PROGRESS

    @staticmethod
    def invalid(
        reason: InvalidReason,
        expected_captures: Iterable[Coordinate] = (),
        message: Optional[str] = None,
    ) -> "MoveValidationResult":
        return MoveValidationResult(
            is_valid=False,
            reason=reason,
            message=message or reason.value,
            expected_captures=sort_coordinates(expected_captures),
            status=GameStatus.IN_PROGRESS,
        )


def sort_coordinates(coords: Iterable[Coordinate]) -> Tuple[Coordinate, ...]:
    return tuple(sorted(set(coords), key=lambda c: (c.y, c.x)))


def is_path_clear(position: Position, from_: Coordinate, to: Coordinate) -> bool:
    """True for a non-empty rank/file move whose intermediate squares are all empty."""
    if from_.x != to.x and from_.y != to.y:
        return False
    if from_ == to:
        return False
    dx = (to.x > from_.x) - (to.x < from_.x)
    dy = (to.y > from_.y) - (to.y < from_.y)
    current = from_.offset(dx, dy)
    while current != to:
        if square_at(position, current).occupant is not None:
            return False
        current = current.offset(dx, dy)
    return True


def owns_piece(position: Position, player: Player, at: Coordinate) -> bool:
    piece = square_at(position, at).occupant
    return piece is not None and piece.owner is player


def defenders_can_reach_edge(position: Position, edge_squares: FrozenSet[Coordinate]) -> bool:
    """Flood fill from every defender piece through empty squares and friendly pieces."""
    starts = [coord for coord, _ in iter_pieces(position, Player.DEFENDER)]
    seen: Set[Coordinate] = set(starts)
    queue = deque(starts)
    while queue:
        coord = queue.popleft()
        if coord in edge_squares:
            return True
        for neighbour in coord.neighbours():
            if neighbour in seen or not in_bounds(position, neighbour):
                continue
            occupant = square_at(position, neighbour).occupant
            if occupant is None or occupant.owner is Player.DEFENDER:
                seen.add(neighbour)
                queue.append(neighbour)
    return False


def get_game_status_after_move(
    position: Position,
    player: Player,
    edge_squares: Optional[FrozenSet[Coordinate]] = None,
) -> GameStatus:
    """Classify ``position``, the board after ``player`` moved and captures were removed."""
    if is_king_captured(position):
        return GameStatus.ATTACKER_WIN
    if is_king_escaped(position) or defenders_have_fort(position):
        return GameStatus.DEFENDER_WIN
    if player is Player.ATTACKER:
        edges = edge_squares if edge_squares is not None else extract_edge_squares(position)
        if not defenders_can_reach_edge(position, edges):
            return GameStatus.ATTACKER_WIN
    return GameStatus.IN_PROGRESS


def validate_move(
    position: Position,
    player: Player,
    move: Move,
    edge_squares: Optional[FrozenSet[Coordinate]] = None,
    defender_positions: Sequence[DefenderFingerprint] = (),
) -> MoveValidationResult:
    """Check ``move`` for ``player`` against ``position`` without modifying it."""
    if not in_bounds(position, move.from_) or not in_bounds(position, move.to):
        return MoveValidationResult.invalid(InvalidReason.OUT_OF_BOUNDS)

    from_square = square_at(position, move.from_)
    to_square = square_at(position, move.to)
    piece = from_square.occupant

    if piece is None:
        return MoveValidationResult.invalid(InvalidReason.NO_PIECE_AT_SOURCE)
    if not owns_piece(position, player, move.from_):
        return MoveValidationResult.invalid(InvalidReason.NOT_YOUR_PIECE)
    if to_square.occupant is not None:
        return MoveValidationResult.invalid(InvalidReason.DESTINATION_OCCUPIED)
    if not is_path_clear(position, move.from_, move.to):
        return MoveValidationResult.invalid(InvalidReason.PATH_BLOCKED)
    if not piece.is_king and to_square.is_restricted:
        return MoveValidationResult.invalid(InvalidReason.RESTRICTED_DESTINATION)

    if edge_squares is None:
        edge_squares = extract_edge_squares(position)
    expected = get_captures(position, move, player, edge_squares)
    expected_sorted = sort_coordinates(expected)

    # Declaring captures is optional, but a declared list must be exact.
    if move.captures and set(move.captures) != expected:
        named = ", ".join(f"({c.x}, {c.y})" for c in expected_sorted) or "none"
        return MoveValidationResult.invalid(
            InvalidReason.INVALID_CAPTURES,
            expected_sorted,
            message=f"Invalid captures, expected: {named}",
        )

    if player is Player.DEFENDER:
        fingerprint = extract_defender_fingerprint(position, move)
        if any(fingerprint == previous for previous in defender_positions):
            return MoveValidationResult.invalid(InvalidReason.REPEATED_POSITION, expected_sorted)

    preview = apply_move(position, move.with_captures(expected_sorted), apply_captures=True)
    status = get_game_status_after_move(preview, player, edge_squares)
    logger.debug("Validated %s for %s: captures=%s status=%s", move, player.value, expected_sorted, status.value)
    return MoveValidationResult(
        is_valid=True,
        expected_captures=expected_sorted,
        status=status,
    )
