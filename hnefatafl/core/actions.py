from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .state import DIRECTIONS, Coordinate, Move

STANDARD_SIZE = 11


def action_vector_size(size: int = STANDARD_SIZE) -> int:
    return size * size * len(DIRECTIONS) * (size - 1)


@dataclass(frozen=True)
class ActionVector:
    """A slide encoded as origin square, direction index and distance."""

    origin: Tuple[int, int]
    direction_index: int
    distance: int
    size: int = STANDARD_SIZE

    def to_move(self) -> Move:
        dx, dy = DIRECTIONS[self.direction_index]
        x, y = self.origin
        return Move(Coordinate(x, y), Coordinate(x + dx * self.distance, y + dy * self.distance))

    @staticmethod
    def from_move(move: Move, size: int = STANDARD_SIZE) -> "ActionVector":
        dx = move.to.x - move.from_.x
        dy = move.to.y - move.from_.y
        if dx != 0 and dy != 0:
            raise ValueError("Move is not orthogonal.")
        if dx == 0 and dy == 0:
            raise ValueError("Move has zero length.")
        if dx != 0:
            direction = (1, 0) if dx > 0 else (-1, 0)
            distance = abs(dx)
        else:
            direction = (0, 1) if dy > 0 else (0, -1)
            distance = abs(dy)
        if distance > size - 1:
            raise ValueError("Move distance out of range.")
        return ActionVector((move.from_.x, move.from_.y), DIRECTIONS.index(direction), distance, size)

    def to_index(self) -> int:
        x, y = self.origin
        base = y * self.size + x
        base = base * len(DIRECTIONS) + self.direction_index
        return base * (self.size - 1) + (self.distance - 1)

    @staticmethod
    def from_index(index: int, size: int = STANDARD_SIZE) -> "ActionVector":
        if not 0 <= index < action_vector_size(size):
            raise ValueError("Action index out of range.")
        max_distance = size - 1
        distance = (index % max_distance) + 1
        index //= max_distance
        direction_index = index % len(DIRECTIONS)
        index //= len(DIRECTIONS)
        y, x = divmod(index, size)
        return ActionVector((x, y), direction_index, distance, size)


def encode_action(move: Move, size: int = STANDARD_SIZE) -> int:
    return ActionVector.from_move(move, size).to_index()


def decode_action(index: int, size: int = STANDARD_SIZE) -> Move:
    return ActionVector.from_index(index, size).to_move()
