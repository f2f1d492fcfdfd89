from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Dict, Iterable, List, Sequence

import numpy as np

from hnefatafl.core import Coordinate, Move

# Glyph relabelling used when attackers and defenders trade places.
SIDE_SWAP = {"A": "D", "a": "d", "D": "A", "d": "a"}


class Transform(Enum):
    IDENTITY = auto()
    ROT90 = auto()
    ROT180 = auto()
    ROT270 = auto()
    FLIP_H = auto()
    FLIP_V = auto()
    FLIP_MAIN_DIAG = auto()
    FLIP_ANTI_DIAG = auto()


@dataclass(frozen=True)
class SymmetrySpec:
    name: str
    transform: Transform
    position_fn: Callable[[int, int, int], tuple]


# Each function maps (x, y) on a board whose last index is ``n``.
def _identity(x: int, y: int, n: int):
    return x, y


def _rot90(x: int, y: int, n: int):
    return n - y, x


def _rot180(x: int, y: int, n: int):
    return n - x, n - y


def _rot270(x: int, y: int, n: int):
    return y, n - x


def _flip_h(x: int, y: int, n: int):
    return n - x, y


def _flip_v(x: int, y: int, n: int):
    return x, n - y


def _flip_main_diag(x: int, y: int, n: int):
    return y, x


def _flip_anti_diag(x: int, y: int, n: int):
    return n - y, n - x


_SPECS: Dict[Transform, SymmetrySpec] = {
    Transform.IDENTITY: SymmetrySpec("identity", Transform.IDENTITY, _identity),
    Transform.ROT90: SymmetrySpec("rot90", Transform.ROT90, _rot90),
    Transform.ROT180: SymmetrySpec("rot180", Transform.ROT180, _rot180),
    Transform.ROT270: SymmetrySpec("rot270", Transform.ROT270, _rot270),
    Transform.FLIP_H: SymmetrySpec("flip_h", Transform.FLIP_H, _flip_h),
    Transform.FLIP_V: SymmetrySpec("flip_v", Transform.FLIP_V, _flip_v),
    Transform.FLIP_MAIN_DIAG: SymmetrySpec("flip_main_diag", Transform.FLIP_MAIN_DIAG, _flip_main_diag),
    Transform.FLIP_ANTI_DIAG: SymmetrySpec("flip_anti_diag", Transform.FLIP_ANTI_DIAG, _flip_anti_diag),
}


def get_spec(transform: Transform) -> SymmetrySpec:
    return _SPECS[transform]


def all_transforms() -> Iterable[Transform]:
    return list(_SPECS.keys())


def transform_coordinate(transform: Transform, coord: Coordinate, size: int) -> Coordinate:
    x, y = get_spec(transform).position_fn(coord.x, coord.y, size - 1)
    return Coordinate(x, y)


def transform_move(transform: Transform, move: Move, size: int) -> Move:
    return Move(
        transform_coordinate(transform, move.from_, size),
        transform_coordinate(transform, move.to, size),
        tuple(transform_coordinate(transform, c, size) for c in move.captures),
    )


def _layout_grid(layout: Sequence[str]) -> np.ndarray:
    return np.array([list(row) for row in layout], dtype="<U1")


def transform_layout(layout: Sequence[str], transform: Transform) -> List[str]:
    grid = _layout_grid(layout)
    size = grid.shape[0]
    result = np.empty_like(grid)
    for (y, x), glyph in np.ndenumerate(grid):
        moved = transform_coordinate(transform, Coordinate(x, y), size)
        result[moved.y, moved.x] = glyph
    return ["".join(row) for row in result]


def swap_sides_layout(layout: Sequence[str]) -> List[str]:
    """Relabel attackers as defenders and vice versa.

    Only meaningful for layouts without a king, the king rules being one-sided.
    """
    grid = _layout_grid(layout)
    if np.isin(grid, ["K", "k"]).any():
        raise ValueError("Cannot swap sides on a layout containing the king.")
    swapped = np.vectorize(lambda glyph: SIDE_SWAP.get(glyph, glyph))(grid)
    return ["".join(row) for row in swapped]
