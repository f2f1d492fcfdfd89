"""Board construction and position helpers.

A layout is a list of equal-length strings, one per row, top row first.
Default glyphs:

    A / a   attacker
    D / d   defender
    K       king standing on the throne
    k       king off the throne
    T       empty throne
    R       restricted square (corners, escape points)
    ' ' / . empty square
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from .errors import InvalidKingCountError, MalformedLayoutError
from .state import (
    ATTACKER_PIECE,
    DEFENDER_PIECE,
    KING_PIECE,
    Coordinate,
    DefenderFingerprint,
    EdgeSquares,
    Move,
    Piece,
    PieceKind,
    Player,
    Position,
    Square,
)

STANDARD_BOARD: Tuple[str, ...] = (
    "R  AAAAA  R",
    "     A     ",
    "           ",
    "A    D    A",
    "A   DDD   A",
    "AA DDKDD AA",
    "A   DDD   A",
    "A    D    A",
    "           ",
    "     A     ",
    "R  AAAAA  R",
)


@dataclass(frozen=True)
class Glyph:
    occupant: Optional[Piece] = None
    is_throne: bool = False
    is_restricted: bool = False


DEFAULT_CHAR_MAP: Dict[str, Glyph] = {
    "A": Glyph(ATTACKER_PIECE),
    "a": Glyph(ATTACKER_PIECE),
    "D": Glyph(DEFENDER_PIECE),
    "d": Glyph(DEFENDER_PIECE),
    "K": Glyph(KING_PIECE, is_throne=True, is_restricted=True),
    "k": Glyph(KING_PIECE),
    "T": Glyph(None, is_throne=True, is_restricted=True),
    "R": Glyph(None, is_restricted=True),
    " ": Glyph(),
    ".": Glyph(),
}


def build_position(
    layout: Sequence[str], char_map: Optional[Mapping[str, Glyph]] = None
) -> Position:
    size = len(layout)
    if size == 0:
        raise MalformedLayoutError("Board layout must not be empty.")
    if any(len(row) != size for row in layout):
        raise MalformedLayoutError(
            "All layout rows must have the same length as the number of rows (square board)."
        )

    glyphs = dict(DEFAULT_CHAR_MAP)
    if char_map:
        glyphs.update(char_map)

    position: Position = []
    for y, row in enumerate(layout):
        squares: List[Square] = []
        for x, char in enumerate(row):
            glyph = glyphs.get(char)
            if glyph is None:
                raise MalformedLayoutError(f"Unknown layout glyph {char!r} at ({x}, {y}).")
            squares.append(Square(glyph.occupant, glyph.is_throne, glyph.is_restricted))
        position.append(squares)
    return position


def initialize_position(layout: Sequence[str]) -> Position:
    """Strict entry point used for real games: exactly one king is required."""
    king_count = sum(row.count("K") + row.count("k") for row in layout)
    if king_count != 1:
        raise InvalidKingCountError(
            f"There must be exactly one king on the board (found {king_count})."
        )
    return build_position(layout)


def clone_position(position: Position) -> Position:
    return [[square.copy() for square in row] for row in position]


def in_bounds(position: Position, coord: Coordinate) -> bool:
    size = len(position)
    return 0 <= coord.x < size and 0 <= coord.y < size


def square_at(position: Position, coord: Coordinate) -> Square:
    if not in_bounds(position, coord):
        raise ValueError(f"Coordinate ({coord.x}, {coord.y}) is off the board.")
    return position[coord.y][coord.x]


def is_perimeter(position: Position, coord: Coordinate) -> bool:
    last = len(position) - 1
    return coord.x in (0, last) or coord.y in (0, last)


def iter_pieces(
    position: Position, owner: Optional[Player] = None
) -> Iterator[Tuple[Coordinate, Piece]]:
    for y, row in enumerate(position):
        for x, square in enumerate(row):
            piece = square.occupant
            if piece is None:
                continue
            if owner is not None and piece.owner is not owner:
                continue
            yield Coordinate(x, y), piece


def find_king(position: Position) -> Optional[Coordinate]:
    for coord, piece in iter_pieces(position, Player.DEFENDER):
        if piece.is_king:
            return coord
    return None


def extract_edge_squares(position: Position) -> EdgeSquares:
    """Board perimeter plus every non-throne restricted square."""
    edges = set()
    for y, row in enumerate(position):
        for x, square in enumerate(row):
            coord = Coordinate(x, y)
            if is_perimeter(position, coord) or (square.is_restricted and not square.is_throne):
                edges.add(coord)
    return frozenset(edges)


def extract_defender_fingerprint(
    position: Position, move: Optional[Move] = None
) -> DefenderFingerprint:
    moving = None
    if move is not None:
        if not in_bounds(position, move.to):
            raise ValueError(f"Coordinate ({move.to.x}, {move.to.y}) is off the board.")
        moving = square_at(position, move.from_).occupant
    rows: List[str] = []
    for y, row in enumerate(position):
        chars: List[str] = []
        for x, square in enumerate(row):
            occupant = square.occupant
            if move is not None:
                if (x, y) == (move.from_.x, move.from_.y):
                    occupant = None
                elif (x, y) == (move.to.x, move.to.y):
                    occupant = moving
            chars.append("D" if occupant is not None and occupant.owner is Player.DEFENDER else " ")
        rows.append("".join(chars))
    return tuple(rows)


def apply_move(position: Position, move: Move, *, apply_captures: bool = True) -> Position:
    next_position = clone_position(position)
    moving = square_at(next_position, move.from_).occupant
    square_at(next_position, move.from_).occupant = None
    square_at(next_position, move.to).occupant = moving
    if apply_captures:
        for capture in move.captures:
            square_at(next_position, capture).occupant = None
    return next_position


def position_to_layout(position: Position) -> List[str]:
    rows: List[str] = []
    for row in position:
        chars: List[str] = []
        for square in row:
            piece = square.occupant
            if piece is None:
                if square.is_throne:
                    chars.append("T")
                elif square.is_restricted:
                    chars.append("R")
                else:
                    chars.append(" ")
            elif piece.kind is PieceKind.KING:
                chars.append("K" if square.is_throne else "k")
            elif piece.kind is PieceKind.DEFENDER:
                chars.append("D")
            elif piece.kind is PieceKind.ATTACKER:
                chars.append("A")
            else:
                raise ValueError(f"Unhandled piece kind {piece.kind!r}")
        rows.append("".join(chars))
    return rows
