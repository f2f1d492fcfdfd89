from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterator, List, Optional, Tuple


class Player(Enum):
    ATTACKER = "attacker"
    DEFENDER = "defender"

    @property
    def opponent(self) -> "Player":
        return Player.DEFENDER if self is Player.ATTACKER else Player.ATTACKER


class PieceKind(Enum):
    ATTACKER = "attacker"
    DEFENDER = "defender"
    KING = "king"


class GameStatus(Enum):
    IN_PROGRESS = "in_progress"
    ATTACKER_WIN = "attacker_win"
    DEFENDER_WIN = "defender_win"


@dataclass(frozen=True)
class Piece:
    owner: Player
    kind: PieceKind

    def __post_init__(self) -> None:
        if self.kind is PieceKind.KING and self.owner is not Player.DEFENDER:
            raise ValueError("The king always belongs to the defender.")

    @property
    def is_king(self) -> bool:
        return self.kind is PieceKind.KING


ATTACKER_PIECE = Piece(Player.ATTACKER, PieceKind.ATTACKER)
DEFENDER_PIECE = Piece(Player.DEFENDER, PieceKind.DEFENDER)
KING_PIECE = Piece(Player.DEFENDER, PieceKind.KING)


@dataclass
class Square:
    occupant: Optional[Piece] = None
    is_throne: bool = False
    is_restricted: bool = False

    def __post_init__(self) -> None:
        # A throne is always restricted.
        if self.is_throne:
            self.is_restricted = True

    def copy(self) -> "Square":
        return Square(self.occupant, self.is_throne, self.is_restricted)


@dataclass(frozen=True, order=True)
class Coordinate:
    """Board coordinate, ``x`` is the column and ``y`` the row (both 0-based)."""

    x: int
    y: int

    def offset(self, dx: int, dy: int) -> "Coordinate":
        return Coordinate(self.x + dx, self.y + dy)

    def neighbours(self) -> Iterator["Coordinate"]:
        for dx, dy in DIRECTIONS:
            yield Coordinate(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class Move:
    from_: Coordinate
    to: Coordinate
    captures: Tuple[Coordinate, ...] = field(default_factory=tuple)

    def with_captures(self, captures) -> "Move":
        return Move(self.from_, self.to, tuple(captures))


@dataclass
class CaptureTally:
    attacker: int = 0
    defender: int = 0


# Up, down, left, right as (dx, dy).
DIRECTIONS: Tuple[Tuple[int, int], ...] = ((0, -1), (0, 1), (-1, 0), (1, 0))

Position = List[List[Square]]
EdgeSquares = FrozenSet[Coordinate]
DefenderFingerprint = Tuple[str, ...]


@dataclass
class GameState:
    position: Position
    current_player: Player = Player.ATTACKER
    captured: CaptureTally = field(default_factory=CaptureTally)
    move_history: List[str] = field(default_factory=list)
    defender_positions: List[DefenderFingerprint] = field(default_factory=list)
    status: GameStatus = GameStatus.IN_PROGRESS

    def copy(self) -> "GameState":
        return GameState(
            position=[[square.copy() for square in row] for row in self.position],
            current_player=self.current_player,
            captured=CaptureTally(self.captured.attacker, self.captured.defender),
            move_history=list(self.move_history),
            defender_positions=list(self.defender_positions),
            status=self.status,
        )

    @property
    def is_terminal(self) -> bool:
        return self.status != GameStatus.IN_PROGRESS

    def __repr__(self) -> str:
        glyphs = []
        for row in self.position:
            glyphs.append("".join(_glyph(square) for square in row))
        board_str = "\n".join(glyphs)
        return (
            f"GameState(current={self.current_player}, status={self.status}, "
            f"moves={len(self.move_history)})\n{board_str}"
        )


def _glyph(square: Square) -> str:
    if square.occupant is None:
        return "R" if square.is_restricted else "."
    if square.occupant.kind is PieceKind.KING:
        return "K"
    if square.occupant.kind is PieceKind.DEFENDER:
        return "D"
    return "A"
