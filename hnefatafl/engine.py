from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .core.board import (
    STANDARD_BOARD,
    apply_move,
    extract_defender_fingerprint,
    extract_edge_squares,
    initialize_position,
    square_at,
)
from .core.state import (
    Coordinate,
    EdgeSquares,
    GameState,
    GameStatus,
    Move,
    PieceKind,
    Player,
)
from .core.validator import InvalidReason, MoveValidationResult, validate_move
from .movegen import PossibleMove, enumerate_legal_moves, generate_possible_moves
from .notation import format_captures, format_move, parse_move

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApplyMoveResult:
    success: bool
    error: Optional[str] = None
    new_state: Optional[GameState] = None


class HnefataflEngine:
    """Stateful game session: keeps the current ``GameState`` and the move history."""

    def __init__(
        self,
        layout: Sequence[str] = STANDARD_BOARD,
        first_player: Player = Player.ATTACKER,
    ) -> None:
        self._first_player = first_player
        self.reset(layout)

    def reset(self, layout: Sequence[str] = STANDARD_BOARD) -> None:
        position = initialize_position(layout)
        self._edge_squares = extract_edge_squares(position)
        self._state = GameState(
            position=position,
            current_player=self._first_player,
            defender_positions=[extract_defender_fingerprint(position)],
            status=GameStatus.IN_PROGRESS,
        )
        logger.info("New game on a %dx%d board, %s to move", len(position), len(position), self._first_player.value)

    def get_state(self) -> GameState:
        return self._state

    @property
    def edge_squares(self) -> EdgeSquares:
        return self._edge_squares

    @property
    def size(self) -> int:
        return len(self._state.position)

    def validate_move(self, move_text: str) -> MoveValidationResult:
        if self._state.status != GameStatus.IN_PROGRESS:
            return MoveValidationResult.invalid(InvalidReason.GAME_OVER)
        move = parse_move(move_text, self.size)
        if move is None:
            return MoveValidationResult.invalid(InvalidReason.INVALID_FORMAT)
        return validate_move(
            self._state.position,
            self._state.current_player,
            move,
            self._edge_squares,
            self._state.defender_positions,
        )

    def apply_move(self, move_text: str) -> ApplyMoveResult:
        if self._state.status != GameStatus.IN_PROGRESS:
            return ApplyMoveResult(False, InvalidReason.GAME_OVER.value)
        move = parse_move(move_text, self.size)
        if move is None:
            return ApplyMoveResult(False, InvalidReason.INVALID_FORMAT.value)
        return self.play(move, move_text)

    def play(self, move: Move, move_text: Optional[str] = None) -> ApplyMoveResult:
        """Apply a structured move; ``move_text`` is what gets written to the history."""
        state = self._state
        if state.status != GameStatus.IN_PROGRESS:
            return ApplyMoveResult(False, InvalidReason.GAME_OVER.value)
        if move_text is None:
            move_text = format_move(move, self.size)

        validation = validate_move(
            state.position,
            state.current_player,
            move,
            self._edge_squares,
            state.defender_positions,
        )
        if not validation.is_valid:
            logger.debug("Rejected %s: %s", move_text, validation.message)
            return ApplyMoveResult(False, validation.message)

        captures = validation.expected_captures
        new_state = state.copy()
        for capture in captures:
            piece = square_at(state.position, capture).occupant
            if piece is None:
                continue
            if piece.kind is PieceKind.ATTACKER:
                new_state.captured.attacker += 1
            else:
                new_state.captured.defender += 1

        new_state.position = apply_move(state.position, move.with_captures(captures), apply_captures=True)
        new_state.status = validation.status

        # Captures change the position for good, so older fingerprints can never recur.
        if captures:
            new_state.defender_positions = []
        if captures or state.current_player is Player.DEFENDER:
            new_state.defender_positions.append(extract_defender_fingerprint(new_state.position))

        recorded = move_text.strip()
        if captures and "(" not in recorded:
            recorded += "(" + format_captures(captures, self.size) + ")"
        new_state.move_history.append(recorded)

        if new_state.status == GameStatus.IN_PROGRESS:
            new_state.current_player = state.current_player.opponent
        else:
            logger.info("Game over after %s: %s", recorded, new_state.status.value)

        self._state = new_state
        logger.info("%s played %s", state.current_player.value, recorded)
        return ApplyMoveResult(True, None, new_state)

    def apply_move_sequence(self, move_list: str) -> ApplyMoveResult:
        """Apply comma separated moves in order, stopping at the first failure."""
        for move_text in move_list.split(","):
            result = self.apply_move(move_text.strip())
            if not result.success:
                return result
        return ApplyMoveResult(True, None, self._state)

    def legal_moves(self, from_: Coordinate) -> List[PossibleMove]:
        return generate_possible_moves(
            self._state.position,
            from_,
            self._state.current_player,
            self._edge_squares,
        )

    def all_legal_moves(self) -> List[Move]:
        if self._state.status != GameStatus.IN_PROGRESS:
            return []
        return enumerate_legal_moves(
            self._state.position,
            self._state.current_player,
            self._edge_squares,
            self._state.defender_positions,
        )
