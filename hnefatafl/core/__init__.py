"""Core rules engine for Hnefatafl."""

from .actions import ActionVector, action_vector_size, decode_action, encode_action
from .board import (
    STANDARD_BOARD,
    Glyph,
    apply_move,
    build_position,
    clone_position,
    extract_defender_fingerprint,
    extract_edge_squares,
    find_king,
    initialize_position,
    position_to_layout,
)
from .errors import (
    GameOverError,
    HnefataflError,
    InvalidKingCountError,
    MalformedLayoutError,
    MoveFormatError,
)
from .fort import attacker_reachable, capturable_defenders, defenders_have_fort, king_region, safe_squares
from .rules import get_captures, is_hostile_to, is_king_captured, is_king_escaped
from .state import (
    CaptureTally,
    Coordinate,
    GameState,
    GameStatus,
    Move,
    Piece,
    PieceKind,
    Player,
    Position,
    Square,
)
from .validator import (
    InvalidReason,
    MoveValidationResult,
    defenders_can_reach_edge,
    get_game_status_after_move,
    validate_move,
)

__all__ = [
    "ActionVector",
    "action_vector_size",
    "decode_action",
    "encode_action",
    "STANDARD_BOARD",
    "Glyph",
    "apply_move",
    "build_position",
    "clone_position",
    "extract_defender_fingerprint",
    "extract_edge_squares",
    "find_king",
    "initialize_position",
    "position_to_layout",
    "GameOverError",
    "HnefataflError",
    "InvalidKingCountError",
    "MalformedLayoutError",
    "MoveFormatError",
    "attacker_reachable",
    "capturable_defenders",
    "defenders_have_fort",
    "king_region",
    "safe_squares",
    "get_captures",
    "is_hostile_to",
    "is_king_captured",
    "is_king_escaped",
    "CaptureTally",
    "Coordinate",
    "GameState",
    "GameStatus",
    "Move",
    "Piece",
    "PieceKind",
    "Player",
    "Position",
    "Square",
    "InvalidReason",
    "MoveValidationResult",
    "defenders_can_reach_edge",
    "get_game_status_after_move",
    "validate_move",
]
