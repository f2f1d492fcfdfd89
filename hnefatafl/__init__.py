"""Hnefatafl rules engine."""

from . import core, features, notation, movegen, engine, env, config
from .config import EngineConfig, configure_logging, load_config
from .core import (
    STANDARD_BOARD,
    Coordinate,
    GameState,
    GameStatus,
    InvalidReason,
    Move,
    MoveValidationResult,
    Player,
    build_position,
    get_captures,
    initialize_position,
    validate_move,
)
from .engine import ApplyMoveResult, HnefataflEngine
from .env import HnefataflEnv
from .movegen import PossibleMove, enumerate_legal_moves, generate_possible_moves
from .notation import coord_from_string, coord_to_string, format_move, parse_move, parse_move_sequence

__all__ = [
    "core",
    "features",
    "notation",
    "movegen",
    "engine",
    "env",
    "config",
    "EngineConfig",
    "configure_logging",
    "load_config",
    "STANDARD_BOARD",
    "Coordinate",
    "GameState",
    "GameStatus",
    "InvalidReason",
    "Move",
    "MoveValidationResult",
    "Player",
    "build_position",
    "get_captures",
    "initialize_position",
    "validate_move",
    "ApplyMoveResult",
    "HnefataflEngine",
    "HnefataflEnv",
    "PossibleMove",
    "enumerate_legal_moves",
    "generate_possible_moves",
    "coord_from_string",
    "coord_to_string",
    "format_move",
    "parse_move",
    "parse_move_sequence",
]
