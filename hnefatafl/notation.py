"""Textual move notation.

Squares are written as a file letter followed by a rank number, ``A11`` being
the top-left corner of the standard board. A move is ``FROM-TO`` with an
optional parenthesised capture list, e.g. ``D11-D9(D10)``. ``P`` in a move
sequence is a pass.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Union

from .core.errors import MoveFormatError
from .core.state import Coordinate, Move

STANDARD_SIZE = 11
PASS = "pass"

COORD_BODY = r"[A-Z](?:[1-9][0-9]?)"
COORD_RE = re.compile(r"^([A-Z])([1-9][0-9]?)$", re.IGNORECASE)
MOVE_RE = re.compile(rf"^({COORD_BODY})-({COORD_BODY})(?:\(([^)]*)\))?$", re.IGNORECASE)
CAPTURE_RE = re.compile(COORD_BODY, re.IGNORECASE)


def coord_from_string(text: str, size: int = STANDARD_SIZE) -> Optional[Coordinate]:
    match = COORD_RE.match(text.strip())
    if not match:
        return None
    x = ord(match.group(1).upper()) - ord("A")
    rank = int(match.group(2))
    if not (0 <= x < size and 1 <= rank <= size):
        return None
    return Coordinate(x, size - rank)


def coord_to_string(coord: Coordinate, size: int = STANDARD_SIZE) -> str:
    return f"{chr(ord('A') + coord.x)}{size - coord.y}"


def parse_move(text: str, size: int = STANDARD_SIZE) -> Optional[Move]:
    cleaned = re.sub(r"\s+", "", text)
    match = MOVE_RE.match(cleaned)
    if not match:
        return None
    from_ = coord_from_string(match.group(1), size)
    to = coord_from_string(match.group(2), size)
    if from_ is None or to is None:
        return None

    captures: List[Coordinate] = []
    chunk = match.group(3)
    if chunk:
        for token in CAPTURE_RE.findall(chunk):
            capture = coord_from_string(token, size)
            if capture is None:
                return None
            captures.append(capture)
    return Move(from_, to, tuple(captures))


def parse_move_strict(text: str, size: int = STANDARD_SIZE) -> Move:
    move = parse_move(text, size)
    if move is None:
        raise MoveFormatError(f"Invalid move format: {text!r}")
    return move


def format_move(move: Move, size: int = STANDARD_SIZE) -> str:
    text = f"{coord_to_string(move.from_, size)}-{coord_to_string(move.to, size)}"
    if move.captures:
        text += "(" + format_captures(move.captures, size) + ")"
    return text


def format_captures(captures: Iterable[Coordinate], size: int = STANDARD_SIZE) -> str:
    return "".join(coord_to_string(c, size) for c in captures)


def parse_move_sequence(text: str, size: int = STANDARD_SIZE) -> List[Union[Move, str]]:
    """Split a comma separated sequence, dropping entries that do not parse."""
    parsed: List[Union[Move, str]] = []
    for token in text.split(","):
        token = token.strip().upper()
        if not token:
            continue
        if token == "P":
            parsed.append(PASS)
            continue
        move = parse_move(token, size)
        if move is not None:
            parsed.append(move)
    return parsed
