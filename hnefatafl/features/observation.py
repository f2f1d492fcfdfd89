from __future__ import annotations

from typing import Tuple

import numpy as np

from hnefatafl.core import GameState, PieceKind, Player

# attacker, defender, king, throne, restricted
BOARD_CHANNELS = 5
AUX_VECTOR_SIZE = 2  # current player one-hot

_PIECE_CHANNEL = {
    PieceKind.ATTACKER: 0,
    PieceKind.DEFENDER: 1,
    PieceKind.KING: 2,
}
_PLAYER_INDEX = {Player.ATTACKER: 0, Player.DEFENDER: 1}


def build_board_tensor(state: GameState) -> np.ndarray:
    """Return a channel-first float32 tensor of shape (BOARD_CHANNELS, N, N)."""
    size = len(state.position)
    tensor = np.zeros((BOARD_CHANNELS, size, size), dtype=np.float32)
    for y, row in enumerate(state.position):
        for x, square in enumerate(row):
            if square.occupant is not None:
                tensor[_PIECE_CHANNEL[square.occupant.kind], y, x] = 1.0
            if square.is_throne:
                tensor[3, y, x] = 1.0
            if square.is_restricted:
                tensor[4, y, x] = 1.0
    return tensor


def build_aux_vector(state: GameState) -> np.ndarray:
    aux = np.zeros((AUX_VECTOR_SIZE,), dtype=np.float32)
    aux[_PLAYER_INDEX[state.current_player]] = 1.0
    return aux


def state_to_numpy(state: GameState) -> Tuple[np.ndarray, np.ndarray]:
    return build_board_tensor(state), build_aux_vector(state)
