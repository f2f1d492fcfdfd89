from __future__ import annotations

import logging
from typing import Dict, Optional, Sequence

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from hnefatafl.core import (
    STANDARD_BOARD,
    GameOverError,
    GameStatus,
    Player,
    action_vector_size,
    decode_action,
    encode_action,
    position_to_layout,
)
from hnefatafl.engine import HnefataflEngine
from hnefatafl.features import (
    AUX_VECTOR_SIZE,
    BOARD_CHANNELS,
    build_aux_vector,
    build_board_tensor,
)

logger = logging.getLogger(__name__)


class HnefataflEnv(gym.Env):
    metadata = {"render_modes": ["ansi"], "render_fps": 4}

    def __init__(
        self,
        *,
        layout: Sequence[str] = STANDARD_BOARD,
        max_ply: int = 400,
        enforce_legal_actions: bool = True,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()
        self._layout = list(layout)
        self._max_ply = max_ply
        self._enforce_legal = enforce_legal_actions
        self.render_mode = render_mode
        self.size = len(self._layout)

        board_shape = (BOARD_CHANNELS, self.size, self.size)
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=0.0, high=1.0, shape=board_shape, dtype=np.float32),
                "aux": spaces.Box(low=0.0, high=1.0, shape=(AUX_VECTOR_SIZE,), dtype=np.float32),
            }
        )
        self.action_space = spaces.Discrete(action_vector_size(self.size))

        self._engine = HnefataflEngine(self._layout)
        self._ply = 0

    @property
    def engine(self) -> HnefataflEngine:
        return self._engine

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().reset(seed=seed)
        self._max_ply = options.get("max_ply", self._max_ply) if options else self._max_ply
        self._engine.reset(self._layout)
        self._ply = 0
        return self._build_observation(), self._build_info()

    def step(self, action_index: int):
        if not self.action_space.contains(action_index):
            raise ValueError(f"Action {action_index} is outside the action space.")
        state = self._engine.get_state()
        if state.is_terminal:
            raise GameOverError("Cannot step a finished game; call reset().")

        acting = state.current_player
        legal_mask = self.legal_action_mask()
        if self._enforce_legal and not legal_mask[action_index]:
            raise ValueError(f"Action {action_index} is not legal in the current position.")

        move = decode_action(int(action_index), self.size)
        result = self._engine.play(move)
        if not result.success:
            raise ValueError(f"Illegal action {action_index}: {result.error}")
        self._ply += 1

        status = self._engine.get_state().status
        reward = self._compute_reward(status, acting)
        terminated = status != GameStatus.IN_PROGRESS
        truncated = not terminated and self._ply >= self._max_ply
        if terminated:
            logger.info("Episode finished after %d plies: %s", self._ply, status.value)
        return self._build_observation(), reward, terminated, truncated, self._build_info()

    def legal_action_mask(self) -> np.ndarray:
        mask = np.zeros(self.action_space.n, dtype=np.int8)
        for move in self._engine.all_legal_moves():
            mask[encode_action(move, self.size)] = 1
        return mask

    def render(self):
        if self.render_mode != "ansi":
            raise NotImplementedError(f"Unsupported render mode {self.render_mode!r}; use 'ansi'.")
        return self._render_ascii()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _build_observation(self) -> Dict[str, np.ndarray]:
        state = self._engine.get_state()
        return {"board": build_board_tensor(state), "aux": build_aux_vector(state)}

    def _build_info(self) -> Dict[str, np.ndarray]:
        return {"legal_action_mask": self.legal_action_mask()}

    def _compute_reward(self, status: GameStatus, acting: Player) -> float:
        if status == GameStatus.IN_PROGRESS:
            return 0.0
        winner = Player.ATTACKER if status == GameStatus.ATTACKER_WIN else Player.DEFENDER
        return 1.0 if winner is acting else -1.0

    def _render_ascii(self) -> str:
        rows = position_to_layout(self._engine.get_state().position)
        return "\n".join(row.replace(" ", ".") for row in rows)
