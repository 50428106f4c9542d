"""Gymnasium-compatible wrapper around :class:`GameSession`.

Each action is one player input followed by one gravity tick:

  0. no-op
  1. move left
  2. move right
  3. rotate
  4. soft drop
  5. hard drop

Observation is a flat vector suitable for an MLP policy:
  - board occupancy (height x width)
  - falling-piece overlay (height x width)
  - next piece one-hot (7)

Reward is the score gained during the step.  The episode terminates when the
session reaches game over.
"""

from __future__ import annotations

from typing import Dict, Optional

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .game_state import GameSession, SessionState
from .pieces import TetrominoType
from .utils import format_grid


ACTIONS = ("noop", "left", "right", "rotate", "soft_drop", "hard_drop")
PIECE_INDEX = {kind: i for i, kind in enumerate(TetrominoType)}


class FallingBlocksEnv(gym.Env):
    metadata = {
        "render_modes": ["ansi"],
        "render_fps": 60,
    }

    def __init__(
        self,
        *,
        width: int = 10,
        height: int = 20,
        speed: int = 5,
        max_steps: Optional[int] = None,
    ) -> None:
        super().__init__()
        self.session = GameSession(width=width, height=height, speed=speed)
        self.action_space = spaces.Discrete(len(ACTIONS))
        self._cells = width * height
        self._obs_size = 2 * self._cells + len(PIECE_INDEX)
        self.observation_space = spaces.Box(
            low=0.0, high=1.0, shape=(self._obs_size,), dtype=np.float32
        )
        self._steps = 0
        self._max_steps = max_steps

    # ----------------------- Env API -----------------------
    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().reset(seed=seed)
        self.session.spawner.seed(seed)
        self.session.start()
        self._steps = 0
        return self._observation(), self._info()

    def step(self, action: int):
        if not self.action_space.contains(action):
            raise ValueError(f"Invalid action: {action!r}")
        before = self.session.score
        self._apply(int(action))
        self.session.tick()
        self._steps += 1
        reward = float(self.session.score - before)
        terminated = self.session.state is SessionState.GAME_OVER
        truncated = self._max_steps is not None and self._steps >= self._max_steps
        return self._observation(), reward, terminated, truncated, self._info()

    def render(self):
        return format_grid(self.session.render_grid())

    def close(self):
        return None

    # -------------------- Helpers -------------------------
    def _apply(self, action: int) -> None:
        name = ACTIONS[action]
        if name == "left":
            self.session.move(-1)
        elif name == "right":
            self.session.move(1)
        elif name == "rotate":
            self.session.rotate()
        elif name == "soft_drop":
            self.session.soft_drop()
        elif name == "hard_drop":
            self.session.hard_drop()

    def _observation(self) -> np.ndarray:
        board = (self.session.board.grid != 0).astype(np.float32).reshape(-1)
        overlay = np.zeros(self._cells, dtype=np.float32)
        piece = self.session.current_piece
        if piece is not None:
            for x, y in piece.cells():
                if 0 <= y < self.session.height and 0 <= x < self.session.width:
                    overlay[y * self.session.width + x] = 1.0
        upcoming = np.zeros((len(PIECE_INDEX),), dtype=np.float32)
        if self.session.next_piece is not None:
            upcoming[PIECE_INDEX[self.session.next_piece.kind]] = 1.0
        return np.concatenate([board, overlay, upcoming], dtype=np.float32)

    def _info(self) -> Dict:
        return {
            "score": self.session.score,
            "lines": self.session.lines_cleared,
            "state": self.session.state.value,
        }
