from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import (
    Action,
    FIELD_COLS,
    FIELD_ROWS,
    GameConfig,
    GameSession,
    ShapeKind,
    color_for_value,
)


FRAME_MS = 1000.0 / 60.0

# Discrete action index -> session command (index 0 is "do nothing").
ACTIONS: Tuple[Optional[Action], ...] = (
    None,
    Action.LEFT,
    Action.RIGHT,
    Action.DOWN,
    Action.ROTATE,
    Action.HARD_DROP,
)


class FallingBlocksEnv(gym.Env):
    """One env step = one frame of play with a single command held for it.

    Observation:
      grid: field with the falling piece overlaid as negative shape values
      next_piece: shape value of the queued piece
    Reward is the score gained during the frame.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 60}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 frame_ms: float = FRAME_MS,
                 max_episode_steps: int = 20000) -> None:
        super().__init__()
        self.session = GameSession(config)
        self.render_mode = render_mode
        self.frame_ms = float(frame_ms)
        self.max_episode_steps = int(max_episode_steps)

        n_kinds = len(ShapeKind)
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=-n_kinds, high=n_kinds, shape=(FIELD_ROWS, FIELD_COLS), dtype=np.int8),
                "next_piece": spaces.Discrete(n_kinds + 1),
            }
        )
        self.action_space = spaces.Discrete(len(ACTIONS))
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        return {
            "grid": self.session.get_state().astype(np.int8),
            "next_piece": int(self.session.next_piece.kind),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.session.score,
            "lines_cleared_total": self.session.lines_cleared_total,
            "pieces_placed": self.session.pieces_placed,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.session.reset(seed)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        command = ACTIONS[int(action)]
        score_before = self.session.score

        if command is not None:
            self.session.press(command)
        self.session.update(self.frame_ms)
        if command is not None:
            self.session.release(command)

        self._steps += 1
        reward = float(self.session.score - score_before)
        terminated = bool(self.session.game_over)
        truncated = self._steps >= self.max_episode_steps
        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        state = self.session.get_state()
        cell = 12
        h, w = state.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color_for_value(int(state[y, x]))
        return img

    def close(self) -> None:
        pass
