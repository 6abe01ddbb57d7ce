from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import (
    WALL,
    Action,
    FallingBlockGame,
    GameConfig,
    GameSession,
    PieceType,
    SessionConfig,
)
from falling_blocks.visualization.renderer import color_for_value


class FallingBlocksEnv(gym.Env):
    """One session tick per step.

    Actions are the ``Action`` values: left, right, rotate cw, rotate ccw,
    soft drop and none. Gravity fires every ``ticks_per_drop`` steps.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 ticks_per_drop: int = 1,
                 max_episode_steps: int = 10000) -> None:
        super().__init__()
        self.game = FallingBlockGame(config)
        self.render_mode = render_mode
        self.ticks_per_drop = int(ticks_per_drop)
        self.max_episode_steps = int(max_episode_steps)
        self._steps = 0
        self.session = self._new_session()

        cfg = self.game.config
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=0, high=WALL, shape=(cfg.height, cfg.width), dtype=np.int8),
                "next_pieces": spaces.Box(low=0, high=len(PieceType) - 1, shape=(cfg.next_pieces,), dtype=np.int8),
            }
        )
        self.action_space = spaces.Discrete(len(Action))

    def _new_session(self) -> GameSession:
        # Elapsed time follows the step count so episodes are reproducible.
        session_config = SessionConfig(ticks_per_drop=self.ticks_per_drop)
        return GameSession(self.game, session_config, clock=lambda: self._steps * session_config.tick_seconds)

    def _get_obs(self) -> Dict[str, Any]:
        return {
            "board": self.game.get_state().astype(np.int8),
            "next_pieces": np.array(self.game.next_pieces(), dtype=np.int8),
        }

    def _get_info(self) -> Dict[str, Any]:
        info: Dict[str, Any] = {
            "score": self.game.score,
            "elapsed": self.session.elapsed,
        }
        info.update(self.game.get_game_stats())
        return info

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed)
        self._steps = 0
        self.session = self._new_session()
        self.session.start()
        return self._get_obs(), self._get_info()

    def step(self, action):
        action = Action(int(action))
        score_before = self.game.score
        self._steps += 1
        self.session.tick(None if action == Action.NONE else action)

        reward = float(self.game.score - score_before)
        terminated = bool(self.game.game_over)
        truncated = self._steps >= self.max_episode_steps and not terminated
        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        grid = self.game.get_state()
        cell = 12
        h, w = grid.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color_for_value(int(grid[y, x]))
        return img

    def close(self) -> None:
        pass
