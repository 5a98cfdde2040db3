from __future__ import annotations

from enum import IntEnum
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import FallingBlockGame, GameConfig, Key, KeySnapshot, TimingRules


class Action(IntEnum):
    NONE = 0
    LEFT = 1
    RIGHT = 2
    ROTATE = 3
    SOFT_DROP = 4
    HARD_DROP = 5


ACTION_INPUT: Dict[Action, KeySnapshot] = {
    Action.NONE: KeySnapshot(),
    Action.LEFT: KeySnapshot.press(Key.LEFT),
    Action.RIGHT: KeySnapshot.press(Key.RIGHT),
    Action.ROTATE: KeySnapshot.press(Key.UP),
    Action.SOFT_DROP: KeySnapshot.hold(Key.DOWN),
    Action.HARD_DROP: KeySnapshot.press(Key.SPACE),
}

RGB_PALETTE = np.array(
    [
        (30, 30, 36),
        (0, 240, 240),
        (0, 0, 240),
        (240, 0, 0),
        (240, 240, 0),
        (0, 240, 0),
        (160, 0, 240),
        (240, 240, 240),
    ],
    dtype=np.uint8,
)


class FallingBlockEnv(gym.Env):
    """
    Headless, frame-stepped falling-block game.

    Each step feeds one frame of input to the game and advances it by ``frame_dt``
    seconds. Gravity and the line-clear animation run on game time, so several
    steps pass between a lock and the rows actually disappearing.

    Actions (6 total):
      0: No input
      1: Move Left
      2: Move Right
      3: Rotate CW
      4: Soft drop (Down held for this frame)
      5: Hard drop

    Observation: board with locked blocks as positive colour ids and the
    falling piece as negative ids. Reward: rows removed during the step.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 60}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[TimingRules] = None,
        render_mode: Optional[str] = None,
        frame_dt: float = 1.0 / 60.0,
        max_episode_steps: int = 20_000,
    ) -> None:
        super().__init__()
        self.game = FallingBlockGame(config, rules)
        self.render_mode = render_mode
        self.frame_dt = float(frame_dt)
        self.max_episode_steps = int(max_episode_steps)

        h, w = self.game.grid.height, self.game.grid.width
        self.observation_space = spaces.Box(low=-7, high=7, shape=(h, w), dtype=np.int8)
        self.action_space = spaces.Discrete(len(Action))

        self._steps = 0

    def _get_info(self) -> Dict[str, Any]:
        return {
            "lines_cleared_total": self.game.lines_cleared_total,
            "pieces_placed": self.game.pieces_placed,
            "state": type(self.game.state).__name__,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed)
        self._steps = 0
        return self.game.get_state(), self._get_info()

    def step(self, action: int):
        controls = ACTION_INPUT[Action(int(action))]
        lines = self.game.update(self.frame_dt, controls)
        self._steps += 1

        terminated = bool(self.game.game_over)
        truncated = self._steps >= self.max_episode_steps
        reward = float(lines)

        info = self._get_info()
        info["lines"] = lines
        return self.game.get_state(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        cell = 12
        grid = np.abs(self.game.get_state())
        img = RGB_PALETTE[grid]
        return np.repeat(np.repeat(img, cell, axis=0), cell, axis=1)

    def close(self) -> None:
        pass
