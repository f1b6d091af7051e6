"""Scripted policies for automated data collection.

Each policy takes an observation and returns an action dict
compatible with BrawlerEnv's action space.
"""

import numpy as np
from typing import Dict, Any, Optional

from .gym_env import MOVE_NONE, MOVE_LEFT, MOVE_RIGHT


class BasePolicy:
    """Base class for scripted policies."""

    name: str = "base"

    def __call__(self, obs: Dict[str, np.ndarray]) -> Dict[str, Any]:
        return self.act(obs)

    def act(self, obs: Dict[str, np.ndarray]) -> Dict[str, Any]:
        raise NotImplementedError

    def reset(self):
        """Called at the start of each episode."""
        pass

    def _make_action(self, move: int, jump: int = 0, sprint: int = 0, punch: int = 0) -> Dict[str, Any]:
        return {
            "move": int(move),
            "jump": int(jump),
            "sprint": int(sprint),
            "punch": int(punch),
        }


class RandomPolicy(BasePolicy):
    """Uniform random movement with occasional jumps and punches.

    Broad state coverage, many hits taken, good baseline.
    """

    name = "random"

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng or np.random.default_rng()

    def act(self, obs):
        move = int(self.rng.integers(0, 3))
        jump = int(self.rng.random() < 0.1)
        sprint = int(self.rng.random() < 0.3)
        punch = int(self.rng.random() < 0.05)
        return self._make_action(move, jump, sprint, punch)


class RushPolicy(BasePolicy):
    """Always sprint right, jump on a timer or when stalled.

    Covers the level quickly, relies on stomps and luck.
    """

    name = "rush"

    def __init__(self, jump_interval: int = 45):
        self.jump_interval = jump_interval
        self._step = 0

    def reset(self):
        self._step = 0

    def act(self, obs):
        state = obs["state"]
        vx = state[2]
        grounded = state[4] > 0.5

        self._step += 1

        should_jump = grounded and (
            self._step % self.jump_interval == 0
            or abs(vx) < 0.5
        )
        return self._make_action(MOVE_RIGHT, int(should_jump), sprint=1)


class BrawlerPolicy(BasePolicy):
    """Walks right and punches enemies that come within reach.

    Stops to face an enemy close behind, punches when it is in range and
    keeps jumping over platforms otherwise.
    """

    name = "brawler"

    def __init__(self, punch_range: float = 70.0, jump_interval: int = 60):
        self.punch_range = punch_range
        self.jump_interval = jump_interval
        self._step = 0

    def reset(self):
        self._step = 0

    def act(self, obs):
        state = obs["state"]
        grounded = state[4] > 0.5
        enemy_dx = state[10]
        enemy_dy = state[11]
        self._step += 1

        near = enemy_dx != 0.0 and abs(enemy_dx) < self.punch_range * 2 and abs(enemy_dy) < 60
        if near:
            move = MOVE_RIGHT if enemy_dx > 0 else MOVE_LEFT
            punch = int(abs(enemy_dx) < self.punch_range)
            if punch:
                move = MOVE_NONE if abs(enemy_dx) < self.punch_range / 2 else move
            return self._make_action(move, 0, 0, punch)

        should_jump = grounded and self._step % self.jump_interval == 0
        return self._make_action(MOVE_RIGHT, int(should_jump))


POLICIES = {
    "random": RandomPolicy,
    "rush": RushPolicy,
    "brawler": BrawlerPolicy,
}
