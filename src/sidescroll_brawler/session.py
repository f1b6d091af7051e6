"""Session state machine and frame-driven tick scheduling.

A host scheduler (pygame clock, gym env, tests) calls tick() once per frame
with a monotonically increasing timestamp. tick() returns whether another
frame should be scheduled; it returns False once the run has ended in
GAME_OVER or WON. Pausing suspends the simulation only, so the host keeps
rendering (for the pause overlay).
"""

import logging
from enum import Enum
from typing import Optional

from .config import GameConfig
from .controls import InputState, NO_INPUT
from .level_gen import LevelSpec
from .sounds import SoundBus, TRACK_LEVEL, TRACK_BOSS
from .world import GameWorld

logger = logging.getLogger(__name__)


class SessionState(Enum):
    READY = "ready"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"
    WON = "won"


TERMINAL_STATES = (SessionState.GAME_OVER, SessionState.WON)


class GameSession:
    """Start/pause/resume/restart control around a GameWorld."""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        level: Optional[LevelSpec] = None,
        sounds: Optional[SoundBus] = None,
        seed: Optional[int] = None,
    ):
        self.config = config or GameConfig()
        self.sounds = sounds or SoundBus()
        self.world = GameWorld(self.config, level=level, sounds=self.sounds, seed=seed)
        self.state = SessionState.READY
        self._last_timestamp: Optional[float] = None

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    @property
    def is_paused(self) -> bool:
        return self.state is SessionState.PAUSED

    def start(self) -> None:
        """Begin the run from the READY screen."""
        if self.state is not SessionState.READY:
            return
        self.state = SessionState.RUNNING
        self._last_timestamp = None
        self.sounds.play_track(TRACK_LEVEL)
        logger.info("Session started")

    def pause(self) -> None:
        if self.state is not SessionState.RUNNING:
            return
        self.state = SessionState.PAUSED
        self.sounds.pause_all()
        logger.info("Session paused")

    def resume(self) -> None:
        if self.state is not SessionState.PAUSED:
            return
        self.state = SessionState.RUNNING
        # Do not feed the paused interval into physics
        self._last_timestamp = None
        self.sounds.resume_all()
        logger.info("Session resumed")

    def toggle_pause(self) -> None:
        if self.state is SessionState.PAUSED:
            self.resume()
        else:
            self.pause()

    def restart(self) -> None:
        """Throw away all entity state and start a fresh run."""
        self.sounds.stop_track(TRACK_BOSS)
        self.world.reset()
        self.state = SessionState.READY
        self.start()
        logger.info("Session restarted")

    def press_punch(self, timestamp: float) -> bool:
        """Edge-triggered punch, once per key press."""
        if self.state is not SessionState.RUNNING:
            return False
        return self.world.press_punch(timestamp)

    def tick(self, timestamp: float, inputs: InputState = NO_INPUT) -> bool:
        """Run one frame.

        Args:
            timestamp: Host clock in ms, monotonically increasing.
            inputs: Held-state snapshot for this frame.

        Returns:
            True if the host should schedule another tick.
        """
        if self.is_terminal:
            return False

        if self._last_timestamp is None:
            delta = 0.0
        else:
            delta = timestamp - self._last_timestamp
        self._last_timestamp = timestamp

        if self.state is not SessionState.RUNNING:
            return True

        self.world.step(delta, timestamp, inputs)

        if self.world.game_over:
            self.state = SessionState.GAME_OVER
            return False
        if self.world.win:
            self.state = SessionState.WON
            return False
        return True
