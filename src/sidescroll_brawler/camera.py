"""Deadzone camera that follows the player horizontally."""

from typing import Optional

from .config import CameraConfig


class Camera:
    """Horizontal scroll offset, recomputed once per tick.

    The camera only moves when the player's screen-relative x leaves the
    band between the left and right deadzones. There is no smoothing: the
    result depends only on the player x and the previous camera x.
    """

    def __init__(self, config: Optional[CameraConfig] = None, world_width: float = 5000.0):
        self.config = config or CameraConfig()
        self.world_width = world_width
        self.x = 0.0

    @property
    def max_x(self) -> float:
        return max(0.0, self.world_width - self.config.viewport_width)

    @property
    def right_bound(self) -> float:
        """Screen x past which the camera scrolls right."""
        return self.config.viewport_width - self.config.deadzone_width

    @property
    def left_bound(self) -> float:
        """Screen x before which the camera scrolls left (symmetric mode)."""
        return self.config.deadzone_width

    def update(self, player_x: float) -> float:
        """Recompute the offset for the player's world x and return it."""
        screen_x = player_x - self.x
        if screen_x > self.right_bound:
            self.x = player_x - self.right_bound
        elif self.config.symmetric and screen_x < self.left_bound:
            self.x = player_x - self.left_bound
        self.x = min(max(self.x, 0.0), self.max_x)
        return self.x

    def reset(self) -> None:
        self.x = 0.0

    def to_screen(self, world_x: float) -> float:
        return world_x - self.x
