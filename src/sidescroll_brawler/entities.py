"""Game entities: Player, Enemy, Boss, Platform, Coin, Particle.

Entities own their state and per-tick self-update. Anything that involves two
entities at once (combat, pickups, landing on platforms) lives in
collisions.py. Timers are absolute deadlines compared against the ``now``
timestamp (ms) the caller passes in, so tests never wait on a real clock.
"""

import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import pymunk

from . import physics
from .config import (
    PlayerConfig,
    EnemyConfig,
    BossConfig,
    WorldConfig,
    REFERENCE_FRAME_MS,
)
from .controls import InputState


class Facing(Enum):
    LEFT = -1
    RIGHT = 1

    @property
    def opposite(self) -> "Facing":
        return Facing.RIGHT if self is Facing.LEFT else Facing.LEFT


class PlayerState(Enum):
    """Animation state, derived every tick from input and physics."""
    IDLE = "idle"
    WALKING = "walking"
    JUMPING = "jumping"
    PUNCHING = "punching"


class EnemyState(Enum):
    IDLE = "idle"
    CHASING = "chasing"


class BossState(Enum):
    ENTERING = "entering"
    CHASING = "chasing"
    RUNNING_AWAY = "runningAway"


def _dt_scale(delta_ms: float, dt_scale: Optional[float]) -> float:
    if dt_scale is not None:
        return dt_scale
    return delta_ms / REFERENCE_FRAME_MS


def _facing_toward(from_x: float, to_x: float, current: Facing) -> Facing:
    if to_x > from_x:
        return Facing.RIGHT
    if to_x < from_x:
        return Facing.LEFT
    return current


@dataclass(frozen=True)
class Platform:
    """Static solid rectangle. Movers land on its top edge."""
    x: float
    y: float
    width: float
    height: float = 20.0

    @property
    def bounds(self) -> pymunk.BB:
        return physics.bounds_of(self)


class Coin:
    """Pickup that bobs on a sine wave around its base height."""

    def __init__(
        self,
        x: float,
        base_y: float,
        size: float = 30.0,
        amplitude: float = 5.0,
        bob_speed: float = 0.05,
        phase: float = 0.0,
    ):
        self.x = x
        self.base_y = base_y
        self.width = size
        self.height = size
        self.amplitude = amplitude
        self.bob_speed = bob_speed  # Radians per reference frame
        self.phase = phase
        self.y = base_y + amplitude * math.sin(phase)
        self.collected = False

    def update(self, dt_scale: float = 1.0) -> None:
        """Advance the bob phase."""
        self.phase += self.bob_speed * dt_scale
        self.y = self.base_y + self.amplitude * math.sin(self.phase)

    def collect(self) -> bool:
        """Mark collected. Returns False if it already was."""
        if self.collected:
            return False
        self.collected = True
        return True

    @property
    def bounds(self) -> pymunk.BB:
        return physics.bounds_of(self)


class Particle:
    """Short-lived decorative point with fading alpha."""

    def __init__(
        self,
        x: float,
        y: float,
        color: Tuple[int, int, int],
        rng: Optional[random.Random] = None,
        decay: float = 0.03,
    ):
        rng = rng or random
        self.x = x
        self.y = y
        self.vx = (rng.random() - 0.5) * 6
        self.vy = (rng.random() - 0.5) * 6
        self.color = color
        self.size = rng.random() * 4 + 2
        self.alpha = 1.0
        self.decay = decay  # Alpha lost per reference frame

    def update(self, dt_scale: float = 1.0) -> None:
        self.x += self.vx * dt_scale
        self.y += self.vy * dt_scale
        self.alpha = max(0.0, self.alpha - self.decay * dt_scale)

    @property
    def alive(self) -> bool:
        return self.alpha > 0.0


class Player:
    """The controlled character.

    Handles horizontal movement, jumping, the sprint/stamina economy, the
    punch window and cooldown, and the invincibility grace period. Lives are
    tracked here but the terminal game-over decision belongs to the resolver.
    """

    def __init__(
        self,
        config: Optional[PlayerConfig] = None,
        world: Optional[WorldConfig] = None,
        position: Optional[Tuple[float, float]] = None,
    ):
        self.config = config or PlayerConfig()
        self.world = world or WorldConfig()

        self.width = self.config.width
        self.height = self.config.height
        self.x, self.y = position or self.start_position
        self.spawn_x = self.x
        self.prev_y = self.y
        self.vx = 0.0
        self.vy = 0.0
        self.speed = self.config.speed
        self.on_ground = False
        self.facing = Facing.RIGHT
        self.state = PlayerState.IDLE

        self.coins_collected = 0
        self.lives = self.config.lives
        self.stamina = self.config.max_stamina

        self.is_punching = False
        self.punch_start_time = 0.0
        self.cooldown_until = 0.0

        self.is_invincible = False
        self.invincible_since = 0.0
        self.invincible_until = 0.0

        self.jumped = False  # True for the tick a jump started
        self._now = 0.0

    @property
    def start_position(self) -> Tuple[float, float]:
        return self.config.start_x, self.world.ground_y - self.height

    @property
    def bounds(self) -> pymunk.BB:
        return physics.bounds_of(self)

    @property
    def visible(self) -> bool:
        """Flicker hint for renderers while invincible."""
        if not self.is_invincible:
            return True
        elapsed = self._now - self.invincible_since
        return int(elapsed // self.config.flicker_interval) % 2 == 0

    def update(
        self,
        delta_ms: float,
        now: float,
        inputs: InputState,
        dt_scale: Optional[float] = None,
    ) -> None:
        """Apply input, stamina, timers and gravity for one tick."""
        scale = _dt_scale(delta_ms, dt_scale)
        self._now = now
        self.jumped = False
        self._expire_timers(now)

        self._update_stamina(delta_ms / 1000.0, inputs.sprint)

        if inputs.move_left:
            self.vx = -self.speed
            self.facing = Facing.LEFT
        elif inputs.move_right:
            self.vx = self.speed
            self.facing = Facing.RIGHT
        else:
            self.vx = 0.0

        if inputs.jump and self.on_ground:
            self.vy = -self.config.jump_strength
            self.on_ground = False
            self.jumped = True

        self.state = self.derive_state()

        physics.integrate(self, self.world.gravity, scale)
        if physics.clamp_to_world(self, self.world.width) == 1:
            self.vx = 0.0

    def _update_stamina(self, seconds: float, sprint_held: bool) -> None:
        cfg = self.config
        if sprint_held and self.stamina > 0:
            self.speed = cfg.speed * cfg.sprint_multiplier
            self.stamina -= cfg.stamina_depletion_rate * seconds
        else:
            self.speed = cfg.speed
            self.stamina += cfg.stamina_recharge_rate * seconds
        self.stamina = min(max(self.stamina, 0.0), cfg.max_stamina)

    def _expire_timers(self, now: float) -> None:
        if self.is_punching and now - self.punch_start_time >= self.config.punch_duration:
            self.is_punching = False
            self.cooldown_until = (
                self.punch_start_time + self.config.punch_duration + self.config.punch_cooldown
            )
        if self.is_invincible and now >= self.invincible_until:
            self.is_invincible = False

    def derive_state(self) -> PlayerState:
        if self.is_punching:
            return PlayerState.PUNCHING
        if not self.on_ground:
            return PlayerState.JUMPING
        if self.vx != 0:
            return PlayerState.WALKING
        return PlayerState.IDLE

    def initiate_punch(self, now: float) -> bool:
        """Start a punch window.

        Returns:
            False (and does nothing) while punching or cooling down.
        """
        self._expire_timers(now)
        if self.is_punching or now < self.cooldown_until:
            return False
        self.is_punching = True
        self.punch_start_time = now
        self.state = PlayerState.PUNCHING
        return True

    def make_invincible(self, now: float) -> None:
        self.is_invincible = True
        self.invincible_since = now
        self.invincible_until = now + self.config.invincibility_duration
        self._now = now

    def lose_life(self) -> int:
        """Decrement lives (never below zero) and return what is left."""
        self.lives = max(0, self.lives - 1)
        return self.lives

    def bounce(self) -> None:
        """Upward rebound after a stomp."""
        self.vy = -self.config.stomp_bounce
        self.on_ground = False

    def apply_knockback(self, direction: int) -> None:
        """Recoil one frame's worth of knockback away from a punched target."""
        push = direction * self.config.punch_knockback
        self.vx = push
        self.x += push
        physics.clamp_to_world(self, self.world.width)

    def _place(self, x: float) -> None:
        self.x = x
        self.y = self.world.ground_y - self.height
        self.prev_y = self.y
        self.vx = 0.0
        self.vy = 0.0
        self.on_ground = True
        self.is_punching = False
        self.state = PlayerState.IDLE
        physics.clamp_to_world(self, self.world.width)

    def reset_to_start(self) -> None:
        """Put the player back at the level start, standing on the ground."""
        self._place(self.spawn_x)

    def reset_to_camera(self, camera_x: float) -> None:
        """Put the player near the left edge of the current view."""
        self._place(camera_x + self.config.respawn_offset)


class Enemy:
    """Roaming enemy that chases the player inside a hysteresis band.

    Engages when the player is within chase_distance and only disengages once
    the player is further than stop_chase_distance. One hit kills it; dead
    enemies stay in the list with alive=False.
    """

    def __init__(
        self,
        x: float,
        y: float,
        config: Optional[EnemyConfig] = None,
        world: Optional[WorldConfig] = None,
        facing: Facing = Facing.LEFT,
    ):
        self.config = config or EnemyConfig()
        self.world = world or WorldConfig()
        self.x = x
        self.y = y
        self.prev_y = y
        self.width = self.config.width
        self.height = self.config.height
        self.facing = facing
        self.vx = facing.value * self.config.idle_speed
        self.vy = 0.0
        self.on_ground = False
        self.alive = True
        self.state = EnemyState.IDLE

    @property
    def bounds(self) -> pymunk.BB:
        return physics.bounds_of(self)

    def update_chase(
        self,
        player_x: float,
        player_y: float,
        delta_ms: float,
        dt_scale: Optional[float] = None,
    ) -> None:
        if not self.alive:
            return

        distance = abs(player_x - self.x)
        if self.state is EnemyState.IDLE and distance <= self.config.chase_distance:
            self.state = EnemyState.CHASING
        elif self.state is EnemyState.CHASING and distance > self.config.stop_chase_distance:
            self.state = EnemyState.IDLE
            self.vx = self.facing.value * self.config.idle_speed

        if self.state is EnemyState.CHASING:
            self.facing = _facing_toward(self.x, player_x, self.facing)
            self.vx = self.facing.value * self.config.chase_speed

        physics.integrate(self, self.world.gravity, _dt_scale(delta_ms, dt_scale))
        self.bounce_off_bounds()

    def bounce_off_bounds(self) -> None:
        """Clamp into the world and turn around at the edges."""
        hit = physics.clamp_to_world(self, self.world.width)
        if hit == -1:
            self.vx = abs(self.vx)
            self.facing = Facing.RIGHT
        elif hit == 1:
            self.vx = -abs(self.vx)
            self.facing = Facing.LEFT

    def kill(self) -> None:
        self.alive = False
        self.vx = 0.0
        self.vy = 0.0


class Boss:
    """Late-game boss: enters from the right edge, chases, flees when hit.

    Combat uses ``hitbox``, a weak point strictly inside the visual box.
    """

    def __init__(
        self,
        x: float,
        y: float,
        config: Optional[BossConfig] = None,
        world: Optional[WorldConfig] = None,
    ):
        self.config = config or BossConfig()
        self.world = world or WorldConfig()
        self.x = x
        self.y = y
        self.prev_y = y
        self.width = self.config.width
        self.height = self.config.height
        self.facing = Facing.LEFT
        self.vx = -self.config.speed
        self.vy = 0.0
        self.on_ground = False
        self.alive = True
        self.state = BossState.ENTERING
        self.health = self.config.max_health
        self.run_away_until = 0.0
        self.next_jump_time = 0.0

    @property
    def max_health(self) -> int:
        return self.config.max_health

    @property
    def bounds(self) -> pymunk.BB:
        return physics.bounds_of(self)

    @property
    def hitbox(self) -> pymunk.BB:
        fx, fy, fw, fh = self.config.hitbox_inset
        return physics.aabb(
            self.x + fx * self.width,
            self.y + fy * self.height,
            fw * self.width,
            fh * self.height,
        )

    @property
    def entry_x(self) -> float:
        """x at or below which the entrance is complete."""
        return self.world.width - self.width - self.config.entry_distance

    def update(
        self,
        player_x: float,
        now: float,
        delta_ms: float,
        rng: Optional[random.Random] = None,
        dt_scale: Optional[float] = None,
    ) -> None:
        if not self.alive:
            return
        rng = rng or random

        if self.state is BossState.ENTERING:
            self.facing = Facing.LEFT
            self.vx = -self.config.speed
            if self.x <= self.entry_x:
                self.state = BossState.CHASING
        elif self.state is BossState.RUNNING_AWAY:
            if now >= self.run_away_until:
                self.state = BossState.CHASING

        if self.state is BossState.CHASING:
            self._chase(player_x)
            if (
                self.on_ground
                and now >= self.next_jump_time
                and rng.random() < self.config.jump_chance
            ):
                self.vy = -self.config.jump_strength
                self.on_ground = False
                self.next_jump_time = now + self.config.jump_cooldown

        physics.integrate(self, self.world.gravity, _dt_scale(delta_ms, dt_scale))
        physics.clamp_to_world(self, self.world.width)

    def _chase(self, player_x: float) -> None:
        center = self.x + self.width / 2
        self.facing = _facing_toward(center, player_x, self.facing)
        self.vx = self.facing.value * self.config.speed

    def run_away(self, now: float) -> None:
        """Flee opposite to the current facing for run_away_duration."""
        if self.state is BossState.RUNNING_AWAY:
            return
        self.state = BossState.RUNNING_AWAY
        self.facing = self.facing.opposite
        self.vx = self.facing.value * self.config.run_away_speed
        self.run_away_until = now + self.config.run_away_duration

    def take_hit(self, now: float) -> bool:
        """Apply one point of damage.

        Hits landing while the boss is already fleeing are ignored, so a single
        punch window or contact cannot drain several points.

        Returns:
            True if the hit counted.
        """
        if not self.alive or self.state is BossState.RUNNING_AWAY:
            return False
        self.health -= 1
        if self.health <= 0:
            self.health = 0
            self.alive = False
            self.vx = 0.0
            self.vy = 0.0
            return True
        self.run_away(now)
        return True
