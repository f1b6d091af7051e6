"""Configuration system for the side-scrolling brawler.

Every tunable number of the simulation lives in one of the dataclass groups
below. The groups are combined into a GameConfig which is the only object the
world, session, engine and gym environment need to be constructed.

Units:
- Distances are world pixels, y grows downward.
- Velocities and gravity are pixels per reference frame (1/60 s); the world
  scales them by the real frame delta each tick.
- Durations and timestamps are milliseconds.
"""

from dataclasses import dataclass, field, asdict
from typing import Tuple, Dict, Any, ClassVar
import random


REFERENCE_FRAME_MS = 1000.0 / 60.0


@dataclass
class WorldConfig:
    """World geometry and global physics."""
    width: float = 5000.0  # Total scrollable world width (px)
    height: float = 600.0  # World height, equal to viewport height (px)
    ground_thickness: float = 50.0  # Height of the solid floor strip (px)
    gravity: float = 0.5  # Downward acceleration per reference frame (px/frame^2)

    @property
    def ground_y(self) -> float:
        """Floor line. No mover's bottom edge may end a tick below it."""
        return self.height - self.ground_thickness

    GRAVITY_RANGE: ClassVar[Tuple[float, float]] = (0.4, 0.7)

    @classmethod
    def sample(cls) -> "WorldConfig":
        """Sample a world with randomized gravity."""
        return cls(gravity=random.uniform(*cls.GRAVITY_RANGE))


@dataclass
class PlayerConfig:
    """Player movement, stamina, punch and survivability attributes."""
    width: float = 50.0
    height: float = 70.0
    speed: float = 5.0  # Base horizontal speed (px/frame)
    jump_strength: float = 12.0  # Initial upward velocity on jump (px/frame)
    sprint_multiplier: float = 1.5

    max_stamina: float = 100.0
    stamina_depletion_rate: float = 66.7  # Stamina points per second while sprinting
    stamina_recharge_rate: float = 66.7  # Stamina points per second otherwise

    punch_duration: float = 300.0  # ms the punch window stays open
    punch_cooldown: float = 400.0  # ms after punch end before another may start
    punch_knockback: float = 5.0  # px/frame recoil applied on a punch kill (0 disables)

    lives: int = 3
    invincibility_duration: float = 2000.0  # ms of damage immunity after hit/respawn
    flicker_interval: float = 100.0  # ms per visibility toggle while invincible
    stomp_bounce: float = 10.0  # Upward velocity after a stomp (px/frame)

    start_x: float = 100.0
    respawn_offset: float = 100.0  # Distance from camera left edge for camera respawns

    SPEED_RANGE: ClassVar[Tuple[float, float]] = (4.0, 6.5)
    JUMP_STRENGTH_RANGE: ClassVar[Tuple[float, float]] = (10.0, 14.0)
    PUNCH_COOLDOWN_RANGE: ClassVar[Tuple[float, float]] = (200.0, 700.0)

    @classmethod
    def sample(cls) -> "PlayerConfig":
        """Sample movement and punch attributes."""
        return cls(
            speed=random.uniform(*cls.SPEED_RANGE),
            jump_strength=random.uniform(*cls.JUMP_STRENGTH_RANGE),
            punch_cooldown=random.uniform(*cls.PUNCH_COOLDOWN_RANGE),
        )


@dataclass
class EnemyConfig:
    """Roaming enemy behaviour."""
    width: float = 50.0
    height: float = 50.0
    idle_speed: float = 1.0  # Roaming speed while idle (px/frame)
    chase_speed: float = 2.0  # Speed while chasing the player (px/frame)
    chase_distance: float = 250.0  # Engage when |dx| <= this
    stop_chase_distance: float = 300.0  # Disengage when |dx| > this

    CHASE_SPEED_RANGE: ClassVar[Tuple[float, float]] = (1.5, 3.0)

    def __post_init__(self):
        if self.stop_chase_distance <= self.chase_distance:
            raise ValueError(
                f"stop_chase_distance ({self.stop_chase_distance}) must be greater "
                f"than chase_distance ({self.chase_distance})"
            )

    @classmethod
    def sample(cls) -> "EnemyConfig":
        """Sample a chase speed."""
        return cls(chase_speed=random.uniform(*cls.CHASE_SPEED_RANGE))


@dataclass
class BossConfig:
    """Boss size, weak point and behaviour."""
    width: float = 150.0
    height: float = 150.0
    max_health: int = 10
    speed: float = 3.0  # Chase and entry speed (px/frame)
    run_away_speed: float = 4.0
    run_away_duration: float = 1000.0  # ms spent fleeing after a hit
    entry_distance: float = 200.0  # How far inside the right edge ENTERING ends

    jump_chance: float = 0.01  # Bernoulli probability per tick once cooldown elapsed
    jump_cooldown: float = 2000.0  # ms between jumps
    jump_strength: float = 15.0

    # Weak point, relative to the bounding box: (x, y, width, height) fractions
    hitbox_inset: Tuple[float, float, float, float] = (0.25, 0.2, 0.5, 0.6)

    def __post_init__(self):
        fx, fy, fw, fh = self.hitbox_inset
        if not (0.0 < fw < 1.0 and 0.0 < fh < 1.0):
            raise ValueError(f"hitbox_inset size must be a strict fraction, got {self.hitbox_inset}")
        if fx <= 0.0 or fy <= 0.0 or fx + fw >= 1.0 or fy + fh >= 1.0:
            raise ValueError(f"hitbox_inset must lie strictly inside the boss box, got {self.hitbox_inset}")
        if self.run_away_duration <= 0:
            raise ValueError("run_away_duration must be positive")


@dataclass
class CameraConfig:
    """Viewport and deadzone-follow settings."""
    viewport_width: float = 800.0
    viewport_height: float = 600.0
    deadzone_width: float = 200.0  # Band width at each screen edge
    symmetric: bool = True  # Also scroll left when the player nears the left edge


@dataclass
class GameConfig:
    """Complete game configuration combining all parameter groups."""
    world: WorldConfig = field(default_factory=WorldConfig)
    player: PlayerConfig = field(default_factory=PlayerConfig)
    enemy: EnemyConfig = field(default_factory=EnemyConfig)
    boss: BossConfig = field(default_factory=BossConfig)
    camera: CameraConfig = field(default_factory=CameraConfig)

    win_coins: int = 20  # Coins needed to summon the boss
    max_delta_ms: float = 100.0  # Frame deltas above this are clamped
    respawn_mode: str = "camera"  # "start" or "camera"
    particle_count: int = 15  # Particles per burst

    # Display settings
    fps: int = 60

    RESPAWN_MODES: ClassVar[Tuple[str, ...]] = ("start", "camera")

    def __post_init__(self):
        if self.respawn_mode not in self.RESPAWN_MODES:
            raise ValueError(f"Unknown respawn_mode: {self.respawn_mode!r}")
        if self.max_delta_ms <= 0:
            raise ValueError("max_delta_ms must be positive")

    @property
    def screen_width(self) -> int:
        return int(self.camera.viewport_width)

    @property
    def screen_height(self) -> int:
        return int(self.camera.viewport_height)

    @classmethod
    def sample_full(cls) -> "GameConfig":
        """Sample a randomized configuration (for domain randomization)."""
        return cls(
            world=WorldConfig.sample(),
            player=PlayerConfig.sample(),
            enemy=EnemyConfig.sample(),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to nested dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "GameConfig":
        """Create from a nested dictionary as produced by to_dict()."""
        boss = dict(d.get("boss", {}))
        if "hitbox_inset" in boss:
            boss["hitbox_inset"] = tuple(boss["hitbox_inset"])
        return cls(
            world=WorldConfig(**d.get("world", {})),
            player=PlayerConfig(**d.get("player", {})),
            enemy=EnemyConfig(**d.get("enemy", {})),
            boss=BossConfig(**boss),
            camera=CameraConfig(**d.get("camera", {})),
            win_coins=d.get("win_coins", 20),
            max_delta_ms=d.get("max_delta_ms", 100.0),
            respawn_mode=d.get("respawn_mode", "camera"),
            particle_count=d.get("particle_count", 15),
            fps=d.get("fps", 60),
        )


def get_config(name: str) -> GameConfig:
    """Look up a preset by name and return a private copy of it."""
    try:
        preset = CONFIGS[name]
    except KeyError:
        raise ValueError(f"Unknown config preset: {name!r} (choose from {sorted(CONFIGS)})") from None
    return GameConfig.from_dict(preset.to_dict())


# Predefined configurations
CONFIGS = {
    # Canonical rules: punch cooldown, punch knockback, respawn near camera
    "default": GameConfig(),

    # Earliest rule set: punches chain freely, no recoil, respawn at start
    "classic": GameConfig(
        player=PlayerConfig(punch_cooldown=0.0, punch_knockback=0.0),
        respawn_mode="start",
    ),

    # Faster enemies that notice the player from further away
    "hard": GameConfig(
        player=PlayerConfig(lives=2, invincibility_duration=1200.0),
        enemy=EnemyConfig(chase_speed=3.0, chase_distance=350.0, stop_chase_distance=450.0),
        boss=BossConfig(max_health=15, speed=3.5, jump_chance=0.02),
    ),

    # Generous stamina and a slower boss
    "easy": GameConfig(
        player=PlayerConfig(lives=3, stamina_recharge_rate=100.0, invincibility_duration=3000.0),
        enemy=EnemyConfig(chase_speed=1.5),
        boss=BossConfig(max_health=6, speed=2.5),
    ),
}
