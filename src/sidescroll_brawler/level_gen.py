"""Level layouts: the fixed default level and a seeded random generator.

A LevelSpec is plain data (coordinates only). build_level() turns it into
entities, so a world can be rebuilt from the same spec on every restart.
All y values are world pixels measured downward from the top; layouts are
computed from the configured ground line so they follow the world height.
"""

import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .config import GameConfig
from .entities import Coin, Enemy, Facing, Platform


PLATFORM_HEIGHT = 20.0
COIN_SIZE = 30.0


@dataclass
class LevelSpec:
    """Specification for a level."""
    platforms: List[Tuple[float, float, float]]  # (x, y, width)
    coins: List[Tuple[float, float]]  # (x, base_y)
    enemies: List[Tuple[float, float]]  # (x, y)
    player_start: Tuple[float, float]

    world_width: float = 5000.0
    seed: Optional[int] = None
    name: str = "default"

    # Metadata for analysis
    stats: dict = field(default_factory=dict)

    def __post_init__(self):
        self.stats = {
            "num_platforms": len(self.platforms),
            "num_coins": len(self.coins),
            "num_enemies": len(self.enemies),
        }


# Default level, relative to the ground line: (x, height above ground, width)
_DEFAULT_PLATFORMS = [
    (400, 130, 200),
    (750, 230, 150),
    (1100, 150, 200),
    (1450, 260, 180),
    (1800, 140, 220),
    (2200, 220, 160),
    (2550, 320, 150),
    (2900, 160, 200),
    (3300, 250, 180),
    (3700, 140, 220),
    (4100, 230, 160),
    (4450, 150, 200),
]
_DEFAULT_GROUND_COINS = [250, 600, 1250, 1950, 2650, 3200, 3850, 4600]
_DEFAULT_ENEMIES = [900, 1300, 1650, 2000, 2400, 2750, 3100, 3500, 3900, 4300]


def default_level(config: Optional[GameConfig] = None) -> LevelSpec:
    """The fixed hand-made level: 12 platforms, 20 coins, 10 enemies."""
    config = config or GameConfig()
    ground_y = config.world.ground_y

    platforms = [(x, ground_y - h, w) for x, h, w in _DEFAULT_PLATFORMS]

    # One coin floating above each platform, the rest along the ground
    coins = [(x + w / 2 - COIN_SIZE / 2, y - 50) for x, y, w in platforms]
    coins += [(x, ground_y - 80) for x in _DEFAULT_GROUND_COINS]

    enemies = [(x, ground_y - config.enemy.height) for x in _DEFAULT_ENEMIES]

    return LevelSpec(
        platforms=platforms,
        coins=coins,
        enemies=enemies,
        player_start=(config.player.start_x, ground_y - config.player.height),
        world_width=config.world.width,
    )


class LevelGenerator:
    """Random layouts with the same ingredients as the default level.

    Platforms are spread left to right with jitter, each height kept within
    the player's jump reach. Coins go above platforms or along the ground and
    enemies keep a safe distance from the player start.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        num_platforms: int = 12,
        num_enemies: int = 10,
        safe_zone: float = 500.0,
    ):
        self.config = config or GameConfig()
        self.num_platforms = num_platforms
        self.num_enemies = num_enemies
        self.safe_zone = safe_zone

        # Apex of a jump: v^2 / 2g in reference-frame units
        p = self.config.player
        self.max_jump_height = p.jump_strength ** 2 / (2 * self.config.world.gravity)

    def generate(self, seed: Optional[int] = None) -> LevelSpec:
        """Generate a level.

        Args:
            seed: Random seed for reproducibility
        """
        rng = random.Random(seed)
        cfg = self.config
        ground_y = cfg.world.ground_y
        world_width = cfg.world.width

        # Platforms: one per equal-width slot after the start area
        platforms = []
        usable = world_width - self.safe_zone / 2 - 200
        slot = usable / max(self.num_platforms, 1)
        for i in range(self.num_platforms):
            width = rng.uniform(140, 240)
            x = self.safe_zone / 2 + i * slot + rng.uniform(0, max(slot - width, 0))
            height_above = rng.uniform(100, min(340, self.max_jump_height * 0.9 + 100))
            platforms.append((x, ground_y - height_above, width))

        coins = []
        for _ in range(cfg.win_coins):
            if platforms and rng.random() < 0.6:
                px, py, pw = rng.choice(platforms)
                x = px + rng.uniform(0, pw - COIN_SIZE)
                coins.append((x, py - 50))
            else:
                x = rng.uniform(self.safe_zone / 2, world_width - COIN_SIZE)
                coins.append((x, ground_y - 80))

        enemies = []
        for _ in range(self.num_enemies):
            x = rng.uniform(self.safe_zone, world_width - cfg.enemy.width)
            enemies.append((x, ground_y - cfg.enemy.height))
        enemies.sort()

        return LevelSpec(
            platforms=platforms,
            coins=coins,
            enemies=enemies,
            player_start=(cfg.player.start_x, ground_y - cfg.player.height),
            world_width=world_width,
            seed=seed,
            name="generated",
        )


def build_level(
    spec: LevelSpec, config: Optional[GameConfig] = None
) -> Tuple[List[Platform], List[Coin], List[Enemy]]:
    """Instantiate entities from a LevelSpec.

    Returns:
        (platforms, coins, enemies)
    """
    config = config or GameConfig()
    platforms = [Platform(x, y, w, PLATFORM_HEIGHT) for x, y, w in spec.platforms]
    # Stagger bob phases so coins do not move in lockstep
    coins = [Coin(x, y, size=COIN_SIZE, phase=i * 0.7) for i, (x, y) in enumerate(spec.coins)]
    enemies = [
        Enemy(
            x, y,
            config=config.enemy,
            world=config.world,
            facing=Facing.LEFT if i % 2 == 0 else Facing.RIGHT,
        )
        for i, (x, y) in enumerate(spec.enemies)
    ]
    return platforms, coins, enemies
