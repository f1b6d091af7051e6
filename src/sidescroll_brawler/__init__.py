"""sidescroll-brawler: 2D side-scrolling platformer with a testable simulation core.

A player traverses a 5000 px world, collects coins, stomps or punches roaming
enemies and finally fights a boss with a weak-point hitbox. The simulation
(world.py, collisions.py, entities.py) is pure Python driven by explicit
timestamps, so it runs the same under the pygame engine, the Gymnasium
environment and the test suite.
"""

from .config import (
    GameConfig,
    WorldConfig,
    PlayerConfig,
    EnemyConfig,
    BossConfig,
    CameraConfig,
    CONFIGS,
    get_config,
)
from .controls import InputState
from .entities import Player, Enemy, Boss, Platform, Coin, Particle, Facing, PlayerState, EnemyState, BossState
from .camera import Camera
from .collisions import CollisionResolver, resolve_enemy_overlaps
from .level_gen import LevelSpec, LevelGenerator, default_level, build_level
from .world import GameWorld, HudSnapshot, WorldStats
from .session import GameSession, SessionState

__all__ = [
    "GameConfig",
    "WorldConfig",
    "PlayerConfig",
    "EnemyConfig",
    "BossConfig",
    "CameraConfig",
    "CONFIGS",
    "get_config",
    "InputState",
    "Player",
    "Enemy",
    "Boss",
    "Platform",
    "Coin",
    "Particle",
    "Facing",
    "PlayerState",
    "EnemyState",
    "BossState",
    "Camera",
    "CollisionResolver",
    "resolve_enemy_overlaps",
    "LevelSpec",
    "LevelGenerator",
    "default_level",
    "build_level",
    "GameWorld",
    "HudSnapshot",
    "WorldStats",
    "GameSession",
    "SessionState",
]
