"""World state aggregate: every entity collection plus the per-tick pipeline.

GameWorld owns the player, enemies, boss, platforms, coins, particles and
camera. reset() rebuilds all of it from a LevelSpec, and step() advances one
tick in the fixed order:

    player -> enemy chase -> enemy/enemy separation -> coin bob -> boss
    -> collision resolver -> particles -> camera
"""

import logging
import random
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional, Tuple

from .camera import Camera
from .collisions import CollisionResolver, resolve_enemy_overlaps
from .config import GameConfig, REFERENCE_FRAME_MS
from .controls import InputState
from .entities import Boss, Coin, Enemy, Particle, Platform, Player
from .level_gen import LevelSpec, build_level, default_level
from .sounds import (
    SoundBus,
    SOUND_JUMP,
    SOUND_PUNCH,
    SOUND_GAME_OVER,
    SOUND_VICTORY,
    TRACK_LEVEL,
    TRACK_BOSS,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HudSnapshot:
    """Read-only data pushed to the HUD after each tick."""
    coins_collected: int
    coins_needed: int
    stamina_percent: float
    lives: int
    boss_health: Optional[int] = None
    boss_max_health: Optional[int] = None


@dataclass
class WorldStats:
    """Event counters for the current run."""
    ticks: int = 0
    enemies_stomped: int = 0
    enemies_punched: int = 0
    boss_hits: int = 0
    damage_taken: int = 0

    @property
    def enemies_defeated(self) -> int:
        return self.enemies_stomped + self.enemies_punched

    def to_dict(self) -> Dict[str, int]:
        return {**asdict(self), "enemies_defeated": self.enemies_defeated}


class GameWorld:
    """All simulation state for one run of a level."""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        level: Optional[LevelSpec] = None,
        sounds: Optional[SoundBus] = None,
        seed: Optional[int] = None,
    ):
        self.config = config or GameConfig()
        self.level = level or default_level(self.config)
        self.sounds = sounds or SoundBus()
        self.seed = seed
        self.resolver = CollisionResolver(self.sounds)

        self.player: Player
        self.enemies: List[Enemy] = []
        self.boss: Optional[Boss] = None
        self.platforms: List[Platform] = []
        self.coins: List[Coin] = []
        self.particles: List[Particle] = []
        self.camera = Camera(self.config.camera, self.config.world.width)
        self.reset()

    def reset(self) -> None:
        """Discard every entity and rebuild the level from scratch."""
        self.rng = random.Random(self.seed)
        self.platforms, self.coins, self.enemies = build_level(self.level, self.config)
        self.player = Player(self.config.player, self.config.world, self.level.player_start)
        self.player.on_ground = True
        self.boss = None
        self.boss_active = False
        self.particles = []
        self.camera.reset()
        self.stats = WorldStats()
        self.game_over = False
        self.win = False
        self.now = 0.0

    @property
    def finished(self) -> bool:
        return self.game_over or self.win

    def movers(self) -> List[Any]:
        """Player, alive enemies and the boss if it is alive."""
        movers: List[Any] = [self.player]
        movers.extend(e for e in self.enemies if e.alive)
        if self.boss is not None and self.boss.alive:
            movers.append(self.boss)
        return movers

    def step(self, delta_ms: float, now: float, inputs: InputState) -> None:
        """Advance the simulation by one tick.

        Args:
            delta_ms: Milliseconds since the previous tick; clamped to
                config.max_delta_ms so a long stall cannot tunnel movers.
            now: Current timestamp (ms), used for every timer.
            inputs: Held-state of the movement keys.
        """
        if self.finished:
            return

        delta = min(max(delta_ms, 0.0), self.config.max_delta_ms)
        scale = delta / REFERENCE_FRAME_MS
        self.now = now
        player = self.player

        player.update(delta, now, inputs, scale)
        if player.jumped:
            self.sounds.play(SOUND_JUMP)

        for enemy in self.enemies:
            enemy.update_chase(player.x, player.y, delta, scale)
        resolve_enemy_overlaps(self.enemies, self.config.world.width)

        for coin in self.coins:
            coin.update(scale)

        if self.boss is not None:
            self.boss.update(player.x + player.width / 2, now, delta, self.rng, scale)

        self.resolver.resolve(self, now)

        for particle in self.particles:
            particle.update(scale)
        self.particles[:] = [p for p in self.particles if p.alive]

        self.camera.update(player.x)
        self.stats.ticks += 1

    def press_punch(self, now: float) -> bool:
        """Edge-triggered punch request; returns True if a punch started."""
        if self.finished:
            return False
        started = self.player.initiate_punch(now)
        if started:
            self.sounds.play(SOUND_PUNCH)
        return started

    def spawn_particles(
        self, x: float, y: float, color: Tuple[int, int, int], count: Optional[int] = None
    ) -> None:
        if count is None:
            count = self.config.particle_count
        self.particles.extend(Particle(x, y, color, rng=self.rng) for _ in range(count))

    def spawn_boss(self, now: float) -> bool:
        """Summon the boss at the right world edge. Only ever happens once."""
        if self.boss_active:
            return False
        cfg = self.config
        self.boss = Boss(
            cfg.world.width - cfg.boss.width,
            cfg.world.ground_y - cfg.boss.height,
            config=cfg.boss,
            world=cfg.world,
        )
        self.boss.next_jump_time = now + cfg.boss.jump_cooldown
        self.boss_active = True
        self.sounds.stop_track(TRACK_LEVEL)
        self.sounds.play_track(TRACK_BOSS)
        logger.info("Boss spawned at t=%.0fms", now)
        return True

    def respawn_player(self, now: float) -> None:
        """Stand the player at the respawn position with a fresh grace window."""
        if self.config.respawn_mode == "start":
            self.player.reset_to_start()
        else:
            self.player.reset_to_camera(self.camera.x)
        self.player.make_invincible(now)

    def set_game_over(self) -> None:
        if self.game_over:
            return
        self.game_over = True
        self.sounds.play(SOUND_GAME_OVER)
        logger.info("Game over after %d ticks", self.stats.ticks)

    def set_win(self) -> None:
        if self.win:
            return
        self.win = True
        self.sounds.stop_track(TRACK_BOSS)
        self.sounds.play(SOUND_VICTORY)
        logger.info("Boss defeated after %d ticks", self.stats.ticks)

    def hud(self) -> HudSnapshot:
        player = self.player
        boss_health = boss_max = None
        if self.boss is not None:
            boss_health = self.boss.health
            boss_max = self.boss.max_health
        return HudSnapshot(
            coins_collected=player.coins_collected,
            coins_needed=self.config.win_coins,
            stamina_percent=100.0 * player.stamina / player.config.max_stamina,
            lives=player.lives,
            boss_health=boss_health,
            boss_max_health=boss_max,
        )

    def get_state(self) -> Dict[str, Any]:
        """Current game state for observation/logging."""
        player = self.player
        state: Dict[str, Any] = {
            "game_over": self.game_over,
            "win": self.win,
            "boss_active": self.boss_active,
            "camera_x": self.camera.x,
            "player_position": (player.x, player.y),
            "player_velocity": (player.vx, player.vy),
            "player_grounded": player.on_ground,
            "player_state": player.state.value,
            "enemies_alive": sum(1 for e in self.enemies if e.alive),
            "coins_remaining": sum(1 for c in self.coins if not c.collected),
            "stats": self.stats.to_dict(),
        }
        if self.boss is not None:
            state["boss_position"] = (self.boss.x, self.boss.y)
            state["boss_state"] = self.boss.state.value
        return state
