"""Cross-entity collision and combat resolution.

Runs once per tick after every entity has updated itself. Decides stomps,
punch kills, damage taken and pickups, then lands every mover on platforms
and the ground. Terminal outcomes (game over, win) are only ever set here.
"""

import logging
from typing import List, TYPE_CHECKING

from . import physics
from .entities import Enemy, Facing, Player
from .sounds import (
    SoundBus,
    SOUND_STOMP,
    SOUND_HIT,
    SOUND_DAMAGE,
    SOUND_COIN,
    SOUND_BOSS_HIT,
)

if TYPE_CHECKING:
    from .world import GameWorld

logger = logging.getLogger(__name__)


# Particle colors (RGB)
COLOR_STOMP = (255, 200, 50)
COLOR_PUNCH = (255, 140, 60)
COLOR_DAMAGE = (224, 108, 117)
COLOR_COIN = (255, 215, 0)
COLOR_BOSS_HIT = (198, 120, 221)


def resolve_enemy_overlaps(enemies: List[Enemy], world_width: float) -> int:
    """Push overlapping alive enemies apart and bounce them.

    Each enemy of an overlapping pair moves half the x-overlap away from the
    other and both invert vx. A pair pushed past a world edge is shifted back
    as a unit, so the two stay touching. This is positional decollision only.

    Returns:
        Number of pairs separated.
    """
    alive = [e for e in enemies if e.alive]
    separated = 0
    for i, a in enumerate(alive):
        for b in alive[i + 1:]:
            a_bb, b_bb = a.bounds, b.bounds
            if not physics.overlaps(a_bb, b_bb):
                continue
            half = physics.overlap_x(a_bb, b_bb) / 2
            left, right = (a, b) if a.x <= b.x else (b, a)
            left.x -= half
            right.x = left.x + left.width
            if left.x < 0:
                left.x = 0.0
                right.x = left.width
            elif right.x > world_width - right.width:
                right.x = world_width - right.width
                left.x = right.x - left.width
            for enemy in (a, b):
                enemy.vx = -enemy.vx
                if enemy.vx:
                    enemy.facing = Facing.RIGHT if enemy.vx > 0 else Facing.LEFT
            separated += 1
    return separated


def _center_x(bb) -> float:
    return (bb.left + bb.right) / 2


def is_stomp(player: Player, target_top: float) -> bool:
    """Falling, and fully above the target before this tick's vertical move."""
    return player.vy > 0 and player.prev_y + player.height <= target_top


def stomp_contact(player: Player, target_bb) -> bool:
    """Stomp on a target the player touched at any point of this tick's fall.

    Tested against the swept box, so a long step that carries the player
    clean through the target still lands on it.
    """
    return (
        is_stomp(player, physics.top_of(target_bb))
        and physics.overlaps(physics.swept_bounds(player), target_bb)
    )


class CollisionResolver:
    """Per-tick combat, pickup and landing pass over a GameWorld."""

    def __init__(self, sounds: SoundBus):
        self.sounds = sounds

    def resolve(self, world: "GameWorld", now: float) -> None:
        """Run the pass in priority order: enemies, boss, coins, landings."""
        self._enemy_combat(world, now)
        if not world.game_over:
            self._boss_combat(world, now)
        if not world.game_over:
            self._coin_pickups(world, now)
        self._landings(world)

    def _knockback_direction(self, player: Player, target_bb) -> int:
        return -1 if _center_x(target_bb) > _center_x(player.bounds) else 1

    def _stomp_on(self, player: Player, target_bb) -> None:
        player.y = physics.top_of(target_bb) - player.height
        player.bounce()

    def _enemy_combat(self, world: "GameWorld", now: float) -> None:
        player = world.player
        for enemy in world.enemies:
            if not enemy.alive or world.game_over:
                continue
            enemy_bb = enemy.bounds
            stomped = stomp_contact(player, enemy_bb)
            if not stomped and not physics.overlaps(player.bounds, enemy_bb):
                continue
            if player.is_invincible:
                continue

            cx, cy = _center_x(enemy_bb), enemy.y + enemy.height / 2
            if stomped:
                enemy.kill()
                self._stomp_on(player, enemy_bb)
                world.stats.enemies_stomped += 1
                world.spawn_particles(cx, cy, COLOR_STOMP)
                self.sounds.play(SOUND_STOMP)
                logger.debug("Enemy stomped at x=%.0f", enemy.x)
            elif player.is_punching:
                enemy.kill()
                if player.config.punch_knockback > 0:
                    player.apply_knockback(self._knockback_direction(player, enemy_bb))
                world.stats.enemies_punched += 1
                world.spawn_particles(cx, cy, COLOR_PUNCH)
                self.sounds.play(SOUND_HIT)
                logger.debug("Enemy punched at x=%.0f", enemy.x)
            else:
                self._damage_player(world, now)

    def _boss_combat(self, world: "GameWorld", now: float) -> None:
        boss = world.boss
        player = world.player
        if boss is None or not boss.alive:
            return
        hitbox = boss.hitbox
        stomped = stomp_contact(player, hitbox)
        if not stomped and not physics.overlaps(player.bounds, hitbox):
            return
        if player.is_invincible:
            return

        if stomped:
            counted = boss.take_hit(now)
            self._stomp_on(player, hitbox)
        elif player.is_punching:
            counted = boss.take_hit(now)
            if counted and player.config.punch_knockback > 0:
                player.apply_knockback(self._knockback_direction(player, hitbox))
        else:
            self._damage_player(world, now)
            return

        if not counted:
            return
        world.stats.boss_hits += 1
        center_y = (physics.top_of(hitbox) + physics.bottom_of(hitbox)) / 2
        world.spawn_particles(_center_x(hitbox), center_y, COLOR_BOSS_HIT)
        self.sounds.play(SOUND_BOSS_HIT)
        logger.debug("Boss hit, health %d/%d", boss.health, boss.max_health)
        if not boss.alive:
            world.set_win()

    def _damage_player(self, world: "GameWorld", now: float) -> None:
        player = world.player
        remaining = player.lose_life()
        world.stats.damage_taken += 1
        world.spawn_particles(
            player.x + player.width / 2, player.y + player.height / 2, COLOR_DAMAGE
        )
        self.sounds.play(SOUND_DAMAGE)
        logger.debug("Player hit, %d lives left", remaining)
        if remaining > 0:
            world.respawn_player(now)
        else:
            world.set_game_over()

    def _coin_pickups(self, world: "GameWorld", now: float) -> None:
        player = world.player
        player_bb = player.bounds
        for coin in world.coins:
            if coin.collected or not physics.overlaps(player_bb, coin.bounds):
                continue
            if not coin.collect():
                continue
            player.coins_collected = min(player.coins_collected + 1, world.config.win_coins)
            world.spawn_particles(coin.x + coin.width / 2, coin.y + coin.height / 2, COLOR_COIN)
            self.sounds.play(SOUND_COIN)
            logger.debug("Coin %d/%d", player.coins_collected, world.config.win_coins)
            if player.coins_collected >= world.config.win_coins:
                world.spawn_boss(now)

    def _landings(self, world: "GameWorld") -> None:
        ground_y = world.config.world.ground_y
        world_width = world.config.world.width
        for mover in world.movers():
            physics.land_on_platforms(mover, world.platforms)
            physics.land_on_ground(mover, ground_y)
            hit = physics.clamp_to_world(mover, world_width)
            if hit == 1 and mover is world.player:
                mover.vx = 0.0
