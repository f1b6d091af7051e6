"""pygame drawing of the world, HUD and session overlays.

Pure reads of world state: nothing here mutates the simulation. Entities are
drawn as flat rectangles; the camera offset is subtracted at draw time only.
"""

from typing import Tuple

import pygame

from . import physics
from .entities import BossState, EnemyState, Facing, PlayerState
from .world import GameWorld, HudSnapshot


# Colors (RGB)
COLOR_BG = (40, 44, 52)
COLOR_GROUND = (92, 99, 112)
COLOR_PLATFORM = (152, 195, 121)
COLOR_PLAYER = (97, 175, 239)
COLOR_PLAYER_PUNCH = (86, 182, 194)
COLOR_ENEMY = (224, 108, 117)
COLOR_ENEMY_CHASING = (255, 80, 80)
COLOR_BOSS = (198, 120, 221)
COLOR_BOSS_FLEEING = (150, 150, 220)
COLOR_HITBOX = (255, 255, 255)
COLOR_COIN = (255, 215, 0)
COLOR_TEXT = (220, 223, 228)
COLOR_STAMINA = (152, 195, 121)
COLOR_BOSS_BAR = (224, 108, 117)


def _rect(world: GameWorld, x: float, y: float, w: float, h: float) -> pygame.Rect:
    return pygame.Rect(int(world.camera.to_screen(x)), int(y), int(w), int(h))


def draw_world(surface: pygame.Surface, world: GameWorld, debug: bool = False) -> None:
    """Draw every visible entity at its camera-relative position."""
    surface.fill(COLOR_BG)
    cfg = world.config.world

    ground_y = cfg.ground_y
    pygame.draw.rect(
        surface, COLOR_GROUND,
        (0, int(ground_y), surface.get_width(), int(cfg.ground_thickness)),
    )

    for plat in world.platforms:
        pygame.draw.rect(surface, COLOR_PLATFORM, _rect(world, plat.x, plat.y, plat.width, plat.height))

    for coin in world.coins:
        if coin.collected:
            continue
        r = _rect(world, coin.x, coin.y, coin.width, coin.height)
        pygame.draw.ellipse(surface, COLOR_COIN, r)

    for enemy in world.enemies:
        if not enemy.alive:
            continue
        color = COLOR_ENEMY_CHASING if enemy.state is EnemyState.CHASING else COLOR_ENEMY
        pygame.draw.rect(surface, color, _rect(world, enemy.x, enemy.y, enemy.width, enemy.height))

    boss = world.boss
    if boss is not None and boss.alive:
        color = COLOR_BOSS_FLEEING if boss.state is BossState.RUNNING_AWAY else COLOR_BOSS
        pygame.draw.rect(surface, color, _rect(world, boss.x, boss.y, boss.width, boss.height))
        if debug:
            hb = boss.hitbox
            top, bottom = physics.top_of(hb), physics.bottom_of(hb)
            pygame.draw.rect(
                surface, COLOR_HITBOX,
                _rect(world, hb.left, top, hb.right - hb.left, bottom - top),
                width=2,
            )

    player = world.player
    if player.visible:
        color = COLOR_PLAYER_PUNCH if player.state is PlayerState.PUNCHING else COLOR_PLAYER
        body = _rect(world, player.x, player.y, player.width, player.height)
        pygame.draw.rect(surface, color, body)
        if player.state is PlayerState.PUNCHING:
            # Fist on the facing side
            fist_x = body.right if player.facing is Facing.RIGHT else body.left - 20
            pygame.draw.rect(surface, color, (fist_x, body.top + 20, 20, 14))

    for particle in world.particles:
        alpha = max(0, min(255, int(particle.alpha * 255)))
        size = max(1, int(particle.size))
        dot = pygame.Surface((size * 2, size * 2), pygame.SRCALPHA)
        pygame.draw.circle(dot, (*particle.color, alpha), (size, size), size)
        surface.blit(dot, (int(world.camera.to_screen(particle.x)) - size, int(particle.y) - size))


def draw_hud(surface: pygame.Surface, hud: HudSnapshot) -> None:
    """Coins, stamina, lives and (when present) boss health."""
    font = pygame.font.Font(None, 28)

    coins = font.render(f"Coins: {hud.coins_collected}/{hud.coins_needed}", True, COLOR_COIN)
    surface.blit(coins, (10, 10))

    lives = font.render(f"Lives: {hud.lives}", True, COLOR_TEXT)
    surface.blit(lives, (10, 36))

    # Stamina bar
    pygame.draw.rect(surface, COLOR_TEXT, (10, 64, 150, 12), width=1)
    fill = int(148 * hud.stamina_percent / 100.0)
    pygame.draw.rect(surface, COLOR_STAMINA, (11, 65, fill, 10))

    if hud.boss_health is not None and hud.boss_max_health:
        width = surface.get_width()
        label = font.render("BOSS", True, COLOR_BOSS_BAR)
        surface.blit(label, label.get_rect(topright=(width - 220, 10)))
        pygame.draw.rect(surface, COLOR_TEXT, (width - 210, 12, 200, 16), width=1)
        fill = int(198 * hud.boss_health / hud.boss_max_health)
        pygame.draw.rect(surface, COLOR_BOSS_BAR, (width - 209, 13, fill, 14))


def draw_overlay(
    surface: pygame.Surface,
    title: str,
    subtitle: str = "",
    color: Tuple[int, int, int] = COLOR_TEXT,
) -> None:
    """Dim the frame and print centered text (pause/game over/victory)."""
    overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
    overlay.fill((0, 0, 0, 160))
    surface.blit(overlay, (0, 0))

    cx = surface.get_width() // 2
    cy = surface.get_height() // 2
    font = pygame.font.Font(None, 48)
    text = font.render(title, True, color)
    surface.blit(text, text.get_rect(center=(cx, cy - 20)))
    if subtitle:
        small = pygame.font.Font(None, 28)
        sub = small.render(subtitle, True, (200, 200, 200))
        surface.blit(sub, sub.get_rect(center=(cx, cy + 20)))
