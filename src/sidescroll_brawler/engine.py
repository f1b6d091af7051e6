"""Interactive pygame front-end.

Coordinates keyboard input, the GameSession and rendering into a playable
game. All game rules live in the session/world; this module is glue.
"""

import logging
from typing import Dict, Optional

import pygame

from .config import GameConfig
from .controls import input_from_keys, is_bound
from .level_gen import LevelSpec
from .render import draw_hud, draw_overlay, draw_world, COLOR_COIN, COLOR_ENEMY
from .session import GameSession, SessionState
from .sounds import SoundBus

logger = logging.getLogger(__name__)


class PlatformerEngine:
    """Main game engine.

    Handles:
    - Frame loop driven by pygame's clock
    - Keyboard input (held keys + edge-triggered punch)
    - Rendering and HUD
    - Session control (start, pause, restart)
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        level: Optional[LevelSpec] = None,
        sounds: Optional[SoundBus] = None,
        seed: Optional[int] = None,
    ):
        self.config = config or GameConfig()

        pygame.init()
        self.screen = pygame.display.set_mode(
            (self.config.screen_width, self.config.screen_height)
        )
        pygame.display.set_caption("Sidescroll Brawler")
        self.clock = pygame.time.Clock()

        self.session = GameSession(self.config, level=level, sounds=sounds, seed=seed)
        self.running = False
        self.debug = False
        self._keys_pressed: Dict[int, bool] = {}

    @property
    def world(self):
        return self.session.world

    def handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                self._on_key_down(event.key)
            elif event.type == pygame.KEYUP:
                self._keys_pressed[event.key] = False

    def _on_key_down(self, key: int) -> None:
        # Punch fires once per press, before the held-state is recorded
        if is_bound("punch", key) and not self._keys_pressed.get(key, False):
            self.session.press_punch(pygame.time.get_ticks())
        self._keys_pressed[key] = True

        if key == pygame.K_F1:
            self.debug = not self.debug
        elif is_bound("start", key) and self.session.state is SessionState.READY:
            self.session.start()
        elif is_bound("pause", key):
            self.session.toggle_pause()
        elif is_bound("restart", key) and self.session.is_terminal:
            self.session.restart()

    def update(self) -> None:
        """Tick the session with the current keyboard snapshot."""
        inputs = input_from_keys(self._keys_pressed)
        self.session.tick(pygame.time.get_ticks(), inputs)

    def render(self) -> None:
        """Render current game state."""
        draw_world(self.screen, self.world, debug=self.debug)
        draw_hud(self.screen, self.world.hud())

        state = self.session.state
        if state is SessionState.READY:
            draw_overlay(self.screen, "SIDESCROLL BRAWLER", "Press Enter to start")
        elif self.session.is_paused:
            draw_overlay(self.screen, "PAUSED", "Press P to resume")
        elif state is SessionState.GAME_OVER:
            draw_overlay(self.screen, "GAME OVER", "Press R to restart", COLOR_ENEMY)
        elif state is SessionState.WON:
            draw_overlay(self.screen, "YOU WIN!", "Press R to restart", COLOR_COIN)

        if self.debug:
            font = pygame.font.Font(None, 22)
            p = self.world.player
            text = (
                f"pos=({p.x:.0f},{p.y:.0f}) vel=({p.vx:.1f},{p.vy:.1f}) "
                f"state={p.state.value} cam={self.world.camera.x:.0f} fps={self.clock.get_fps():.0f}"
            )
            surface = font.render(text, True, (200, 200, 200))
            self.screen.blit(surface, (10, self.config.screen_height - 24))

        pygame.display.flip()

    def run(self) -> None:
        """Main game loop."""
        self.running = True
        logger.info("Engine running at %d fps", self.config.fps)

        while self.running:
            self.handle_events()
            self.update()
            self.render()
            self.clock.tick(self.config.fps)

        pygame.quit()
