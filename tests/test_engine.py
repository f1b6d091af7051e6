"""Tests for the pygame front-end, run headless."""

import pygame
import pytest

from sidescroll_brawler.config import GameConfig
from sidescroll_brawler.engine import PlatformerEngine
from sidescroll_brawler.level_gen import LevelGenerator
from sidescroll_brawler.session import SessionState
from sidescroll_brawler.sounds import RecordingSoundBus


@pytest.fixture
def engine():
    engine = PlatformerEngine(GameConfig(), sounds=RecordingSoundBus())
    yield engine
    pygame.quit()


class TestPlatformerEngine:
    def test_initialization(self, engine):
        assert engine.session.state is SessionState.READY
        assert engine.screen.get_size() == (800, 600)
        assert len(engine.world.enemies) == 10

    def test_enter_starts(self, engine):
        engine._on_key_down(pygame.K_RETURN)
        assert engine.session.state is SessionState.RUNNING

    def test_pause_key(self, engine):
        engine._on_key_down(pygame.K_RETURN)
        engine._on_key_down(pygame.K_p)
        assert engine.session.state is SessionState.PAUSED
        engine._keys_pressed[pygame.K_p] = False
        engine._on_key_down(pygame.K_p)
        assert engine.session.state is SessionState.RUNNING

    def test_punch_is_edge_triggered(self, engine):
        engine._on_key_down(pygame.K_RETURN)
        engine._on_key_down(pygame.K_j)
        assert engine.world.player.is_punching
        assert engine.session.sounds.count("punch") == 1

        # Key repeat while held does not punch again
        engine._on_key_down(pygame.K_j)
        assert engine.session.sounds.count("punch") == 1

    def test_held_keys_move_player(self, engine):
        engine._on_key_down(pygame.K_RETURN)
        engine._on_key_down(pygame.K_d)
        engine.update()
        pygame.time.wait(20)
        engine.update()
        assert engine.world.player.x > 100

    def test_restart_only_when_over(self, engine):
        engine._on_key_down(pygame.K_RETURN)
        engine._on_key_down(pygame.K_r)
        assert engine.session.state is SessionState.RUNNING

        engine.world.set_game_over()
        engine.update()
        assert engine.session.state is SessionState.GAME_OVER
        engine._on_key_down(pygame.K_r)
        assert engine.session.state is SessionState.RUNNING

    def test_debug_toggle(self, engine):
        engine._on_key_down(pygame.K_F1)
        assert engine.debug

    @pytest.mark.parametrize("state", list(SessionState))
    def test_render_every_state(self, engine, state):
        engine.debug = True
        engine.world.spawn_boss(0)
        engine.world.spawn_particles(300, 300, (255, 255, 255))
        engine.session.state = state
        engine.render()

    def test_generated_level(self):
        level = LevelGenerator().generate(seed=5)
        engine = PlatformerEngine(level=level)
        try:
            assert engine.world.level is level
        finally:
            pygame.quit()
