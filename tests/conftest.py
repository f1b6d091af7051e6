"""Pytest configuration and shared fixtures."""

import os

# Ensure headless pygame for all tests
os.environ['SDL_VIDEODRIVER'] = 'dummy'
os.environ['SDL_AUDIODRIVER'] = 'dummy'

import pytest

from sidescroll_brawler.config import GameConfig
from sidescroll_brawler.level_gen import LevelSpec
from sidescroll_brawler.sounds import RecordingSoundBus
from sidescroll_brawler.world import GameWorld


@pytest.fixture
def game_config():
    """Default game configuration."""
    return GameConfig()


@pytest.fixture
def sounds():
    return RecordingSoundBus()


@pytest.fixture
def make_world(sounds):
    """Build a world on a hand-made level.

    Entity lists default to empty so a test only contains what it places.
    """

    def _make(config=None, platforms=(), coins=(), enemies=(), player_x=100.0, seed=0):
        config = config or GameConfig()
        spec = LevelSpec(
            platforms=list(platforms),
            coins=list(coins),
            enemies=list(enemies),
            player_start=(player_x, config.world.ground_y - config.player.height),
            world_width=config.world.width,
        )
        return GameWorld(config, level=spec, sounds=sounds, seed=seed)

    return _make
