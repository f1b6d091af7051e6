"""Tests for level layouts and generation."""

import pytest

from sidescroll_brawler.config import GameConfig, WorldConfig
from sidescroll_brawler.entities import Coin, Enemy, Facing, Platform
from sidescroll_brawler.level_gen import (
    COIN_SIZE,
    PLATFORM_HEIGHT,
    LevelGenerator,
    LevelSpec,
    build_level,
    default_level,
)


class TestLevelSpec:
    def test_stats(self):
        spec = LevelSpec(
            platforms=[(100, 400, 200)],
            coins=[(150, 350), (400, 470)],
            enemies=[],
            player_start=(100, 480),
        )
        assert spec.stats == {"num_platforms": 1, "num_coins": 2, "num_enemies": 0}
        assert spec.world_width == 5000.0


class TestDefaultLevel:
    def test_counts(self):
        spec = default_level()
        assert len(spec.platforms) == 12
        assert len(spec.coins) == 20
        assert len(spec.enemies) == 10

    def test_enough_coins_to_win(self):
        config = GameConfig()
        assert len(default_level(config).coins) >= config.win_coins

    def test_layout_above_ground(self):
        config = GameConfig()
        spec = default_level(config)
        ground_y = config.world.ground_y
        for x, y, w in spec.platforms:
            assert 0 <= x and x + w <= config.world.width
            assert y < ground_y
        for x, y in spec.enemies:
            assert y + config.enemy.height == ground_y

    def test_player_start(self):
        spec = default_level()
        assert spec.player_start == (100.0, 480.0)

    def test_follows_world_height(self):
        config = GameConfig(world=WorldConfig(height=720.0))
        spec = default_level(config)
        assert spec.player_start[1] == 720.0 - 50.0 - 70.0


class TestLevelGenerator:
    def test_generate_returns_spec(self):
        spec = LevelGenerator().generate(seed=1)
        assert isinstance(spec, LevelSpec)
        assert len(spec.platforms) == 12
        assert len(spec.coins) == 20
        assert len(spec.enemies) == 10
        assert spec.name == "generated"
        assert spec.seed == 1

    def test_generate_with_seed_is_reproducible(self):
        gen = LevelGenerator()
        spec1 = gen.generate(seed=42)
        spec2 = gen.generate(seed=42)
        assert spec1.platforms == spec2.platforms
        assert spec1.coins == spec2.coins
        assert spec1.enemies == spec2.enemies

    def test_different_seeds_differ(self):
        gen = LevelGenerator()
        assert gen.generate(seed=1).platforms != gen.generate(seed=2).platforms

    @pytest.mark.parametrize("seed", range(10))
    def test_generated_layout_is_valid(self, seed):
        config = GameConfig()
        gen = LevelGenerator(config)
        spec = gen.generate(seed=seed)
        ground_y = config.world.ground_y

        for x, y, w in spec.platforms:
            assert 0 <= x and x + w <= config.world.width
            # Every platform top is within jump reach from the ground
            assert ground_y - y <= gen.max_jump_height + 100

        for x, _ in spec.enemies:
            assert x >= gen.safe_zone
            assert x + config.enemy.width <= config.world.width

        for x, y in spec.coins:
            assert 0 <= x <= config.world.width - COIN_SIZE
            assert y < ground_y

    def test_custom_counts(self):
        spec = LevelGenerator(num_platforms=5, num_enemies=3).generate(seed=0)
        assert len(spec.platforms) == 5
        assert len(spec.enemies) == 3

    def test_max_jump_height(self):
        gen = LevelGenerator()
        # 12^2 / (2 * 0.5)
        assert gen.max_jump_height == pytest.approx(144.0)


class TestBuildLevel:
    def test_builds_entities(self):
        config = GameConfig()
        platforms, coins, enemies = build_level(default_level(config), config)

        assert len(platforms) == 12
        assert all(isinstance(p, Platform) for p in platforms)
        assert all(p.height == PLATFORM_HEIGHT for p in platforms)
        assert all(isinstance(c, Coin) and not c.collected for c in coins)
        assert all(isinstance(e, Enemy) and e.alive for e in enemies)

    def test_enemy_facing_alternates(self):
        _, _, enemies = build_level(default_level())
        assert enemies[0].facing is Facing.LEFT
        assert enemies[1].facing is Facing.RIGHT
        assert enemies[0].vx == -1
        assert enemies[1].vx == 1

    def test_coin_phases_staggered(self):
        _, coins, _ = build_level(default_level())
        assert coins[0].phase != coins[1].phase

    def test_rebuild_gives_fresh_entities(self):
        spec = default_level()
        _, coins1, enemies1 = build_level(spec)
        enemies1[0].kill()
        coins1[0].collect()
        _, coins2, enemies2 = build_level(spec)
        assert enemies2[0].alive
        assert not coins2[0].collected
