"""Tests for the configuration system."""

import pytest

from sidescroll_brawler.config import (
    WorldConfig,
    PlayerConfig,
    EnemyConfig,
    BossConfig,
    CameraConfig,
    GameConfig,
    CONFIGS,
    REFERENCE_FRAME_MS,
    get_config,
)


class TestWorldConfig:
    def test_defaults(self):
        config = WorldConfig()
        assert config.width == 5000.0
        assert config.height == 600.0
        assert config.gravity == 0.5

    def test_ground_line(self):
        assert WorldConfig().ground_y == 550.0
        assert WorldConfig(height=720.0, ground_thickness=40.0).ground_y == 680.0

    def test_sample(self):
        config = WorldConfig.sample()
        assert WorldConfig.GRAVITY_RANGE[0] <= config.gravity <= WorldConfig.GRAVITY_RANGE[1]


class TestPlayerConfig:
    def test_defaults(self):
        config = PlayerConfig()
        assert (config.width, config.height) == (50.0, 70.0)
        assert config.speed == 5.0
        assert config.jump_strength == 12.0
        assert config.lives == 3
        assert config.punch_duration == 300.0
        assert config.punch_cooldown == 400.0
        assert config.invincibility_duration == 2000.0

    def test_sample_within_ranges(self):
        config = PlayerConfig.sample()
        assert PlayerConfig.SPEED_RANGE[0] <= config.speed <= PlayerConfig.SPEED_RANGE[1]
        assert PlayerConfig.JUMP_STRENGTH_RANGE[0] <= config.jump_strength <= PlayerConfig.JUMP_STRENGTH_RANGE[1]
        assert PlayerConfig.PUNCH_COOLDOWN_RANGE[0] <= config.punch_cooldown <= PlayerConfig.PUNCH_COOLDOWN_RANGE[1]
        # Survivability is not randomized
        assert config.lives == 3


class TestEnemyConfig:
    def test_hysteresis_band(self):
        config = EnemyConfig()
        assert config.chase_distance == 250.0
        assert config.stop_chase_distance == 300.0

    def test_rejects_inverted_band(self):
        with pytest.raises(ValueError, match="stop_chase_distance"):
            EnemyConfig(chase_distance=300.0, stop_chase_distance=300.0)


class TestBossConfig:
    def test_defaults(self):
        config = BossConfig()
        assert config.max_health == 10
        assert config.hitbox_inset == (0.25, 0.2, 0.5, 0.6)

    @pytest.mark.parametrize("inset", [
        (0.0, 0.2, 0.5, 0.6),
        (0.25, 0.2, 0.75, 0.6),
        (0.25, 0.2, 1.0, 0.6),
        (0.25, 0.5, 0.5, 0.5),
    ])
    def test_rejects_hitbox_touching_edges(self, inset):
        with pytest.raises(ValueError, match="hitbox_inset"):
            BossConfig(hitbox_inset=inset)

    def test_rejects_non_positive_run_away(self):
        with pytest.raises(ValueError):
            BossConfig(run_away_duration=0.0)


class TestGameConfig:
    def test_defaults(self):
        config = GameConfig()
        assert config.win_coins == 20
        assert config.max_delta_ms == 100.0
        assert config.respawn_mode == "camera"
        assert config.screen_width == 800
        assert config.screen_height == 600
        assert REFERENCE_FRAME_MS == pytest.approx(16.667, rel=1e-3)

    def test_rejects_unknown_respawn_mode(self):
        with pytest.raises(ValueError, match="respawn_mode"):
            GameConfig(respawn_mode="checkpoint")

    def test_rejects_non_positive_delta_clamp(self):
        with pytest.raises(ValueError):
            GameConfig(max_delta_ms=0.0)

    def test_sample_full(self):
        config = GameConfig.sample_full()
        assert isinstance(config.world, WorldConfig)
        assert EnemyConfig.CHASE_SPEED_RANGE[0] <= config.enemy.chase_speed <= EnemyConfig.CHASE_SPEED_RANGE[1]

    def test_to_dict(self):
        d = GameConfig().to_dict()
        assert d["world"]["width"] == 5000.0
        assert d["player"]["lives"] == 3
        assert d["camera"]["deadzone_width"] == 200.0
        assert d["respawn_mode"] == "camera"

    def test_dict_round_trip(self):
        config = GameConfig(
            player=PlayerConfig(speed=6.0),
            boss=BossConfig(max_health=4),
            camera=CameraConfig(symmetric=False),
            respawn_mode="start",
        )
        restored = GameConfig.from_dict(config.to_dict())
        assert restored == config
        assert isinstance(restored.boss.hitbox_inset, tuple)

    def test_from_partial_dict(self):
        config = GameConfig.from_dict({"player": {"lives": 5}})
        assert config.player.lives == 5
        assert config.world.width == 5000.0


class TestPresets:
    def test_all_presets_exist(self):
        for name in ("default", "classic", "hard", "easy"):
            assert isinstance(CONFIGS[name], GameConfig)

    def test_classic_rules(self):
        config = get_config("classic")
        assert config.player.punch_cooldown == 0.0
        assert config.player.punch_knockback == 0.0
        assert config.respawn_mode == "start"

    def test_hard_is_harder(self):
        default, hard = get_config("default"), get_config("hard")
        assert hard.enemy.chase_speed > default.enemy.chase_speed
        assert hard.boss.max_health > default.boss.max_health

    def test_returns_independent_copy(self):
        config = get_config("default")
        assert config == CONFIGS["default"]
        assert config is not CONFIGS["default"]
        assert get_config("default") is not config

        config.player.lives = 99
        config.boss.max_health = 1
        assert CONFIGS["default"].player.lives == 3
        assert CONFIGS["default"].boss.max_health == 10
        assert get_config("default").player.lives == 3

    def test_unknown_preset(self):
        with pytest.raises(ValueError, match="Unknown config preset"):
            get_config("nightmare")
