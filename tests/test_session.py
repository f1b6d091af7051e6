"""Tests for the session state machine and tick scheduling."""

import pytest

from sidescroll_brawler.config import GameConfig, REFERENCE_FRAME_MS
from sidescroll_brawler.controls import InputState, NO_INPUT
from sidescroll_brawler.level_gen import LevelSpec
from sidescroll_brawler.session import GameSession, SessionState
from sidescroll_brawler.sounds import RecordingSoundBus, TRACK_LEVEL


FRAME_MS = REFERENCE_FRAME_MS


def make_level(config, enemies=(), coins=()):
    return LevelSpec(
        platforms=[],
        coins=list(coins),
        enemies=list(enemies),
        player_start=(100.0, config.world.ground_y - config.player.height),
        world_width=config.world.width,
    )


@pytest.fixture
def session(sounds):
    config = GameConfig()
    return GameSession(config, level=make_level(config), sounds=sounds, seed=0)


class TestLifecycle:
    def test_starts_ready(self, session):
        assert session.state is SessionState.READY
        assert not session.is_terminal

    def test_ready_does_not_simulate(self, session):
        assert session.tick(0, InputState(move_right=True))
        assert session.tick(FRAME_MS, InputState(move_right=True))
        assert session.world.player.x == 100
        assert session.world.stats.ticks == 0

    def test_start_plays_level_music(self, session, sounds):
        session.start()
        assert session.state is SessionState.RUNNING
        assert sounds.current_track == TRACK_LEVEL
        session.start()
        assert sum(1 for e in sounds.events if e == ("play_track", TRACK_LEVEL)) == 1

    def test_first_tick_has_zero_delta(self, session):
        session.start()
        session.tick(5000, InputState(move_right=True))
        assert session.world.player.x == 100
        session.tick(5000 + FRAME_MS, InputState(move_right=True))
        assert session.world.player.x == pytest.approx(105)

    def test_pause_and_resume(self, session):
        session.start()
        session.tick(0)
        session.pause()
        assert session.is_paused
        assert session.tick(FRAME_MS, InputState(move_right=True))
        assert session.world.player.x == 100

        session.resume()
        assert session.state is SessionState.RUNNING
        # The paused interval is not fed into physics
        session.tick(10000, InputState(move_right=True))
        assert session.world.player.x == 100
        session.tick(10000 + FRAME_MS, InputState(move_right=True))
        assert session.world.player.x == pytest.approx(105)

    def test_toggle_pause(self, session):
        session.start()
        session.toggle_pause()
        assert session.state is SessionState.PAUSED
        session.toggle_pause()
        assert session.state is SessionState.RUNNING

    def test_punch_only_while_running(self, session):
        assert not session.press_punch(0)
        session.start()
        assert session.press_punch(0)


class TestTerminalStates:
    def test_game_over_stops_scheduling(self, sounds):
        config = GameConfig()
        session = GameSession(
            config, level=make_level(config, enemies=[(120, 500)]), sounds=sounds,
        )
        session.world.player.lives = 1
        session.start()

        assert not session.tick(0, NO_INPUT)
        assert session.state is SessionState.GAME_OVER
        assert session.world.player.lives == 0
        assert not session.tick(FRAME_MS, NO_INPUT)

    def test_win_stops_scheduling(self, session):
        session.start()
        session.tick(0)
        session.world.set_win()
        assert not session.tick(FRAME_MS)
        assert session.state is SessionState.WON

    def test_pause_ignored_when_terminal(self, session):
        session.start()
        session.world.set_game_over()
        session.tick(0)
        session.pause()
        assert session.state is SessionState.GAME_OVER

    def test_restart(self, sounds):
        config = GameConfig()
        session = GameSession(
            config, level=make_level(config, enemies=[(120, 500)]), sounds=sounds,
        )
        session.world.player.lives = 1
        session.start()
        session.tick(0)
        assert session.state is SessionState.GAME_OVER

        session.restart()
        assert session.state is SessionState.RUNNING
        assert session.world.player.lives == 3
        assert session.world.enemies[0].alive
        assert session.tick(100)
