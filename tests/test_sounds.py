"""Tests for the sound-trigger collaborators."""

import logging

from sidescroll_brawler.sounds import (
    PygameSoundBus,
    RecordingSoundBus,
    SoundBus,
    SOUND_COIN,
    SOUND_JUMP,
    TRACK_BOSS,
    TRACK_LEVEL,
)


class TestSoundBus:
    def test_base_is_silent(self):
        bus = SoundBus()
        bus.play(SOUND_JUMP)
        bus.play_track(TRACK_LEVEL)
        bus.stop_track(TRACK_LEVEL)
        bus.pause_all()
        bus.resume_all()


class TestRecordingSoundBus:
    def test_records_events(self):
        bus = RecordingSoundBus()
        bus.play(SOUND_COIN)
        bus.play(SOUND_COIN)
        bus.play(SOUND_JUMP)
        assert bus.count(SOUND_COIN) == 2
        assert bus.count(SOUND_JUMP) == 1
        assert bus.events[0] == ("play", SOUND_COIN)

    def test_track_switching(self):
        bus = RecordingSoundBus()
        bus.play_track(TRACK_LEVEL)
        assert bus.current_track == TRACK_LEVEL
        bus.stop_track(TRACK_LEVEL)
        bus.play_track(TRACK_BOSS)
        assert bus.current_track == TRACK_BOSS
        bus.stop_track(TRACK_LEVEL)
        assert bus.current_track == TRACK_BOSS

    def test_clear(self):
        bus = RecordingSoundBus()
        bus.play(SOUND_JUMP)
        bus.clear()
        assert bus.events == []


class TestPygameSoundBus:
    def test_missing_files_degrade_gracefully(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING, logger="sidescroll_brawler.sounds"):
            bus = PygameSoundBus(tmp_path)
        bus.play(SOUND_JUMP)
        bus.play_track(TRACK_LEVEL)
        bus.stop_track(TRACK_LEVEL)
        bus.pause_all()
        bus.resume_all()
        assert any(record.levelno == logging.WARNING for record in caplog.records)
