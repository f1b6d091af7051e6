"""Sound-trigger collaborator.

The simulation never owns audio state; it calls out "play sound X" or
"switch track Y" at well-defined events. SoundBus is the interface,
RecordingSoundBus keeps a log (headless runs, tests, the gym env) and
PygameSoundBus plays real files through pygame.mixer.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import pygame

logger = logging.getLogger(__name__)


# Effect names emitted by the simulation
SOUND_JUMP = "jump"
SOUND_PUNCH = "punch"
SOUND_STOMP = "stomp"
SOUND_HIT = "hit"
SOUND_DAMAGE = "damage"
SOUND_COIN = "coin"
SOUND_BOSS_HIT = "boss_hit"
SOUND_GAME_OVER = "game_over"
SOUND_VICTORY = "victory"

# Music tracks
TRACK_LEVEL = "level"
TRACK_BOSS = "boss"

SOUND_NAMES = (
    SOUND_JUMP, SOUND_PUNCH, SOUND_STOMP, SOUND_HIT, SOUND_DAMAGE,
    SOUND_COIN, SOUND_BOSS_HIT, SOUND_GAME_OVER, SOUND_VICTORY,
)
TRACK_NAMES = (TRACK_LEVEL, TRACK_BOSS)


class SoundBus:
    """Interface the simulation calls into. The base class is silent."""

    def play(self, name: str) -> None:
        pass

    def play_track(self, name: str) -> None:
        pass

    def stop_track(self, name: str) -> None:
        pass

    def pause_all(self) -> None:
        pass

    def resume_all(self) -> None:
        pass


class RecordingSoundBus(SoundBus):
    """Keeps every call in ``events`` as (kind, name) tuples."""

    def __init__(self):
        self.events: List[Tuple[str, str]] = []
        self.current_track: Optional[str] = None

    def play(self, name: str) -> None:
        self.events.append(("play", name))

    def play_track(self, name: str) -> None:
        self.events.append(("play_track", name))
        self.current_track = name

    def stop_track(self, name: str) -> None:
        self.events.append(("stop_track", name))
        if self.current_track == name:
            self.current_track = None

    def count(self, name: str) -> int:
        """How many times an effect was played."""
        return sum(1 for kind, n in self.events if kind == "play" and n == name)

    def clear(self) -> None:
        self.events.clear()


class PygameSoundBus(SoundBus):
    """Plays ``<name>.wav``/``.ogg`` files from a directory via pygame.mixer.

    Loading never blocks startup: a missing mixer or file is logged and the
    corresponding trigger becomes a no-op.
    """

    EXTENSIONS = (".wav", ".ogg", ".mp3")

    def __init__(self, sound_dir: Union[str, Path], volume: float = 0.6):
        self.sound_dir = Path(sound_dir)
        self.volume = volume
        self._effects: Dict[str, "pygame.mixer.Sound"] = {}
        self._tracks: Dict[str, Path] = {}
        self._current_track: Optional[str] = None
        self.enabled = self._init_mixer()
        if self.enabled:
            self._load()

    def _init_mixer(self) -> bool:
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
        except pygame.error as exc:
            logger.warning("Audio disabled, mixer failed to initialize: %s", exc)
            return False
        return True

    def _find(self, name: str) -> Optional[Path]:
        for ext in self.EXTENSIONS:
            path = self.sound_dir / f"{name}{ext}"
            if path.exists():
                return path
        return None

    def _load(self) -> None:
        for name in SOUND_NAMES:
            path = self._find(name)
            if path is None:
                logger.warning("Sound %r not found in %s", name, self.sound_dir)
                continue
            try:
                sound = pygame.mixer.Sound(str(path))
            except (pygame.error, FileNotFoundError) as exc:
                logger.warning("Failed to load sound %s: %s", path, exc)
                continue
            sound.set_volume(self.volume)
            self._effects[name] = sound

        for name in TRACK_NAMES:
            path = self._find(name)
            if path is None:
                logger.warning("Music track %r not found in %s", name, self.sound_dir)
                continue
            self._tracks[name] = path

    def play(self, name: str) -> None:
        sound = self._effects.get(name)
        if sound is not None:
            sound.play()

    def play_track(self, name: str) -> None:
        path = self._tracks.get(name)
        if path is None:
            return
        try:
            pygame.mixer.music.load(str(path))
            pygame.mixer.music.set_volume(self.volume)
            pygame.mixer.music.play(loops=-1)
        except pygame.error as exc:
            logger.warning("Failed to play track %s: %s", path, exc)
            return
        self._current_track = name

    def stop_track(self, name: str) -> None:
        if self.enabled and self._current_track == name:
            pygame.mixer.music.stop()
            self._current_track = None

    def pause_all(self) -> None:
        if self.enabled:
            pygame.mixer.pause()
            pygame.mixer.music.pause()

    def resume_all(self) -> None:
        if self.enabled:
            pygame.mixer.unpause()
            pygame.mixer.music.unpause()
