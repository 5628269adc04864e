"""Music and sound-effect playback."""

from __future__ import annotations

import logging
import os

import pygame

from .assets import AssetError

_PygameError = pygame.error
_log = logging.getLogger(__name__)


def _music_repeats(loops: int) -> int:
    """Convert a play count (negative for forever) to pygame's repeat count."""
    if loops < 0:
        return -1
    return max(loops - 1, 0)


class AudioManager:
    """Plays music and sound effects fetched through an asset manager."""

    FREQUENCY = 44100
    CHANNELS = 2
    BUFFER = 4096

    def __init__(self, assets) -> None:
        self._assets = assets
        self._paused = False
        try:
            pygame.mixer.init(
                frequency=self.FREQUENCY, size=-16, channels=self.CHANNELS, buffer=self.BUFFER
            )
        except _PygameError as exc:
            _log.error("Unable to initialize audio: %s", exc)
            self.available = False
        else:
            self.available = True

    def play_music(self, music, loops: int = -1) -> None:
        """Play ``music`` (a file name or a loaded handle); negative loops repeat forever."""
        if not self.available:
            return
        if isinstance(music, str):
            music = self._assets.get_music(music)
        try:
            pygame.mixer.music.load(os.fspath(music))
            pygame.mixer.music.play(loops=_music_repeats(loops))
        except _PygameError as exc:
            raise AssetError(f"Unable to play music {music}: {exc}") from exc
        self._paused = False

    def pause_music(self) -> None:
        """Pause the music if it is playing."""
        if self.available and not self._paused and pygame.mixer.music.get_busy():
            pygame.mixer.music.pause()
            self._paused = True

    def resume_music(self) -> None:
        """Resume the music if it is paused."""
        if self.available and self._paused:
            pygame.mixer.music.unpause()
            self._paused = False

    def play_sfx(self, sfx, loops: int = 0, channel: int = -1) -> None:
        """Play ``sfx`` (a file name or a sound), repeated ``loops`` extra times."""
        if not self.available:
            return
        if isinstance(sfx, str):
            sfx = self._assets.get_sfx(sfx)
        if channel < 0:
            sfx.play(loops=loops)
        else:
            pygame.mixer.Channel(channel).play(sfx, loops=loops)

    def is_music_playing(self) -> bool:
        """True while music is playing or paused."""
        if not self.available:
            return False
        return self._paused or bool(pygame.mixer.music.get_busy())

    def close(self) -> None:
        """Shut the audio device down."""
        if self.available:
            pygame.mixer.quit()
        self.available = False
        self._paused = False