from pathlib import Path
from unittest import mock

import pygame

from swarmshooter.audio import AudioManager


class FakeAssets:
    def __init__(self):
        self.music_requests = []
        self.sfx_requests = []
        self.sound = mock.Mock()

    def get_music(self, filename, managed=True):
        self.music_requests.append(filename)
        return Path("Assets") / "Audio" / filename

    def get_sfx(self, filename, managed=True):
        self.sfx_requests.append(filename)
        return self.sound


@mock.patch("swarmshooter.audio.pygame")
def test_init_opens_mixer(fake_pygame):
    manager = AudioManager(FakeAssets())
    assert manager.available
    assert fake_pygame.mixer.init.call_args == mock.call(
        frequency=44100, size=-16, channels=2, buffer=4096
    )


@mock.patch("swarmshooter.audio.pygame")
def test_play_music_by_name(fake_pygame):
    assets = FakeAssets()
    manager = AudioManager(assets)
    manager.play_music("intro.wav")
    assert assets.music_requests == ["intro.wav"]
    assert fake_pygame.mixer.music.load.call_args == mock.call(
        str(Path("Assets") / "Audio" / "intro.wav")
    )
    assert fake_pygame.mixer.music.play.call_args == mock.call(loops=-1)


@mock.patch("swarmshooter.audio.pygame")
def test_play_music_once(fake_pygame):
    fake_pygame.mixer.music.get_busy.return_value = True
    manager = AudioManager(FakeAssets())
    manager.play_music(Path("song.ogg"), 0)
    assert fake_pygame.mixer.music.play.call_args == mock.call(loops=0)
    manager.play_music(Path("song.ogg"), 1)
    assert fake_pygame.mixer.music.play.call_args == mock.call(loops=0)
    assert manager.is_music_playing()


@mock.patch("swarmshooter.audio.pygame")
def test_play_sfx_any_channel(fake_pygame):
    assets = FakeAssets()
    manager = AudioManager(assets)
    manager.play_sfx("SFX/Fire.wav")
    assert assets.sfx_requests == ["SFX/Fire.wav"]
    assert assets.sound.play.call_args == mock.call(loops=0)


@mock.patch("swarmshooter.audio.pygame")
def test_play_sfx_on_channel(fake_pygame):
    manager = AudioManager(FakeAssets())
    sound = mock.Mock()
    manager.play_sfx(sound, 0, 2)
    assert fake_pygame.mixer.Channel.call_args == mock.call(2)
    assert fake_pygame.mixer.Channel.return_value.play.call_args == mock.call(sound, loops=0)
    assert not sound.play.called


@mock.patch("swarmshooter.audio.pygame")
def test_pause_and_resume(fake_pygame):
    fake_pygame.mixer.music.get_busy.return_value = True
    manager = AudioManager(FakeAssets())
    manager.pause_music()
    assert fake_pygame.mixer.music.pause.call_count == 1
    fake_pygame.mixer.music.get_busy.return_value = False
    assert manager.is_music_playing()
    manager.resume_music()
    assert fake_pygame.mixer.music.unpause.call_count == 1


@mock.patch("swarmshooter.audio.pygame")
def test_pause_without_music_does_nothing(fake_pygame):
    fake_pygame.mixer.music.get_busy.return_value = False
    manager = AudioManager(FakeAssets())
    manager.pause_music()
    manager.resume_music()
    assert fake_pygame.mixer.music.pause.call_count == 0
    assert fake_pygame.mixer.music.unpause.call_count == 0
    assert not manager.is_music_playing()


@mock.patch("swarmshooter.audio.pygame")
def test_failed_init_disables_playback(fake_pygame):
    fake_pygame.mixer.init.side_effect = pygame.error("no audio device")
    manager = AudioManager(FakeAssets())
    sound = mock.Mock()
    manager.play_sfx(sound)
    manager.play_music(Path("song.ogg"))
    assert manager.available is False
    assert not sound.play.called
    assert not fake_pygame.mixer.music.play.called


@mock.patch("swarmshooter.audio.pygame")
def test_close_quits_mixer(fake_pygame):
    fake_pygame.mixer.music.get_busy.return_value = True
    manager = AudioManager(FakeAssets())
    manager.close()
    assert fake_pygame.mixer.quit.call_count == 1
    assert not manager.is_music_playing()