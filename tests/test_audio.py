import pygame

import tetris_audio
from tetris_audio import SoundManager, synthesize


class _FakeChannel:
    def __init__(self):
        self.busy = True

    def get_busy(self):
        return self.busy

    def stop(self):
        self.busy = False


class _FakeSound:
    def __init__(self):
        self.plays = 0
        self.channels = []

    def stop(self):
        pass

    def play(self, loops=0):
        self.plays += 1
        ch = _FakeChannel()
        self.channels.append(ch)
        return ch


def _manager_with_fakes():
    sm = SoundManager(enabled=False)
    sm._sounds = {"hit": _FakeSound(), "success": _FakeSound(), "background": _FakeSound()}
    return sm


def test_disabled_manager_is_silent_but_tracks_mute():
    sm = SoundManager(enabled=False)
    assert not sm.available
    sm.play_placement_sound()
    sm.play_line_clear_sound()
    sm.play_background_loop()
    sm.stop_background_loop()
    assert sm.toggle_mute() is True
    assert sm.is_muted()
    assert sm.toggle_mute() is False


def test_mixer_failure_is_swallowed(monkeypatch):
    def _boom(*args, **kwargs):
        raise pygame.error("no audio device")

    monkeypatch.setattr(tetris_audio.pygame.mixer, "get_init", lambda: None)
    monkeypatch.setattr(tetris_audio.pygame.mixer, "init", _boom)
    sm = SoundManager(enabled=True)
    assert not sm.available
    sm.play_background_loop()
    assert not sm.is_muted()


def test_missing_mixer_module_is_swallowed(monkeypatch):
    def _missing(*args, **kwargs):
        raise NotImplementedError("mixer module not available")

    monkeypatch.setattr(tetris_audio.pygame.mixer, "get_init", _missing)
    sm = SoundManager(enabled=True)
    assert not sm.available
    sm.play_placement_sound()
    sm.play_background_loop()
    assert sm.toggle_mute() is True


class _BrokenSound(_FakeSound):
    def play(self, loops=0):
        raise NotImplementedError("mixer module not available")


def test_playback_errors_are_swallowed():
    sm = SoundManager(enabled=False)
    sm._sounds = {"hit": _BrokenSound(), "success": _BrokenSound(), "background": _BrokenSound()}
    sm.play_placement_sound()
    sm.play_line_clear_sound()
    sm.play_background_loop()
    sm.stop_background_loop()
    assert not sm.is_muted()


def test_muted_manager_plays_nothing():
    sm = _manager_with_fakes()
    sm.toggle_mute()
    sm.play_placement_sound()
    sm.play_background_loop()
    assert sm._sounds["hit"].plays == 0
    assert sm._sounds["background"].plays == 0


def test_unmute_resumes_background_only_when_requested():
    sm = _manager_with_fakes()
    bg = sm._sounds["background"]
    sm.play_background_loop()
    assert bg.plays == 1
    sm.toggle_mute()
    assert not bg.channels[0].busy
    sm.toggle_mute()
    assert bg.plays == 2

    sm.stop_background_loop()
    sm.toggle_mute()
    sm.toggle_mute()
    assert bg.plays == 2


def test_background_loop_is_not_stacked():
    sm = _manager_with_fakes()
    sm.play_background_loop()
    sm.play_background_loop()
    assert sm._sounds["background"].plays == 1


def test_synthesize_sample_count():
    data = synthesize([(440.0, 100), (0, 50)], rate=1000, channels=2)
    assert len(data) == (100 + 50) * 2 * 2
    assert data[-200:] == bytes(200)
