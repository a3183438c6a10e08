"""
Audio collaborator: synthesized tones over pygame.mixer.

Sounds are generated at start-up as 16-bit sample buffers, so the game ships
without asset files. Any mixer failure is logged and swallowed; the manager
then behaves as a silent collaborator whose mute flag still toggles.
"""
from __future__ import annotations

import logging
import math
from array import array
from typing import Dict, List, Optional, Tuple

import pygame

from tetris_config import CONFIG

log = logging.getLogger(__name__)

SAMPLE_RATE = 22050

# pygame builds without SDL_mixer expose a stub mixer raising NotImplementedError
AUDIO_ERRORS = (pygame.error, NotImplementedError)

# (frequency Hz, duration ms); frequency 0 is a rest
PLACEMENT_NOTES: List[Tuple[float, int]] = [(130.8, 45), (98.0, 45)]
LINE_CLEAR_NOTES: List[Tuple[float, int]] = [(523.3, 70), (659.3, 70), (784.0, 70), (1046.5, 140)]
BACKGROUND_NOTES: List[Tuple[float, int]] = [
    (659.3, 300), (493.9, 150), (523.3, 150), (587.3, 300), (523.3, 150), (493.9, 150),
    (440.0, 300), (440.0, 150), (523.3, 150), (659.3, 300), (587.3, 150), (523.3, 150),
    (493.9, 450), (523.3, 150), (587.3, 300), (659.3, 300),
    (523.3, 300), (440.0, 300), (440.0, 300), (0, 300),
]


def synthesize(notes, rate: int, channels: int) -> bytes:
    """Render a note list into interleaved signed 16-bit samples."""
    samples = array("h")
    fade = max(1, rate // 200)
    for freq, ms in notes:
        n = int(rate * ms / 1000)
        for i in range(n):
            if freq <= 0:
                v = 0
            else:
                env = min(1.0, i / fade, (n - i) / fade)
                v = int(0.6 * 32767 * env * math.sin(2 * math.pi * freq * i / rate))
            for _ in range(channels):
                samples.append(v)
    return samples.tobytes()


class SoundManager:
    def __init__(self, enabled: Optional[bool] = None):
        self._muted = False
        self._background_wanted = False
        self._sounds: Dict[str, pygame.mixer.Sound] = {}
        self._background_channel: Optional[pygame.mixer.Channel] = None
        if enabled is None:
            enabled = CONFIG["SOUND_ENABLED"]
        if enabled:
            self._load_sounds()

    @property
    def available(self) -> bool:
        return bool(self._sounds)

    def _load_sounds(self):
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1)
            rate, size, channels = pygame.mixer.get_init()
            if abs(size) != 16:
                log.warning("unsupported mixer sample size %s, audio disabled", size)
                return
            for name, notes, volume in (
                ("hit", PLACEMENT_NOTES, CONFIG["PLACEMENT_VOLUME"]),
                ("success", LINE_CLEAR_NOTES, CONFIG["LINE_CLEAR_VOLUME"]),
                ("background", BACKGROUND_NOTES, CONFIG["BACKGROUND_VOLUME"]),
            ):
                sound = pygame.mixer.Sound(buffer=synthesize(notes, rate, channels))
                sound.set_volume(volume)
                self._sounds[name] = sound
        except AUDIO_ERRORS as exc:
            log.warning("could not initialise audio: %s", exc)
            self._sounds = {}

    def _play(self, name: str):
        sound = self._sounds.get(name)
        if self._muted or sound is None:
            return
        try:
            sound.stop()
            sound.play()
        except AUDIO_ERRORS as exc:
            log.debug("playback of %s failed: %s", name, exc)

    def play_placement_sound(self):
        self._play("hit")

    def play_line_clear_sound(self):
        self._play("success")

    def play_background_loop(self):
        self._background_wanted = True
        self._start_background()

    def stop_background_loop(self):
        self._background_wanted = False
        self._halt_background()

    def _start_background(self):
        sound = self._sounds.get("background")
        if self._muted or sound is None:
            return
        try:
            if self._background_channel is not None and self._background_channel.get_busy():
                return
            self._background_channel = sound.play(loops=-1)
        except AUDIO_ERRORS as exc:
            log.debug("background loop failed: %s", exc)

    def _halt_background(self):
        if self._background_channel is None:
            return
        try:
            self._background_channel.stop()
        except AUDIO_ERRORS as exc:
            log.debug("stopping background loop failed: %s", exc)
        self._background_channel = None

    def toggle_mute(self) -> bool:
        self._muted = not self._muted
        if self._muted:
            self._halt_background()
        elif self._background_wanted:
            self._start_background()
        return self._muted

    def is_muted(self) -> bool:
        return self._muted
