"""
Clean Catch audio: chiptune cues synthesised at startup.

Each cue is a voice function of a time array, rendered once with numpy
into 16-bit stereo and handed to the pygame mixer. Nothing is loaded
from disk. When the mixer cannot open a device the engine stays silent
and every cue is a no-op.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional

import numpy as np
import pygame
from numpy.typing import NDArray

from cleancatch.config.settings import AudioSettings
from cleancatch.core.interfaces import AudioCues
from cleancatch.core.state import RoundOutcome

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100
PEAK = 32767

Wave = NDArray[np.float64]
Voice = Callable[[Wave], Wave]

_noise_rng = np.random.default_rng(7)


def square(t, freq):
    return np.where((t * freq) % 1 < 0.5, 1.0, -1.0)


def triangle(t, freq):
    return 4 * np.abs((t * freq) % 1 - 0.5) - 1


def sine(t, freq):
    return np.sin(2 * np.pi * freq * t)


def noise(t):
    return _noise_rng.uniform(-1.0, 1.0, size=np.shape(t))


def decay(t, rate):
    """Linear fade from 1 to 0 over ``1 / rate`` seconds."""
    return np.clip(1 - t * rate, 0.0, 1.0)


def render_samples(duration: float, voice: Voice) -> NDArray[np.int16]:
    """Sample ``voice`` (range -1..1, clipped) into signed 16-bit mono."""
    t = np.arange(int(SAMPLE_RATE * duration)) / SAMPLE_RATE
    return (np.clip(voice(t), -1.0, 1.0) * PEAK).astype(np.int16)


# Cue voices

def _click(t):
    return (square(t, 800) * 0.4 + sine(t, 150) * 0.3) * decay(t, 20) * 0.6


def _score_up(t):
    # rising chirp: frequency sweeps 800 -> ~1160Hz
    return square(t, 800 + t * 4000) * 0.2 * decay(t, 12)


def _miss(t):
    buzz = square(t, np.maximum(80, 260 - t * 600)) * 0.2
    return (buzz + noise(t) * 0.15) * decay(t, 5)


def _countdown_tick(t):
    return sine(t, 1000) * 0.2 * decay(t, 25)


def _success(t):
    notes = np.array([523, 659, 784, 1047])
    idx = np.minimum((t * 10).astype(int), 3)
    return square(t, notes[idx]) * 0.25 * decay(t - idx * 0.1, 5)


def _game_over(t):
    tone = square(t, 400 - t * 250) * 0.2 + triangle(t, 200 - t * 120) * 0.15
    return tone * decay(t, 1.6)


MUSIC_STEP = 0.18
_BASS = np.array([110, 110, 165, 147, 131, 131, 165, 196])
_LEAD = np.array([440, 523, 659, 523, 494, 587, 659, 587])


def _round_music(t):
    idx = (t / MUSIC_STEP).astype(int) % len(_BASS)
    pluck = decay((t % MUSIC_STEP) / MUSIC_STEP, 1.5)
    return (triangle(t, _BASS[idx]) * 0.25 + square(t, _LEAD[idx]) * 0.08 * pluck) * 0.8


@dataclass(frozen=True)
class Cue:
    duration: float
    voice: Voice


CUES: Dict[str, Cue] = {
    "click": Cue(0.06, _click),
    "score_up": Cue(0.09, _score_up),
    "miss": Cue(0.22, _miss),
    "countdown_tick": Cue(0.05, _countdown_tick),
    "success": Cue(0.5, _success),
    "game_over": Cue(0.6, _game_over),
    "music_round": Cue(MUSIC_STEP * len(_BASS) * 2, _round_music),
}


class AudioEngine(AudioCues):
    """
    Mixer-backed implementation of the round's audio cues.

    Catch, miss, win and loss sound names come from ``AudioSettings``,
    so the end-of-round sound can differ between a win and a loss.
    """

    def __init__(self, settings: Optional[AudioSettings] = None):
        self.settings = settings or AudioSettings()
        self._ready = False
        self._sounds: Dict[str, pygame.mixer.Sound] = {}
        self._master = self.settings.master_volume
        self._muted = False
        self._music: Optional[pygame.mixer.Channel] = None

    @property
    def available(self) -> bool:
        return self._ready

    def init(self) -> bool:
        """Open the mixer and synthesise every cue. False means silent mode."""
        if not self.settings.enabled:
            logger.info("Audio disabled in settings")
            return False
        try:
            pygame.mixer.pre_init(SAMPLE_RATE, -16, 2, 1024)
            pygame.mixer.init()
            pygame.mixer.set_num_channels(8)
        except pygame.error as e:
            logger.error(f"Audio unavailable, running silent: {e}")
            return False

        self._ready = True
        logger.info("Audio engine initialized")
        self._synthesise()
        return True

    def _synthesise(self) -> None:
        if self._sounds:
            return
        for name, cue in CUES.items():
            mono = render_samples(cue.duration, cue.voice)
            stereo = np.ascontiguousarray(np.column_stack((mono, mono)))
            self._sounds[name] = pygame.mixer.Sound(buffer=stereo.tobytes())
        logger.info(f"Synthesised {len(self._sounds)} cues")

    def play(self, sound_name: str, volume: float = 1.0, loops: int = 0) -> Optional[pygame.mixer.Channel]:
        """Play a synthesised cue; None when silent, muted or unknown."""
        if not self._ready or self._muted:
            return None
        sound = self._sounds.get(sound_name)
        if sound is None:
            logger.warning(f"Unknown cue: {sound_name}")
            return None
        sound.set_volume(volume * self._master)
        return sound.play(loops=loops)

    def play_click(self) -> None:
        self.play("click", volume=0.6)

    def play_countdown_tick(self) -> None:
        self.play("countdown_tick")

    # AudioCues

    def play_catch(self) -> None:
        self.play(self.settings.catch_cue)

    def play_miss(self) -> None:
        self.play(self.settings.miss_cue)

    def play_round_end(self, outcome: RoundOutcome) -> None:
        self.stop_music()
        self.play(self.settings.win_cue if outcome is RoundOutcome.WIN else self.settings.loss_cue)

    # Music

    def start_music(self) -> None:
        """Loop the round music until ``stop_music``."""
        self.stop_music()
        self._music = self.play("music_round", volume=0.35, loops=-1)

    def stop_music(self, fade_out_ms: int = 200) -> None:
        if self._music is not None:
            self._music.fadeout(fade_out_ms)
            self._music = None

    # Volume

    def set_master_volume(self, volume: float) -> None:
        self._master = min(1.0, max(0.0, volume))

    def get_volume(self) -> float:
        return self._master

    def is_muted(self) -> bool:
        return self._muted

    def toggle_mute(self) -> bool:
        """Flip mute; pauses or resumes every playing channel. Returns the new state."""
        self._muted = not self._muted
        if self._ready:
            (pygame.mixer.pause if self._muted else pygame.mixer.unpause)()
        logger.info("Audio muted" if self._muted else "Audio unmuted")
        return self._muted

    def cleanup(self) -> None:
        if not self._ready:
            return
        self.stop_music()
        pygame.mixer.quit()
        self._ready = False
        self._sounds.clear()
        logger.info("Audio engine shut down")
