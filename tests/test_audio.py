"""Tests for the synthesised audio cues (no mixer device needed)."""
from __future__ import annotations

from cleancatch.audio.engine import SAMPLE_RATE, AudioEngine, render_samples, sine, square, triangle
from cleancatch.config.settings import AudioSettings
from cleancatch.core.state import RoundOutcome


class TestOscillators:
    def test_square_levels(self) -> None:
        assert square(0.0, 10) == 1
        assert square(0.06, 10) == -1

    def test_triangle_range(self) -> None:
        assert triangle(0.0, 1) == 1
        assert triangle(0.5, 1) == -1

    def test_render_samples(self) -> None:
        samples = render_samples(0.01, lambda t: sine(t, 440) * 2)
        assert len(samples) == int(SAMPLE_RATE * 0.01)
        assert max(samples) == 32767
        assert min(samples) == -32767


class TestDisabledEngine:
    def test_init_refuses_when_disabled(self) -> None:
        engine = AudioEngine(AudioSettings(enabled=False))
        assert not engine.init()
        assert not engine.available

    def test_cues_are_silent_without_mixer(self) -> None:
        engine = AudioEngine(AudioSettings(enabled=False))
        engine.play_catch()
        engine.play_miss()
        engine.play_round_end(RoundOutcome.WIN)
        engine.start_music()
        engine.stop_music()
        assert engine.play("score_up") is None

    def test_volume_and_mute(self) -> None:
        engine = AudioEngine(AudioSettings(enabled=False, master_volume=0.5))
        assert engine.get_volume() == 0.5
        engine.set_master_volume(3.0)
        assert engine.get_volume() == 1.0
        assert engine.toggle_mute()
        assert engine.is_muted()
        assert not engine.toggle_mute()
