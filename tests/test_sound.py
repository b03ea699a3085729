"""Tests for tone rendering and the capability implementations."""

import numpy as np
import pygame
import pygame.sndarray
import pytest

import sound
import utils
from config import SAMPLE_RATE, WAVE_SINE, WAVE_SQUARE, WAVE_SAW


class TestEnvelope:

    def test_starts_and_ends_silent(self):
        wave = np.ones(SAMPLE_RATE // 5)
        out = utils.apply_envelope(wave, SAMPLE_RATE, 0.005, 0.03, 0.85, 0.05)
        assert out[0] == 0.0
        assert out[-1] == 0.0
        assert out.max() <= 1.0

    def test_sustain_plateau(self):
        wave = np.ones(SAMPLE_RATE)
        out = utils.apply_envelope(wave, SAMPLE_RATE, 0.01, 0.01, 0.5, 0.01)
        assert out[SAMPLE_RATE // 2] == pytest.approx(0.5)

    def test_shorter_than_envelope_segments(self):
        wave = np.ones(100)
        out = utils.apply_envelope(wave, SAMPLE_RATE, 0.005, 0.08, 0.85, 0.12)
        assert len(out) == 100


class TestSynthNote:

    @pytest.mark.parametrize("wave_type", [WAVE_SINE, WAVE_SQUARE, WAVE_SAW])
    def test_length_and_range(self, wave_type):
        out = utils.synth_note(wave_type, 440.0, 0.2, volume=0.5)
        assert len(out) == int(SAMPLE_RATE * 0.2)
        assert out.dtype == np.float32
        assert np.abs(out).max() <= 0.5 + 1e-6

    def test_frequency_scaling(self):
        assert utils.frequency_at(440.0, 5) == 880.0
        assert utils.frequency_at(261.63, 1) == pytest.approx(32.70375)
        assert utils.note_label("C#", 3) == "C#3"

    @pytest.mark.parametrize("octave", range(1, 9))
    def test_octave_of_inverts_frequency_at(self, octave):
        for base in (261.63, 415.30, 493.88):
            assert utils.octave_of(base, utils.frequency_at(base, octave)) == octave

    def test_square_wave_is_two_level_before_envelope(self):
        shape = utils.WAVEFORMS[WAVE_SQUARE](np.array([0.25, 0.75]))
        assert list(shape) == [1.0, -1.0]

    def test_unknown_wave_type_renders_saw(self):
        assert np.array_equal(utils.synth_note(99, 220.0, 0.05), utils.synth_note(WAVE_SAW, 220.0, 0.05))


class TestGenTone:

    def test_renders_stereo_int16_and_caches(self, monkeypatch):
        made = []

        def fake_make_sound(arr):
            made.append(arr)
            return object()

        monkeypatch.setattr(utils, "sound_cache", {})
        monkeypatch.setattr(pygame.sndarray, "make_sound", fake_make_sound)

        first = utils.gen_tone(WAVE_SINE, 440.0, 200, 0.6)
        second = utils.gen_tone(WAVE_SINE, 440.0, 200, 0.6)
        assert first is second
        assert len(made) == 1
        arr = made[0]
        assert arr.dtype == np.int16
        assert arr.shape == (int(SAMPLE_RATE * 0.2), 2)

        utils.gen_tone(WAVE_SINE, 880.0, 200, 0.6)
        assert len(made) == 2


class FakeSound:

    def __init__(self):
        self.played = 0

    def play(self):
        self.played += 1


class TestCapabilities:

    def test_tone_sink_plays_and_blocks(self, monkeypatch):
        snd = FakeSound()
        requested = []
        waits = []
        monkeypatch.setattr(sound, "gen_tone", lambda *args: requested.append(args) or snd)
        monkeypatch.setattr(pygame.time, "wait", lambda ms: waits.append(ms))

        sink = sound.PygameToneSink(WAVE_SAW, 0.4)
        sink.emit(523.26, 200)
        assert requested == [(WAVE_SAW, 523.26, 200, 0.4)]
        assert snd.played == 1
        assert waits == [200]

    def test_pygame_clock_and_delay(self, monkeypatch):
        waits = []
        monkeypatch.setattr(pygame.time, "get_ticks", lambda: 1234)
        monkeypatch.setattr(pygame.time, "wait", lambda ms: waits.append(ms))
        assert sound.PygameClock().now_ms() == 1234
        sound.PygameDelay().sleep(75)
        assert waits == [75]

    def test_monotonic_clock_never_goes_back(self):
        clock = sound.MonotonicClock()
        a = clock.now_ms()
        b = clock.now_ms()
        assert isinstance(a, int)
        assert b >= a

    def test_sleep_delay_converts_to_seconds(self, monkeypatch):
        slept = []
        monkeypatch.setattr(sound.time, "sleep", lambda s: slept.append(s))
        sound.SleepDelay().sleep(250)
        assert slept == [0.25]
