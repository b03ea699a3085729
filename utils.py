import math
import pygame
import numpy as np
from config import *

# Simple cache for rendered tones: (wave, freq, duration, volume) -> pygame.Sound
sound_cache = {}

# ---------------------- Utility ----------------------
def frequency_at(base_freq, octave):
    """Scale a BASE_OCTAVE frequency to `octave` (doubles per octave up)."""
    return base_freq * 2.0 ** (octave - BASE_OCTAVE)

def note_label(name, octave):
    return f"{name}{octave}"

def apply_envelope(wave, sample_rate, attack, decay, sustain_level, release):
    n = len(wave)
    env = np.ones_like(wave)
    a_samps = min(n, max(1, int(attack * sample_rate)))
    d_samps = min(n - a_samps, max(1, int(decay * sample_rate)))
    r_samps = min(n, max(1, int(release * sample_rate)))
    env[:a_samps] = np.linspace(0, 1, a_samps)
    env[a_samps:a_samps+d_samps] = np.linspace(1, sustain_level, d_samps)
    sustain_start = a_samps + d_samps
    sustain_end = n - r_samps
    if sustain_end > sustain_start:
        env[sustain_start:sustain_end] = sustain_level
    env[sustain_end:] = np.linspace(sustain_level, 0, r_samps)
    return wave * env

# wave shape as a function of phase in cycles
WAVEFORMS = {
    WAVE_SINE:   lambda ph: np.sin(2*np.pi*ph),
    WAVE_SQUARE: lambda ph: np.sign(np.sin(2*np.pi*ph)),
    WAVE_SAW:    lambda ph: 2.0 * (ph - np.floor(0.5 + ph)),
}

def synth_note(wave_type, freq, duration, volume=1.0):
    """Enveloped mono float32 tone, `duration` seconds long, peak <= volume."""
    n_samps = max(1, int(SAMPLE_RATE * duration))
    phase = freq * np.arange(n_samps) / SAMPLE_RATE
    shape = WAVEFORMS.get(wave_type, WAVEFORMS[WAVE_SAW])
    env_wave = apply_envelope(shape(phase), SAMPLE_RATE, ENV_ATTACK, ENV_DECAY, ENV_SUSTAIN, ENV_RELEASE)
    return (env_wave * volume).astype(np.float32)

def octave_of(base_freq, freq):
    """Inverse of frequency_at: the octave at which base_freq sounds as freq."""
    return BASE_OCTAVE + round(math.log2(freq / base_freq))

def gen_tone(wave_type, freq, duration_ms, volume=DEFAULT_VOLUME):
    key = (wave_type, round(freq, 4), duration_ms, round(volume, 3))
    if key in sound_cache:
        return sound_cache[key]
    wave = synth_note(wave_type, freq, duration_ms / 1000.0, volume)
    wave = (np.clip(wave, -1.0, 1.0) * 32767).astype(np.int16)
    stereo = np.column_stack((wave, wave))
    sound = pygame.sndarray.make_sound(stereo.copy())
    sound_cache[key] = sound
    return sound
