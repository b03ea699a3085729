import logging
import time

import pygame

from config import *
from utils import gen_tone

logger = logging.getLogger(__name__)


# ---------------------- Tone output ----------------------
class PygameToneSink:
    """Sounds one note at a time on the pygame mixer.

    emit() blocks for the length of the tone, so consecutive notes never
    overlap. The mixer must already be initialised.
    """
    def __init__(self, wave_type=WAVE_SINE, volume=DEFAULT_VOLUME):
        self.wave_type = wave_type
        self.volume = volume

    def emit(self, frequency_hz, duration_ms):
        logger.debug("Tone %.2f Hz for %d ms", frequency_hz, duration_ms)
        snd = gen_tone(self.wave_type, frequency_hz, duration_ms, self.volume)
        snd.play()
        pygame.time.wait(int(duration_ms))


# ---------------------- Clocks ----------------------
class PygameClock:
    """Milliseconds since pygame.init()."""
    def now_ms(self):
        return pygame.time.get_ticks()


class MonotonicClock:
    def now_ms(self):
        return int(time.monotonic() * 1000)


# ---------------------- Delays ----------------------
class PygameDelay:
    def sleep(self, ms):
        pygame.time.wait(int(ms))


class SleepDelay:
    def sleep(self, ms):
        time.sleep(ms / 1000.0)
