import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pytest

from sequencer import Sequencer


class FakeClock:

    """Manually advanced millisecond clock."""

    def __init__(self, start=0):
        self.now = start

    def now_ms(self):
        return self.now

    def advance(self, ms):
        self.now += ms


class RecordingToneSink:

    """Logs every emitted tone instead of sounding it."""

    def __init__(self):
        self.calls = []

    def emit(self, frequency_hz, duration_ms):
        self.calls.append((frequency_hz, duration_ms))


class RecordingDelay:

    """Logs requested sleeps and advances the fake clock by the same amount."""

    def __init__(self, clock=None):
        self.calls = []
        self.clock = clock

    def sleep(self, ms):
        self.calls.append(ms)
        if self.clock is not None:
            self.clock.advance(ms)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sink():
    return RecordingToneSink()


@pytest.fixture
def delay(clock):
    return RecordingDelay(clock)


@pytest.fixture
def seq(sink, clock, delay):
    return Sequencer(sink, clock=clock, delay=delay)
