import enum
import logging

from config import *
from piano_mapping import PITCH_TABLE, lookup
from recording import Recording
from sound import MonotonicClock, SleepDelay
from utils import frequency_at, note_label

logger = logging.getLogger(__name__)


class PlaybackResult(enum.Enum):
    EMPTY = "empty"          # nothing to play
    COMPLETED = "completed"
    ABORTED = "aborted"


class KeyResult(enum.Enum):
    IGNORED = "ignored"
    NOTE_PLAYED = "note_played"
    OCTAVE_CHANGED = "octave_changed"
    RECORDING_STARTED = "recording_started"
    RECORDING_STOPPED = "recording_stopped"
    PLAYBACK_EMPTY = "playback_empty"
    PLAYBACK_DONE = "playback_done"
    PLAYBACK_ABORTED = "playback_aborted"
    QUIT = "quit"


_PLAYBACK_KEY_RESULTS = {
    PlaybackResult.EMPTY: KeyResult.PLAYBACK_EMPTY,
    PlaybackResult.COMPLETED: KeyResult.PLAYBACK_DONE,
    PlaybackResult.ABORTED: KeyResult.PLAYBACK_ABORTED,
}


class Sequencer:
    """Octave state, recording capture and timed playback.

    The sequencer never touches audio or wall-clock time directly. It is
    handed three collaborators:

    - tone_sink.emit(frequency_hz, duration_ms), expected to block while
      the tone sounds
    - clock.now_ms(), a monotonic millisecond timestamp
    - delay.sleep(ms), used only between notes during playback

    Errors raised by any of them propagate to the caller untouched.
    """
    frequency_at = staticmethod(frequency_at)

    def __init__(self, tone_sink, clock=None, delay=None, pitch_table=PITCH_TABLE,
                 duration_ms=NOTE_DURATION_MS, octave=BASE_OCTAVE, on_change=None, on_note=None):
        self.tone_sink = tone_sink
        self.clock = clock if clock is not None else MonotonicClock()
        self.delay = delay if delay is not None else SleepDelay()
        self.pitch_table = pitch_table
        self.duration_ms = duration_ms
        self.on_change = on_change
        self.on_note = on_note    # on_note(name, freq), just before each tone, live or replayed
        self._octave = min(MAX_OCTAVE, max(MIN_OCTAVE, int(octave)))
        self._recording = Recording()
        self.last_played = None  # (name, freq) of the most recent live note

    # ---------- State ----------
    @property
    def octave(self):
        return self._octave

    @property
    def recording(self):
        return self._recording.is_recording

    @property
    def recording_start(self):
        return self._recording.start_time

    @property
    def notes(self):
        return self._recording.notes

    def _changed(self):
        if self.on_change is not None:
            self.on_change()

    def _sound(self, name, freq):
        if self.on_note is not None:
            self.on_note(name, freq)
        self.tone_sink.emit(freq, self.duration_ms)

    # ---------- Operations ----------
    def set_octave(self, delta):
        self._octave = min(MAX_OCTAVE, max(MIN_OCTAVE, self._octave + delta))
        logger.info("Octave %d", self._octave)
        self._changed()
        return self._octave

    def play_key(self, symbol):
        entry = lookup(symbol.lower(), self.pitch_table)
        if entry is None:
            logger.debug("Unmapped key %r", symbol)
            return None
        name, base = entry
        freq = self.frequency_at(base, self._octave)
        if self._recording.is_recording:
            self._recording.add(name, freq, self.clock.now_ms())
        self.last_played = (name, freq)
        logger.debug("Playing %s (%.2f Hz)", note_label(name, self._octave), freq)
        self._sound(name, freq)
        return self.last_played

    def toggle_recording(self):
        if not self._recording.is_recording:
            self._recording.start(self.clock.now_ms())
        else:
            self._recording.stop()
        self._changed()
        return self._recording.is_recording

    def playback(self, should_abort=None):
        notes = self._recording.notes
        if not notes:
            logger.info("No recording to play")
            return PlaybackResult.EMPTY

        logger.info("Playing back %d notes", len(notes))
        last_offset = 0
        for note in notes:
            if should_abort is not None and should_abort():
                logger.info("Playback aborted")
                return PlaybackResult.ABORTED
            delay = note.offset_ms - last_offset
            if delay > 0:
                self.delay.sleep(delay)
            self._sound(note.name, note.frequency)
            last_offset = note.offset_ms
        logger.info("Playback finished")
        return PlaybackResult.COMPLETED

    def handle_key(self, symbol, should_abort=None):
        key = symbol.lower()
        if key in QUIT_KEYS:
            return KeyResult.QUIT
        if key in RECORD_KEYS:
            if self.toggle_recording():
                return KeyResult.RECORDING_STARTED
            return KeyResult.RECORDING_STOPPED
        if key in PLAYBACK_KEYS:
            return _PLAYBACK_KEY_RESULTS[self.playback(should_abort)]
        if key in OCTAVE_UP_KEYS:
            self.set_octave(1)
            return KeyResult.OCTAVE_CHANGED
        if key in OCTAVE_DOWN_KEYS:
            self.set_octave(-1)
            return KeyResult.OCTAVE_CHANGED
        if self.play_key(key) is None:
            return KeyResult.IGNORED
        return KeyResult.NOTE_PLAYED
