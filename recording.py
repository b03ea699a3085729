import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Note:
    name: str
    frequency: float    # Hz
    offset_ms: int      # since the start of the recording session


# ---------------------- Recording ----------------------
class Recording:
    """Note buffer for one recording session.

    start() discards whatever the previous session captured; stop() leaves
    the buffer untouched so it can be replayed until the next start().
    """
    def __init__(self):
        self.is_recording = False
        self.start_time = None
        self._notes = []

    def start(self, now_ms):
        self.is_recording = True
        self.start_time = now_ms
        self._notes.clear()
        logger.info("Recording started at %d ms", now_ms)

    def stop(self):
        if not self.is_recording:
            return
        self.is_recording = False
        logger.info("Recording stopped with %d notes", len(self._notes))

    def add(self, name, freq, now_ms):
        if not self.is_recording:
            return None
        note = Note(name=name, frequency=float(freq),
                    offset_ms=max(0, int(now_ms - self.start_time)))
        self._notes.append(note)
        return note

    @property
    def notes(self):
        return tuple(self._notes)

    def __len__(self):
        return len(self._notes)
