import argparse
import logging
import os
import sys
import traceback
from logging.handlers import RotatingFileHandler

import pygame

from config import *
from sequencer import Sequencer, KeyResult
from sound import PygameToneSink, PygameClock, PygameDelay
from piano_mapping import PITCH_TABLE, symbol_for
from utils import note_label, octave_of
from visualizer import Visualizer, GLOW_FRAME_MS

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _init_logging(level=logging.INFO, log_path=None):
    if logging.getLogger().handlers:
        return

    logging.basicConfig(level=level, format=LOG_FORMAT, encoding="utf-8")
    if log_path:
        os.makedirs(os.path.dirname(log_path) or ".", exist_ok=True)
        fh = RotatingFileHandler(log_path, maxBytes=2*1024*1024, backupCount=3, encoding="utf-8")
        fh.setLevel(level)
        fh.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(fh)


def parse_args(argv=None):
    ap = argparse.ArgumentParser(description="Play, record and replay notes from the keyboard.")
    ap.add_argument('--octave', type=int, default=BASE_OCTAVE, help=f"starting octave ({MIN_OCTAVE}-{MAX_OCTAVE})")
    ap.add_argument('--duration-ms', type=int, default=NOTE_DURATION_MS, help="length of every note")
    ap.add_argument('--volume', type=float, default=DEFAULT_VOLUME)
    ap.add_argument('--wave', default='sine', choices=sorted(WAVE_NAMES))
    ap.add_argument('--log-level', default='INFO', choices=['DEBUG','INFO','WARNING','ERROR'])
    ap.add_argument('--log-file', default=os.path.join(LOG_DIR, LOG_FILE))
    args = ap.parse_args(argv)
    if args.duration_ms <= 0:
        ap.error("--duration-ms must be positive")
    if not 0.0 < args.volume <= 1.0:
        ap.error("--volume must be in (0, 1]")
    return args


def status_for(result, seq):
    """Status line shown under the keyboard after a handled key."""
    if result == KeyResult.NOTE_PLAYED:
        name, freq = seq.last_played
        return f"Playing: {note_label(name, seq.octave)} ({freq:.2f} Hz)"
    if result == KeyResult.OCTAVE_CHANGED:
        return f"Octave {seq.octave}"
    if result == KeyResult.RECORDING_STARTED:
        return "Recording..."
    if result == KeyResult.RECORDING_STOPPED:
        return f"Recording saved: {len(seq.notes)} notes" if seq.notes else "Nothing recorded."
    if result == KeyResult.PLAYBACK_EMPTY:
        return "No recording found!"
    if result == KeyResult.PLAYBACK_DONE:
        return "Done!"
    if result == KeyResult.PLAYBACK_ABORTED:
        return "Playback aborted."
    return None


def escape_held():
    pygame.event.pump()
    return bool(pygame.key.get_pressed()[pygame.K_ESCAPE])


def run(args):
    pygame.mixer.pre_init(SAMPLE_RATE, BITSIZE, CHANNELS, AUDIO_BUFFER)
    pygame.init()
    try:
        screen = pygame.display.set_mode(WINDOW_SIZE)
        pygame.display.set_caption(WINDOW_TITLE)
        vis = Visualizer(screen)
        status = ""

        def refresh(status_msg=None):
            nonlocal status
            if status_msg is not None:
                status = status_msg
            vis.draw(seq.octave, seq.recording, len(seq.notes), status)
            pygame.display.flip()

        # lights the key and names the note before the blocking tone starts
        def show_note(name, freq):
            symbol = symbol_for(name)
            if symbol is None:
                refresh(f"Playing: {name} ({freq:.2f} Hz)")
                return
            vis.note_on(symbol)
            octave = octave_of(PITCH_TABLE[symbol][1], freq)
            refresh(f"Playing: {note_label(name, octave)} ({freq:.2f} Hz)")

        seq = Sequencer(
            PygameToneSink(WAVE_NAMES[args.wave], args.volume),
            clock=PygameClock(),
            delay=PygameDelay(),
            duration_ms=args.duration_ms,
            octave=args.octave,
            on_note=show_note,
        )
        refresh()

        while True:
            # keep drawing frames until a fading glow is gone
            event = pygame.event.wait(GLOW_FRAME_MS if vis.glow_drawn else 0)
            if event.type == pygame.NOEVENT:
                refresh()
                continue
            if event.type == pygame.QUIT:
                break
            if event.type != pygame.KEYDOWN or not event.unicode:
                continue

            if event.unicode.lower() in PLAYBACK_KEYS and seq.notes:
                refresh("Playing recording...")
            result = seq.handle_key(event.unicode, should_abort=escape_held)
            if result == KeyResult.QUIT:
                break
            refresh(status_for(result, seq))
    finally:
        pygame.quit()


def main(argv=None):
    args = parse_args(argv)
    _init_logging(getattr(logging, args.log_level), args.log_file)
    logger.info("Keyboard sequencer starting (octave %d, %s wave)", args.octave, args.wave)
    run(args)
    logger.info("Keyboard sequencer stopped")


if __name__ == "__main__":
    try:
        main()
    except Exception as e:
        logging.error("Unhandled exception: %s", e, exc_info=True)
        print(f"The program hit an error; see {os.path.join(LOG_DIR, LOG_FILE)} for details.")
        traceback.print_exc()
        sys.exit(1)
