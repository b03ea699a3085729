# ---------------------- Config ----------------------
SAMPLE_RATE = 44100
BITSIZE = -16          # 16-bit signed
CHANNELS = 2
AUDIO_BUFFER = 256     # smaller = lower latency, but risk crackles
BASE_OCTAVE = 4        # reference octave of the pitch table (C4 = middle C)
MIN_OCTAVE = 1
MAX_OCTAVE = 8
NOTE_DURATION_MS = 200 # every note, live or replayed, sounds this long
DEFAULT_VOLUME = 0.6

WAVE_SINE = 0
WAVE_SQUARE = 1
WAVE_SAW = 2
WAVE_NAMES = {'sine': WAVE_SINE, 'square': WAVE_SQUARE, 'saw': WAVE_SAW}

# Envelope applied to every rendered tone
ENV_ATTACK = 0.005
ENV_DECAY = 0.03
ENV_SUSTAIN = 0.85
ENV_RELEASE = 0.05

# ---------------------- Key bindings ----------------------
QUIT_KEYS = ('q',)
RECORD_KEYS = ('r',)
PLAYBACK_KEYS = ('p',)
OCTAVE_UP_KEYS = ('+', '=', ']')
OCTAVE_DOWN_KEYS = ('-', '_', '[')

# ---------------------- Window ----------------------
WINDOW_SIZE = (560, 300)
WINDOW_TITLE = "Keyboard Sequencer  [z-m: notes | R: rec | P: play | +/-: octave | Esc: stop playback | Q: quit]"

LOG_DIR = "logs"
LOG_FILE = "app.log"
