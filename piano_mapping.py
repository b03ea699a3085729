# ---------------------- Key -> Note mapping ----------------------
# One chromatic octave at BASE_OCTAVE, laid out on the lower keyboard row.
PITCH_TABLE = {
    'z': ('C',  261.63),
    's': ('C#', 277.18),
    'x': ('D',  293.66),
    'd': ('D#', 311.13),
    'c': ('E',  329.63),
    'v': ('F',  349.23),
    'g': ('F#', 369.99),
    'b': ('G',  392.00),
    'h': ('G#', 415.30),
    'n': ('A',  440.00),
    'j': ('A#', 466.16),
    'm': ('B',  493.88),
}

WHITE_KEYS = ['z','x','c','v','b','n','m']             # C D E F G A B
BLACK_KEYS = {'s':0, 'd':1, 'g':3, 'h':4, 'j':5}       # key -> white slot it sits after


def lookup(symbol, table=PITCH_TABLE):
    """Return (note_name, base_frequency_hz) for a symbol, or None.

    The table only stores lowercase keys; callers normalise case first.
    """
    return table.get(symbol)


def symbol_for(name, table=PITCH_TABLE):
    """Key that plays note `name`, or None."""
    for symbol, (note_name, _) in table.items():
        if note_name == name:
            return symbol
    return None
