from __future__ import annotations

"""Note catalog: the twelve pitch classes the quiz asks about.

A note is a plain ``int`` in ``[0, 11]``; index 0 is C. The catalog is
stateless, so everything here is a module-level function. Note strings
such as ``"C4"`` or ``"Bb3"`` are only parsed for the configured root note.
"""

import random
import re
from typing import Dict, List, Optional

PITCH_CLASS_NAMES: List[str] = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]
NOTE_COUNT = len(PITCH_CLASS_NAMES)

_LETTER_OFFSETS: Dict[str, int] = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}
_ACCIDENTALS: Dict[str, int] = {"": 0, "#": 1, "b": -1}
_NOTE_STR = re.compile(r"([A-Ga-g])([#b]?)(-?\d+)")


class NoteOutOfRange(ValueError):
    """Raised when a note index falls outside the catalog."""

    def __init__(self, note: object) -> None:
        super().__init__(f"Note index out of range: {note!r} (expected 0..{NOTE_COUNT - 1})")
        self.note = note


def is_valid_note(note: object) -> bool:
    # bool is an int subclass but never a note
    return isinstance(note, int) and not isinstance(note, bool) and 0 <= note < NOTE_COUNT


def validate_note(note: object) -> int:
    if not is_valid_note(note):
        raise NoteOutOfRange(note)
    return int(note)  # type: ignore[arg-type]


def label_of(note: int) -> str:
    """Return the display name for a note, e.g. ``label_of(1) == "C#"``."""
    return PITCH_CLASS_NAMES[validate_note(note)]


def label_or_empty(note: object) -> str:
    """Like :func:`label_of` but maps out-of-range input to ``""``."""
    if not is_valid_note(note):
        return ""
    return PITCH_CLASS_NAMES[int(note)]  # type: ignore[arg-type]


def random_note(rng: Optional[random.Random] = None) -> int:
    """Pick a note uniformly from the catalog."""
    if rng is None:
        return random.randrange(NOTE_COUNT)
    return rng.randrange(NOTE_COUNT)


def note_to_midi(note: int, root_midi: int = 60) -> int:
    """MIDI number of ``note`` in the octave starting at ``root_midi``."""
    return root_midi + validate_note(note)


def note_str_to_midi(text: str) -> int:
    """Parse ``"C4"``, ``"Db3"`` or ``"g#5"`` into a MIDI number (C4 = 60)."""
    m = _NOTE_STR.fullmatch(text.strip()) if text else None
    if m is None:
        raise ValueError(f"Invalid note string: {text!r}")
    letter, accidental, octave = m.groups()
    midi = (int(octave) + 1) * 12 + _LETTER_OFFSETS[letter.upper()] + _ACCIDENTALS[accidental]
    if not 0 <= midi <= 127:
        raise ValueError(f"Note {text!r} is outside the MIDI range")
    return midi
