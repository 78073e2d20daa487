from __future__ import annotations

"""NotePlayer backed by a Synth: one sounding note at a time."""

from typing import Optional

from ..app.explain import warn
from ..theory.notes import is_valid_note, note_to_midi
from .synthesis import Synth


class SynthNotePlayer:
    """Plays catalog notes in the octave starting at ``root_midi``."""

    def __init__(self, synth: Synth, root_midi: int = 60, velocity: int = 100, channel: int = 0) -> None:
        self.synth = synth
        self.root_midi = root_midi
        self.velocity = velocity
        self.channel = channel
        self._sounding: Optional[int] = None

    def play(self, note: int) -> None:
        if not is_valid_note(note):
            warn(f"SynthNotePlayer: no clip configured for note index {note}.")
            return
        self.stop()
        midi = note_to_midi(note, self.root_midi)
        self.synth.note_on_raw(self.channel, midi, self.velocity)
        self._sounding = midi

    def stop(self) -> None:
        if self._sounding is None:
            return
        self.synth.note_off_raw(self.channel, self._sounding)
        self._sounding = None

    def close(self) -> None:
        self.stop()
        self.synth.all_notes_off(self.channel)
        self.synth.close()
