from __future__ import annotations

"""Abstract-ish audio synthesis interface.

The quiz only needs to start and release single notes without blocking the
UI thread, so the interface is raw note-on/note-off per channel.
"""


class Synth:
    """Abstract-like synth interface for playback engines."""

    def __init__(self, sample_rate: int, gain: float) -> None:
        self.sample_rate = sample_rate
        self.gain = gain

    def program_piano(self) -> None:
        """Program a basic piano sound (General MIDI) if applicable."""
        raise NotImplementedError

    def note_on_raw(self, channel: int, midi: int, velocity: int) -> None:
        raise NotImplementedError

    def note_off_raw(self, channel: int, midi: int) -> None:
        raise NotImplementedError

    def all_notes_off(self, channel: int) -> None:
        raise NotImplementedError

    def close(self) -> None:
        """Release resources."""
        pass
