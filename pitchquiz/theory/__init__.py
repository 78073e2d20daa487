"""Pitch-class catalog and note-name helpers."""

from .notes import (  # noqa: F401
    NOTE_COUNT,
    NoteOutOfRange,
    label_of,
    label_or_empty,
    note_str_to_midi,
    random_note,
    validate_note,
)
