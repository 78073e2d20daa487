from __future__ import annotations

"""Keyboard bindings for the quiz window.

Kept free of tkinter so the key handling can be tested headless: the
window passes ``event.keysym`` in and acts on the returned action.
"""

from typing import List, Literal, Optional, Sequence, Tuple

KeyAction = Tuple[Literal["play", "answer"], Optional[int]]


class KeyBindings:
    def __init__(self, play_key: str, note_keys: Sequence[str]) -> None:
        self.play_key = str(play_key).lower()
        self.note_keys: List[str] = [str(k).lower() for k in note_keys]

    def legend(self, note: int) -> str:
        return self.note_keys[note] if 0 <= note < len(self.note_keys) else ""

    def resolve(self, keysym: Optional[str], interactable: bool) -> Optional[KeyAction]:
        """Map a key press to ``("play", None)``, ``("answer", note)`` or None."""
        key = (keysym or "").lower()
        if not key:
            return None
        if key == self.play_key:
            return ("play", None)
        # keys only answer while the buttons do
        if not interactable or key not in self.note_keys:
            return None
        return ("answer", self.note_keys.index(key))
