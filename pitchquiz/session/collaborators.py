from __future__ import annotations

"""Capabilities the quiz session drives but does not own."""

from typing import Protocol


class NotePlayer(Protocol):
    def play(self, note: int) -> None: ...

    def stop(self) -> None: ...


class ButtonPanel(Protocol):
    """The twelve answer controls, switched on and off as a group."""

    def set_interactable(self, interactable: bool) -> None: ...


class FeedbackSink(Protocol):
    def show_message(self, text: str) -> None: ...

    def show_score(self, text: str) -> None: ...
