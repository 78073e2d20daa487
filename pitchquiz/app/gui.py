from __future__ import annotations

"""Very simple Tkinter window hosting one quiz session.

Twelve note buttons, a Play button, a Restart button and two status
lines. The window is the session's button panel and feedback sink; the
Tk event loop is its scheduler and frame clock.
"""

import random
import time
import tkinter as tk
from tkinter import ttk
from typing import Any, Dict, List, Optional

from ..session.collaborators import NotePlayer
from ..session.policy import QuizPolicy
from ..session.quiz import QuizSession
from ..theory.notes import NOTE_COUNT
from ..timing.scheduler import TkScheduler
from .events import SESSION_ENDED
from .keymap import KeyBindings


class QuizWindow(tk.Tk):
    def __init__(
        self,
        cfg: Dict[str, Any],
        policy: QuizPolicy,
        player: Optional[NotePlayer] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__()
        self.title("PitchQuiz")
        self.geometry("720x260")

        self.cfg = cfg
        self.player = player
        keys = cfg.get("keys", {})
        self.key_bindings = KeyBindings(keys.get("play", "space"), keys.get("notes", []))
        self._frame_ms = int(cfg.get("window", {}).get("frame_ms", 16))
        self._interactable = False
        self._last_frame: Optional[float] = None
        self._frame_job: Optional[str] = None

        self.feedback_var = tk.StringVar(value="")
        self.score_var = tk.StringVar(value="")
        self.note_buttons: List[ttk.Button] = []

        self.session = QuizSession(
            policy,
            TkScheduler(self),
            player=player,
            buttons=self,
            feedback=self,
            rng=rng,
        )
        self.session.bus.subscribe(SESSION_ENDED, self._on_session_ended)

        self._build_controls()
        self.focus_set()
        self.bind("<KeyPress>", self._on_key)
        self.protocol("WM_DELETE_WINDOW", self._on_close)

    def _build_controls(self) -> None:
        top = ttk.Frame(self)
        top.pack(side=tk.TOP, fill=tk.X, padx=10, pady=10)
        ttk.Label(top, textvariable=self.feedback_var, anchor=tk.W).pack(side=tk.LEFT, fill=tk.X, expand=True)
        ttk.Button(top, text="Restart", takefocus=False, command=self.start).pack(side=tk.RIGHT)
        self.play_button = ttk.Button(top, text="Play", takefocus=False, command=self.session.request_playback)
        self.play_button.pack(side=tk.RIGHT, padx=8)

        keyboard = ttk.Frame(self)
        keyboard.pack(side=tk.TOP, fill=tk.BOTH, expand=True, padx=10)
        for note in range(NOTE_COUNT):
            legend = self.session.get_note_label(note)
            hint = self.key_bindings.legend(note)
            if hint:
                legend += f"\n({hint})"
            # buttons never take keyboard focus; keys only reach the session via _on_key
            btn = ttk.Button(
                keyboard, text=legend, width=5, takefocus=False, command=lambda n=note: self.session.submit_answer(n)
            )
            btn.grid(row=0, column=note, padx=2, pady=6, sticky=tk.NSEW)
            keyboard.columnconfigure(note, weight=1)
            self.note_buttons.append(btn)

        status = ttk.Frame(self)
        status.pack(side=tk.BOTTOM, fill=tk.X, padx=10, pady=(0, 8))
        ttk.Label(status, textvariable=self.score_var, anchor=tk.W).pack(side=tk.LEFT)

    # ButtonPanel -------------------------------------------------------
    def set_interactable(self, interactable: bool) -> None:
        self._interactable = bool(interactable)
        state = "!disabled" if interactable else "disabled"
        for btn in self.note_buttons:
            btn.state([state])

    # FeedbackSink ------------------------------------------------------
    def show_message(self, text: str) -> None:
        self.feedback_var.set(text)

    def show_score(self, text: str) -> None:
        self.score_var.set(text)

    # Session driving ---------------------------------------------------
    def start(self) -> None:
        self.session.start()
        self.play_button.state(["!disabled"])
        self._last_frame = time.monotonic()
        if self._frame_job is None:
            self._frame_job = self.after(self._frame_ms, self._on_frame)

    def _on_frame(self) -> None:
        now = time.monotonic()
        dt = now - self._last_frame if self._last_frame is not None else 0.0
        self._last_frame = now
        self.session.tick(dt)
        if self.session.is_session_active():
            self._frame_job = self.after(self._frame_ms, self._on_frame)
        else:
            self._frame_job = None

    def _on_key(self, event: tk.Event) -> Optional[str]:
        action = self.key_bindings.resolve(event.keysym, self._interactable)
        if action is None:
            return None
        kind, note = action
        if kind == "play":
            self.session.request_playback()
        elif note is not None:
            self.session.submit_answer(note)
        return "break"

    def _on_session_ended(self, _payload: Any) -> None:
        self.play_button.state(["disabled"])

    def _on_close(self) -> None:
        if self._frame_job is not None:
            self.after_cancel(self._frame_job)
            self._frame_job = None
        self.session.close()
        close = getattr(self.player, "close", None)
        if callable(close):
            close()
        self.destroy()


def run_gui(cfg: Dict[str, Any], policy: QuizPolicy, player: Optional[NotePlayer] = None, rng: Optional[random.Random] = None) -> None:
    app = QuizWindow(cfg, policy, player=player, rng=rng)
    app.start()
    app.mainloop()
