from __future__ import annotations

"""Quiz session state machine.

One session drives one game screen: it picks a target note, asks the note
player to sound it, grades the player's answer, shows feedback and then
advances on a scheduled delay. Scoring, what happens after a miss and
whether the session runs against a clock all come from the
:class:`~pitchquiz.session.policy.QuizPolicy`.

At most one delayed advance is pending at any time. Scheduling a new one
cancels the previous, and ``start()``, clock expiry and ``close()`` cancel
it too, so a callback never lands in a state it was not scheduled for.
"""

import random
from typing import Callable, Literal, Optional

from ..app.events import ANSWER_GRADED, PHASE_CHANGED, SESSION_ENDED, SESSION_STARTED, EventBus
from ..app.explain import trace as xtrace
from ..app.explain import warn
from ..stats.score import ScoreTracker, format_score_line, make_score_tracker
from ..theory.notes import is_valid_note, label_of, label_or_empty, random_note
from ..timing.scheduler import ScheduledAction, Scheduler
from .clock import SessionClock
from .collaborators import ButtonPanel, FeedbackSink, NotePlayer
from .policy import QuizPolicy

Phase = Literal["awaiting_playback", "awaiting_answer", "showing_feedback", "ended"]

PROMPT_MESSAGE = "Listen and choose a note"
CORRECT_MESSAGE = "Correct! Next note is coming..."
RETRY_MESSAGE = "Not quite. Listen again and try once more..."


class QuizSession:
    def __init__(
        self,
        policy: QuizPolicy,
        scheduler: Scheduler,
        *,
        player: Optional[NotePlayer] = None,
        buttons: Optional[ButtonPanel] = None,
        feedback: Optional[FeedbackSink] = None,
        rng: Optional[random.Random] = None,
        bus: Optional[EventBus] = None,
    ) -> None:
        self.policy = policy
        self.scheduler = scheduler
        self.player = player
        self.buttons = buttons
        self.feedback = feedback
        self.rng = rng
        self.bus = bus or EventBus()
        self._phase: Phase = "awaiting_playback"
        self._target_note = 0
        self._active = False
        self._closed = False
        self._score: ScoreTracker = make_score_tracker(policy)
        self._pending: Optional[ScheduledAction] = None
        self._clock: Optional[SessionClock] = None

    # Read-only state ---------------------------------------------------
    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def target_note(self) -> int:
        return self._target_note

    @property
    def score(self) -> ScoreTracker:
        return self._score

    @property
    def pending(self) -> Optional[ScheduledAction]:
        return self._pending

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def remaining_time(self) -> Optional[float]:
        if self._clock is None:
            return None
        return self._clock.remaining()

    def is_session_active(self) -> bool:
        return self._active

    def current_score_summary(self) -> str:
        return self._score.summary()

    def get_note_label(self, note: int) -> str:
        return label_or_empty(note)

    # Lifecycle ---------------------------------------------------------
    def start(self) -> None:
        """Begin a new session; restarting an active one resets it fully."""
        if self._closed:
            warn("QuizSession: start() called on a closed session.")
            return
        self._cancel_pending()
        if self._clock is not None:
            self._clock.stop()
        self._score = make_score_tracker(self.policy)
        self._active = True
        self._clock = None
        if self.policy.timed:
            self._clock = SessionClock(self.policy.session_duration, self._on_time_up)
        self._update_score()
        self._prepare_next_question()
        xtrace("session_started", {"policy": self.policy.session_policy, "duration": self.policy.session_duration})
        self.bus.emit(SESSION_STARTED, {"policy": self.policy.session_policy})

    def tick(self, dt: float) -> None:
        """Advance the session clock by one host frame."""
        if self._clock is None or not self._active:
            return
        self._clock.tick(dt)
        if self._active:
            self._update_score()

    def close(self) -> None:
        """Tear the session down; nothing scheduled by it will run afterwards."""
        if self._closed:
            return
        self._cancel_pending()
        if self._clock is not None:
            self._clock.stop()
        self._active = False
        self._closed = True
        self._stop_note()
        xtrace("session_closed", {"score": self._score.summary()})

    # Player input ------------------------------------------------------
    def request_playback(self) -> None:
        """Play the current note, or replay it while an answer is awaited."""
        if not self._active:
            self._ignored("playback", "inactive")
            return
        if self._phase not in ("awaiting_playback", "awaiting_answer"):
            self._ignored("playback", "wrong_phase")
            return
        self._play_current_note()
        if self._phase == "awaiting_playback":
            self._set_phase("awaiting_answer")
            self._set_buttons(True)

    def submit_answer(self, note: int) -> None:
        if not self._active:
            self._ignored("answer", "inactive")
            return
        if self._phase != "awaiting_answer":
            self._ignored("answer", "wrong_phase")
            return

        self._set_buttons(False)
        self._stop_note()
        is_correct = is_valid_note(note) and note == self._target_note
        self._score.record_answer(is_correct)
        self._update_score()
        self._set_phase("showing_feedback")
        xtrace("graded", {"answer": note, "truth": self._target_note, "correct": is_correct})
        self.bus.emit(
            ANSWER_GRADED,
            {"answer": note, "truth": self._target_note, "correct": is_correct, "score": self._score.summary()},
        )

        if is_correct:
            self._show_message(CORRECT_MESSAGE)
        elif self.policy.repeat_on_miss:
            self._show_message(RETRY_MESSAGE)
        else:
            self._show_message(f"Almost! The answer was {label_of(self._target_note)}. Next note is coming...")

        delay = self.policy.advance_delays.for_outcome(is_correct)
        self._schedule_advance(delay, lambda: self._advance(is_correct), "correct" if is_correct else "incorrect")

    # Transitions -------------------------------------------------------
    def _schedule_advance(self, delay: float, callback: Callable[[], None], label: str) -> None:
        self._cancel_pending()
        self._pending = self.scheduler.schedule(delay, callback, label)

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _advance(self, was_correct: bool) -> None:
        self._pending = None
        xtrace("advance", {"after_correct": was_correct})
        if not was_correct and self.policy.repeat_on_miss:
            self._set_phase("awaiting_answer")
            self._set_buttons(True)
            self._show_message(PROMPT_MESSAGE)
            if self.policy.auto_replay_on_miss:
                self._play_current_note()
            return
        self._prepare_next_question()
        if self.policy.auto_play_next:
            self.request_playback()

    def _prepare_next_question(self) -> None:
        self._target_note = random_note(self.rng)
        self._set_phase("awaiting_playback")
        self._set_buttons(False)
        self._show_message(PROMPT_MESSAGE)

    def _on_time_up(self) -> None:
        self._active = False
        self._set_buttons(False)
        self._cancel_pending()
        self._set_phase("ended")
        self._update_score()
        self._show_message(f"Time's up! Score: {self._score.summary()}")
        xtrace("session_ended", self._score.as_dict())
        self.bus.emit(SESSION_ENDED, self._score.as_dict())

    def _set_phase(self, phase: Phase) -> None:
        if phase == self._phase:
            return
        previous = self._phase
        self._phase = phase
        self.bus.emit(PHASE_CHANGED, {"from": previous, "to": phase})

    def _ignored(self, action: str, reason: str) -> None:
        xtrace(f"{action}_ignored", {"reason": reason, "phase": self._phase})

    # Collaborator effects ----------------------------------------------
    def _play_current_note(self) -> None:
        if self.player is None:
            warn("QuizSession: no note player attached; skipping playback.")
            return
        xtrace("playback", {"note": self._target_note})
        self.player.play(self._target_note)

    def _stop_note(self) -> None:
        if self.player is None:
            return
        self.player.stop()

    def _set_buttons(self, interactable: bool) -> None:
        if self.buttons is None:
            return
        self.buttons.set_interactable(interactable)

    def _show_message(self, text: str) -> None:
        if self.feedback is None:
            return
        self.feedback.show_message(text)

    def _update_score(self) -> None:
        if self.feedback is None:
            return
        seconds_left = self._clock.seconds_left() if self._clock is not None else None
        self.feedback.show_score(format_score_line(self._score, seconds_left))
