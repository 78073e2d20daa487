from __future__ import annotations

"""Session score tracking.

Two scoring schemes exist and the session policy picks one at
construction time:

- counted: every answer adds to ``total``; correct ones also to ``correct``.
- streak: only correct answers count, wrong ones leave the score alone.
"""

from typing import TYPE_CHECKING, Dict

if TYPE_CHECKING:  # pragma: no cover
    from ..session.policy import QuizPolicy


class ScoreTracker:
    """Abstract-like base for score keeping."""

    def record_answer(self, is_correct: bool) -> None:
        raise NotImplementedError

    def summary(self) -> str:
        raise NotImplementedError

    def as_dict(self) -> Dict[str, int]:
        raise NotImplementedError


class CountedScore(ScoreTracker):
    def __init__(self) -> None:
        self.correct = 0
        self.total = 0

    def record_answer(self, is_correct: bool) -> None:
        self.total += 1
        if is_correct:
            self.correct += 1

    def summary(self) -> str:
        return f"{self.correct}/{self.total}"

    def as_dict(self) -> Dict[str, int]:
        return {"correct": self.correct, "total": self.total}


class StreakScore(ScoreTracker):
    def __init__(self) -> None:
        self.score = 0

    def record_correct(self) -> None:
        self.score += 1

    def record_answer(self, is_correct: bool) -> None:
        if is_correct:
            self.record_correct()

    def summary(self) -> str:
        return str(self.score)

    def as_dict(self) -> Dict[str, int]:
        return {"score": self.score}


def make_score_tracker(policy: "QuizPolicy") -> ScoreTracker:
    """Fresh tracker for the scoring scheme the policy asks for."""
    if policy.counted:
        return CountedScore()
    return StreakScore()


def format_score_line(score: ScoreTracker, seconds_left: int | None = None) -> str:
    """Status-bar text, e.g. ``SCORE: 3/5  TIME: 12s``."""
    line = f"SCORE: {score.summary()}"
    if seconds_left is not None:
        line += f"  TIME: {seconds_left}s"
    return line
