from __future__ import annotations

"""Quiz session policy (construction-time configuration) using Pydantic.

Every field is required: values come from a preset, the YAML config and
CLI overrides (see ``app/presets.py`` and ``config/config.py``).
"""

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field, PositiveFloat, model_validator

SessionPolicy = Literal["fixed_duration_counted", "repeat_until_correct"]


class AdvanceDelays(BaseModel):
    """Seconds of feedback before moving on, by answer outcome."""

    correct: float = Field(ge=0)
    incorrect: float = Field(ge=0)

    def for_outcome(self, is_correct: bool) -> float:
        return self.correct if is_correct else self.incorrect


class QuizPolicy(BaseModel):
    """How a quiz session scores, advances and ends.

    - session_policy: ``fixed_duration_counted`` scores correct/total against
      the clock and moves to a new note after a miss;
      ``repeat_until_correct`` keeps a running score and re-asks the same
      note after a miss.
    - auto_replay_on_miss: replay the note when re-asking after a miss.
    - auto_play_next: play the next note as soon as it is picked.
    - advance_delays: feedback time before the next step.
    - session_duration: seconds on the clock, or None for an untimed session.
    """

    model_config = {"frozen": True}

    session_policy: SessionPolicy
    auto_replay_on_miss: bool
    auto_play_next: bool
    advance_delays: AdvanceDelays
    session_duration: Optional[PositiveFloat]

    @model_validator(mode="after")
    def _counted_needs_duration(self) -> "QuizPolicy":
        if self.session_policy == "fixed_duration_counted" and self.session_duration is None:
            raise ValueError("fixed_duration_counted sessions need a session_duration")
        return self

    @property
    def counted(self) -> bool:
        return self.session_policy == "fixed_duration_counted"

    @property
    def repeat_on_miss(self) -> bool:
        return self.session_policy == "repeat_until_correct"

    @property
    def timed(self) -> bool:
        return self.session_duration is not None

    @classmethod
    def from_params(cls, params: Dict[str, Any]) -> "QuizPolicy":
        """Build from a flat parameter dict as produced by preset resolution."""
        return cls(**{k: params[k] for k in cls.model_fields if k in params})
