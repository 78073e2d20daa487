from __future__ import annotations

"""Countdown for timed sessions, driven once per host frame."""

import math
from typing import Callable


class SessionClock:
    """Counts ``duration`` seconds down to zero and reports expiry once.

    The owner calls :meth:`tick` with the frame delta. Remaining time is
    clamped at zero; ticks after expiry or after :meth:`stop` do nothing.
    """

    def __init__(self, duration: float, on_expired: Callable[[], None]) -> None:
        if duration <= 0:
            raise ValueError(f"Session duration must be positive, got {duration}")
        self.duration = float(duration)
        self._remaining = float(duration)
        self._on_expired = on_expired
        self.expired = False
        self.stopped = False

    def tick(self, dt: float) -> None:
        if self.expired or self.stopped:
            return
        self._remaining = max(0.0, self._remaining - max(0.0, float(dt)))
        if self._remaining <= 0.0:
            self.expired = True
            self._on_expired()

    def remaining(self) -> float:
        return self._remaining

    def seconds_left(self) -> int:
        return int(math.ceil(self._remaining))

    def stop(self) -> None:
        self.stopped = True
