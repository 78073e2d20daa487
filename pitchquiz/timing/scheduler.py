from __future__ import annotations

"""Cancellable one-shot delayed callbacks.

A :class:`Scheduler` hands out :class:`ScheduledAction` handles. Two hosts
are provided:

- :class:`ManualScheduler` keeps a virtual clock that the host moves with
  ``advance(dt)`` once per frame. Tests use it to step time exactly.
- :class:`TkScheduler` rides on a Tk widget's ``after``/``after_cancel``.

Callbacks never run inside ``schedule()``; a non-positive delay means
"on the next tick".
"""

import heapq
import itertools
from typing import Any, Callable, List, Optional, Tuple


class ScheduledAction:
    """Handle for a callback that will run once unless cancelled first."""

    def __init__(self, delay: float, callback: Callable[[], None], label: str = "") -> None:
        self.delay = delay
        self.callback = callback
        self.label = label
        self.cancelled = False
        self.fired = False
        self._on_cancel: Optional[Callable[[], None]] = None

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.fired)

    def cancel(self) -> None:
        if not self.pending:
            return
        self.cancelled = True
        if self._on_cancel is not None:
            self._on_cancel()
            self._on_cancel = None

    def _fire(self) -> None:
        if not self.pending:
            return
        self.fired = True
        self._on_cancel = None
        self.callback()

    def __repr__(self) -> str:
        state = "pending" if self.pending else ("fired" if self.fired else "cancelled")
        return f"ScheduledAction({self.label or self.callback!r}, delay={self.delay}, {state})"


class Scheduler:
    """Abstract-like scheduler interface."""

    def schedule(self, delay: float, callback: Callable[[], None], label: str = "") -> ScheduledAction:
        raise NotImplementedError

    def cancel(self, action: Optional[ScheduledAction]) -> None:
        if action is not None:
            action.cancel()


class ManualScheduler(Scheduler):
    """Scheduler over a virtual clock advanced explicitly by the host.

    Actions fire in due-time order, ties in scheduling order. An action
    scheduled while ``advance()`` is running waits for the next
    ``advance()`` even when its delay is zero.
    """

    def __init__(self) -> None:
        self.now: float = 0.0
        self._tick = 0
        self._seq = itertools.count()
        self._queue: List[Tuple[float, int, int, ScheduledAction]] = []

    def schedule(self, delay: float, callback: Callable[[], None], label: str = "") -> ScheduledAction:
        action = ScheduledAction(delay, callback, label)
        due = self.now + max(0.0, float(delay))
        heapq.heappush(self._queue, (due, next(self._seq), self._tick, action))
        return action

    def advance(self, dt: float = 0.0) -> int:
        """Move the clock forward by ``dt`` seconds; return how many actions fired."""
        self._tick += 1
        tick = self._tick
        self.now += max(0.0, float(dt))
        fired = 0
        deferred: List[Tuple[float, int, int, ScheduledAction]] = []
        while self._queue and self._queue[0][0] <= self.now:
            entry = heapq.heappop(self._queue)
            action = entry[3]
            if not action.pending:
                continue
            if entry[2] >= tick:
                # scheduled during this advance
                deferred.append(entry)
                continue
            action._fire()
            fired += 1
        for entry in deferred:
            heapq.heappush(self._queue, entry)
        return fired

    def pending_count(self) -> int:
        return sum(1 for entry in self._queue if entry[3].pending)


class TkScheduler(Scheduler):
    """Scheduler backed by a Tk widget's event loop."""

    def __init__(self, widget: Any) -> None:
        self.widget = widget

    def schedule(self, delay: float, callback: Callable[[], None], label: str = "") -> ScheduledAction:
        action = ScheduledAction(delay, callback, label)
        ms = max(0, int(round(float(delay) * 1000)))
        after_id = self.widget.after(ms, action._fire)
        action._on_cancel = lambda: self.widget.after_cancel(after_id)
        return action
