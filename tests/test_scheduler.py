import unittest
from unittest.mock import MagicMock

from pitchquiz.timing.scheduler import ManualScheduler, Scheduler, TkScheduler


class ManualSchedulerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.sched = ManualScheduler()
        self.calls = []

    def _cb(self, name):
        return lambda: self.calls.append(name)

    def test_never_fires_inside_schedule(self) -> None:
        action = self.sched.schedule(0, self._cb("a"))
        self.assertEqual(self.calls, [])
        self.assertTrue(action.pending)
        self.assertEqual(self.sched.advance(0), 1)
        self.assertEqual(self.calls, ["a"])
        self.assertTrue(action.fired)
        self.assertFalse(action.pending)

    def test_non_positive_delay_fires_on_next_tick(self) -> None:
        self.sched.schedule(-3, self._cb("neg"))
        self.assertEqual(self.calls, [])
        self.sched.advance(0)
        self.assertEqual(self.calls, ["neg"])

    def test_fires_only_once_delay_has_elapsed(self) -> None:
        self.sched.schedule(1.0, self._cb("a"))
        self.sched.advance(0.4)
        self.assertEqual(self.calls, [])
        self.sched.advance(0.6)
        self.assertEqual(self.calls, ["a"])
        self.sched.advance(5)
        self.assertEqual(self.calls, ["a"])

    def test_cancel_before_firing(self) -> None:
        action = self.sched.schedule(0.5, self._cb("a"))
        action.cancel()
        action.cancel()
        self.sched.advance(1)
        self.assertEqual(self.calls, [])
        self.assertTrue(action.cancelled)
        self.assertEqual(self.sched.pending_count(), 0)

    def test_cancel_after_firing_is_noop(self) -> None:
        action = self.sched.schedule(0.1, self._cb("a"))
        self.sched.advance(0.2)
        self.sched.cancel(action)
        self.assertTrue(action.fired)
        self.assertFalse(action.cancelled)

    def test_cancel_none_is_tolerated(self) -> None:
        self.sched.cancel(None)

    def test_fires_in_due_order_then_schedule_order(self) -> None:
        self.sched.schedule(0.3, self._cb("late"))
        self.sched.schedule(0.1, self._cb("early"))
        self.sched.schedule(0.1, self._cb("early2"))
        self.sched.advance(1)
        self.assertEqual(self.calls, ["early", "early2", "late"])

    def test_callback_scheduled_during_advance_waits(self) -> None:
        def chain():
            self.calls.append("first")
            self.sched.schedule(0, self._cb("second"))

        self.sched.schedule(0, chain)
        self.sched.advance(0)
        self.assertEqual(self.calls, ["first"])
        self.sched.advance(0)
        self.assertEqual(self.calls, ["first", "second"])

    def test_base_scheduler_is_abstract(self) -> None:
        with self.assertRaises(NotImplementedError):
            Scheduler().schedule(1, lambda: None)


class TkSchedulerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.widget = MagicMock()
        self.widget.after.return_value = "after#1"
        self.sched = TkScheduler(self.widget)

    def test_schedules_in_milliseconds(self) -> None:
        cb = MagicMock()
        action = self.sched.schedule(0.25, cb)
        ms, fire = self.widget.after.call_args[0]
        self.assertEqual(ms, 250)
        cb.assert_not_called()
        fire()
        cb.assert_called_once_with()
        self.assertTrue(action.fired)

    def test_negative_delay_goes_through_event_loop(self) -> None:
        cb = MagicMock()
        self.sched.schedule(-1, cb)
        self.assertEqual(self.widget.after.call_args[0][0], 0)
        cb.assert_not_called()

    def test_cancel_uses_after_cancel_once(self) -> None:
        cb = MagicMock()
        action = self.sched.schedule(1, cb)
        action.cancel()
        action.cancel()
        self.widget.after_cancel.assert_called_once_with("after#1")
        # a late event-loop delivery must not run the callback
        self.widget.after.call_args[0][1]()
        cb.assert_not_called()

    def test_cancel_after_fire_skips_after_cancel(self) -> None:
        action = self.sched.schedule(1, MagicMock())
        self.widget.after.call_args[0][1]()
        action.cancel()
        self.widget.after_cancel.assert_not_called()


if __name__ == "__main__":
    unittest.main()
