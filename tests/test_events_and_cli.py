import io
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest.mock import MagicMock, patch

from pitchquiz.app import explain
from pitchquiz.app.cli import main
from pitchquiz.app.events import EventBus


class EventBusTests(unittest.TestCase):
    def test_emit_reaches_subscribers(self) -> None:
        bus = EventBus()
        handler = MagicMock()
        bus.subscribe("x", handler)
        bus.emit("x", {"a": 1})
        handler.assert_called_once_with({"a": 1})
        bus.unsubscribe("x", handler)
        bus.emit("x", {"a": 2})
        handler.assert_called_once_with({"a": 1})

    def test_failing_handler_does_not_stop_others(self) -> None:
        bus = EventBus()
        after = MagicMock()
        bus.subscribe("x", MagicMock(side_effect=RuntimeError("boom")))
        bus.subscribe("x", after)
        err = io.StringIO()
        with redirect_stderr(err):
            bus.emit("x", None)
        after.assert_called_once_with(None)
        self.assertIn("[WARN]", err.getvalue())


class ExplainTests(unittest.TestCase):
    def tearDown(self) -> None:
        explain.enable(False)

    def test_trace_only_when_enabled(self) -> None:
        out = io.StringIO()
        with redirect_stdout(out):
            explain.trace("graded", {"correct": True})
            explain.enable(True)
            explain.trace("graded", {"correct": True})
        self.assertEqual(out.getvalue(), '[EXPLAIN] graded :: {"correct":true}\n')


class CliTests(unittest.TestCase):
    def test_list_presets(self) -> None:
        out = io.StringIO()
        with redirect_stdout(out):
            self.assertEqual(main(["list-presets"]), 0)
        self.assertIn("fixed_duration_counted", out.getvalue())
        self.assertIn("repeat_until_correct", out.getvalue())

    def test_show_params(self) -> None:
        out = io.StringIO()
        with redirect_stdout(out):
            self.assertEqual(main(["show-params", "--preset", "repeat_until_correct"]), 0)
        self.assertIn("'session_policy': 'repeat_until_correct'", out.getvalue())

    def test_show_params_unknown_preset(self) -> None:
        with redirect_stderr(io.StringIO()):
            self.assertEqual(main(["show-params", "--preset", "blitz"]), 2)

    def test_run_rejects_invalid_settings(self) -> None:
        err = io.StringIO()
        with redirect_stderr(err), redirect_stdout(io.StringIO()):
            self.assertEqual(main(["run", "--no-audio", "--duration", "-5"]), 2)
        self.assertIn("Invalid quiz settings", err.getvalue())

    def test_run_launches_window(self) -> None:
        with patch("pitchquiz.app.cli._launch") as run_gui, redirect_stdout(io.StringIO()):
            self.assertEqual(main(["run", "--no-audio", "--preset", "repeat_until_correct", "--no-auto-replay"]), 0)
        cfg, policy = run_gui.call_args[0]
        self.assertFalse(cfg["audio"]["enabled"])
        self.assertEqual(policy.session_policy, "repeat_until_correct")
        self.assertFalse(policy.auto_replay_on_miss)
        self.assertIsNone(run_gui.call_args[1]["player"])

    def test_run_delay_and_play_flags(self) -> None:
        argv = ["run", "--no-audio", "--correct-delay", "0.25", "--incorrect-delay", "2", "--no-auto-play", "--auto-replay"]
        with patch("pitchquiz.app.cli._launch") as run_gui, redirect_stdout(io.StringIO()):
            self.assertEqual(main(argv), 0)
        policy = run_gui.call_args[0][1]
        self.assertEqual(policy.advance_delays.correct, 0.25)
        self.assertEqual(policy.advance_delays.incorrect, 2.0)
        self.assertFalse(policy.auto_play_next)
        self.assertTrue(policy.auto_replay_on_miss)
        self.assertEqual(policy.session_duration, 30.0)


if __name__ == "__main__":
    unittest.main()
