import unittest
from unittest.mock import MagicMock

from pitchquiz.session.clock import SessionClock
from pitchquiz.session.policy import QuizPolicy
from pitchquiz.stats.score import CountedScore, StreakScore, format_score_line, make_score_tracker


def _policy(session_policy: str) -> QuizPolicy:
    return QuizPolicy.from_params(
        {
            "session_policy": session_policy,
            "auto_replay_on_miss": False,
            "auto_play_next": False,
            "advance_delays": {"correct": 1.0, "incorrect": 1.0},
            "session_duration": 30.0,
        }
    )


class ScoreTests(unittest.TestCase):
    def test_counted_score(self) -> None:
        s = CountedScore()
        self.assertEqual(s.summary(), "0/0")
        s.record_answer(True)
        s.record_answer(False)
        s.record_answer(True)
        self.assertEqual(s.summary(), "2/3")
        self.assertEqual(s.as_dict(), {"correct": 2, "total": 3})

    def test_streak_ignores_misses(self) -> None:
        s = StreakScore()
        s.record_correct()
        s.record_answer(False)
        s.record_answer(True)
        self.assertEqual(s.summary(), "2")
        self.assertEqual(s.as_dict(), {"score": 2})

    def test_policy_picks_tracker(self) -> None:
        self.assertIsInstance(make_score_tracker(_policy("fixed_duration_counted")), CountedScore)
        self.assertIsInstance(make_score_tracker(_policy("repeat_until_correct")), StreakScore)

    def test_score_line(self) -> None:
        s = CountedScore()
        s.record_answer(True)
        self.assertEqual(format_score_line(s), "SCORE: 1/1")
        self.assertEqual(format_score_line(s, 12), "SCORE: 1/1  TIME: 12s")


class SessionClockTests(unittest.TestCase):
    def test_expires_exactly_once(self) -> None:
        on_expired = MagicMock()
        clock = SessionClock(1.0, on_expired)
        clock.tick(0.4)
        clock.tick(0.4)
        on_expired.assert_not_called()
        self.assertAlmostEqual(clock.remaining(), 0.2)
        clock.tick(0.5)
        on_expired.assert_called_once_with()
        self.assertEqual(clock.remaining(), 0.0)
        clock.tick(3)
        clock.tick(3)
        on_expired.assert_called_once_with()
        self.assertEqual(clock.remaining(), 0.0)
        self.assertTrue(clock.expired)

    def test_seconds_left_rounds_up(self) -> None:
        clock = SessionClock(30, MagicMock())
        self.assertEqual(clock.seconds_left(), 30)
        clock.tick(0.5)
        self.assertEqual(clock.seconds_left(), 30)
        clock.tick(10)
        self.assertEqual(clock.seconds_left(), 20)

    def test_negative_delta_counts_as_zero(self) -> None:
        clock = SessionClock(5, MagicMock())
        clock.tick(-2)
        self.assertEqual(clock.remaining(), 5.0)

    def test_stopped_clock_ignores_ticks(self) -> None:
        on_expired = MagicMock()
        clock = SessionClock(1, on_expired)
        clock.stop()
        clock.tick(5)
        on_expired.assert_not_called()
        self.assertEqual(clock.remaining(), 1.0)

    def test_rejects_non_positive_duration(self) -> None:
        with self.assertRaises(ValueError):
            SessionClock(0, MagicMock())


if __name__ == "__main__":
    unittest.main()
