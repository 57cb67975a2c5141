from datetime import timedelta

import pytest

from lexio.application.stats import StatsTracker


def test_points_and_counts():
    tracker = StatsTracker()
    tracker.record(True, timedelta(seconds=2))
    tracker.record(False, timedelta(seconds=4))
    tracker.record(True, timedelta(seconds=6))

    stats = tracker.stats
    assert stats.correct_answers == 2
    assert stats.wrong_answers == 1
    assert stats.points == 25
    assert stats.average_response_time == timedelta(seconds=4)
    assert stats.accuracy == pytest.approx(2 / 3)


def test_negative_response_time_counts_as_zero():
    tracker = StatsTracker()
    tracker.record(True, timedelta(seconds=-3))
    assert tracker.stats.total_response_time == timedelta(0)


def test_summary_before_any_grade():
    summary = StatsTracker().summary()
    assert summary["accuracy"] is None
    assert summary["avg_response_seconds"] is None
    assert summary["points"] == 0
