"""
Session statistics tracking.

Counts correct/wrong grades, awards points and accumulates response times.
This is a pure computation module with no I/O.
"""

from datetime import timedelta
from typing import Any

from lexio.domain.constants import POINTS_FAILURE, POINTS_SUCCESS
from lexio.domain.models import SessionStats


class StatsTracker:
    """Accumulates SessionStats as grades come in."""

    def __init__(
        self,
        points_success: int = POINTS_SUCCESS,
        points_failure: int = POINTS_FAILURE,
    ):
        self.stats = SessionStats()
        self._points_success = points_success
        self._points_failure = points_failure

    def record(self, success: bool, response_time: timedelta) -> None:
        if success:
            self.stats.correct_answers += 1
            self.stats.points += self._points_success
        else:
            self.stats.wrong_answers += 1
            self.stats.points += self._points_failure
        # Clock skew can make this negative; count it as instant
        self.stats.total_response_time += max(response_time, timedelta(0))

    def summary(self) -> dict[str, Any]:
        avg = self.stats.average_response_time
        return {
            "correct": self.stats.correct_answers,
            "wrong": self.stats.wrong_answers,
            "points": self.stats.points,
            "accuracy": self.stats.accuracy,
            "avg_response_seconds": avg.total_seconds() if avg is not None else None,
        }
