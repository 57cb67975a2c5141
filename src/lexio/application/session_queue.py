"""
Study-session queue.

Holds the ordered working set of cards for one session and decides which
card is shown next:
1. A successful grade removes the card for the rest of the session
2. A lapse requeues the updated card at the back, behind unseen cards
3. The session completes when the queue drains, the card limit is hit,
   or the optional time limit has elapsed
"""

import logging
import random
from collections import deque
from collections.abc import Callable, Iterable, Mapping
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Any

from lexio.domain.constants import DEFAULT_SESSION_LIMIT
from lexio.domain.errors import InvalidInput, InvalidState
from lexio.domain.models import Card, GradeEvent, SessionState, SessionStats

from .grading import GradingPolicy, Rating
from .id_service import generate_session_id
from .records import parse_cards
from .scheduler import ReviewScheduler
from .stats import StatsTracker

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SessionQueue:
    """
    Mutable card queue for a single learner's single session.

    Not shared between sessions. Abandoning a session is just dropping the
    instance; grades are only applied when `grade` is called.
    """

    def __init__(
        self,
        cards: Iterable[Card],
        session_limit: int = DEFAULT_SESSION_LIMIT,
        *,
        scheduler: ReviewScheduler | None = None,
        policy: GradingPolicy | None = None,
        time_limit: timedelta | None = None,
        clock: Clock = utc_now,
        session_id: str | None = None,
    ):
        """
        Args:
            cards: Cards in the order they should be shown.
            session_limit: Maximum number of grades in this session.
            scheduler: Optional custom scheduler; uses default if not provided.
            policy: Grading policy for binary statuses and the success threshold.
            time_limit: Optional maximum session duration.
            clock: Source of the current time.
            session_id: Optional explicit ID; generated if not provided.
        """
        if isinstance(session_limit, bool) or not isinstance(session_limit, int):
            raise InvalidInput(f"session_limit must be an integer, got {session_limit!r}")
        if session_limit < 0:
            raise InvalidInput(f"session_limit must be non-negative, got {session_limit}")
        if time_limit is not None and time_limit <= timedelta(0):
            raise InvalidInput(f"time_limit must be positive, got {time_limit}")

        self._queue: deque[Card] = deque(cards)
        self.session_limit = session_limit
        self.time_limit = time_limit
        self.session_id = session_id or generate_session_id()
        self.studied_count = 0

        self._scheduler = scheduler or ReviewScheduler()
        self._policy = policy or GradingPolicy()
        self._clock = clock
        self._stats = StatsTracker()

        self.new_count = sum(1 for c in self._queue if c.is_new)
        self.learning_count = sum(1 for c in self._queue if c.is_learning)
        self.mastered_count = sum(1 for c in self._queue if c.is_mastered)
        self.total_cards = len(self._queue)

        self.started_at = clock()
        self._shown_at = self.started_at
        self._complete = False
        self.completion_reason: str | None = None
        self._check_complete(self.started_at)

    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping[str, Any] | Card],
        session_limit: int = DEFAULT_SESSION_LIMIT,
        shuffle: bool = False,
        rng: random.Random | None = None,
        **kwargs: Any,
    ) -> "SessionQueue":
        """
        Build a session from raw card mappings.

        With `shuffle`, the cards are permuted once here and never again.
        """
        cards = parse_cards(records)
        if shuffle and len(cards) > 1:
            (rng or random.Random()).shuffle(cards)
        return cls(cards, session_limit, **kwargs)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return SessionState.COMPLETE if self._complete else SessionState.ACTIVE

    @property
    def is_complete(self) -> bool:
        return self._complete

    @property
    def remaining(self) -> int:
        return len(self._queue)

    @property
    def stats(self) -> SessionStats:
        return self._stats.stats

    def current(self) -> Card | None:
        if self._complete or not self._queue:
            return None
        return self._queue[0]

    def cards(self) -> tuple[Card, ...]:
        """Snapshot of the queued cards in display order."""
        return tuple(self._queue)

    def elapsed(self, now: datetime | None = None) -> timedelta:
        return (now or self._clock()) - self.started_at

    def summary(self) -> dict[str, Any]:
        return {
            "session_id": self.session_id,
            "state": self.state.value,
            "reason": self.completion_reason,
            "studied": self.studied_count,
            "limit": self.session_limit,
            "remaining": self.remaining,
            "elapsed_seconds": self.elapsed().total_seconds(),
            **self._stats.summary(),
        }

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def grade(self, rating: Rating, reviewed_at: datetime | None = None) -> GradeEvent:
        """
        Grade the current card and advance the queue.

        Args:
            rating: A 0-5 quality, or a "repeat"/"learned" status.
            reviewed_at: Time of the grade; defaults to the session clock.

        Returns:
            The GradeEvent, carrying the updated card.

        Raises:
            InvalidState: If the session is already complete.
            InvalidInput: If the rating is not accepted, or `reviewed_at` is
                naive where the clock is aware (or the reverse).
        """
        card = self._require_current("grade")
        quality = self._policy.resolve_quality(rating)
        now = reviewed_at or self._clock()
        if (now.tzinfo is None) != (self._shown_at.tzinfo is None):
            raise InvalidInput(
                f"reviewed_at {now.isoformat()} must match the session clock's timezone awareness"
            )
        response_time = now - self._shown_at

        updated = self._scheduler.apply(card, quality, reviewed_at=now)
        success = self._policy.is_success(quality)
        status = self._policy.status_for(quality)
        updated = replace(updated, status=status)

        self._queue.popleft()
        if not success:
            self._queue.append(updated)
        self.studied_count += 1

        self._stats.record(success, response_time)
        self._shown_at = now

        event = GradeEvent(
            session_id=self.session_id,
            card=updated,
            quality=quality,
            status=status,
            requeued=not success,
            timestamp=now,
            response_time=response_time,
        )
        logger.debug(
            f"Graded {card.id!r} q={quality}: interval {card.interval}->{updated.interval}, "
            f"ease {card.ease_factor:.2f}->{updated.ease_factor:.2f}, "
            f"reps {card.repetitions}->{updated.repetitions}"
        )

        self._check_complete(now)
        return event

    def skip(self) -> None:
        """Move the current card to the back without grading it."""
        card = self._require_current("skip")
        self._queue.rotate(-1)
        self._shown_at = self._clock()
        logger.debug(f"Skipped {card.id!r}")

    def _require_current(self, operation: str) -> Card:
        card = self.current()
        if card is None:
            raise InvalidState(f"Cannot {operation}: session {self.session_id} is complete")
        return card

    def _check_complete(self, now: datetime) -> None:
        if self._complete:
            return
        if not self._queue:
            reason = "drained"
        elif self.studied_count >= self.session_limit:
            reason = "limit"
        elif self.time_limit is not None and now - self.started_at >= self.time_limit:
            reason = "time"
        else:
            return
        self._complete = True
        self.completion_reason = reason
        logger.info(
            f"Session {self.session_id} complete ({reason}): "
            f"{self.studied_count} graded, {len(self._queue)} left"
        )
