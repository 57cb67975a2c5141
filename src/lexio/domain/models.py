"""
Domain models for review scheduling and study sessions.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any

from .constants import (
    DEFAULT_EASE_FACTOR,
    DEFAULT_INTERVAL,
    DEFAULT_REPETITIONS,
    MASTERED_REPETITIONS,
)


class CardStatus(str, Enum):
    """Per-card status used by the two-button study screen."""

    NONE = "none"
    REPEAT = "repeat"
    LEARNED = "learned"


class SessionState(str, Enum):
    ACTIVE = "active"
    COMPLETE = "complete"


@dataclass(frozen=True)
class SchedulingState:
    """
    The three SM-2 fields the scheduler reads and writes.

    Attributes:
        interval: Days until the next scheduled review.
        ease_factor: Multiplier controlling interval growth.
        repetitions: Consecutive successful reviews since the last lapse.
    """

    interval: int = DEFAULT_INTERVAL
    ease_factor: float = DEFAULT_EASE_FACTOR
    repetitions: int = DEFAULT_REPETITIONS


@dataclass(frozen=True)
class Card:
    """
    A unit of learning material with its review state.

    `front` and `back` are opaque to scheduling. The new/learning/mastered
    flags are derived on access from `repetitions` and `last_reviewed`, or
    from `status` for cards that carry no review timestamp.
    """

    id: Any
    front: str = ""
    back: str = ""
    interval: int = DEFAULT_INTERVAL
    ease_factor: float = DEFAULT_EASE_FACTOR
    repetitions: int = DEFAULT_REPETITIONS
    last_reviewed: datetime | None = None
    status: CardStatus = CardStatus.NONE

    @property
    def scheduling(self) -> SchedulingState:
        return SchedulingState(
            interval=self.interval,
            ease_factor=self.ease_factor,
            repetitions=self.repetitions,
        )

    @property
    def is_new(self) -> bool:
        return self.last_reviewed is None and self.status is CardStatus.NONE

    @property
    def is_mastered(self) -> bool:
        # Stores that only track status have no review timestamp
        if self.last_reviewed is None:
            return self.status is CardStatus.LEARNED
        return self.repetitions >= MASTERED_REPETITIONS

    @property
    def is_learning(self) -> bool:
        return not self.is_new and not self.is_mastered

    @property
    def due_at(self) -> datetime | None:
        """When the card is next due, or None if it was never reviewed."""
        if self.last_reviewed is None:
            return None
        return self.last_reviewed + timedelta(days=self.interval)


@dataclass(frozen=True)
class GradeEvent:
    """
    Record of a single grading action, handed back to the caller.

    The core never persists it; the caller decides whether to store it.

    Attributes:
        session_id: Session that produced the event.
        card: The card with its updated scheduling fields.
        quality: Quality on the 0-5 scale the scheduler received.
        status: Binary projection of the quality (repeat/learned).
        requeued: True if the card went back into the queue.
        timestamp: When the grade was applied.
        response_time: Time between the card becoming current and the grade.
    """

    session_id: str
    card: Card
    quality: int
    status: CardStatus
    requeued: bool
    timestamp: datetime
    response_time: timedelta

    @property
    def card_id(self) -> Any:
        return self.card.id

    @property
    def new_interval(self) -> int:
        return self.card.interval

    @property
    def new_ease_factor(self) -> float:
        return self.card.ease_factor

    @property
    def new_repetitions(self) -> int:
        return self.card.repetitions

    def to_dict(self) -> dict[str, Any]:
        return {
            "sessionId": self.session_id,
            "cardId": self.card_id,
            "quality": self.quality,
            "status": self.status.value,
            "newInterval": self.new_interval,
            "newEaseFactor": self.new_ease_factor,
            "newRepetitions": self.new_repetitions,
            "requeued": self.requeued,
            "timestamp": self.timestamp.isoformat(),
            "responseTimeMs": int(self.response_time.total_seconds() * 1000),
        }


@dataclass
class SessionStats:
    """Running statistics for one study session."""

    correct_answers: int = 0
    wrong_answers: int = 0
    points: int = 0
    total_response_time: timedelta = field(default_factory=timedelta)

    @property
    def graded(self) -> int:
        return self.correct_answers + self.wrong_answers

    @property
    def average_response_time(self) -> timedelta | None:
        if self.graded == 0:
            return None
        return self.total_response_time / self.graded

    @property
    def accuracy(self) -> float | None:
        if self.graded == 0:
            return None
        return self.correct_answers / self.graded
