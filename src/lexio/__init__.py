"""lexio: SM-2 review scheduling and study-session queues."""

from lexio.application.scheduler import ReviewScheduler, compute_next
from lexio.application.session_queue import SessionQueue
from lexio.domain.errors import InvalidInput, InvalidState, LexioError
from lexio.domain.models import Card, CardStatus, GradeEvent, SchedulingState, SessionState

__all__ = [
    "Card",
    "CardStatus",
    "GradeEvent",
    "InvalidInput",
    "InvalidState",
    "LexioError",
    "ReviewScheduler",
    "SchedulingState",
    "SessionQueue",
    "SessionState",
    "compute_next",
]
