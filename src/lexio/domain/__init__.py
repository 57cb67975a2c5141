# Domain Package
from .errors import InvalidInput, InvalidState, LexioError
from .models import (
    Card,
    CardStatus,
    GradeEvent,
    SchedulingState,
    SessionState,
    SessionStats,
)

__all__ = [
    "Card",
    "CardStatus",
    "GradeEvent",
    "InvalidInput",
    "InvalidState",
    "LexioError",
    "SchedulingState",
    "SessionState",
    "SessionStats",
]
