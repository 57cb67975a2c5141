"""
SM-2 review scheduler.

Computes a card's next interval, ease factor and repetition count from its
current values and a 0-5 quality rating. This is a pure computation module
with no I/O.

    EF' = EF + (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02))
"""

import math
from dataclasses import replace
from datetime import datetime, timezone

from lexio.domain.constants import (
    FIRST_INTERVAL,
    MAX_QUALITY,
    MIN_EASE_FACTOR,
    MIN_INTERVAL,
    MIN_QUALITY,
    SECOND_INTERVAL,
    SUCCESS_THRESHOLD,
)
from lexio.domain.errors import InvalidInput
from lexio.domain.models import Card, SchedulingState


def validate_quality(quality: object) -> int:
    if isinstance(quality, bool) or not isinstance(quality, int):
        raise InvalidInput(f"Quality must be an integer, got {quality!r}")
    if quality < MIN_QUALITY or quality > MAX_QUALITY:
        raise InvalidInput(
            f"Quality must be between {MIN_QUALITY} and {MAX_QUALITY}, got {quality}"
        )
    return quality


def validate_state(current: SchedulingState) -> None:
    """Reject negative, fractional or non-numeric prior fields."""
    for name in ("interval", "repetitions"):
        value = getattr(current, name)
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidInput(f"{name} must be an integer, got {value!r}")
        if value < 0:
            raise InvalidInput(f"{name} must be non-negative, got {value}")

    ease = current.ease_factor
    if isinstance(ease, bool) or not isinstance(ease, (int, float)):
        raise InvalidInput(f"ease_factor must be a number, got {ease!r}")
    if not math.isfinite(ease) or ease <= 0:
        raise InvalidInput(f"ease_factor must be a positive finite number, got {ease}")


def calculate_ease_factor(current_ease: float, quality: int) -> float:
    """Apply the SM-2 ease adjustment and the 1.3 floor."""
    adjustment = 0.1 - (5 - quality) * (0.08 + (5 - quality) * 0.02)
    return max(MIN_EASE_FACTOR, current_ease + adjustment)


def compute_next(current: SchedulingState, quality: int) -> SchedulingState:
    """
    Compute the next scheduling parameters for a card.

    Args:
        current: The card's current interval, ease factor and repetitions.
        quality: Recall quality on the 0-5 scale. 3 and above is a success.

    Returns:
        A new SchedulingState. `current` is left untouched.

    Raises:
        InvalidInput: If quality or any prior field is out of domain.
    """
    quality = validate_quality(quality)
    validate_state(current)

    if quality >= SUCCESS_THRESHOLD:
        repetitions = current.repetitions + 1
        if current.repetitions == 0:
            interval = FIRST_INTERVAL
        elif current.repetitions == 1:
            interval = SECOND_INTERVAL
        else:
            interval = round(current.interval * current.ease_factor)
        ease_factor = calculate_ease_factor(current.ease_factor, quality)
    else:
        # Lapse: restart the streak, keep ease
        repetitions = 0
        interval = FIRST_INTERVAL
        ease_factor = max(MIN_EASE_FACTOR, float(current.ease_factor))

    return SchedulingState(
        interval=max(MIN_INTERVAL, interval),
        ease_factor=ease_factor,
        repetitions=repetitions,
    )


class ReviewScheduler:
    """
    Applies `compute_next` to cards.

    Stateless and side-effect free.
    """

    def compute_next(self, current: SchedulingState, quality: int) -> SchedulingState:
        return compute_next(current, quality)

    def apply(self, card: Card, quality: int, reviewed_at: datetime | None = None) -> Card:
        """
        Return a copy of `card` with updated scheduling fields.

        `last_reviewed` is set to `reviewed_at` (UTC now if omitted).
        """
        result = compute_next(card.scheduling, quality)
        return replace(
            card,
            interval=result.interval,
            ease_factor=result.ease_factor,
            repetitions=result.repetitions,
            last_reviewed=reviewed_at or datetime.now(timezone.utc),
        )
