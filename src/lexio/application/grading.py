"""
Grading policy: maps what the learner pressed onto the 0-5 quality scale.

A two-button screen offers only "repeat" and "learned". Those map onto
fixed qualities on either side of the success threshold.
"""

from dataclasses import dataclass

from lexio.domain.constants import LEARNED_QUALITY, REPEAT_QUALITY, SUCCESS_THRESHOLD
from lexio.domain.errors import InvalidInput
from lexio.domain.models import CardStatus

from .scheduler import validate_quality

Rating = int | str | CardStatus


@dataclass(frozen=True)
class GradingPolicy:
    repeat_quality: int = REPEAT_QUALITY
    learned_quality: int = LEARNED_QUALITY

    def __post_init__(self):
        validate_quality(self.repeat_quality)
        validate_quality(self.learned_quality)
        if self.repeat_quality >= SUCCESS_THRESHOLD:
            raise InvalidInput(
                f"repeat_quality must be below {SUCCESS_THRESHOLD}, "
                f"got {self.repeat_quality}"
            )
        if self.learned_quality < SUCCESS_THRESHOLD:
            raise InvalidInput(
                f"learned_quality must be at least {SUCCESS_THRESHOLD}, "
                f"got {self.learned_quality}"
            )

    def resolve_quality(self, rating: Rating) -> int:
        """
        Turn a rating into a 0-5 quality.

        Accepts an int quality, a CardStatus, or a status string
        ("repeat"/"learned").
        """
        if isinstance(rating, CardStatus) or isinstance(rating, str):
            status = _parse_status(rating)
            if status is CardStatus.REPEAT:
                return self.repeat_quality
            if status is CardStatus.LEARNED:
                return self.learned_quality
            raise InvalidInput(f"Status {status.value!r} cannot be used as a grade")
        return validate_quality(rating)

    def is_success(self, quality: int) -> bool:
        return quality >= SUCCESS_THRESHOLD

    def status_for(self, quality: int) -> CardStatus:
        return CardStatus.LEARNED if self.is_success(quality) else CardStatus.REPEAT


def _parse_status(rating: str | CardStatus) -> CardStatus:
    if isinstance(rating, CardStatus):
        return rating
    try:
        return CardStatus(rating.strip().lower())
    except ValueError:
        raise InvalidInput(f"Unknown status {rating!r}") from None
