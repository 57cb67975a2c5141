"""
Validation of the per-card mappings a session is built from.

Records come from the caller's card store in camelCase
(`priorInterval`, `priorEaseFactor`, ...). Snake-case keys are accepted
too. Never-reviewed cards may omit the prior fields entirely.
"""

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Annotated, Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictInt, ValidationError

from lexio.domain.constants import DEFAULT_EASE_FACTOR, DEFAULT_INTERVAL, DEFAULT_REPETITIONS
from lexio.domain.errors import InvalidInput
from lexio.domain.models import Card, CardStatus

NonNegativeInt = Annotated[StrictInt, Field(ge=0)]
EaseFactor = Annotated[float, Field(gt=0, allow_inf_nan=False, strict=True)]


class CardRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: StrictInt | str
    front: str = ""
    back: str = ""
    interval: NonNegativeInt = Field(
        default=DEFAULT_INTERVAL,
        validation_alias=AliasChoices("priorInterval", "prior_interval", "interval"),
    )
    ease_factor: EaseFactor = Field(
        default=DEFAULT_EASE_FACTOR,
        validation_alias=AliasChoices("priorEaseFactor", "prior_ease_factor", "ease_factor"),
    )
    repetitions: NonNegativeInt = Field(
        default=DEFAULT_REPETITIONS,
        validation_alias=AliasChoices("priorRepetitions", "prior_repetitions", "repetitions"),
    )
    last_reviewed: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("lastReviewed", "last_reviewed"),
    )
    status: CardStatus = CardStatus.NONE

    def to_card(self) -> Card:
        return Card(
            id=self.id,
            front=self.front,
            back=self.back,
            interval=self.interval,
            ease_factor=self.ease_factor,
            repetitions=self.repetitions,
            last_reviewed=self.last_reviewed,
            status=self.status,
        )


def parse_card(record: Mapping[str, Any] | Card, index: int = 0) -> Card:
    """Validate a single record. Card instances pass through unchanged."""
    if isinstance(record, Card):
        return record
    if not isinstance(record, Mapping):
        raise InvalidInput(f"Card #{index}: expected a mapping, got {type(record).__name__}")
    try:
        return CardRecord.model_validate(dict(record)).to_card()
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'card'}: {err['msg']}"
            for err in e.errors()
        )
        raise InvalidInput(f"Card #{index}: {problems}") from e


def parse_cards(records: Iterable[Mapping[str, Any] | Card]) -> list[Card]:
    return [parse_card(record, i) for i, record in enumerate(records)]
