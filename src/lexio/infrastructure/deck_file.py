"""
Read-only loader for deck files.

A deck file is YAML (JSON is valid YAML) holding either a bare list of
card mappings or a mapping with a `cards` list and an optional `title`:

    title: Irregular verbs
    cards:
      - id: 1
        front: go
        back: went
        priorRepetitions: 2
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from lexio.domain.errors import InvalidInput

logger = logging.getLogger(__name__)


@dataclass
class DeckFile:
    path: Path
    title: str
    records: list[dict[str, Any]] = field(default_factory=list)


def load_deck(path: Path) -> DeckFile:
    """
    Parse a deck file into raw card records.

    Record validation is left to the session builder.

    Raises:
        InvalidInput: If the file is missing, unparsable, or has the wrong shape.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise InvalidInput(f"Cannot read deck file {path}: {e}") from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise InvalidInput(f"Invalid YAML in {path}: {e}") from e

    title = path.stem
    if data is None:
        cards: Any = []
    elif isinstance(data, list):
        cards = data
    elif isinstance(data, dict):
        title = str(data.get("title") or title)
        cards = data.get("cards", [])
    else:
        raise InvalidInput(f"{path}: expected a list of cards or a mapping with 'cards'")

    if not isinstance(cards, list):
        raise InvalidInput(f"{path}: 'cards' must be a list")

    for i, card in enumerate(cards):
        if not isinstance(card, dict):
            raise InvalidInput(f"{path}: card #{i} is not a mapping")

    logger.debug(f"Loaded {len(cards)} cards from {path}")
    return DeckFile(path=path, title=title, records=cards)
