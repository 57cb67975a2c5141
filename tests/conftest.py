import os
from datetime import datetime, timedelta, timezone

import pytest

from lexio.domain.models import Card

T0 = datetime(2026, 1, 5, 9, 0, tzinfo=timezone.utc)


class FakeClock:
    """Deterministic clock; advance it explicitly."""

    def __init__(self, start: datetime = T0):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def deck():
    """Three fresh cards in insertion order."""
    return [
        Card(id=1, front="dog", back="pies"),
        Card(id=2, front="cat", back="kot"),
        Card(id=3, front="house", back="dom"),
    ]


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config
    monkeypatch.setenv("HOME", str(home))
    for var in [k for k in os.environ if k.upper().startswith("LEXIO_")]:
        monkeypatch.delenv(var)
    return home
