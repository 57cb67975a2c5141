from datetime import datetime, timedelta, timezone

from lexio.domain.models import Card, CardStatus, GradeEvent, SessionStats

REVIEWED = datetime(2026, 3, 1, tzinfo=timezone.utc)


class TestCardFlags:
    def test_never_reviewed_card_is_new(self):
        card = Card(id="a")
        assert card.is_new
        assert not card.is_learning
        assert not card.is_mastered
        assert card.due_at is None

    def test_reviewed_card_with_short_streak_is_learning(self):
        card = Card(id="a", repetitions=1, last_reviewed=REVIEWED)
        assert not card.is_new
        assert card.is_learning
        assert not card.is_mastered

    def test_lapsed_card_is_learning(self):
        card = Card(id="a", repetitions=0, last_reviewed=REVIEWED)
        assert card.is_learning

    def test_three_successes_is_mastered(self):
        card = Card(id="a", repetitions=3, interval=15, last_reviewed=REVIEWED)
        assert card.is_mastered
        assert not card.is_learning

    def test_flags_follow_authoritative_fields(self):
        card = Card(id="a", repetitions=5, last_reviewed=None)
        # Never reviewed wins over a stale repetition count
        assert card.is_new
        assert not card.is_mastered

    def test_due_at_adds_interval_days(self):
        card = Card(id="a", interval=6, last_reviewed=REVIEWED)
        assert card.due_at == REVIEWED + timedelta(days=6)

    def test_scheduling_projection(self):
        card = Card(id="a", interval=6, ease_factor=2.36, repetitions=2)
        state = card.scheduling
        assert (state.interval, state.ease_factor, state.repetitions) == (6, 2.36, 2)


def test_grade_event_to_dict():
    card = Card(id=7, interval=6, ease_factor=2.6, repetitions=2, last_reviewed=REVIEWED)
    event = GradeEvent(
        session_id="session_x",
        card=card,
        quality=5,
        status=CardStatus.LEARNED,
        requeued=False,
        timestamp=REVIEWED,
        response_time=timedelta(seconds=2.5),
    )

    d = event.to_dict()
    assert d["cardId"] == 7
    assert d["quality"] == 5
    assert d["status"] == "learned"
    assert d["newInterval"] == 6
    assert d["newEaseFactor"] == 2.6
    assert d["newRepetitions"] == 2
    assert d["requeued"] is False
    assert d["timestamp"] == REVIEWED.isoformat()
    assert d["responseTimeMs"] == 2500


def test_session_stats_empty():
    stats = SessionStats()
    assert stats.graded == 0
    assert stats.accuracy is None
    assert stats.average_response_time is None


class TestStatusOnlyCards:
    """Cards from stores that keep a status but no review timestamp."""

    def test_learned_status_is_mastered(self):
        card = Card(id="a", status=CardStatus.LEARNED)
        assert card.is_mastered
        assert not card.is_new
        assert not card.is_learning

    def test_repeat_status_is_learning(self):
        card = Card(id="a", status=CardStatus.REPEAT)
        assert card.is_learning
        assert not card.is_new

    def test_timestamp_takes_precedence_over_status(self):
        card = Card(id="a", repetitions=1, last_reviewed=REVIEWED, status=CardStatus.LEARNED)
        assert card.is_learning
        assert not card.is_mastered
