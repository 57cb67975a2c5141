import pytest

from lexio.application.grading import GradingPolicy
from lexio.domain.errors import InvalidInput
from lexio.domain.models import CardStatus


@pytest.fixture
def policy():
    return GradingPolicy()


def test_binary_statuses_map_across_threshold(policy):
    assert policy.resolve_quality("repeat") == 2
    assert policy.resolve_quality("learned") == 4
    assert policy.resolve_quality(CardStatus.LEARNED) == 4
    assert policy.resolve_quality(" Learned ") == 4


def test_numeric_quality_passes_through(policy):
    for q in range(6):
        assert policy.resolve_quality(q) == q


def test_none_status_is_not_a_grade(policy):
    with pytest.raises(InvalidInput, match="cannot be used"):
        policy.resolve_quality(CardStatus.NONE)


@pytest.mark.parametrize("rating", ["maybe", 6, -1, 2.5])
def test_bad_ratings_rejected(policy, rating):
    with pytest.raises(InvalidInput):
        policy.resolve_quality(rating)


def test_status_for(policy):
    assert policy.status_for(2) is CardStatus.REPEAT
    assert policy.status_for(3) is CardStatus.LEARNED
    assert policy.is_success(3)
    assert not policy.is_success(2)


def test_custom_mapping():
    policy = GradingPolicy(repeat_quality=0, learned_quality=5)
    assert policy.resolve_quality("repeat") == 0
    assert policy.resolve_quality("learned") == 5


@pytest.mark.parametrize(
    "kwargs",
    [{"repeat_quality": 3}, {"learned_quality": 2}, {"learned_quality": 9}],
)
def test_policy_rejects_mappings_on_wrong_side(kwargs):
    with pytest.raises(InvalidInput):
        GradingPolicy(**kwargs)
