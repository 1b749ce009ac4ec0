import json

import pytest

from studybudget.suggesters.memory import MemoryMatcher


@pytest.fixture
def memory_matcher(tmp_path):
    data_file = tmp_path / "memory.json"
    return MemoryMatcher(data_path=str(data_file), threshold=80.0)


def test_memory_learn_and_exact_match(memory_matcher):
    memory_matcher.learn("Spotify Premium", "Subscriptions")

    # Reload to verify persistence
    memory_matcher.load()

    res = memory_matcher.suggest("spotify   premium")
    assert res is not None
    assert res.category == "Subscriptions"
    assert res.confidence == 100.0
    assert res.reason == 'Previously saved as "Subscriptions"'


def test_memory_fuzzy_match(memory_matcher):
    memory_matcher.learn("Uber Ride", "Transport")

    res = memory_matcher.suggest("Ride Uber")
    assert res is not None
    assert res.category == "Transport"
    assert res.confidence >= 80.0
    assert res.reason.startswith('Similar to "uber ride"')


def test_memory_below_threshold(memory_matcher):
    memory_matcher.learn("Uber Ride", "Transport")
    assert memory_matcher.suggest("Dormitory rent") is None


def test_memory_no_match(memory_matcher):
    assert memory_matcher.suggest("Unknown Transaction") is None
    assert memory_matcher.suggest("   ") is None


def test_memory_clear(memory_matcher, tmp_path):
    memory_matcher.learn("Gym membership", "Health")
    memory_matcher.clear()

    assert memory_matcher.suggest("Gym membership") is None
    assert json.loads((tmp_path / "memory.json").read_text()) == {}


def test_memory_ignores_corrupt_file(tmp_path):
    data_file = tmp_path / "memory.json"
    data_file.write_text("{not json")

    matcher = MemoryMatcher(data_path=str(data_file))
    assert matcher.memory == {}
