import random

import pytest
import requests

from hintle.config.game_settings import (
    FALLBACK_WORD_POOLS, validate_word_pools, get_word_statistics
)
from hintle.models.game import Difficulty
from hintle.services import word_source as word_source_module
from hintle.services.word_source import (
    WordSource, difficulty_for_score, filter_words, parse_word_pools, fetch_word_pools
)


class FakeResponse:
    def __init__(self, payload=None, status_code=200, bad_json=False):
        self.payload = payload
        self.status_code = status_code
        self.bad_json = bad_json

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def raise_for_status(self):
        if not self.ok:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self.bad_json:
            raise ValueError("Expecting value")
        return self.payload


@pytest.mark.parametrize("score,expected", [
    (0, Difficulty.EASY),
    (4, Difficulty.EASY),
    (5, Difficulty.MEDIUM),
    (9, Difficulty.MEDIUM),
    (10, Difficulty.HARD),
    (42, Difficulty.HARD),
])
def test_difficulty_for_score(score, expected):
    assert difficulty_for_score(score) == expected


def test_builtin_pools_are_valid():
    assert validate_word_pools() is True
    stats = get_word_statistics()
    assert stats["total_words"] == 45
    assert stats["words_per_tier"] == {"easy": 15, "medium": 15, "hard": 15}


def test_validate_word_pools_rejects_bad_entries():
    pools = dict(FALLBACK_WORD_POOLS)
    pools[Difficulty.HARD] = ("CRYPT", "CRYPT")
    with pytest.raises(ValueError, match="Duplicate"):
        validate_word_pools(pools)

    pools[Difficulty.HARD] = ("toast",)
    with pytest.raises(ValueError, match="uppercase"):
        validate_word_pools(pools)

    pools[Difficulty.HARD] = ()
    with pytest.raises(ValueError, match="empty"):
        validate_word_pools(pools)


def test_select_target_draws_from_requested_tier():
    source = WordSource(rng=random.Random(7))
    for difficulty in Difficulty:
        for _ in range(20):
            assert source.select_target(difficulty) in FALLBACK_WORD_POOLS[difficulty]


def test_filter_words_normalizes_and_drops_bad_shapes():
    words = [" crane", "SPEED", "sp33d", "toolong", 42, "CRANE", "Ab"]
    assert filter_words(words) == ["CRANE", "SPEED"]


def test_parse_word_pools_by_tier_name():
    pools = parse_word_pools({
        "easy": ["apple", "bread"],
        "Hard": ["fjord"],
        "impossible": ["xxxxx"],
        "medium": ["no"],
    })
    assert pools == {Difficulty.EASY: ["APPLE", "BREAD"], Difficulty.HARD: ["FJORD"]}


def test_parse_word_pools_flat_list_feeds_every_tier():
    pools = parse_word_pools(["stone", "plaza"])
    assert set(pools) == set(Difficulty)
    assert pools[Difficulty.MEDIUM] == ["STONE", "PLAZA"]


def test_bootstrap_replaces_only_supplied_tiers():
    source = WordSource()
    count = source.bootstrap(lambda: {Difficulty.HARD: ["qualm", "bad!!"]})
    assert count == 1
    assert source.resolve_pool(Difficulty.HARD) == ["QUALM"]
    assert source.select_target(Difficulty.HARD) == "QUALM"
    assert source.resolve_pool(Difficulty.EASY) == list(FALLBACK_WORD_POOLS[Difficulty.EASY])


def test_bootstrap_failure_keeps_fallback():
    def broken_provider():
        raise ConnectionError("offline")

    source = WordSource()
    assert source.bootstrap(broken_provider) == 0
    assert source.bootstrap(lambda: {}) == 0
    assert source.bootstrap(None) == 0
    assert source.select_target(Difficulty.MEDIUM) in FALLBACK_WORD_POOLS[Difficulty.MEDIUM]


def test_empty_supplied_tier_falls_back():
    source = WordSource()
    source.bootstrap(lambda: {Difficulty.EASY: ["1234", ""]})
    assert source.select_target(Difficulty.EASY) in FALLBACK_WORD_POOLS[Difficulty.EASY]


def test_missing_fallback_tier_is_a_configuration_error():
    with pytest.raises(ValueError):
        WordSource(cols=6)
    with pytest.raises(ValueError):
        WordSource(fallback_pools={Difficulty.EASY: ("APPLE",)})


def test_fetch_word_pools_success(monkeypatch):
    calls = []

    def fake_get(url, timeout):
        calls.append((url, timeout))
        return FakeResponse({"easy": ["light", "house"]})

    monkeypatch.setattr(word_source_module.requests, "get", fake_get)
    pools = fetch_word_pools("http://words.test/list.json", timeout=2)
    assert pools == {Difficulty.EASY: ["LIGHT", "HOUSE"]}
    assert calls == [("http://words.test/list.json", 2)]


@pytest.mark.parametrize("behaviour", ["timeout", "http_error", "bad_json", "no_words"])
def test_fetch_word_pools_failures_return_empty(monkeypatch, behaviour):
    def fake_get(url, timeout):
        if behaviour == "timeout":
            raise requests.Timeout("slow")
        if behaviour == "http_error":
            return FakeResponse(status_code=503)
        if behaviour == "bad_json":
            return FakeResponse(bad_json=True)
        return FakeResponse({"easy": ["nope"]})

    monkeypatch.setattr(word_source_module.requests, "get", fake_get)
    assert fetch_word_pools("http://words.test/list.json") == {}
