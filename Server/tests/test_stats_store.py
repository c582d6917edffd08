from unittest.mock import MagicMock

import pytest

from hintle.models.game import SessionStats
from hintle.services import stats_store as stats_store_module
from hintle.services.stats_store import (
    MemoryStatsStore, MongoStatsStore, create_stats_store
)


def test_memory_store_round_trip():
    store = MemoryStatsStore()
    assert store.load("ada") == SessionStats()
    assert store.save("ada", SessionStats(score=4, wins=4, streak=2)) is True
    assert store.load("ada") == SessionStats(score=4, wins=4, streak=2)
    assert store.load("grace") == SessionStats()


def test_memory_store_keeps_a_copy():
    store = MemoryStatsStore()
    stats = SessionStats(score=1, wins=1, streak=1)
    store.save("ada", stats)
    stats.score = 99
    assert store.load("ada").score == 1


@pytest.fixture
def mongo_client():
    return MagicMock()


def test_mongo_store_pings_and_indexes(mongo_client):
    store = MongoStatsStore("mongodb://db.test", client=mongo_client)
    mongo_client.admin.command.assert_called_once_with('ping')
    store.collection.create_index.assert_called_once_with("player_id", unique=True)


def test_mongo_store_load(mongo_client):
    store = MongoStatsStore("mongodb://db.test", client=mongo_client)
    store.collection.find_one.return_value = {
        "player_id": "ada", "stats": {"score": 7, "wins": 7, "streak": 3}
    }
    assert store.load("ada") == SessionStats(score=7, wins=7, streak=3)
    store.collection.find_one.assert_called_with({"player_id": "ada"})

    store.collection.find_one.return_value = None
    assert store.load("nobody") == SessionStats()


def test_mongo_store_save_upserts(mongo_client):
    store = MongoStatsStore("mongodb://db.test", client=mongo_client)
    assert store.save("ada", SessionStats(score=2, wins=2, streak=0)) is True

    args, kwargs = store.collection.replace_one.call_args
    assert args[0] == {"player_id": "ada"}
    assert args[1]["stats"] == {"score": 2, "wins": 2, "streak": 0}
    assert kwargs == {"upsert": True}


def test_mongo_store_errors_do_not_propagate(mongo_client):
    store = MongoStatsStore("mongodb://db.test", client=mongo_client)
    store.collection.find_one.side_effect = RuntimeError("db down")
    store.collection.replace_one.side_effect = RuntimeError("db down")
    assert store.load("ada") == SessionStats()
    assert store.save("ada", SessionStats()) is False


def test_mongo_store_failed_ping_raises(mongo_client):
    mongo_client.admin.command.side_effect = RuntimeError("unreachable")
    with pytest.raises(RuntimeError):
        MongoStatsStore("mongodb://db.test", client=mongo_client)


def test_create_stats_store_without_uri_is_memory():
    assert isinstance(create_stats_store(None), MemoryStatsStore)
    assert isinstance(create_stats_store(""), MemoryStatsStore)


def test_create_stats_store_falls_back_when_mongo_unreachable(monkeypatch):
    def unreachable(uri):
        raise RuntimeError("unreachable")

    monkeypatch.setattr(stats_store_module, "MongoStatsStore", unreachable)
    assert isinstance(create_stats_store("mongodb://db.test"), MemoryStatsStore)
