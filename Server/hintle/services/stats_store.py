"""
Stats Store

Persists per-player SessionStats between sessions. Stats are loaded once
when a session starts and saved whenever a round ends.
"""

import datetime
from dataclasses import asdict
from typing import Dict, Optional

from pymongo.mongo_client import MongoClient
from pymongo.server_api import ServerApi

from ..models.game import SessionStats
from ..utils.game_logger import game_logger


class StatsStore:
    """Interface for stats persistence."""

    def load(self, player_id: str) -> SessionStats:
        raise NotImplementedError

    def save(self, player_id: str, stats: SessionStats) -> bool:
        raise NotImplementedError

    def close(self) -> None:
        pass


class MemoryStatsStore(StatsStore):
    """Process-local store, used when no database is configured."""

    def __init__(self):
        self._stats: Dict[str, Dict[str, int]] = {}

    def load(self, player_id: str) -> SessionStats:
        return SessionStats.from_dict(self._stats.get(player_id))

    def save(self, player_id: str, stats: SessionStats) -> bool:
        self._stats[player_id] = asdict(stats)
        return True


class MongoStatsStore(StatsStore):
    """
    MongoDB-backed store.

    One document per player in ``hintle.session_stats``, keyed by
    ``player_id``. Database errors are logged and reported as fresh stats
    (load) or False (save) so a round is never interrupted by storage.
    """

    def __init__(self, mongo_uri: str, client: Optional[MongoClient] = None):
        self.client = client or MongoClient(mongo_uri, server_api=ServerApi('1'))
        self.db = self.client.hintle
        self.collection = self.db.session_stats

        # Test connection
        try:
            self.client.admin.command('ping')
        except Exception as e:
            game_logger.logger.error(f"MongoDB connection error: {e}")
            raise

        self.collection.create_index("player_id", unique=True)

    def load(self, player_id: str) -> SessionStats:
        try:
            document = self.collection.find_one({"player_id": player_id})
        except Exception as e:
            game_logger.logger.error(f"Error loading stats for {player_id}: {e}")
            return SessionStats()
        return SessionStats.from_dict(document.get("stats") if document else None)

    def save(self, player_id: str, stats: SessionStats) -> bool:
        try:
            self.collection.replace_one(
                {"player_id": player_id},
                {
                    "player_id": player_id,
                    "stats": asdict(stats),
                    "updated_at": datetime.datetime.now(datetime.timezone.utc),
                },
                upsert=True
            )
            return True
        except Exception as e:
            game_logger.logger.error(f"Error saving stats for {player_id}: {e}")
            return False

    def close(self) -> None:
        if self.client:
            self.client.close()


def create_stats_store(mongo_uri: Optional[str]) -> StatsStore:
    """Mongo store when a URI is configured and reachable, memory store otherwise."""
    if not mongo_uri:
        return MemoryStatsStore()
    try:
        return MongoStatsStore(mongo_uri)
    except Exception as e:
        game_logger.logger.warning(f"Falling back to in-memory stats store: {e}")
        return MemoryStatsStore()
