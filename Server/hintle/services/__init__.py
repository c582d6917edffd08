"""
Services Package

Contains the round core (board, evaluator, word source, round controller)
and the session-level services built around it.
"""

from .board import Board
from .evaluator import evaluate, is_solved
from .word_source import WordSource, difficulty_for_score, fetch_word_pools
from .hint_service import HintService
from .stats_store import StatsStore, MemoryStatsStore, MongoStatsStore, create_stats_store
from .ui_port import UIPort
from .round_controller import RoundController, parse_key
from .session_service import (
    SessionService, get_session_service, initialize_session_service, build_session_service
)

__all__ = [
    'Board', 'evaluate', 'is_solved',
    'WordSource', 'difficulty_for_score', 'fetch_word_pools',
    'HintService',
    'StatsStore', 'MemoryStatsStore', 'MongoStatsStore', 'create_stats_store',
    'UIPort',
    'RoundController', 'parse_key',
    'SessionService', 'get_session_service', 'initialize_session_service', 'build_session_service'
]
