"""
Word Source

Supplies target words per difficulty tier. Pools start out as the curated
built-in lists and may be replaced once, at bootstrap, by an external word
list. An unusable external list never surfaces as an error: the affected
tier simply keeps its built-in pool.
"""

import random
import re
from typing import Callable, Dict, Iterable, List, Optional, Sequence

import requests

from ..config.game_settings import (
    COLS, EASY_SCORE_LIMIT, MEDIUM_SCORE_LIMIT, FALLBACK_WORD_POOLS
)
from ..models.game import Difficulty
from ..utils.game_logger import game_logger

WordPools = Dict[Difficulty, List[str]]


def word_pattern(cols: int = COLS) -> "re.Pattern[str]":
    return re.compile(rf"^[A-Z]{{{cols}}}$")


def difficulty_for_score(score: int) -> Difficulty:
    """Score-threshold policy: easy below 5, medium below 10, hard after."""
    if score < EASY_SCORE_LIMIT:
        return Difficulty.EASY
    if score < MEDIUM_SCORE_LIMIT:
        return Difficulty.MEDIUM
    return Difficulty.HARD


def filter_words(words: Iterable, cols: int = COLS) -> List[str]:
    """
    Normalize and filter candidate words.

    Entries are stripped and upper-cased; anything that is not exactly
    ``cols`` ASCII letters is dropped. Order is kept, duplicates removed.
    """
    pattern = word_pattern(cols)
    accepted: List[str] = []
    seen = set()
    for word in words:
        if not isinstance(word, str):
            continue
        normalized = word.strip().upper()
        if pattern.match(normalized) and normalized not in seen:
            seen.add(normalized)
            accepted.append(normalized)
    return accepted


def parse_word_pools(payload, cols: int = COLS) -> WordPools:
    """
    Turn a word-list payload into per-tier pools.

    Accepts either an object keyed by tier name ({"easy": [...], ...}) or a
    flat array, which is used for every tier. Tiers that end up empty are
    omitted.
    """
    pools: WordPools = {}

    if isinstance(payload, list):
        words = filter_words(payload, cols)
        if words:
            pools = {difficulty: list(words) for difficulty in Difficulty}
    elif isinstance(payload, dict):
        for key, entries in payload.items():
            difficulty = Difficulty.parse(key)
            if difficulty is None or not isinstance(entries, list):
                continue
            words = filter_words(entries, cols)
            if words:
                pools[difficulty] = words

    return pools


def fetch_word_pools(url: str, timeout: float = 5.0, cols: int = COLS) -> WordPools:
    """
    Fetch a word list over HTTP.

    Returns:
        Per-tier pools, or an empty mapping on any network / payload failure
    """
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        payload = response.json()
    except requests.RequestException as e:
        game_logger.logger.warning(f"Word list fetch failed for {url}: {e}")
        return {}
    except ValueError as e:
        game_logger.logger.warning(f"Word list at {url} is not valid JSON: {e}")
        return {}

    pools = parse_word_pools(payload, cols)
    if not pools:
        game_logger.logger.warning(f"Word list at {url} contained no usable {cols}-letter words")
    return pools


class WordSource:
    """
    Per-tier word pools with a built-in fallback.

    The fallback pools are validated at construction; a fallback tier with no
    word of the configured length is a configuration error.
    """

    def __init__(self,
                 cols: int = COLS,
                 fallback_pools: Optional[Dict[Difficulty, Sequence[str]]] = None,
                 rng: Optional[random.Random] = None):
        self.cols = cols
        self.rng = rng or random.Random()

        source = FALLBACK_WORD_POOLS if fallback_pools is None else fallback_pools
        self.fallback_pools: WordPools = {}
        for difficulty in Difficulty:
            words = filter_words(source.get(difficulty, ()), cols)
            if not words:
                raise ValueError(
                    f"No built-in {cols}-letter words for the {difficulty.value} tier"
                )
            self.fallback_pools[difficulty] = words

        self.pools: WordPools = {}

    def bootstrap(self, provider: Optional[Callable[[], WordPools]]) -> int:
        """
        Populate pools from an external provider, once per session bootstrap.

        Provider failures and empty results leave the fallback in place.

        Returns:
            Number of tiers now served by the external list
        """
        if provider is None:
            return 0

        try:
            supplied = provider() or {}
        except Exception as e:
            game_logger.logger.warning(f"Word list provider failed, using built-in pools: {e}")
            return 0

        for difficulty, words in supplied.items():
            accepted = filter_words(words, self.cols)
            if accepted:
                self.pools[difficulty] = accepted

        game_logger.logger.info(
            f"Word source bootstrapped: {len(self.pools)} tier(s) from provider"
        )
        return len(self.pools)

    def resolve_pool(self, difficulty: Difficulty) -> List[str]:
        return self.pools.get(difficulty) or self.fallback_pools[difficulty]

    def select_target(self, difficulty: Difficulty) -> str:
        """Uniform-random word from the resolved pool for ``difficulty``."""
        return self.rng.choice(self.resolve_pool(difficulty))
