"""
Game Configuration Constants Module

This module defines the game constants: board dimensions, difficulty
thresholds and the curated word pools used when no external word list
is available. Difficulty curation is configuration data, so changing a
tier means editing the pools here rather than touching game logic.
"""

from typing import Dict, Final, List, Tuple

from ..models.game import Difficulty

# Board dimensions
ROWS: Final[int] = 6
"""
Number of guess attempts allowed per round.
Type: Final[int] - Immutable to prevent accidental modification
"""

COLS: Final[int] = 5
"""
Length of every target word and guess.
"""

# Score-threshold difficulty policy
EASY_SCORE_LIMIT: Final[int] = 5
MEDIUM_SCORE_LIMIT: Final[int] = 10

# Transient status message durations (milliseconds, 0 = sticky)
SHORT_MESSAGE_MS: Final[int] = 1200
ATTEMPT_MESSAGE_MS: Final[int] = 1000

# Curated word pools, one per difficulty tier
EASY_WORDS: Final[Tuple[str, ...]] = (
    'APPLE', 'WATER', 'LIGHT', 'HOUSE', 'BREAD',
    'PHONE', 'GRASS', 'SMILE', 'TRAIN', 'PLANT',
    'HEART', 'MUSIC', 'CHAIR', 'TABLE', 'HAPPY',
)

MEDIUM_WORDS: Final[Tuple[str, ...]] = (
    'BRAVE', 'QUIET', 'STORM', 'CLOUD', 'NIGHT',
    'RIVER', 'BRAIN', 'VOICE', 'POWER', 'GREEN',
    'DREAM', 'CRANE', 'STONE', 'WORLD', 'FLASH',
)

HARD_WORDS: Final[Tuple[str, ...]] = (
    'CRYPT', 'RHYME', 'ZESTY', 'PIXEL', 'GHOST',
    'MYTHS', 'QUARK', 'VEXED', 'NERVE', 'BLAZE',
    'PLAZA', 'FJORD', 'KHAKI', 'OXIDE', 'WALTZ',
)

FALLBACK_WORD_POOLS: Final[Dict[Difficulty, Tuple[str, ...]]] = {
    Difficulty.EASY: EASY_WORDS,
    Difficulty.MEDIUM: MEDIUM_WORDS,
    Difficulty.HARD: HARD_WORDS,
}


def validate_word_pools(pools: Dict[Difficulty, Tuple[str, ...]] = FALLBACK_WORD_POOLS,
                        word_length: int = COLS) -> bool:
    """
    Validates the integrity and consistency of the word pools.

    This function performs validation to ensure:
    1. Coverage: every difficulty tier has a non-empty pool
    2. Length validation: all words are exactly ``word_length`` characters
    3. Character validation: only uppercase alphabetic characters
    4. Uniqueness validation: no duplicate entries within a tier

    Returns:
        bool: True if the pools pass all validation checks

    Raises:
        ValueError: If any validation check fails with detailed error message
    """
    for difficulty in Difficulty:
        words = pools.get(difficulty)
        if not words:
            raise ValueError(f"Word pool for {difficulty.value} cannot be empty")

        for index, word in enumerate(words):
            if len(word) != word_length:
                raise ValueError(
                    f"Word at index {index} '{word}' in {difficulty.value} pool "
                    f"is not {word_length} characters long"
                )
            if not word.isalpha():
                raise ValueError(
                    f"Word at index {index} '{word}' in {difficulty.value} pool "
                    f"contains non-alphabetic characters"
                )
            if not word.isupper():
                raise ValueError(
                    f"Word at index {index} '{word}' in {difficulty.value} pool "
                    f"is not in uppercase format"
                )

        if len(words) != len(set(words)):
            duplicates = sorted({word for word in words if words.count(word) > 1})
            raise ValueError(f"Duplicate words found in {difficulty.value} pool: {duplicates}")

    return True


def get_word_statistics(pools: Dict[Difficulty, Tuple[str, ...]] = FALLBACK_WORD_POOLS) -> dict:
    """
    Analyzes the word pools and returns statistical information for game balancing.

    Returns:
        dict: Statistical analysis including:
            - total_words: Number of words across all tiers
            - words_per_tier: Pool size per difficulty
            - avg_vowel_count: Average vowels per word
            - letter_frequency: Distribution of letters across all words
            - most_common_letters: Top five letters
    """
    all_words: List[str] = [word for words in pools.values() for word in words]
    if not all_words:
        return {"error": "Word pools are empty"}

    vowels = set('AEIOU')
    total_vowels = sum(len([char for char in word if char in vowels]) for word in all_words)

    letter_frequency: Dict[str, int] = {}
    for word in all_words:
        for char in word:
            letter_frequency[char] = letter_frequency.get(char, 0) + 1

    return {
        "total_words": len(all_words),
        "words_per_tier": {difficulty.value: len(words) for difficulty, words in pools.items()},
        "avg_vowel_count": round(total_vowels / len(all_words), 2),
        "letter_frequency": letter_frequency,
        "most_common_letters": sorted(letter_frequency.items(), key=lambda x: x[1], reverse=True)[:5]
    }
