"""
Guess Evaluator

Scores one completed guess against the target word.
"""

from typing import List, Optional

from ..models.game import Verdict


def evaluate(guess: str, target: str) -> List[Verdict]:
    """
    Implements the two-pass Wordle letter evaluation algorithm.

    Exact matches are resolved first so that a duplicated guess letter can
    only be marked PRESENT against target occurrences not already claimed.

    Args:
        guess: Completed guess, same length as ``target``
        target: The hidden word

    Returns:
        One Verdict per position

    Raises:
        ValueError: If the two words differ in length
    """
    if len(guess) != len(target):
        raise ValueError(f"Guess '{guess}' and target differ in length")

    remaining: List[Optional[str]] = list(target)
    result: List[Optional[Verdict]] = [None] * len(guess)

    # First pass: exact position matches consume their target letter
    for i, letter in enumerate(guess):
        if letter == remaining[i]:
            result[i] = Verdict.EXACT
            remaining[i] = None

    # Second pass: first unconsumed occurrence, left to right
    for i, letter in enumerate(guess):
        if result[i] is not None:
            continue
        if letter in remaining:
            result[i] = Verdict.PRESENT
            remaining[remaining.index(letter)] = None
        else:
            result[i] = Verdict.ABSENT

    return [verdict for verdict in result if verdict is not None]


def is_solved(verdicts: List[Verdict]) -> bool:
    """True when every cell of a row is EXACT."""
    return bool(verdicts) and all(verdict == Verdict.EXACT for verdict in verdicts)
