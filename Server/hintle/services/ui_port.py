"""
UI Port

Emission points the round controller calls into. The base class ignores
every call so the core can run headless; the real-time channel supplies a
Socket.IO-backed implementation.
"""

from typing import List

from ..models.game import Difficulty, Outcome, SessionStats, Verdict


class UIPort:
    """No-op presentation port."""

    def round_started(self, round_number: int, difficulty: Difficulty) -> None:
        pass

    def tile_updated(self, row: int, col: int, letter: str) -> None:
        pass

    def row_revealed(self, row: int, guess: str, verdicts: List[Verdict]) -> None:
        pass

    def key_state_updated(self, letter: str, verdict: Verdict) -> None:
        pass

    def status_message(self, text: str, clear_after_ms: int = 0) -> None:
        pass

    def score_updated(self, stats: SessionStats, difficulty: Difficulty) -> None:
        pass

    def round_ended(self, target: str, outcome: Outcome, stats: SessionStats) -> None:
        pass

    def hint_shown(self, definition: str, difficulty: Difficulty, countdown: int) -> None:
        pass

    def hint_countdown(self, seconds_left: int) -> None:
        pass
