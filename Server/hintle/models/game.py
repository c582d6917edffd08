"""
Game Data Models

Contains all round- and session-related data structures and enums.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class Difficulty(Enum):
    """Difficulty tier; selects which word pool a target is drawn from."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value) -> Optional["Difficulty"]:
        """Return the tier named by ``value`` (case-insensitive), or None."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class Verdict(Enum):
    """Per-cell evaluation of a submitted guess."""
    EXACT = "EXACT"
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"


# Keyboard state may only move up this ladder within a round
VERDICT_PRIORITY = {
    Verdict.ABSENT: 0,
    Verdict.PRESENT: 1,
    Verdict.EXACT: 2,
}


class Outcome(Enum):
    """Final (or pending) result of a round."""
    IN_PROGRESS = "IN_PROGRESS"
    WIN = "WIN"
    LOSS = "LOSS"


class RoundPhase(Enum):
    """Round state machine phases."""
    AWAITING_HINT = "AWAITING_HINT"
    IN_PROGRESS = "IN_PROGRESS"
    WON = "WON"
    LOST = "LOST"


class KeyAction(Enum):
    """Logical keys accepted by the input surface."""
    LETTER = "letter"
    BACKSPACE = "backspace"
    SUBMIT = "submit"


@dataclass
class SessionStats:
    """Score counters that survive across rounds of a session."""
    score: int = 0
    wins: int = 0
    streak: int = 0

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> "SessionStats":
        if not data:
            return cls()
        return cls(
            score=int(data.get("score", 0)),
            wins=int(data.get("wins", 0)),
            streak=int(data.get("streak", 0)),
        )


@dataclass
class RoundState:
    """Mutable server-side state of the current round."""
    target: str
    difficulty: Difficulty
    round_number: int
    phase: RoundPhase = RoundPhase.AWAITING_HINT
    outcome: Outcome = Outcome.IN_PROGRESS
    guesses: List[str] = field(default_factory=list)
    verdicts: List[List[Verdict]] = field(default_factory=list)

    @property
    def over(self) -> bool:
        return self.phase in (RoundPhase.WON, RoundPhase.LOST)


@dataclass
class InputResult:
    """What happened to a single key event."""
    accepted: bool
    message: str = ""
    verdicts: Optional[List[str]] = None
    round_over: bool = False


@dataclass
class RoundView:
    """Client-facing round representation (target hidden until the round is over)."""
    round_number: int
    phase: str
    outcome: str
    over: bool
    difficulty: str
    rows: int
    cols: int
    current_row: int
    current_col: int
    board: List[List[str]]
    guesses: List[str]
    verdicts: List[List[str]]
    key_states: Dict[str, str]
    stats: Dict[str, int]
    target: Optional[str] = None  # Only included when round is over
