"""
Round Controller

Drives a single player's rounds: routes key input to the board, evaluates
submitted rows, keeps score across rounds and decides when a round ends.

Phases: AWAITING_HINT -> IN_PROGRESS -> WON | LOST. Input is only
accepted while IN_PROGRESS; anything else is silently ignored.
"""

from typing import Dict, Optional, Tuple

from ..config.game_settings import ROWS, COLS, SHORT_MESSAGE_MS, ATTEMPT_MESSAGE_MS
from ..models.game import (
    Difficulty, Verdict, VERDICT_PRIORITY, Outcome, RoundPhase, KeyAction,
    SessionStats, RoundState, InputResult, RoundView
)
from .board import Board
from .evaluator import evaluate, is_solved
from .ui_port import UIPort
from .word_source import WordSource, difficulty_for_score, word_pattern

NOT_ENOUGH_LETTERS = "Not enough letters"
INVALID_GUESS = "Invalid guess"


def parse_key(raw) -> Optional[Tuple[KeyAction, Optional[str]]]:
    """
    Map a raw key label to a logical key.

    ``Enter`` submits, ``Backspace`` deletes, a single ASCII letter types it
    (upper-cased). Anything else returns None.
    """
    if not isinstance(raw, str):
        return None

    label = raw.strip()
    if label.lower() == "enter":
        return KeyAction.SUBMIT, None
    if label.lower() == "backspace":
        return KeyAction.BACKSPACE, None
    if len(label) == 1 and label.isascii() and label.isalpha():
        return KeyAction.LETTER, label.upper()
    return None


class RoundController:
    """
    Owns the Board, the current RoundState and the SessionStats.

    SessionStats outlive rounds; everything else is reset by start_round().
    """

    def __init__(self,
                 word_source: WordSource,
                 stats: Optional[SessionStats] = None,
                 ui: Optional[UIPort] = None,
                 rows: int = ROWS,
                 cols: int = COLS):
        self.word_source = word_source
        self.stats = stats or SessionStats()
        self.ui = ui or UIPort()
        self.rows = rows
        self.cols = cols
        self.board = Board(rows, cols)
        self.round: Optional[RoundState] = None
        self.key_states: Dict[str, Verdict] = {}
        self.round_number = 0
        self._guess_pattern = word_pattern(cols)

    @property
    def phase(self) -> RoundPhase:
        if self.round is None:
            return RoundPhase.AWAITING_HINT
        return self.round.phase

    @property
    def accepting_input(self) -> bool:
        return self.round is not None and self.round.phase == RoundPhase.IN_PROGRESS

    def start_round(self, difficulty: Optional[Difficulty] = None) -> RoundState:
        """
        Draw a new target and reset the board. The round waits behind the
        hint gate until hint_ready() is called.

        Args:
            difficulty: Explicit tier; derived from the score when omitted
        """
        if difficulty is None:
            difficulty = difficulty_for_score(self.stats.score)

        target = self.word_source.select_target(difficulty)

        self.round_number += 1
        self.board = Board(self.rows, self.cols)
        self.key_states = {}
        self.round = RoundState(
            target=target,
            difficulty=difficulty,
            round_number=self.round_number,
        )

        self.ui.round_started(self.round_number, difficulty)
        self.ui.score_updated(self.stats, difficulty)
        self.ui.status_message("Fetching hint...", 0)
        return self.round

    def hint_ready(self, round_number: Optional[int] = None) -> bool:
        """
        Clear the hint gate. A signal carrying a stale round number is ignored.

        Returns:
            True if the round moved to IN_PROGRESS
        """
        if self.round is None or self.round.phase != RoundPhase.AWAITING_HINT:
            return False
        if round_number is not None and round_number != self.round.round_number:
            return False

        self.round.phase = RoundPhase.IN_PROGRESS
        self.ui.status_message(f"Start guessing! You have {self.rows} attempts.", 0)
        return True

    def next_round(self, difficulty: Optional[Difficulty] = None) -> Optional[RoundState]:
        """Restart the cycle; only allowed once the current round is over."""
        if self.round is not None and not self.round.over:
            return None
        return self.start_round(difficulty)

    def handle_key(self, raw_key) -> InputResult:
        parsed = parse_key(raw_key)
        if parsed is None:
            return InputResult(accepted=False)

        action, letter = parsed
        if action == KeyAction.LETTER:
            return self.type_letter(letter)
        if action == KeyAction.BACKSPACE:
            return self.backspace()
        return self.submit()

    def type_letter(self, letter: str) -> InputResult:
        if not self.accepting_input:
            return InputResult(accepted=False)

        row, col = self.board.current_row, self.board.current_col
        if not self.board.append_letter(letter):
            return InputResult(accepted=False)

        self.ui.tile_updated(row, col, letter)
        return InputResult(accepted=True)

    def backspace(self) -> InputResult:
        if not self.accepting_input:
            return InputResult(accepted=False)

        if not self.board.delete_letter():
            return InputResult(accepted=False)

        self.ui.tile_updated(self.board.current_row, self.board.current_col, "")
        return InputResult(accepted=True)

    def submit(self) -> InputResult:
        """
        Evaluate the active row.

        Incomplete or malformed rows are rejected without touching any state.
        A solved row wins; the last unsolved row loses; otherwise the board
        moves on to the next row.
        """
        if not self.accepting_input:
            return InputResult(accepted=False)

        if not self.board.row_full:
            self.ui.status_message(NOT_ENOUGH_LETTERS, SHORT_MESSAGE_MS)
            return InputResult(accepted=False, message=NOT_ENOUGH_LETTERS)

        guess = self.board.current_guess()
        if not self._guess_pattern.match(guess):
            self.ui.status_message(INVALID_GUESS, SHORT_MESSAGE_MS)
            return InputResult(accepted=False, message=INVALID_GUESS)

        state = self.round
        row = self.board.current_row
        verdicts = evaluate(guess, state.target)
        state.guesses.append(guess)
        state.verdicts.append(verdicts)

        self.ui.row_revealed(row, guess, verdicts)
        self._update_key_states(guess, verdicts)

        if is_solved(verdicts):
            self.stats.score += 1
            self.stats.wins += 1
            self.stats.streak += 1
            state.phase = RoundPhase.WON
            state.outcome = Outcome.WIN
            message = "You win!"
            self.ui.status_message(message, 0)
        elif row + 1 == self.rows:
            self.stats.streak = 0
            state.phase = RoundPhase.LOST
            state.outcome = Outcome.LOSS
            message = f"The word was {state.target}"
            self.ui.status_message(message, 0)
        else:
            self.board.advance_row()
            message = f"Attempt {self.board.current_row + 1} of {self.rows}"
            self.ui.status_message(message, ATTEMPT_MESSAGE_MS)

        if state.over:
            self.ui.score_updated(self.stats, state.difficulty)
            self.ui.round_ended(state.target, state.outcome, self.stats)

        return InputResult(
            accepted=True,
            message=message,
            verdicts=[verdict.value for verdict in verdicts],
            round_over=state.over,
        )

    def _update_key_states(self, guess: str, verdicts) -> None:
        """Upgrade keyboard colours; a key never moves down in priority."""
        for letter, verdict in zip(guess, verdicts):
            current = self.key_states.get(letter)
            if current is None or VERDICT_PRIORITY[verdict] > VERDICT_PRIORITY[current]:
                self.key_states[letter] = verdict
                self.ui.key_state_updated(letter, verdict)

    def get_view(self) -> RoundView:
        """Client-facing view of the round; the target stays hidden until it is over."""
        state = self.round
        over = state.over if state else False
        return RoundView(
            round_number=self.round_number,
            phase=self.phase.value,
            outcome=state.outcome.value if state else Outcome.IN_PROGRESS.value,
            over=over,
            difficulty=state.difficulty.value if state else difficulty_for_score(self.stats.score).value,
            rows=self.rows,
            cols=self.cols,
            current_row=self.board.current_row,
            current_col=self.board.current_col,
            board=self.board.snapshot(),
            guesses=list(state.guesses) if state else [],
            verdicts=[[v.value for v in row] for row in state.verdicts] if state else [],
            key_states={letter: verdict.value for letter, verdict in self.key_states.items()},
            stats={'score': self.stats.score, 'wins': self.stats.wins, 'streak': self.stats.streak},
            target=state.target if over else None,
        )
