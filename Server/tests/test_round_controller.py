import pytest

from conftest import fixed_source
from hintle.models.game import (
    Difficulty, KeyAction, Outcome, RoundPhase, SessionStats, Verdict
)
from hintle.services.round_controller import RoundController, parse_key, NOT_ENOUGH_LETTERS
from hintle.services.word_source import WordSource

E, P, A = Verdict.EXACT, Verdict.PRESENT, Verdict.ABSENT


def started(source, ui=None, stats=None, rows=6, cols=5):
    controller = RoundController(source, stats=stats, ui=ui, rows=rows, cols=cols)
    controller.start_round()
    controller.hint_ready()
    return controller


def play(controller, word):
    for letter in word:
        controller.handle_key(letter)
    return controller.handle_key("Enter")


@pytest.mark.parametrize("raw,expected", [
    ("Enter", (KeyAction.SUBMIT, None)),
    ("ENTER", (KeyAction.SUBMIT, None)),
    ("Backspace", (KeyAction.BACKSPACE, None)),
    ("a", (KeyAction.LETTER, "A")),
    ("Q", (KeyAction.LETTER, "Q")),
    ("1", None),
    ("é", None),
    ("Shift", None),
    ("", None),
    (None, None),
])
def test_parse_key(raw, expected):
    assert parse_key(raw) == expected


def test_crane_end_to_end(crane_source):
    controller = started(crane_source)

    result = play(controller, "BRAVE")
    assert result.accepted
    assert result.verdicts == ["ABSENT", "EXACT", "EXACT", "ABSENT", "EXACT"]
    assert result.message == "Attempt 2 of 6"
    assert controller.phase == RoundPhase.IN_PROGRESS
    assert controller.board.current_row == 1
    assert controller.board.current_col == 0

    result = play(controller, "crane")
    assert result.verdicts == ["EXACT"] * 5
    assert result.round_over
    assert controller.phase == RoundPhase.WON
    assert controller.round.outcome == Outcome.WIN
    assert controller.stats == SessionStats(score=1, wins=1, streak=1)


def test_input_ignored_while_awaiting_hint(crane_source):
    controller = RoundController(crane_source)
    controller.start_round()
    assert controller.phase == RoundPhase.AWAITING_HINT

    for key in ["C", "Backspace", "Enter"]:
        assert controller.handle_key(key).accepted is False
    assert controller.board.current_col == 0
    assert controller.board.current_guess() == ""


def test_input_ignored_before_first_round(crane_source):
    controller = RoundController(crane_source)
    assert controller.phase == RoundPhase.AWAITING_HINT
    assert controller.handle_key("C").accepted is False
    assert controller.hint_ready() is False


def test_submit_incomplete_row_is_rejected(crane_source, ui):
    controller = started(crane_source, ui=ui)
    for letter in "CRA":
        controller.handle_key(letter)

    for _ in range(3):
        result = controller.handle_key("Enter")
        assert result.accepted is False
        assert result.message == NOT_ENOUGH_LETTERS

    assert controller.board.current_row == 0
    assert controller.board.current_col == 3
    assert controller.stats.score == 0
    assert controller.round.guesses == []
    assert ui.of('status_message')[-1] == (NOT_ENOUGH_LETTERS, 1200)


def test_malformed_row_is_rejected(crane_source, ui):
    controller = started(crane_source, ui=ui)
    controller.board.cells[0] = list("CR4NE")
    controller.board.current_col = 5

    result = controller.submit()
    assert result.accepted is False
    assert result.message == "Invalid guess"
    assert controller.board.current_row == 0
    assert controller.round.guesses == []


def test_letters_past_last_column_are_noops(crane_source):
    controller = started(crane_source)
    play_letters = "CRANEXYZ"
    results = [controller.handle_key(letter) for letter in play_letters]
    assert [r.accepted for r in results] == [True] * 5 + [False] * 3
    assert controller.board.current_guess() == "CRANE"


def test_repeated_backspace_at_start_is_noop(crane_source):
    controller = started(crane_source)
    assert controller.handle_key("Backspace").accepted is False
    assert controller.handle_key("Backspace").accepted is False
    controller.handle_key("C")
    assert controller.handle_key("Backspace").accepted is True
    assert controller.handle_key("Backspace").accepted is False
    assert controller.board.current_col == 0


def test_exhausting_attempts_loses_and_resets_streak(crane_source, ui):
    controller = started(crane_source, ui=ui, stats=SessionStats(score=3, wins=3, streak=3))

    for attempt in range(5):
        result = play(controller, "BRAVE")
        assert result.round_over is False
        assert controller.board.current_row == attempt + 1

    result = play(controller, "BRAVE")
    assert result.round_over is True
    assert result.message == "The word was CRANE"
    assert controller.phase == RoundPhase.LOST
    assert controller.round.outcome == Outcome.LOSS
    assert controller.stats == SessionStats(score=3, wins=3, streak=0)
    assert ui.of('round_ended') == [("CRANE", Outcome.LOSS)]

    # Terminal: nothing is accepted until a new round starts
    for key in ["C", "Backspace", "Enter"]:
        assert controller.handle_key(key).accepted is False
    assert len(controller.round.guesses) == 6


@pytest.mark.parametrize("misses", range(6))
def test_win_on_any_attempt_scores_exactly_once(crane_source, misses):
    controller = started(crane_source, stats=SessionStats(score=2, wins=2, streak=1))
    for _ in range(misses):
        play(controller, "BRAVE")

    result = play(controller, "CRANE")
    assert result.round_over
    assert controller.phase == RoundPhase.WON
    assert controller.stats == SessionStats(score=3, wins=3, streak=2)
    assert controller.handle_key("Enter").accepted is False
    assert controller.stats.score == 3


def test_ui_receives_tiles_reveal_and_round_end(crane_source, ui):
    controller = started(crane_source, ui=ui)
    controller.handle_key("B")
    controller.handle_key("Backspace")
    assert ui.of('tile_updated') == [(0, 0, "B"), (0, 0, "")]

    play(controller, "CRANE")
    assert ui.of('row_revealed') == [(0, "CRANE", [E] * 5)]
    assert ui.of('round_ended') == [("CRANE", Outcome.WIN)]
    assert ui.of('score_updated')[-1] == (1, 1, 1, Difficulty.EASY)
    assert ui.names().index('round_started') < ui.names().index('round_ended')


def test_key_states_only_upgrade(ui):
    controller = started(fixed_source("SPEED"), ui=ui)
    play(controller, "ERASE")
    assert controller.key_states["E"] == P
    assert controller.key_states["R"] == A

    play(controller, "SPEED")
    assert controller.key_states["E"] == E
    assert controller.key_states["S"] == E

    # ERASE reported E twice as PRESENT; only the first change is emitted
    assert ui.of('key_state_updated').count(("E", P)) == 1


def test_difficulty_follows_score():
    controller = RoundController(fixed_source(), stats=SessionStats(score=5))
    assert controller.start_round().difficulty == Difficulty.MEDIUM

    controller = RoundController(fixed_source(), stats=SessionStats(score=12))
    assert controller.start_round().difficulty == Difficulty.HARD

    controller = RoundController(fixed_source(), stats=SessionStats(score=12))
    assert controller.start_round(Difficulty.EASY).difficulty == Difficulty.EASY


def test_stale_hint_signal_is_ignored(crane_source):
    controller = RoundController(crane_source)
    controller.start_round()
    assert controller.hint_ready(round_number=2) is False
    assert controller.phase == RoundPhase.AWAITING_HINT
    assert controller.hint_ready(round_number=1) is True
    assert controller.hint_ready(round_number=1) is False


def test_next_round_only_after_round_over(crane_source):
    controller = started(crane_source)
    assert controller.next_round() is None
    assert controller.round_number == 1

    play(controller, "CRANE")
    state = controller.next_round()
    assert state.round_number == 2
    assert controller.phase == RoundPhase.AWAITING_HINT
    assert controller.board.current_row == 0
    assert controller.key_states == {}
    assert controller.stats.score == 1
    assert controller.handle_key("C").accepted is False


def test_view_hides_target_until_over(crane_source):
    controller = started(crane_source)
    play(controller, "BRAVE")
    view = controller.get_view()
    assert view.target is None
    assert view.phase == "IN_PROGRESS"
    assert view.guesses == ["BRAVE"]
    assert view.verdicts == [["ABSENT", "EXACT", "EXACT", "ABSENT", "EXACT"]]
    assert view.board[0] == list("BRAVE")
    assert view.key_states["R"] == "EXACT"

    play(controller, "CRANE")
    view = controller.get_view()
    assert view.target == "CRANE"
    assert view.over is True
    assert view.stats == {'score': 1, 'wins': 1, 'streak': 1}


def test_custom_board_dimensions():
    source = WordSource(cols=3, fallback_pools={d: ("CAT",) for d in Difficulty})
    controller = started(source, rows=2, cols=3)
    play(controller, "DOG")
    result = play(controller, "COT")
    assert result.round_over
    assert controller.phase == RoundPhase.LOST
