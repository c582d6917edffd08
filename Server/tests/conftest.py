import os
import tempfile

# Keep test logs out of the working tree; must run before hintle is imported
os.environ.setdefault('LOG_DIR', tempfile.mkdtemp(prefix='hintle-logs-'))

import pytest

from hintle.models.game import Difficulty
from hintle.services.ui_port import UIPort
from hintle.services.word_source import WordSource


class RecordingUI(UIPort):
    """UI port that remembers every emission."""

    def __init__(self):
        self.events = []

    def names(self):
        return [name for name, _ in self.events]

    def of(self, name):
        return [args for event, args in self.events if event == name]

    def round_started(self, round_number, difficulty):
        self.events.append(('round_started', (round_number, difficulty)))

    def tile_updated(self, row, col, letter):
        self.events.append(('tile_updated', (row, col, letter)))

    def row_revealed(self, row, guess, verdicts):
        self.events.append(('row_revealed', (row, guess, list(verdicts))))

    def key_state_updated(self, letter, verdict):
        self.events.append(('key_state_updated', (letter, verdict)))

    def status_message(self, text, clear_after_ms=0):
        self.events.append(('status_message', (text, clear_after_ms)))

    def score_updated(self, stats, difficulty):
        self.events.append(('score_updated', (stats.score, stats.wins, stats.streak, difficulty)))

    def round_ended(self, target, outcome, stats):
        self.events.append(('round_ended', (target, outcome)))

    def hint_shown(self, definition, difficulty, countdown):
        self.events.append(('hint_shown', (definition, difficulty, countdown)))

    def hint_countdown(self, seconds_left):
        self.events.append(('hint_countdown', (seconds_left,)))


def fixed_source(word='CRANE'):
    """WordSource whose every tier holds a single word."""
    return WordSource(fallback_pools={difficulty: (word,) for difficulty in Difficulty})


class StubHintService:
    def __init__(self, definition=None):
        self.definition = definition
        self.requested = []

    def fetch_definition(self, word):
        self.requested.append(word)
        return self.definition


@pytest.fixture
def ui():
    return RecordingUI()


@pytest.fixture
def crane_source():
    return fixed_source('CRANE')
