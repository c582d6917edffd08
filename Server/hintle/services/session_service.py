"""
Session Service

Manages player sessions. Each session owns one RoundController and the
player's persisted stats; the service wires the controller to the hint
provider, the stats store and whichever UI port the transport attaches.
"""

import time
import uuid
from functools import partial
from typing import Callable, Dict, Optional

from ..config.app_config import Config
from ..config.game_settings import ROWS, COLS
from ..models.game import Difficulty, InputResult, Outcome, RoundPhase, RoundView
from ..utils.game_logger import game_logger
from .hint_service import HintService
from .round_controller import RoundController
from .stats_store import StatsStore, MemoryStatsStore, create_stats_store
from .ui_port import UIPort
from .word_source import WordSource, fetch_word_pools

DIFFICULTY_POLICIES = ("score", "explicit")


class SessionService:
    """
    In-memory registry of active sessions.

    This class handles:
    - Session creation with stats loaded from the store
    - The hint gate at the start of every round
    - Routing key input to the right controller
    - Saving stats whenever a round ends
    """

    def __init__(self,
                 word_source: WordSource,
                 hint_service: Optional[HintService] = None,
                 stats_store: Optional[StatsStore] = None,
                 rows: int = ROWS,
                 cols: int = COLS,
                 difficulty_policy: str = "score",
                 hint_countdown: int = 10,
                 clock: Callable[[], float] = time.monotonic):
        if difficulty_policy not in DIFFICULTY_POLICIES:
            raise ValueError(f"Unknown difficulty policy: {difficulty_policy}")

        self.sessions: Dict[str, Dict] = {}
        self.word_source = word_source
        self.hint_service = hint_service
        self.stats_store = stats_store or MemoryStatsStore()
        self.rows = rows
        self.cols = cols
        self.difficulty_policy = difficulty_policy
        self.hint_countdown = hint_countdown
        self.clock = clock

    def _resolve_difficulty(self, requested) -> Optional[Difficulty]:
        """Explicit tiers only count under the explicit policy; None means score-derived."""
        if self.difficulty_policy != "explicit":
            return None
        return Difficulty.parse(requested)

    def get_controller(self, session_id: str) -> Optional[RoundController]:
        session = self.sessions.get(session_id)
        return session["controller"] if session else None

    def create_session(self,
                       player_id: Optional[str] = None,
                       difficulty=None,
                       ui: Optional[UIPort] = None,
                       ui_factory: Optional[Callable[[str], UIPort]] = None) -> str:
        """
        Creates a session and starts its first round behind the hint gate.

        Args:
            player_id: Stable player key for stats persistence (anonymous if None)
            difficulty: Requested tier, honoured under the explicit policy
            ui: Presentation port, may be attached later
            ui_factory: Builds the port from the new session ID; takes
                precedence over ``ui`` and sees the first round's emissions

        Returns:
            str: Unique session ID
        """
        session_id = str(uuid.uuid4())
        stats = self.stats_store.load(player_id) if player_id else None
        if ui_factory is not None:
            ui = ui_factory(session_id)

        controller = RoundController(
            self.word_source, stats=stats, ui=ui, rows=self.rows, cols=self.cols
        )
        self.sessions[session_id] = {
            "controller": controller,
            "player_id": player_id,
            "hint": None,
            "hint_deadline": None,
            "hint_round": None,
        }

        controller.start_round(self._resolve_difficulty(difficulty))
        game_logger.log_game_event(
            session_id, 'round_started',
            round_number=controller.round_number,
            difficulty=controller.round.difficulty.value,
        )
        return session_id

    def attach_ui(self, session_id: str, ui: UIPort) -> bool:
        controller = self.get_controller(session_id)
        if controller is None:
            return False
        controller.ui = ui
        return True

    def _expire_hint_gate(self, session: Dict) -> None:
        """Open a gate whose hint has been on show for the full countdown."""
        deadline = session["hint_deadline"]
        if deadline is None or self.clock() < deadline:
            return
        controller = session["controller"]
        session["hint_deadline"] = None
        controller.hint_ready(session["hint_round"])

    def get_state(self, session_id: str) -> Optional[RoundView]:
        session = self.sessions.get(session_id)
        if session is None:
            return None
        self._expire_hint_gate(session)
        return session["controller"].get_view()

    def get_hint(self, session_id: str) -> Optional[str]:
        session = self.sessions.get(session_id)
        return session["hint"] if session else None

    def prepare_hint(self, session_id: str) -> Optional[str]:
        """
        Look up the definition of the current target.

        When no definition is available the gate is cleared right away and the
        round proceeds without a hint.

        Returns:
            The definition, or None if there is nothing to show
        """
        session = self.sessions.get(session_id)
        if session is None:
            return None

        controller = session["controller"]
        if controller.round is None or controller.phase != RoundPhase.AWAITING_HINT:
            return None

        round_number = controller.round_number
        definition = None
        if self.hint_service is not None:
            definition = self.hint_service.fetch_definition(controller.round.target)

        session["hint"] = definition
        if definition is not None:
            # Opens on its own once the countdown has elapsed
            session["hint_deadline"] = self.clock() + self.hint_countdown
            session["hint_round"] = round_number
        else:
            controller.hint_ready(round_number)
            game_logger.log_game_event(session_id, 'hint_skipped', round_number=round_number)
        return definition

    def mark_ready(self, session_id: str, round_number: Optional[int] = None) -> Optional[bool]:
        """Clear the hint gate. Returns None for an unknown session."""
        controller = self.get_controller(session_id)
        if controller is None:
            return None
        return controller.hint_ready(round_number)

    def run_hint_phase(self, session_id: str, sleep: Callable[[float], None] = time.sleep) -> None:
        """
        Full hint phase for the real-time channel: fetch, show, count down, open.

        The countdown is bound to the round it started for, so a late finish
        cannot open the gate of a newer round.
        """
        controller = self.get_controller(session_id)
        if controller is None:
            return

        round_number = controller.round_number
        definition = self.prepare_hint(session_id)
        if definition is None:
            return

        controller.ui.hint_shown(definition, controller.round.difficulty, self.hint_countdown)
        for seconds_left in range(self.hint_countdown, 0, -1):
            controller.ui.hint_countdown(seconds_left)
            sleep(1)

        controller.hint_ready(round_number)

    def handle_key(self, session_id: str, key) -> Optional[InputResult]:
        """
        Route one key event. Returns None for an unknown session.
        """
        session = self.sessions.get(session_id)
        if session is None:
            return None

        self._expire_hint_gate(session)
        controller = session["controller"]
        result = controller.handle_key(key)
        if result.round_over:
            self._finish_round(session_id, session)
        return result

    def _finish_round(self, session_id: str, session: Dict) -> None:
        controller = session["controller"]
        state = controller.round

        if session["player_id"]:
            self.stats_store.save(session["player_id"], controller.stats)

        game_logger.log_game_event(
            session_id,
            'round_won' if state.outcome == Outcome.WIN else 'round_lost',
            round_number=state.round_number,
            attempts_used=len(state.guesses),
            target_word=state.target,
            difficulty=state.difficulty.value,
            score=controller.stats.score,
            streak=controller.stats.streak,
        )

    def next_round(self, session_id: str, difficulty=None) -> Optional[RoundView]:
        """
        Start the next round with stats carried over.

        Returns:
            The new round's view, or None if the session is unknown or its
            round is still being played
        """
        session = self.sessions.get(session_id)
        if session is None:
            return None

        controller = session["controller"]
        state = controller.next_round(self._resolve_difficulty(difficulty))
        if state is None:
            return None

        session["hint"] = None
        session["hint_deadline"] = None
        game_logger.log_game_event(
            session_id, 'round_started',
            round_number=state.round_number,
            difficulty=state.difficulty.value,
        )
        return controller.get_view()

    def delete_session(self, session_id: str) -> bool:
        """
        Removes a session from memory.

        Returns:
            bool: True if the session was deleted, False if not found
        """
        if session_id in self.sessions:
            del self.sessions[session_id]
            return True
        return False


def build_session_service(config_class=Config) -> SessionService:
    """Assemble a SessionService from configuration, bootstrapping the word pools once."""
    word_source = WordSource(cols=config_class.COLS)
    if config_class.WORD_LIST_URL:
        word_source.bootstrap(partial(
            fetch_word_pools,
            config_class.WORD_LIST_URL,
            config_class.WORD_LIST_TIMEOUT_SECONDS,
            config_class.COLS,
        ))

    hint_service = None
    if config_class.DICTIONARY_API:
        hint_service = HintService(config_class.DICTIONARY_API, config_class.HINT_TIMEOUT_SECONDS)

    return SessionService(
        word_source,
        hint_service=hint_service,
        stats_store=create_stats_store(config_class.MONGO_URI),
        rows=config_class.ROWS,
        cols=config_class.COLS,
        difficulty_policy=config_class.DIFFICULTY_POLICY,
        hint_countdown=config_class.HINT_COUNTDOWN_SECONDS,
    )


# Global service instance
_session_service = None


def get_session_service() -> Optional[SessionService]:
    """Get the global session service instance."""
    return _session_service


def initialize_session_service(config_class=Config,
                               service: Optional[SessionService] = None) -> SessionService:
    """Initialize the global session service instance."""
    global _session_service
    _session_service = service or build_session_service(config_class)
    return _session_service
