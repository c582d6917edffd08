"""
WebSocket Event Handlers

Real-time input surface and UI emission channel for sessions.
"""

from dataclasses import asdict
from flask import request
from flask_socketio import emit, join_room, leave_room
from ..services.session_service import get_session_service
from ..services.ui_port import UIPort
from ..utils.game_logger import game_logger

# Session IDs created by each socket
socket_sessions = {}  # socket_id -> set of session_id


def session_room(session_id):
    return f"session_{session_id}"


class SocketIOEmitter(UIPort):
    """UI port that forwards every emission point to a session's Socket.IO room."""

    def __init__(self, socketio, session_id):
        self.socketio = socketio
        self.session_id = session_id
        self.room = session_room(session_id)

    def _emit(self, event, payload):
        self.socketio.emit(event, {'session_id': self.session_id, **payload}, room=self.room)

    def round_started(self, round_number, difficulty):
        self._emit('round_started', {'round_number': round_number, 'difficulty': difficulty.value})

    def tile_updated(self, row, col, letter):
        self._emit('tile_update', {'row': row, 'col': col, 'letter': letter})

    def row_revealed(self, row, guess, verdicts):
        self._emit('row_revealed', {
            'row': row,
            'guess': guess,
            'verdicts': [verdict.value for verdict in verdicts]
        })

    def key_state_updated(self, letter, verdict):
        self._emit('key_state', {'letter': letter, 'verdict': verdict.value})

    def status_message(self, text, clear_after_ms=0):
        self._emit('status_message', {'text': text, 'clear_after_ms': clear_after_ms})

    def score_updated(self, stats, difficulty):
        self._emit('score_update', {**asdict(stats), 'difficulty': difficulty.value})

    def round_ended(self, target, outcome, stats):
        self._emit('round_ended', {
            'target': target,
            'outcome': outcome.value,
            'stats': asdict(stats)
        })

    def hint_shown(self, definition, difficulty, countdown):
        self._emit('hint', {
            'definition': definition,
            'difficulty': difficulty.value,
            'countdown': countdown
        })

    def hint_countdown(self, seconds_left):
        self._emit('hint_countdown', {'seconds_left': seconds_left})


def register_websocket_handlers(socketio):
    """Register all WebSocket event handlers."""

    def start_hint_phase(session_service, session_id):
        socketio.start_background_task(session_service.run_hint_phase, session_id, socketio.sleep)

    def bind_socket(session_id):
        join_room(session_room(session_id))
        return SocketIOEmitter(socketio, session_id)

    def emit_state(session_service, session_id):
        emit('state_update', {
            'success': True,
            'session_id': session_id,
            'state': asdict(session_service.get_state(session_id))
        })

    @socketio.on('disconnect')
    def handle_disconnect(reason=None):
        """Drop the sessions this socket created."""
        session_ids = socket_sessions.pop(request.sid, set())
        session_service = get_session_service()
        if not session_service:
            return

        for session_id in session_ids:
            if session_service.delete_session(session_id):
                game_logger.log_game_event(session_id, 'session_closed', reason='disconnect')

    @socketio.on('start_session')
    def handle_start_session(data=None):
        """Create a session bound to this socket and run its hint phase."""
        session_service = get_session_service()
        if not session_service:
            emit('error', {'error': 'Session service unavailable'})
            return

        data = data or {}
        try:
            session_id = session_service.create_session(
                data.get('player_id'), data.get('difficulty'), ui_factory=bind_socket
            )
            socket_sessions.setdefault(request.sid, set()).add(session_id)

            game_logger.log_user_action(request, 'start_session', session_id, transport='websocket')
            emit('session_created', {'session_id': session_id})
            emit_state(session_service, session_id)
            start_hint_phase(session_service, session_id)
        except Exception as e:
            game_logger.log_error(request, e, 'start_session')
            emit('error', {'error': str(e)})

    @socketio.on('join_session')
    def handle_join_session(data=None):
        """Re-attach a socket to an existing session."""
        session_service = get_session_service()
        if not session_service:
            emit('error', {'error': 'Session service unavailable'})
            return

        session_id = (data or {}).get('session_id')
        if not session_id or session_service.get_controller(session_id) is None:
            emit('error', {'error': 'Session not found'})
            return

        join_room(session_room(session_id))
        session_service.attach_ui(session_id, SocketIOEmitter(socketio, session_id))
        game_logger.log_user_action(request, 'join_session', session_id, transport='websocket')
        emit_state(session_service, session_id)

    @socketio.on('leave_session')
    def handle_leave_session(data=None):
        """Stop receiving a session's events; the session itself is kept."""
        session_id = (data or {}).get('session_id')
        if not session_id:
            emit('error', {'error': 'Session ID is required'})
            return

        leave_room(session_room(session_id))
        session_service = get_session_service()
        if session_service:
            session_service.attach_ui(session_id, UIPort())
        game_logger.log_user_action(request, 'leave_session', session_id, transport='websocket')

    @socketio.on('key')
    def handle_key(data=None):
        """Apply one key event; emissions reach the room through the session's UI port."""
        session_service = get_session_service()
        if not session_service:
            emit('error', {'error': 'Session service unavailable'})
            return

        data = data or {}
        session_id = data.get('session_id')
        key = data.get('key')
        if not session_id or key is None:
            emit('error', {'error': 'Session ID and key required'})
            return

        result = session_service.handle_key(session_id, key)
        if result is None:
            emit('error', {'error': 'Session not found'})
            return

        emit('key_result', {'session_id': session_id, **asdict(result)})

    @socketio.on('next_round')
    def handle_next_round(data=None):
        """Start the next round and its hint phase."""
        session_service = get_session_service()
        if not session_service:
            emit('error', {'error': 'Session service unavailable'})
            return

        data = data or {}
        session_id = data.get('session_id')
        if not session_id or session_service.get_controller(session_id) is None:
            emit('error', {'error': 'Session not found'})
            return

        game_logger.log_user_action(
            request, 'next_round', session_id,
            transport='websocket', difficulty=data.get('difficulty')
        )
        if session_service.next_round(session_id, data.get('difficulty')) is None:
            emit('error', {'error': 'Current round is not over'})
            return

        emit_state(session_service, session_id)
        start_hint_phase(session_service, session_id)
