"""
Session Controller

Handles all session and round HTTP endpoints.
"""

from flask import Blueprint, request, jsonify
from dataclasses import asdict
from ..services.session_service import get_session_service
from ..utils.game_logger import game_logger

session_bp = Blueprint('session', __name__)


def _service_unavailable():
    return jsonify({
        'success': False,
        'error': 'Session service unavailable'
    }), 500


def _not_found(action, session_id):
    error_response = {
        'success': False,
        'error': 'Session not found'
    }
    game_logger.log_server_response(request, action, False, error_response, session_id)
    return jsonify(error_response), 404


@session_bp.route('/session', methods=['POST'])
def create_session():
    """Create a session, start its first round and fetch the round's hint."""
    try:
        session_service = get_session_service()
        if not session_service:
            return _service_unavailable()

        data = request.get_json(silent=True) or {}
        player_id = data.get('player_id')
        difficulty = data.get('difficulty')

        if player_id is not None and (not isinstance(player_id, str) or not player_id.strip()):
            error_response = {
                'success': False,
                'error': 'player_id must be a non-empty string'
            }
            game_logger.log_server_response(request, 'create_session', False, error_response)
            return jsonify(error_response), 400

        game_logger.log_user_action(
            request, 'create_session', player_id=player_id, difficulty=difficulty
        )

        session_id = session_service.create_session(player_id, difficulty)
        hint = session_service.prepare_hint(session_id)
        state = session_service.get_state(session_id)

        response_data = {
            'success': True,
            'session_id': session_id,
            'hint': hint,
            'state': asdict(state)
        }
        game_logger.log_server_response(
            request, 'create_session', True, response_data, session_id,
            difficulty=state.difficulty, hint_available=hint is not None
        )
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'create_session')
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'create_session', False, error_response)
        return jsonify(error_response), 500


@session_bp.route('/session/<session_id>/state', methods=['GET'])
def get_state(session_id):
    """Get the current round state."""
    try:
        session_service = get_session_service()
        if not session_service:
            return _service_unavailable()

        game_logger.log_user_action(request, 'get_state', session_id)

        state = session_service.get_state(session_id)
        if state is None:
            return _not_found('get_state', session_id)

        response_data = {
            'success': True,
            'hint': session_service.get_hint(session_id),
            'state': asdict(state)
        }
        game_logger.log_server_response(request, 'get_state', True, response_data, session_id)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'get_state', session_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'get_state', False, error_response, session_id)
        return jsonify(error_response), 500


@session_bp.route('/session/<session_id>/ready', methods=['POST'])
def mark_ready(session_id):
    """Signal that the hint has been shown; opens the round for input."""
    try:
        session_service = get_session_service()
        if not session_service:
            return _service_unavailable()

        data = request.get_json(silent=True) or {}
        round_number = data.get('round_number')
        if round_number is not None and (isinstance(round_number, bool) or not isinstance(round_number, int)):
            error_response = {
                'success': False,
                'error': 'round_number must be an integer'
            }
            game_logger.log_server_response(request, 'ready', False, error_response, session_id)
            return jsonify(error_response), 400

        game_logger.log_user_action(request, 'ready', session_id, round_number=round_number)

        opened = session_service.mark_ready(session_id, round_number)
        if opened is None:
            return _not_found('ready', session_id)

        response_data = {
            'success': True,
            'opened': opened,
            'state': asdict(session_service.get_state(session_id))
        }
        game_logger.log_server_response(request, 'ready', True, response_data, session_id)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'ready', session_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'ready', False, error_response, session_id)
        return jsonify(error_response), 500


@session_bp.route('/session/<session_id>/key', methods=['POST'])
def press_key(session_id):
    """Apply one key event (a letter, Backspace or Enter)."""
    try:
        session_service = get_session_service()
        if not session_service:
            return _service_unavailable()

        data = request.get_json(silent=True)
        if not data or 'key' not in data:
            error_response = {
                'success': False,
                'error': 'Key is required'
            }
            game_logger.log_server_response(request, 'key', False, error_response, session_id)
            return jsonify(error_response), 400

        key = data['key']
        game_logger.log_user_action(request, 'key', session_id, key=key)

        result = session_service.handle_key(session_id, key)
        if result is None:
            return _not_found('key', session_id)

        state = session_service.get_state(session_id)
        response_data = {
            'success': True,
            'result': asdict(result),
            'state': asdict(state)
        }
        game_logger.log_server_response(
            request, 'key', True, response_data, session_id,
            accepted=result.accepted, round_over=result.round_over
        )
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'key', session_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'key', False, error_response, session_id)
        return jsonify(error_response), 500


@session_bp.route('/session/<session_id>/next_round', methods=['POST'])
def next_round(session_id):
    """Start the next round once the current one is over."""
    try:
        session_service = get_session_service()
        if not session_service:
            return _service_unavailable()

        data = request.get_json(silent=True) or {}
        difficulty = data.get('difficulty')
        game_logger.log_user_action(request, 'next_round', session_id, difficulty=difficulty)

        if session_service.get_controller(session_id) is None:
            return _not_found('next_round', session_id)

        if session_service.next_round(session_id, difficulty) is None:
            error_response = {
                'success': False,
                'error': 'Current round is not over'
            }
            game_logger.log_server_response(request, 'next_round', False, error_response, session_id)
            return jsonify(error_response), 409

        hint = session_service.prepare_hint(session_id)
        state = session_service.get_state(session_id)
        response_data = {
            'success': True,
            'hint': hint,
            'state': asdict(state)
        }
        game_logger.log_server_response(
            request, 'next_round', True, response_data, session_id,
            difficulty=state.difficulty, hint_available=hint is not None
        )
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'next_round', session_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'next_round', False, error_response, session_id)
        return jsonify(error_response), 500


@session_bp.route('/session/<session_id>', methods=['DELETE'])
def delete_session(session_id):
    """Delete a session."""
    try:
        session_service = get_session_service()
        if not session_service:
            return _service_unavailable()

        game_logger.log_user_action(request, 'delete_session', session_id)

        success = session_service.delete_session(session_id)
        response_data = {
            'success': success
        }
        game_logger.log_server_response(request, 'delete_session', success, response_data, session_id)

        if not success:
            return jsonify(response_data), 404
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'delete_session', session_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'delete_session', False, error_response, session_id)
        return jsonify(error_response), 500


@session_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    try:
        session_service = get_session_service()
        game_logger.log_user_action(request, 'health_check')

        response_data = {
            'status': 'healthy',
            'active_sessions': len(session_service.sessions) if session_service else 0,
            'difficulty_policy': session_service.difficulty_policy if session_service else None,
            'log_stats': game_logger.get_log_stats(),
        }
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'health_check')
        return jsonify({
            'status': 'unhealthy',
            'error': str(e)
        }), 500
