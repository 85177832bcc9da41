"""
Response Helpers

Shared request/response handling for the game blueprints: hub lookup,
action logging and the ``{'success': ..., 'state': ...}`` envelope.
"""

from typing import Any, Callable, Optional

from flask import jsonify, request

from ..services.game_hub import GameHub, get_game_hub
from ..utils.game_logger import game_logger
from ..utils.helpers import BadRequest


def game_action(action: str, game_id: Optional[str], operation: Callable[[GameHub], Any], **log_details):
    """
    Run one game operation and answer with the resulting state.

    Args:
        action: Name logged for the action (e.g., 'press_key')
        game_id: Game the action applies to, or None for hub-wide actions
        operation: Callable receiving the hub and returning the JSON state
        **log_details: Extra fields for the action log entry

    Returns:
        Flask response tuple; 400 for malformed requests, 500 for failures
    """
    hub = get_game_hub()
    if not hub:
        return jsonify({
            'success': False,
            'error': 'Game service unavailable'
        }), 500

    try:
        game_logger.log_user_action(request, action, game_id, **log_details)
        with hub.lock:
            state = operation(hub)
        response_data = {
            'success': True,
            'state': state
        }
        game_logger.log_server_response(request, action, True, response_data, game_id)
        return jsonify(response_data), 200

    except BadRequest as e:
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, action, False, error_response, game_id)
        return jsonify(error_response), 400

    except Exception as e:
        game_logger.log_error(request, e, action, game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, action, False, error_response, game_id)
        return jsonify(error_response), 500
