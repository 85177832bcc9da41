"""
Menu Controller

Handles the hub-wide endpoints: the game menu with completion badges,
the global reset and the health check.
"""

from flask import Blueprint, jsonify, request

from ..services.game_hub import get_game_hub
from ..utils.game_logger import game_logger
from .responses import game_action

menu_bp = Blueprint('menu', __name__)


@menu_bp.route('/games', methods=['GET'])
def list_games():
    """List the games with their completion badges."""
    return game_action('list_games', None, lambda hub: hub.menu())


@menu_bp.route('/reset', methods=['POST'])
def reset_all():
    """Clear every game's progress and every badge."""
    def operation(hub):
        hub.reset_all()
        return hub.menu()

    return game_action('reset_all', None, operation)


@menu_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    try:
        hub = get_game_hub()

        response_data = {
            'status': 'healthy' if hub else 'degraded',
            'games_available': hub is not None,
            'completed_games': [game_id.value for game_id in hub.registry.completed()] if hub else [],
            'log_stats': game_logger.get_log_stats()
        }
        game_logger.log_server_response(request, 'health_check', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'health_check')
        error_response = {
            'status': 'error',
            'error': str(e)
        }
        game_logger.log_server_response(request, 'health_check', False, error_response)
        return jsonify(error_response), 500
