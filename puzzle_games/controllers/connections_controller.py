"""
Connections Controller

Handles the Connections HTTP endpoints.
"""

from flask import Blueprint

from ..models.game import GameId
from ..utils.helpers import get_json_body, require_string
from .responses import game_action

connections_bp = Blueprint('connections', __name__)

GAME_ID = GameId.CONNECTIONS.value


@connections_bp.route('/state', methods=['GET'])
def get_state():
    return game_action('get_state', GAME_ID, lambda hub: hub.connections.describe())


@connections_bp.route('/toggle', methods=['POST'])
def toggle_word():
    """Select or deselect one word."""
    def operation(hub):
        word = require_string(get_json_body(), 'word')
        hub.connections.toggle_word(word)
        return hub.connections.describe()

    return game_action('toggle_word', GAME_ID, operation)


@connections_bp.route('/submit', methods=['POST'])
def submit_guess():
    """Submit the four selected words."""
    def operation(hub):
        hub.connections.submit_guess()
        return hub.connections.describe()

    return game_action('submit_guess', GAME_ID, operation)


@connections_bp.route('/shuffle', methods=['POST'])
def shuffle():
    def operation(hub):
        hub.connections.shuffle()
        return hub.connections.describe()

    return game_action('shuffle', GAME_ID, operation)


@connections_bp.route('/reset', methods=['POST'])
def reset():
    def operation(hub):
        hub.connections.reset()
        return hub.connections.describe()

    return game_action('reset', GAME_ID, operation)
