"""
Wordle Controller

Handles the Wordle HTTP endpoints.
"""

from flask import Blueprint

from ..models.game import GameId
from ..utils.helpers import get_json_body, require_string
from .responses import game_action

wordle_bp = Blueprint('wordle', __name__)

GAME_ID = GameId.WORDLE.value


@wordle_bp.route('/state', methods=['GET'])
def get_state():
    """Get the current board."""
    return game_action('get_state', GAME_ID, lambda hub: hub.wordle.describe())


@wordle_bp.route('/key', methods=['POST'])
def press_key():
    """Forward one keyboard key (a letter, ENTER or BACKSPACE)."""
    def operation(hub):
        key = require_string(get_json_body(), 'key')
        hub.wordle.press_key(key)
        return hub.wordle.describe()

    return game_action('press_key', GAME_ID, operation)


@wordle_bp.route('/reset', methods=['POST'])
def reset():
    """Start the puzzle over."""
    def operation(hub):
        hub.wordle.reset()
        return hub.wordle.describe()

    return game_action('reset', GAME_ID, operation)
