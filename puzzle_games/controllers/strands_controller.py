"""
Strands Controller

Handles the Strands HTTP endpoints. Clients may use either the two-step
select/submit surface or the single click gesture.
"""

from flask import Blueprint

from ..models.game import GameId
from ..utils.helpers import get_json_body, require_cell
from .responses import game_action

strands_bp = Blueprint('strands', __name__)

GAME_ID = GameId.STRANDS.value


@strands_bp.route('/state', methods=['GET'])
def get_state():
    return game_action('get_state', GAME_ID, lambda hub: hub.strands.describe())


@strands_bp.route('/select', methods=['POST'])
def select_cell():
    """Start a path or extend it by one adjacent cell."""
    def operation(hub):
        row, col = require_cell(get_json_body())
        hub.strands.select_cell(row, col)
        return hub.strands.describe()

    return game_action('select_cell', GAME_ID, operation)


@strands_bp.route('/click', methods=['POST'])
def click_cell():
    """Single-gesture input: clicking the path's last cell again submits it."""
    def operation(hub):
        row, col = require_cell(get_json_body())
        hub.strands.click_cell(row, col)
        return hub.strands.describe()

    return game_action('click_cell', GAME_ID, operation)


@strands_bp.route('/submit', methods=['POST'])
def submit_path():
    def operation(hub):
        hub.strands.submit_path()
        return hub.strands.describe()

    return game_action('submit_path', GAME_ID, operation)


@strands_bp.route('/clear', methods=['POST'])
def clear_selection():
    def operation(hub):
        hub.strands.reset_selection()
        return hub.strands.describe()

    return game_action('clear_selection', GAME_ID, operation)


@strands_bp.route('/reset', methods=['POST'])
def reset():
    def operation(hub):
        hub.strands.reset()
        return hub.strands.describe()

    return game_action('reset', GAME_ID, operation)
