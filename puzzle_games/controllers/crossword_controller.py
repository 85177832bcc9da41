"""
Crossword Controller

Handles the Crossword HTTP endpoints.
"""

from flask import Blueprint

from ..models.game import GameId
from ..utils.helpers import BadRequest, get_json_body, require_cell
from .responses import game_action

crossword_bp = Blueprint('crossword', __name__)

GAME_ID = GameId.CROSSWORD.value


@crossword_bp.route('/state', methods=['GET'])
def get_state():
    return game_action('get_state', GAME_ID, lambda hub: hub.crossword.describe())


@crossword_bp.route('/cell', methods=['POST'])
def set_cell():
    """Enter a letter into a cell; an empty or null value clears it."""
    def operation(hub):
        data = get_json_body()
        row, col = require_cell(data)
        value = data.get('value')
        if value is not None and not isinstance(value, str):
            raise BadRequest("'value' must be a string or null")
        hub.crossword.set_cell(row, col, value)
        return hub.crossword.describe()

    return game_action('set_cell', GAME_ID, operation)


@crossword_bp.route('/select', methods=['POST'])
def select_cell():
    def operation(hub):
        row, col = require_cell(get_json_body())
        hub.crossword.select_cell(row, col)
        return hub.crossword.describe()

    return game_action('select_cell', GAME_ID, operation)


@crossword_bp.route('/check', methods=['POST'])
def check_solution():
    """Report whether the grid is correct so far, without changing it."""
    def operation(hub):
        view = hub.crossword.describe()
        view['correct'] = hub.crossword.check_solution()
        return view

    return game_action('check_solution', GAME_ID, operation)


@crossword_bp.route('/reset', methods=['POST'])
def reset():
    def operation(hub):
        hub.crossword.reset()
        return hub.crossword.describe()

    return game_action('reset', GAME_ID, operation)
