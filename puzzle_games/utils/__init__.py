"""
Utilities Package

Contains request helpers and the structured game logger.
"""

from .helpers import BadRequest, get_json_body, require_string, require_cell
from .game_logger import game_logger

__all__ = ['BadRequest', 'get_json_body', 'require_string', 'require_cell', 'game_logger']
