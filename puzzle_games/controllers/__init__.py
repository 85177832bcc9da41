"""
Controllers Package

Flask blueprints exposing the puzzle engines over HTTP.
"""

from .menu_controller import menu_bp
from .wordle_controller import wordle_bp
from .connections_controller import connections_bp
from .strands_controller import strands_bp
from .crossword_controller import crossword_bp

__all__ = ['menu_bp', 'wordle_bp', 'connections_bp', 'strands_bp', 'crossword_bp']
