"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import (
    BLOCKED,
    Clue,
    ConnectionsState,
    CrosswordState,
    Direction,
    GameId,
    Group,
    LetterStatus,
    StrandsState,
    WordleState,
    cell_id,
    parse_cell_id,
)

__all__ = [
    'BLOCKED', 'Clue', 'ConnectionsState', 'CrosswordState', 'Direction', 'GameId',
    'Group', 'LetterStatus', 'StrandsState', 'WordleState', 'cell_id', 'parse_cell_id'
]
