"""
Game Data Models

Contains all game-related data structures and enums. Each persisted state
converts to and from the JSON shape stored under its game's key.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

Cell = Tuple[int, int]

BLOCKED = ''
"""Sentinel marking a blocked crossword cell in a solution grid."""


class GameId(Enum):
    """Identifiers of the four puzzles, as stored in the completion registry."""
    WORDLE = "wordle"
    CONNECTIONS = "connections"
    STRANDS = "strands"
    CROSSWORD = "crossword"


class LetterStatus(Enum):
    """Letter evaluation status for a finalized Wordle row."""
    CORRECT = "correct"
    PRESENT = "present"
    ABSENT = "absent"


class Direction(Enum):
    ACROSS = "across"
    DOWN = "down"


def cell_id(row: int, col: int) -> str:
    """Serialize a grid coordinate as ``"row-col"``."""
    return f"{row}-{col}"


def parse_cell_id(value: str) -> Cell:
    """Parse a ``"row-col"`` string back into a coordinate tuple."""
    row, col = value.split('-')
    return int(row), int(col)


@dataclass(frozen=True)
class Group:
    """One Connections category: four words, a label and a display color."""
    words: Tuple[str, ...]
    category: str
    color: str

    def to_dict(self) -> Dict[str, Any]:
        return {'words': list(self.words), 'category': self.category, 'color': self.color}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Group':
        return cls(words=tuple(data['words']), category=data['category'], color=data['color'])


@dataclass(frozen=True)
class Clue:
    """A crossword clue anchored at a fixed start cell."""
    number: int
    direction: Direction
    row: int
    col: int
    text: str


@dataclass
class WordleState:
    """Wordle progress: six guess slots and the row being typed."""
    guesses: List[str]
    current_guess: str = ''
    current_row: int = 0
    game_over: bool = False
    won: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'guesses': list(self.guesses),
            'currentGuess': self.current_guess,
            'currentRow': self.current_row,
            'gameOver': self.game_over,
            'won': self.won,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'WordleState':
        return cls(
            guesses=[str(guess) for guess in data['guesses']],
            current_guess=str(data['currentGuess']),
            current_row=int(data['currentRow']),
            game_over=bool(data['gameOver']),
            won=bool(data['won']),
        )


@dataclass
class ConnectionsState:
    """Connections progress: remaining words, selection and solved groups."""
    words: List[str]
    selected: List[str] = field(default_factory=list)
    solved_groups: List[Group] = field(default_factory=list)
    mistakes: int = 0
    game_over: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'words': list(self.words),
            'selected': list(self.selected),
            'solvedGroups': [group.to_dict() for group in self.solved_groups],
            'mistakes': self.mistakes,
            'gameOver': self.game_over,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ConnectionsState':
        return cls(
            words=list(data['words']),
            selected=list(data['selected']),
            solved_groups=[Group.from_dict(group) for group in data['solvedGroups']],
            mistakes=int(data['mistakes']),
            game_over=bool(data['gameOver']),
        )


@dataclass
class StrandsState:
    """Strands progress: the open path and every word found so far."""
    selected_cells: List[Cell] = field(default_factory=list)
    found_words: List[str] = field(default_factory=list)
    found_word_cells: List[List[Cell]] = field(default_factory=list)
    current_word: str = ''
    is_selecting: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'selectedCells': [cell_id(*cell) for cell in self.selected_cells],
            'foundWords': list(self.found_words),
            'foundWordCells': [[cell_id(*cell) for cell in path] for path in self.found_word_cells],
            'currentWord': self.current_word,
            'isSelecting': self.is_selecting,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StrandsState':
        return cls(
            selected_cells=[parse_cell_id(value) for value in data['selectedCells']],
            found_words=list(data['foundWords']),
            found_word_cells=[[parse_cell_id(value) for value in path] for path in data['foundWordCells']],
            current_word=str(data['currentWord']),
            is_selecting=bool(data['isSelecting']),
        )


@dataclass
class CrosswordState:
    """Crossword progress: entered letters, focus and the running clock."""
    grid: List[List[str]]
    selected_cell: Optional[Cell] = None
    time_elapsed: int = 0
    is_completed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'grid': [list(row) for row in self.grid],
            'selectedCell': cell_id(*self.selected_cell) if self.selected_cell else None,
            'timeElapsed': self.time_elapsed,
            'isCompleted': self.is_completed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CrosswordState':
        selected = data.get('selectedCell')
        return cls(
            grid=[[str(value) for value in row] for row in data['grid']],
            selected_cell=parse_cell_id(selected) if selected else None,
            time_elapsed=int(data['timeElapsed']),
            is_completed=bool(data['isCompleted']),
        )
