"""
Game Configuration Constants Module

This module defines the fixed puzzle content for all four games. All puzzle
parameters are centralized here to enable easy modification.
"""

from typing import Dict, Final, List, Tuple

from ..models.game import BLOCKED, Clue, Direction, Group

# Storage keys, one per game plus the completion registry
WORDLE_STORAGE_KEY: Final[str] = 'wordle-game-state'
CONNECTIONS_STORAGE_KEY: Final[str] = 'connections-game-state'
STRANDS_STORAGE_KEY: Final[str] = 'strands-game-state'
CROSSWORD_STORAGE_KEY: Final[str] = 'crossword-game-state'
COMPLETED_GAMES_KEY: Final[str] = 'completed-games'

# Wordle
WORDLE_SOLUTION: Final[str] = 'AUGIE'
MAX_GUESSES: Final[int] = 6
WORD_LENGTH: Final[int] = 5

# Connections
CONNECTIONS_GROUPS: Final[Tuple[Group, ...]] = (
    Group(words=('DOG', 'CAT', 'BIRD', 'FISH'), category='PETS', color='yellow'),
    Group(words=('RED', 'BLUE', 'GREEN', 'PURPLE'), category='COLORS', color='green'),
    Group(words=('APPLE', 'GOOGLE', 'MICROSOFT', 'AMAZON'), category='TECH COMPANIES', color='blue'),
    Group(words=('SPRING', 'SUMMER', 'FALL', 'WINTER'), category='SEASONS', color='purple'),
)
GROUP_SIZE: Final[int] = 4
MAX_MISTAKES: Final[int] = 4

# Strands
STRANDS_THEME: Final[str] = 'React Development'
STRANDS_GRID: Final[Tuple[Tuple[str, ...], ...]] = (
    ('T', 'H', 'E', 'M', 'E'),
    ('R', 'E', 'A', 'C', 'T'),
    ('S', 'T', 'A', 'T', 'E'),
    ('H', 'O', 'O', 'K', 'S'),
    ('P', 'R', 'O', 'P', 'S'),
)
STRANDS_WORDS: Final[Tuple[str, ...]] = ('REACT', 'STATE', 'PROPS', 'HOOKS', 'THEME')
SPANGRAM: Final[str] = 'THEME'

# Crossword
GRID_SIZE: Final[int] = 5
CROSSWORD_SOLUTION: Final[Tuple[Tuple[str, ...], ...]] = (
    ('R', 'E', 'A', 'C', 'T'),
    ('O', BLOCKED, 'P', BLOCKED, 'H'),
    ('U', BLOCKED, 'P', BLOCKED, 'E'),
    ('T', BLOCKED, 'S', BLOCKED, 'M'),
    ('E', 'R', 'R', 'O', 'R'),
)
CROSSWORD_CLUES: Final[Tuple[Clue, ...]] = (
    Clue(1, Direction.ACROSS, 0, 0, 'JavaScript library for building UIs'),
    Clue(5, Direction.ACROSS, 4, 0, 'Mistake in code'),
    Clue(1, Direction.DOWN, 0, 0, 'Path or direction'),
    Clue(2, Direction.DOWN, 0, 2, 'React application state'),
    Clue(3, Direction.DOWN, 0, 4, 'Single idea or subject'),
    Clue(4, Direction.DOWN, 0, 3, 'CSS styling system'),
)


def _is_traceable(word: str, grid) -> bool:
    """True when ``word`` can be spelled along a path of adjacent, unrepeated cells."""
    rows, cols = len(grid), len(grid[0])

    def extend(path: List[Tuple[int, int]], index: int) -> bool:
        if index == len(word):
            return True
        last_row, last_col = path[-1]
        for row in range(max(0, last_row - 1), min(rows, last_row + 2)):
            for col in range(max(0, last_col - 1), min(cols, last_col + 2)):
                if (row, col) not in path and grid[row][col] == word[index]:
                    if extend(path + [(row, col)], index + 1):
                        return True
        return False

    return any(
        extend([(row, col)], 1)
        for row in range(rows)
        for col in range(cols)
        if grid[row][col] == word[0]
    )


def validate_puzzle_integrity() -> bool:
    """
    Validates the consistency of the configured puzzles.

    Checks performed:
    1. Wordle solution length and case
    2. Connections partition: four disjoint groups of four words
    3. Strands grid is rectangular, every word can be traced, spangram is a word
    4. Crossword grid is GRID_SIZE square and clue start cells are open

    Returns:
        bool: True if every puzzle passes all checks

    Raises:
        ValueError: If any validation check fails with detailed error message
    """
    if len(WORDLE_SOLUTION) != WORD_LENGTH or not WORDLE_SOLUTION.isupper():
        raise ValueError(f"Wordle solution '{WORDLE_SOLUTION}' must be {WORD_LENGTH} uppercase letters")

    if len(CONNECTIONS_GROUPS) != 4:
        raise ValueError("Connections needs exactly 4 groups")
    all_words = [word for group in CONNECTIONS_GROUPS for word in group.words]
    if any(len(group.words) != GROUP_SIZE for group in CONNECTIONS_GROUPS):
        raise ValueError(f"Every Connections group needs exactly {GROUP_SIZE} words")
    if len(set(all_words)) != len(all_words):
        duplicates = sorted({word for word in all_words if all_words.count(word) > 1})
        raise ValueError(f"Connections groups overlap: {duplicates}")

    widths = {len(row) for row in STRANDS_GRID}
    if len(widths) != 1:
        raise ValueError("Strands grid rows must all have the same length")
    if SPANGRAM not in STRANDS_WORDS:
        raise ValueError(f"Spangram '{SPANGRAM}' is not one of the Strands words")
    for word in STRANDS_WORDS:
        if not _is_traceable(word, STRANDS_GRID):
            raise ValueError(f"Strands word '{word}' cannot be traced in the grid")

    if len(CROSSWORD_SOLUTION) != GRID_SIZE or any(len(row) != GRID_SIZE for row in CROSSWORD_SOLUTION):
        raise ValueError(f"Crossword solution must be {GRID_SIZE}x{GRID_SIZE}")
    for clue in CROSSWORD_CLUES:
        if CROSSWORD_SOLUTION[clue.row][clue.col] == BLOCKED:
            raise ValueError(f"Clue {clue.number} {clue.direction.value} starts on a blocked cell")

    return True


def get_clues_by_direction(clues=CROSSWORD_CLUES) -> Dict[str, Dict[int, str]]:
    """Clue texts grouped the way a clue list is displayed: ``{'across': {1: ...}, 'down': {...}}``."""
    grouped: Dict[str, Dict[int, str]] = {direction.value: {} for direction in Direction}
    for clue in clues:
        grouped[clue.direction.value][clue.number] = clue.text
    return grouped


if __name__ == "__main__":

    try:
        validate_puzzle_integrity()
        print(" Puzzle validation passed")
    except ValueError as config_error:
        print(f" Configuration validation failed: {config_error}")
        exit(1)
