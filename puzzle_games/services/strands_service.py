"""
Strands Service

Find the theme words hidden in a letter grid by tracing paths of adjacent
cells (diagonals included). One of the words is the spangram.

Input surface:
- select_cell(r, c): open a path, or extend it by one adjacent cell
- submit_path(): check the traced word and clear the path
- click_cell(r, c): single-gesture variant where clicking the path's last
  cell again submits it
"""

from typing import Any, Dict, List, Optional, Sequence, Set

from ..config.game_settings import SPANGRAM, STRANDS_GRID, STRANDS_STORAGE_KEY, STRANDS_THEME, STRANDS_WORDS
from ..models.game import Cell, GameId, StrandsState, cell_id
from ..utils.game_logger import game_logger
from .completion_registry import CompletionRegistry
from .persistence import PersistentGameState
from .storage import KeyValueStore


def is_adjacent(first: Cell, second: Cell) -> bool:
    """Chebyshev distance of at most one, so diagonal neighbours count."""
    return abs(first[0] - second[0]) <= 1 and abs(first[1] - second[1]) <= 1


class StrandsService:
    """Strands game engine."""

    def __init__(self,
                 store: KeyValueStore,
                 registry: CompletionRegistry,
                 grid: Sequence[Sequence[str]] = STRANDS_GRID,
                 words: Sequence[str] = STRANDS_WORDS,
                 spangram: str = SPANGRAM,
                 theme: str = STRANDS_THEME):
        self.grid = [list(row) for row in grid]
        self.words = tuple(words)
        self.spangram = spangram
        self.theme = theme
        self.registry = registry
        self.persistence = PersistentGameState(
            store, STRANDS_STORAGE_KEY, StrandsState,
            StrandsState.from_dict, StrandsState.to_dict, self._is_valid
        )
        self.state = self.persistence.load()

    def _in_grid(self, cell: Cell) -> bool:
        row, col = cell
        return 0 <= row < len(self.grid) and 0 <= col < len(self.grid[row])

    def _is_valid(self, state: StrandsState) -> bool:
        cells = list(state.selected_cells)
        for path in state.found_word_cells:
            cells.extend(path)
        return all(self._in_grid(cell) for cell in cells)

    def reload(self) -> None:
        self.state = self.persistence.load()

    @property
    def is_complete(self) -> bool:
        return len(self.state.found_words) == len(self.words)

    def is_spangram(self, word: str) -> bool:
        return word == self.spangram

    def _letter(self, cell: Cell) -> str:
        return self.grid[cell[0]][cell[1]]

    def select_cell(self, row: int, col: int) -> StrandsState:
        """
        Open a new path at a cell, or append a cell adjacent to the path's end.

        Cells outside the grid, cells not adjacent to the last selected cell
        and cells already on the path are ignored.
        """
        state = self.state
        cell = (row, col)
        if self.is_complete or not self._in_grid(cell):
            return state

        if not state.is_selecting:
            state.is_selecting = True
            state.selected_cells = [cell]
            state.current_word = self._letter(cell)
        elif cell in state.selected_cells:
            return state
        elif not state.selected_cells or is_adjacent(state.selected_cells[-1], cell):
            state.selected_cells.append(cell)
            state.current_word += self._letter(cell)
        else:
            return state

        self.persistence.save(state)
        return state

    def submit_path(self) -> StrandsState:
        """
        Check the traced word, then clear the path whatever the outcome.

        A word counts once per spelling; tracing it again elsewhere in the
        grid is ignored.
        """
        state = self.state
        word = state.current_word
        if word in self.words and word not in state.found_words:
            state.found_words.append(word)
            state.found_word_cells.append(list(state.selected_cells))
            game_logger.log_game_event(
                GameId.STRANDS.value, 'word_found', word=word, spangram=self.is_spangram(word)
            )
            if self.is_complete:
                self.registry.mark_complete(GameId.STRANDS)
                game_logger.log_game_event(GameId.STRANDS.value, 'game_won')
        self.reset_selection()
        return state

    def click_cell(self, row: int, col: int) -> StrandsState:
        """Clicking the last cell of an open path submits it; any other click selects."""
        state = self.state
        if state.is_selecting and state.selected_cells and state.selected_cells[-1] == (row, col):
            return self.submit_path()
        return self.select_cell(row, col)

    def reset_selection(self) -> StrandsState:
        state = self.state
        state.selected_cells = []
        state.current_word = ''
        state.is_selecting = False
        self.persistence.save(state)
        return state

    def reset(self) -> StrandsState:
        self.state = StrandsState()
        self.persistence.save(self.state)
        self.registry.unmark(GameId.STRANDS)
        game_logger.log_game_event(GameId.STRANDS.value, 'game_reset')
        return self.state

    def found_cells(self) -> Set[Cell]:
        """Every cell that belongs to a found word's path."""
        return {cell for path in self.state.found_word_cells for cell in path}

    def spangram_cells(self) -> Optional[List[Cell]]:
        for word, path in zip(self.state.found_words, self.state.found_word_cells):
            if self.is_spangram(word):
                return list(path)
        return None

    def describe(self) -> Dict[str, Any]:
        state = self.state
        view = state.to_dict()
        view['grid'] = [list(row) for row in self.grid]
        view['theme'] = self.theme
        view['totalWords'] = len(self.words)
        view['found'] = [
            {'word': word, 'spangram': self.is_spangram(word), 'cells': [cell_id(*cell) for cell in path]}
            for word, path in zip(state.found_words, state.found_word_cells)
        ]
        view['foundCells'] = [cell_id(*cell) for cell in sorted(self.found_cells())]
        spangram_cells = self.spangram_cells()
        view['spangramCells'] = [cell_id(*cell) for cell in spangram_cells] if spangram_cells else []
        view['isComplete'] = self.is_complete
        view['completed'] = self.registry.is_complete(GameId.STRANDS)
        return view
