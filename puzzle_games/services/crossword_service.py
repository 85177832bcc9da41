"""
Crossword Service

Free-form grid fill checked against a solution grid, with a clock that
runs until the puzzle is solved.
"""

import threading
from typing import Any, Callable, Dict, List, Optional, Sequence

from ..config.game_settings import (
    CROSSWORD_CLUES,
    CROSSWORD_SOLUTION,
    CROSSWORD_STORAGE_KEY,
    get_clues_by_direction,
)
from ..models.game import BLOCKED, Clue, CrosswordState, Direction, GameId
from ..utils.game_logger import game_logger
from .completion_registry import CompletionRegistry
from .persistence import PersistentGameState
from .storage import KeyValueStore


def format_time(seconds: int) -> str:
    """MM:SS with whole seconds; minutes keep growing past 99."""
    minutes, seconds = divmod(int(seconds), 60)
    return f"{minutes:02d}:{seconds:02d}"


class CrosswordService:
    """
    Crossword game engine.

    This class handles:
    - Letter entry into open (non-blocked) cells
    - Automatic completion once every open cell matches the solution
    - The elapsed-time clock, fed by a tick source
    - Clue numbering and answers
    """

    def __init__(self,
                 store: KeyValueStore,
                 registry: CompletionRegistry,
                 ticker=None,
                 solution: Sequence[Sequence[str]] = CROSSWORD_SOLUTION,
                 clues: Sequence[Clue] = CROSSWORD_CLUES,
                 lock=None):
        self.solution = [list(row) for row in solution]
        self.size = len(self.solution)
        self.clues = tuple(clues)
        self.registry = registry
        self.ticker = None
        self._lock = lock if lock is not None else threading.RLock()
        self._tick_listeners: List[Callable[[Dict[str, Any]], None]] = []
        self.persistence = PersistentGameState(
            store, CROSSWORD_STORAGE_KEY, self._initial_state,
            CrosswordState.from_dict, CrosswordState.to_dict, self._is_valid
        )
        self.state = self.persistence.load()
        if ticker is not None:
            self.attach_clock(ticker)

    def _initial_state(self) -> CrosswordState:
        return CrosswordState(grid=[[''] * len(row) for row in self.solution])

    def _is_valid(self, state: CrosswordState) -> bool:
        grid = state.grid
        if len(grid) != self.size or any(len(row) != self.size for row in grid):
            return False
        for row in range(self.size):
            for col in range(self.size):
                value = grid[row][col]
                if len(value) > 1 or (self.is_blocked(row, col) and value):
                    return False
        return True

    def _in_grid(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < len(self.solution[row])

    def is_blocked(self, row: int, col: int) -> bool:
        return self.solution[row][col] == BLOCKED

    # -------------------------------------------------
    # Clock
    # -------------------------------------------------

    def attach_clock(self, ticker) -> None:
        """Subscribe to a tick source; a solved puzzle stays unsubscribed."""
        with self._lock:
            if self.ticker is not None:
                self.ticker.unsubscribe(self.tick)
            self.ticker = ticker
            if not self.state.is_completed:
                ticker.subscribe(self.tick)

    def _stop_clock(self) -> None:
        if self.ticker is not None:
            self.ticker.unsubscribe(self.tick)

    def add_tick_listener(self, listener: Callable[[Dict[str, Any]], None]) -> None:
        """Register a callback receiving the clock view after every tick."""
        self._tick_listeners.append(listener)

    def tick(self) -> None:
        """Advance the clock by one second unless the puzzle is solved."""
        with self._lock:
            if self.state.is_completed:
                self._stop_clock()
                return
            self.state.time_elapsed += 1
            self.persistence.save(self.state)
            clock = self.clock_view()
        for listener in list(self._tick_listeners):
            listener(clock)

    def formatted_time(self) -> str:
        return format_time(self.state.time_elapsed)

    def clock_view(self) -> Dict[str, Any]:
        return {
            'timeElapsed': self.state.time_elapsed,
            'formatted': self.formatted_time(),
            'isCompleted': self.state.is_completed,
        }

    # -------------------------------------------------
    # Grid input
    # -------------------------------------------------

    def set_cell(self, row: int, col: int, value: Optional[str]) -> CrosswordState:
        """
        Enter one character into an open cell, or clear it with an empty value.

        Writes to blocked cells, outside the grid, or after completion are
        ignored. A full but wrong grid simply stays incomplete.
        """
        with self._lock:
            state = self.state
            if not self._in_grid(row, col) or self.is_blocked(row, col) or state.is_completed:
                return state

            state.grid[row][col] = (value or '').strip().upper()[:1]
            self._check_completion()
            self.persistence.save(state)
            return state

    def _is_filled(self) -> bool:
        return all(
            self.state.grid[row][col]
            for row in range(self.size)
            for col in range(self.size)
            if not self.is_blocked(row, col)
        )

    def check_solution(self) -> bool:
        """True when every open cell holds its solution letter. Does not change state."""
        return all(
            self.state.grid[row][col] == self.solution[row][col]
            for row in range(self.size)
            for col in range(self.size)
            if not self.is_blocked(row, col)
        )

    def _check_completion(self) -> None:
        if not self._is_filled() or not self.check_solution():
            return
        self.state.is_completed = True
        self._stop_clock()
        self.registry.mark_complete(GameId.CROSSWORD)
        game_logger.log_game_event(
            GameId.CROSSWORD.value, 'game_won', time_elapsed=self.state.time_elapsed
        )

    def select_cell(self, row: int, col: int) -> CrosswordState:
        """Move the input focus; focus has no effect on play."""
        with self._lock:
            if not self._in_grid(row, col) or self.is_blocked(row, col):
                return self.state
            self.state.selected_cell = (row, col)
            self.persistence.save(self.state)
            return self.state

    # -------------------------------------------------
    # Clues
    # -------------------------------------------------

    def clue_number_at(self, row: int, col: int) -> Optional[int]:
        """Number shown in a cell: the lowest across clue starting there, else the lowest down clue."""
        for direction in (Direction.ACROSS, Direction.DOWN):
            numbers = sorted(
                clue.number for clue in self.clues
                if clue.direction == direction and (clue.row, clue.col) == (row, col)
            )
            if numbers:
                return numbers[0]
        return None

    def clue_answer(self, clue: Clue) -> str:
        """Solution letters from the clue's start cell to the next blocked cell or edge."""
        d_row, d_col = (0, 1) if clue.direction == Direction.ACROSS else (1, 0)
        row, col = clue.row, clue.col
        letters = []
        while self._in_grid(row, col) and not self.is_blocked(row, col):
            letters.append(self.solution[row][col])
            row, col = row + d_row, col + d_col
        return ''.join(letters)

    # -------------------------------------------------
    # Lifecycle
    # -------------------------------------------------

    def reload(self) -> None:
        with self._lock:
            self.state = self.persistence.load()
            if self.ticker is not None:
                self.attach_clock(self.ticker)

    def discard_progress(self) -> None:
        """Drop the in-memory puzzle without saving, so a late tick cannot write the old grid back."""
        with self._lock:
            self.state = self._initial_state()

    def reset(self) -> CrosswordState:
        with self._lock:
            self.state = self._initial_state()
            self.persistence.save(self.state)
            self.registry.unmark(GameId.CROSSWORD)
            if self.ticker is not None:
                self.ticker.subscribe(self.tick)
            game_logger.log_game_event(GameId.CROSSWORD.value, 'game_reset')
            return self.state

    def describe(self) -> Dict[str, Any]:
        with self._lock:
            state = self.state
            view = state.to_dict()
            view['blocked'] = [
                [self.is_blocked(row, col) for col in range(self.size)]
                for row in range(self.size)
            ]
            view['clueNumbers'] = [
                [self.clue_number_at(row, col) for col in range(self.size)]
                for row in range(self.size)
            ]
            view['clues'] = get_clues_by_direction(self.clues)
            view['answers'] = (
                {f"{clue.number}-{clue.direction.value}": self.clue_answer(clue) for clue in self.clues}
                if state.is_completed else {}
            )
            view['formattedTime'] = self.formatted_time()
            view['completed'] = self.registry.is_complete(GameId.CROSSWORD)
            return view
