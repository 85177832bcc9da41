"""
Wordle Service

Row-based guessing against a fixed five-letter solution, driven one key
press at a time by the on-screen keyboard.
"""

from typing import Any, Dict, List

from ..config.game_settings import MAX_GUESSES, WORD_LENGTH, WORDLE_SOLUTION, WORDLE_STORAGE_KEY
from ..models.game import GameId, LetterStatus, WordleState
from ..utils.game_logger import game_logger
from .completion_registry import CompletionRegistry
from .persistence import PersistentGameState
from .storage import KeyValueStore

ENTER = 'ENTER'
BACKSPACE = 'BACKSPACE'

_STATUS_PRIORITY = {LetterStatus.ABSENT: 0, LetterStatus.PRESENT: 1, LetterStatus.CORRECT: 2}


def _initial_state() -> WordleState:
    return WordleState(guesses=[''] * MAX_GUESSES)


def _is_valid(state: WordleState) -> bool:
    return len(state.guesses) == MAX_GUESSES and 0 <= state.current_row < MAX_GUESSES


class WordleService:
    """
    Wordle game engine.

    This class handles:
    - Key input (letters, BACKSPACE, ENTER) for the active row
    - Win/loss detection after each submitted row
    - Per-letter evaluation of finalized rows
    - Persisting every change and registering the win
    """

    def __init__(self, store: KeyValueStore, registry: CompletionRegistry, solution: str = WORDLE_SOLUTION):
        self.solution = solution.upper()
        self.registry = registry
        self.persistence = PersistentGameState(
            store, WORDLE_STORAGE_KEY, _initial_state,
            WordleState.from_dict, WordleState.to_dict, _is_valid
        )
        self.state = self.persistence.load()

    def reload(self) -> None:
        self.state = self.persistence.load()

    def press_key(self, key: str) -> WordleState:
        """
        Apply one keyboard key to the active row.

        Args:
            key: 'BACKSPACE', 'ENTER' or a single letter (any case)

        Returns:
            The current WordleState; ignored input leaves it unchanged
        """
        state = self.state
        if state.game_over or not isinstance(key, str):
            return state

        if key == BACKSPACE:
            if not state.current_guess:
                return state
            state.current_guess = state.current_guess[:-1]
        elif key == ENTER:
            if len(state.current_guess) != WORD_LENGTH:
                return state
            self._submit_row()
        elif len(key) == 1 and key.isalpha() and key.isascii():
            if len(state.current_guess) >= WORD_LENGTH:
                return state
            state.current_guess += key.upper()
        else:
            return state

        self.persistence.save(state)
        return state

    def _submit_row(self) -> None:
        state = self.state
        guess = state.current_guess
        state.guesses[state.current_row] = guess

        if guess.upper() == self.solution:
            state.won = True
            state.game_over = True
            self.registry.mark_complete(GameId.WORDLE)
            game_logger.log_game_event(GameId.WORDLE.value, 'game_won', rounds_used=state.current_row + 1)
        elif state.current_row == MAX_GUESSES - 1:
            state.game_over = True
            game_logger.log_game_event(GameId.WORDLE.value, 'game_lost', final_guess=guess)
        else:
            state.current_row += 1
        state.current_guess = ''

    def letter_status(self, letter: str, position: int) -> LetterStatus:
        """
        Evaluate one letter of a guess.

        A letter is CORRECT at its solution position and PRESENT whenever it
        appears anywhere else in the solution; repeated letters are not
        counted against the solution's letter counts.
        """
        letter = letter.upper()
        if self.solution[position] == letter:
            return LetterStatus.CORRECT
        if letter in self.solution:
            return LetterStatus.PRESENT
        return LetterStatus.ABSENT

    def is_row_finalized(self, row: int) -> bool:
        state = self.state
        return row < state.current_row or (state.game_over and row == state.current_row)

    def row_statuses(self, row: int) -> List[LetterStatus]:
        """Statuses for a submitted row; an unsubmitted row has none."""
        if not 0 <= row < MAX_GUESSES or not self.is_row_finalized(row):
            return []
        guess = self.state.guesses[row]
        return [self.letter_status(letter, position) for position, letter in enumerate(guess)]

    def keyboard_status(self) -> Dict[str, LetterStatus]:
        """Best status seen per letter across submitted rows."""
        best: Dict[str, LetterStatus] = {}
        for row in range(MAX_GUESSES):
            for letter, status in zip(self.state.guesses[row].upper(), self.row_statuses(row)):
                if letter not in best or _STATUS_PRIORITY[status] > _STATUS_PRIORITY[best[letter]]:
                    best[letter] = status
        return best

    def reset(self) -> WordleState:
        self.state = _initial_state()
        self.persistence.save(self.state)
        self.registry.unmark(GameId.WORDLE)
        game_logger.log_game_event(GameId.WORDLE.value, 'game_reset')
        return self.state

    def describe(self) -> Dict[str, Any]:
        """JSON-ready view of the board, revealing the answer once the game is over."""
        state = self.state
        view = state.to_dict()
        view['rows'] = [
            [status.value for status in self.row_statuses(row)]
            for row in range(MAX_GUESSES)
        ]
        view['keyboard'] = {letter: status.value for letter, status in self.keyboard_status().items()}
        view['answer'] = self.solution if state.game_over else None
        view['completed'] = self.registry.is_complete(GameId.WORDLE)
        return view
