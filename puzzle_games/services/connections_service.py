"""
Connections Service

Sixteen words, four hidden groups of four, four mistakes allowed.
"""

import random
from typing import Any, Dict, Optional, Sequence

from ..config.game_settings import CONNECTIONS_GROUPS, CONNECTIONS_STORAGE_KEY, GROUP_SIZE, MAX_MISTAKES
from ..models.game import ConnectionsState, GameId, Group
from ..utils.game_logger import game_logger
from .completion_registry import CompletionRegistry
from .persistence import PersistentGameState
from .storage import KeyValueStore


class ConnectionsService:
    """
    Connections game engine.

    This class handles:
    - Toggling words in and out of the (at most four word) selection
    - Matching a full selection against the predefined groups
    - Counting mistakes and ending the game on the last one
    - Uniform shuffling of the remaining words
    """

    def __init__(self,
                 store: KeyValueStore,
                 registry: CompletionRegistry,
                 groups: Sequence[Group] = CONNECTIONS_GROUPS,
                 rng: Optional[random.Random] = None):
        self.groups = tuple(groups)
        self.all_words = [word for group in self.groups for word in group.words]
        self.registry = registry
        self.rng = rng or random.Random()
        self.persistence = PersistentGameState(
            store, CONNECTIONS_STORAGE_KEY, self._initial_state,
            ConnectionsState.from_dict, ConnectionsState.to_dict
        )
        self.state = self.persistence.load()

    def _initial_state(self) -> ConnectionsState:
        words = list(self.all_words)
        self.rng.shuffle(words)
        return ConnectionsState(words=words)

    def reload(self) -> None:
        self.state = self.persistence.load()

    @property
    def mistakes_remaining(self) -> int:
        return max(0, MAX_MISTAKES - self.state.mistakes)

    @property
    def won(self) -> bool:
        return len(self.state.solved_groups) == len(self.groups)

    def toggle_word(self, word: str) -> ConnectionsState:
        """Select or deselect a remaining word; a fifth selection is ignored."""
        state = self.state
        if state.game_over or word not in state.words:
            return state

        if word in state.selected:
            state.selected.remove(word)
        elif len(state.selected) < GROUP_SIZE:
            state.selected.append(word)
        else:
            return state

        self.persistence.save(state)
        return state

    def _find_group(self, selected: Sequence[str]) -> Optional[Group]:
        chosen = set(selected)
        for group in self.groups:
            if set(group.words) == chosen:
                return group
        return None

    def submit_guess(self) -> ConnectionsState:
        """
        Check the current selection against the groups.

        Only a selection of exactly four words is submitted. An exact match
        moves its group to the solved list; anything else costs a mistake.
        The selection is cleared either way.
        """
        state = self.state
        if state.game_over or len(state.selected) != GROUP_SIZE:
            return state

        group = self._find_group(state.selected)
        state.selected = []
        if group is not None:
            state.solved_groups.append(group)
            state.words = [word for word in state.words if word not in group.words]
            if len(state.solved_groups) == len(self.groups):
                state.game_over = True
                self.registry.mark_complete(GameId.CONNECTIONS)
                game_logger.log_game_event(GameId.CONNECTIONS.value, 'game_won', mistakes=state.mistakes)
        else:
            state.mistakes += 1
            if state.mistakes >= MAX_MISTAKES:
                state.game_over = True
                game_logger.log_game_event(
                    GameId.CONNECTIONS.value, 'game_lost', solved_groups=len(state.solved_groups)
                )

        self.persistence.save(state)
        return state

    def shuffle(self) -> ConnectionsState:
        """Randomly reorder the remaining words; solved groups are untouched."""
        self.rng.shuffle(self.state.words)
        self.persistence.save(self.state)
        return self.state

    def reset(self) -> ConnectionsState:
        self.state = self._initial_state()
        self.persistence.save(self.state)
        self.registry.unmark(GameId.CONNECTIONS)
        game_logger.log_game_event(GameId.CONNECTIONS.value, 'game_reset')
        return self.state

    def describe(self) -> Dict[str, Any]:
        """JSON-ready view; unsolved groups are revealed only after a loss."""
        state = self.state
        view = state.to_dict()
        view['mistakesRemaining'] = self.mistakes_remaining
        view['won'] = self.won
        if state.game_over and not self.won:
            solved = set(state.solved_groups)
            view['unsolvedGroups'] = [group.to_dict() for group in self.groups if group not in solved]
        else:
            view['unsolvedGroups'] = []
        view['completed'] = self.registry.is_complete(GameId.CONNECTIONS)
        return view
