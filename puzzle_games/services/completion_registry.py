"""
Completion Registry

The shared set of finished puzzles the menu badges. Stored as an ordered
JSON list of game id strings; it only grows, except through a per-game reset
(which removes that one id) or a full reset.
"""

import json
import logging
from typing import List

from ..config.game_settings import COMPLETED_GAMES_KEY
from ..models.game import GameId
from .exceptions import StoreError
from .storage import KeyValueStore

logger = logging.getLogger(__name__)


class CompletionRegistry:
    """Tracks which games have been completed."""

    def __init__(self, store: KeyValueStore, key: str = COMPLETED_GAMES_KEY):
        self.store = store
        self.key = key

    def completed(self) -> List[GameId]:
        """Completed games in the order they were first completed."""
        try:
            raw = self.store.get(self.key)
            values = json.loads(raw) if raw is not None else []
        except (StoreError, ValueError, TypeError) as e:
            logger.warning(f"[REGISTRY] Unreadable completion list, treating as empty: {e}")
            return []
        if not isinstance(values, list):
            return []

        known = {game_id.value: game_id for game_id in GameId}
        result: List[GameId] = []
        for value in values:
            game_id = known.get(value) if isinstance(value, str) else None
            if game_id is not None and game_id not in result:
                result.append(game_id)
        return result

    def is_complete(self, game_id: GameId) -> bool:
        return game_id in self.completed()

    def mark_complete(self, game_id: GameId) -> None:
        """Add a game to the registry; marking it again changes nothing."""
        completed = self.completed()
        if game_id in completed:
            return
        completed.append(game_id)
        self._write(completed)
        logger.info(f"[REGISTRY] {game_id.value} marked complete")

    def unmark(self, game_id: GameId) -> None:
        """Remove one game's badge, leaving every other game untouched."""
        completed = self.completed()
        if game_id not in completed:
            return
        completed.remove(game_id)
        self._write(completed)

    def reset_all(self) -> None:
        try:
            self.store.remove(self.key)
        except StoreError as e:
            logger.error(f"[REGISTRY] Could not clear completion list: {e}")

    def _write(self, completed: List[GameId]) -> None:
        try:
            self.store.set(self.key, json.dumps([game_id.value for game_id in completed]))
        except StoreError as e:
            logger.error(f"[REGISTRY] Could not save completion list: {e}")
