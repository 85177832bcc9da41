"""
Game Hub

Owns the store, the completion registry and the four puzzle engines, and
performs the global reset.
"""

import logging
import threading
from typing import Any, Dict, List, Optional

from ..config.game_settings import (
    COMPLETED_GAMES_KEY,
    CONNECTIONS_STORAGE_KEY,
    CROSSWORD_STORAGE_KEY,
    STRANDS_STORAGE_KEY,
    WORDLE_STORAGE_KEY,
)
from ..models.game import GameId
from ..utils.game_logger import game_logger
from .completion_registry import CompletionRegistry
from .connections_service import ConnectionsService
from .crossword_service import CrosswordService
from .exceptions import StoreError
from .storage import KeyValueStore
from .strands_service import StrandsService
from .wordle_service import WordleService

logger = logging.getLogger(__name__)

ALL_STORAGE_KEYS = (
    WORDLE_STORAGE_KEY,
    CONNECTIONS_STORAGE_KEY,
    STRANDS_STORAGE_KEY,
    CROSSWORD_STORAGE_KEY,
    COMPLETED_GAMES_KEY,
)

GAME_NAMES = {
    GameId.WORDLE: 'Wordle',
    GameId.CONNECTIONS: 'Connections',
    GameId.STRANDS: 'Strands',
    GameId.CROSSWORD: 'Crossword',
}


class GameHub:
    """
    Container for every puzzle engine sharing one store.

    Args:
        store: Key-value backend all games persist to
        ticker: Optional tick source for the crossword clock
        rng: Optional random.Random used by Connections shuffles
    """

    def __init__(self, store: KeyValueStore, ticker=None, rng=None):
        self.store = store
        # Serializes player input, clock ticks and the global reset.
        self.lock = threading.RLock()
        self.registry = CompletionRegistry(store)
        self.wordle = WordleService(store, self.registry)
        self.connections = ConnectionsService(store, self.registry, rng=rng)
        self.strands = StrandsService(store, self.registry)
        self.crossword = CrosswordService(store, self.registry, ticker=ticker, lock=self.lock)

    def engines(self) -> Dict[GameId, Any]:
        return {
            GameId.WORDLE: self.wordle,
            GameId.CONNECTIONS: self.connections,
            GameId.STRANDS: self.strands,
            GameId.CROSSWORD: self.crossword,
        }

    def menu(self) -> List[Dict[str, Any]]:
        """Menu entries in display order, each with its completion badge."""
        completed = set(self.registry.completed())
        return [
            {'id': game_id.value, 'name': name, 'completed': game_id in completed}
            for game_id, name in GAME_NAMES.items()
        ]

    def reload(self) -> None:
        for engine in self.engines().values():
            engine.reload()

    def reset_all(self) -> None:
        """Remove every game's saved state and its badge, then reload fresh games."""
        with self.lock:
            self.crossword.discard_progress()
            for key in ALL_STORAGE_KEYS:
                try:
                    self.store.remove(key)
                except StoreError as e:
                    logger.error(f"[HUB] Could not remove '{key}' during reset: {e}")
            self.reload()
        game_logger.log_game_event(None, 'all_games_reset')


# Global hub instance
_game_hub: Optional[GameHub] = None


def get_game_hub() -> Optional[GameHub]:
    """Get the global game hub instance."""
    return _game_hub


def initialize_game_hub(store: KeyValueStore, ticker=None, rng=None) -> GameHub:
    """Initialize the global game hub instance."""
    global _game_hub
    _game_hub = GameHub(store, ticker=ticker, rng=rng)
    return _game_hub
