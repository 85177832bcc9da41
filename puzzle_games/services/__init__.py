"""
Services Package

Contains storage adapters, persistence, the completion registry and the
four puzzle engines.
"""

from .clock import IntervalTicker, ManualTicker
from .completion_registry import CompletionRegistry
from .connections_service import ConnectionsService
from .crossword_service import CrosswordService
from .exceptions import StoreConfigurationError, StoreError, StoreReadError, StoreWriteError
from .game_hub import GameHub, get_game_hub, initialize_game_hub
from .persistence import PersistentGameState
from .storage import JsonFileStore, KeyValueStore, MemoryStore, MongoStore, create_store
from .strands_service import StrandsService
from .wordle_service import WordleService

__all__ = [
    'IntervalTicker', 'ManualTicker',
    'CompletionRegistry', 'PersistentGameState',
    'StoreError', 'StoreReadError', 'StoreWriteError', 'StoreConfigurationError',
    'KeyValueStore', 'MemoryStore', 'JsonFileStore', 'MongoStore', 'create_store',
    'WordleService', 'ConnectionsService', 'StrandsService', 'CrosswordService',
    'GameHub', 'get_game_hub', 'initialize_game_hub'
]
