"""Shared fixtures for the puzzle engine tests."""

import os
import random
import tempfile

# Keep test runs from writing log files into the working tree.
os.environ.setdefault('LOG_DIR', os.path.join(tempfile.gettempdir(), 'puzzle_games_test_logs'))

import pytest

from puzzle_games.services import (
    CompletionRegistry,
    ConnectionsService,
    CrosswordService,
    ManualTicker,
    MemoryStore,
    StrandsService,
    WordleService,
)
from puzzle_games.services.exceptions import StoreReadError, StoreWriteError


class BrokenStore:
    """Store whose reads and writes always fail."""

    def get(self, key):
        raise StoreReadError("storage unavailable")

    def set(self, key, value):
        raise StoreWriteError("storage unavailable")

    def remove(self, key):
        raise StoreWriteError("storage unavailable")


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def registry(store) -> CompletionRegistry:
    return CompletionRegistry(store)


@pytest.fixture
def ticker() -> ManualTicker:
    return ManualTicker()


@pytest.fixture
def wordle(store, registry) -> WordleService:
    return WordleService(store, registry)


@pytest.fixture
def connections(store, registry) -> ConnectionsService:
    return ConnectionsService(store, registry, rng=random.Random(7))


@pytest.fixture
def strands(store, registry) -> StrandsService:
    return StrandsService(store, registry)


@pytest.fixture
def crossword(store, registry, ticker) -> CrosswordService:
    return CrosswordService(store, registry, ticker=ticker)


@pytest.fixture
def broken_store() -> BrokenStore:
    return BrokenStore()
