"""
Key-Value Store Adapters

Synchronous string stores the game state is persisted to. Every backend
offers the same three calls and no transactional guarantees:

- get(key) -> Optional[str]
- set(key, value) -> None
- remove(key) -> None
"""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Dict, Optional, Protocol

from pymongo.mongo_client import MongoClient
from pymongo.server_api import ServerApi
from pymongo.errors import PyMongoError

from .exceptions import StoreConfigurationError, StoreReadError, StoreWriteError

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Protocol every storage backend implements."""

    def get(self, key: str) -> Optional[str]:
        """Return the stored string, or None when the key is absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store or replace the value for a key."""
        ...

    def remove(self, key: str) -> None:
        """Delete a key. Removing an absent key is not an error."""
        ...


class MemoryStore:
    """Dict-based storage for tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self):
        return list(self._data)


class JsonFileStore:
    """
    Storage backed by a single JSON object file mapping keys to strings.

    The whole file is rewritten on every set/remove; a uniquely named
    temporary file plus ``os.replace`` keeps a crash from leaving a
    half-written document. Each read-modify-write runs under one lock, so
    the clock thread and request threads never overwrite each other.
    """

    def __init__(self, path: str):
        self.path = Path(path)
        self._lock = threading.Lock()
        logger.info(f"[STORE] JsonFileStore using {self.path}")

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StoreReadError(f"Cannot read store file {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StoreReadError(f"Store file {self.path} does not hold a JSON object")
        return data

    def _write_all(self, data: Dict[str, str]) -> None:
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile('w', encoding='utf-8', dir=self.path.parent,
                                             prefix=self.path.name + '.', suffix='.tmp',
                                             delete=False) as f:
                tmp_name = f.name
                json.dump(data, f, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise StoreWriteError(f"Cannot write store file {self.path}: {e}") from e

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            try:
                data = self._read_all()
            except StoreReadError:
                logger.warning(f"[STORE] Unreadable store file {self.path}, starting a fresh one")
                data = {}
            data[key] = value
            self._write_all(data)

    def remove(self, key: str) -> None:
        with self._lock:
            try:
                data = self._read_all()
            except StoreReadError:
                data = {}
            if data.pop(key, None) is not None:
                self._write_all(data)


class MongoStore:
    """Storage backed by a MongoDB collection of ``{_id: key, value: str}`` documents."""

    def __init__(self, collection):
        self.collection = collection

    @classmethod
    def connect(cls, mongo_uri: str, db_name: str = 'puzzle_games') -> 'MongoStore':
        """Open a client and return a store over the ``game_state`` collection."""
        client = MongoClient(mongo_uri, server_api=ServerApi('1'))
        try:
            client.admin.command('ping')
        except PyMongoError as e:
            logger.error(f"[STORE] MongoDB connection error: {e}")
            raise StoreConfigurationError(f"Cannot reach MongoDB: {e}") from e
        logger.info(f"[STORE] Connected to MongoDB database {db_name}")
        return cls(client[db_name].game_state)

    def get(self, key: str) -> Optional[str]:
        try:
            document = self.collection.find_one({'_id': key})
        except PyMongoError as e:
            raise StoreReadError(f"Cannot read '{key}': {e}") from e
        return document['value'] if document else None

    def set(self, key: str, value: str) -> None:
        try:
            self.collection.replace_one({'_id': key}, {'_id': key, 'value': value}, upsert=True)
        except PyMongoError as e:
            raise StoreWriteError(f"Cannot write '{key}': {e}") from e

    def remove(self, key: str) -> None:
        try:
            self.collection.delete_one({'_id': key})
        except PyMongoError as e:
            raise StoreWriteError(f"Cannot remove '{key}': {e}") from e


def create_store(config_class) -> KeyValueStore:
    """Build the backend named by ``config_class.STORE_BACKEND``."""
    backend = (getattr(config_class, 'STORE_BACKEND', 'memory') or 'memory').strip().lower()
    if backend == 'memory':
        return MemoryStore()
    if backend == 'file':
        return JsonFileStore(config_class.STORE_PATH)
    if backend == 'mongo':
        if not config_class.MONGO_URI:
            raise StoreConfigurationError("STORE_BACKEND=mongo requires MONGO_URI")
        return MongoStore.connect(config_class.MONGO_URI, config_class.MONGO_DB)
    raise StoreConfigurationError(f"Unknown store backend: {backend!r}")
