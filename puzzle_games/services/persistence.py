"""
Persistent Game State

One generic load/save capability shared by every engine. A state is stored
as a JSON document under a fixed key; anything that cannot be read back
(storage failure, malformed JSON, wrong shape, failed validation) falls back
to the game's default state instead of reaching the player.
"""

import json
import logging
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

from .exceptions import StoreError
from .storage import KeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar('T')


class PersistentGameState(Generic[T]):
    """
    Load/save binding between one storage key and one state type.

    Args:
        store: Backend the JSON document is read from and written to
        key: Fixed storage key of the game
        default_factory: Builds a fresh initial state
        decode: Turns the parsed JSON document into a state (may raise on bad shape)
        encode: Turns a state into a JSON-serializable document
        validate: Optional extra check run on a decoded state
    """

    def __init__(self,
                 store: KeyValueStore,
                 key: str,
                 default_factory: Callable[[], T],
                 decode: Callable[[Dict[str, Any]], T],
                 encode: Callable[[T], Dict[str, Any]],
                 validate: Optional[Callable[[T], bool]] = None):
        self.store = store
        self.key = key
        self.default_factory = default_factory
        self.decode = decode
        self.encode = encode
        self.validate = validate

    def load(self) -> T:
        """Return the stored state, or the default when absent or unusable."""
        try:
            raw = self.store.get(self.key)
        except StoreError as e:
            logger.warning(f"[PERSIST] Read of '{self.key}' failed, using default state: {e}")
            return self.default_factory()

        if raw is None:
            return self.default_factory()

        try:
            state = self.decode(json.loads(raw))
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            logger.warning(f"[PERSIST] Stored '{self.key}' is malformed, using default state: {e}")
            return self.default_factory()

        if self.validate is not None and not self.validate(state):
            logger.warning(f"[PERSIST] Stored '{self.key}' failed validation, using default state")
            return self.default_factory()

        return state

    def save(self, state: T) -> None:
        """Write the full snapshot; a failed write is logged and play continues in memory."""
        try:
            self.store.set(self.key, json.dumps(self.encode(state)))
        except StoreError as e:
            logger.error(f"[PERSIST] Write of '{self.key}' failed, continuing in memory: {e}")

    def clear(self) -> None:
        try:
            self.store.remove(self.key)
        except StoreError as e:
            logger.error(f"[PERSIST] Removal of '{self.key}' failed: {e}")
