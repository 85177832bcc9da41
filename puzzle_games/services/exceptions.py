"""
Shared exception definitions for the key-value stores.

Hierarchy:
- StoreError (base for all store exceptions)
  - StoreReadError (value could not be read)
  - StoreWriteError (value could not be written or removed)
"""


class StoreError(Exception):
    """Base exception for all store-related errors."""
    retryable: bool = True


class StoreReadError(StoreError):
    retryable = True


class StoreWriteError(StoreError):
    retryable = True


class StoreConfigurationError(StoreError):
    """The configured backend is unknown or missing its settings."""
    retryable = False
