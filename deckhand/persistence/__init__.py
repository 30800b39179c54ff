"""Persistence - session record storage, sanitizing, and the gateway."""

from .store import KeyValueStore, MemoryStore, FileStore, StorageError
from .state_validator import SanitizeResult, validate_and_sanitize
from .gateway import PersistenceGateway, Ok, Err, serialize_state, DEFAULT_STORAGE_KEY

__all__ = [
    "KeyValueStore",
    "MemoryStore",
    "FileStore",
    "StorageError",
    "SanitizeResult",
    "validate_and_sanitize",
    "PersistenceGateway",
    "Ok",
    "Err",
    "serialize_state",
    "DEFAULT_STORAGE_KEY",
]
