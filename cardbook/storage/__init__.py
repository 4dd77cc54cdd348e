"""
Storage Module for the contact book.

This module provides persistence for the contact collection:
    - ContactStore interface (save / load / clear)
    - JSON file, SQLite and in-memory backends
    - create_store() factory driven by ``storage.backend``
"""

from typing import Optional

from config import get_config
from .base import ContactStore
from .json_store import JsonFileContactStore
from .memory_store import InMemoryContactStore
from .sqlite_store import SQLiteContactStore

BACKENDS = {
    'json': JsonFileContactStore,
    'sqlite': SQLiteContactStore,
    'memory': InMemoryContactStore,
}


def create_store(backend: Optional[str] = None) -> ContactStore:
    """
    Build the contact store named in configuration.

    Args:
        backend: One of "json", "sqlite", "memory". If None, uses
                 ``storage.backend``.

    Returns:
        ContactStore instance.

    Raises:
        ValueError: If the backend name is unknown.
    """
    name = backend or get_config("storage.backend", "json")
    try:
        store_class = BACKENDS[name]
    except KeyError:
        raise ValueError(
            f"Unknown storage backend '{name}' (choose from {', '.join(BACKENDS)})"
        )
    return store_class()


__all__ = [
    'ContactStore',
    'JsonFileContactStore',
    'SQLiteContactStore',
    'InMemoryContactStore',
    'create_store',
]
