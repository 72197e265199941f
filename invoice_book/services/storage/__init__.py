from .kv_store_base import KeyValueStoreBase
from .kv_memory import InMemoryKeyValueStore
from .kv_sqlite import SQLiteKeyValueStore


def create_key_value_store(backend: str = "sqlite", path: str = "invoice_book.db") -> KeyValueStoreBase:
    """
    Build a key-value backend by name.

    Args:
        backend: "sqlite" or "memory"
        path: Database file for the sqlite backend

    Returns:
        A KeyValueStoreBase implementation
    """
    backend = backend.strip().lower()
    if backend == "sqlite":
        return SQLiteKeyValueStore(path)
    if backend == "memory":
        return InMemoryKeyValueStore()
    raise ValueError(f"Unknown store backend: {backend!r} (expected 'sqlite' or 'memory')")


__all__ = [
    "KeyValueStoreBase",
    "InMemoryKeyValueStore",
    "SQLiteKeyValueStore",
    "create_key_value_store",
]
