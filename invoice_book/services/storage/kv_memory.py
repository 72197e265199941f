"""
In-memory key-value storage (for tests and demo sessions).
Nothing survives a restart; use the SQLite backend for a real invoice book.
"""
from typing import Dict, Optional

from .kv_store_base import KeyValueStoreBase


class InMemoryKeyValueStore(KeyValueStoreBase):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        """Read a value, None if absent"""
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        """Store a value"""
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        """Remove a key if present"""
        self._items.pop(key, None)

    def keys(self) -> list:
        """List stored keys (for debugging)"""
        return list(self._items.keys())
