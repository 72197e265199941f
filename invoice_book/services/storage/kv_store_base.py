"""
Abstract base class for key-value persistence backends.

The invoice history lives in a flat key-value medium (one serialized blob
per key). Defining the interface here lets the history store take its
medium by injection, so tests can hand it an in-memory dict while the
application uses a SQLite file.
"""

from abc import ABC, abstractmethod
from typing import Mapping, Optional


class KeyValueStoreBase(ABC):
    """
    Abstract base class for string key-value storage.

    Implementations can use:
    - In-memory storage (for testing/demo)
    - SQLite (for single-machine installs)
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Args:
            key: Storage key

        Returns:
            Stored string, or None if the key is absent
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """
        Store a value, overwriting any previous one.

        Args:
            key: Storage key
            value: String value to store
        """
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """
        Remove a key. Removing an absent key is not an error.

        Args:
            key: Storage key
        """
        pass

    @abstractmethod
    def keys(self) -> list:
        """
        List all stored keys.

        Returns:
            List of key strings
        """
        pass

    def set_items(self, items: Mapping[str, str]) -> None:
        """
        Store several values.

        The default writes them one at a time; backends that can commit
        them together should override this.

        Args:
            items: Mapping of key to string value
        """
        for key, value in items.items():
            self.set_item(key, value)
