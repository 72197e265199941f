"""
SQLite-based key-value storage.

Keeps the invoice book in a single local database file so saved invoices
survive application restarts.
"""

import sqlite3
from typing import Mapping, Optional

from loguru import logger

from ...exceptions import StorageError
from .kv_store_base import KeyValueStoreBase


class SQLiteKeyValueStore(KeyValueStoreBase):
    """
    SQLite-backed key-value store with persistent storage.

    Features:
    - Persistent storage across application restarts
    - Multi-key writes committed in a single transaction
    - Driver errors surfaced as StorageError
    """

    def __init__(self, db_path: str = "invoice_book.db"):
        """
        Initialize store with database path.

        Args:
            db_path: Path to SQLite database file (default: invoice_book.db)
        """
        self.db_path = db_path
        self._init_database()

    def _init_database(self):
        """Create kv_store table if it doesn't exist"""
        try:
            conn = sqlite3.connect(self.db_path)
            try:
                conn.execute("""
                    CREATE TABLE IF NOT EXISTS kv_store (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL
                    )
                """)
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageError(f"Cannot initialise key-value store at {self.db_path}: {e}") from e

    def _get_connection(self) -> sqlite3.Connection:
        """Get database connection with row factory"""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def get_item(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Args:
            key: Storage key

        Returns:
            Stored string, or None if the key is absent
        """
        try:
            conn = self._get_connection()
            try:
                row = conn.execute(
                    "SELECT value FROM kv_store WHERE key = ?", (key,)
                ).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to read {key!r}: {e}") from e

        if row is None:
            return None
        return row["value"]

    def set_item(self, key: str, value: str) -> None:
        self.set_items({key: value})

    def set_items(self, items: Mapping[str, str]) -> None:
        """
        Store several values in one transaction.

        Either every key is written or none is.

        Args:
            items: Mapping of key to string value
        """
        try:
            conn = self._get_connection()
            try:
                # The connection context manager commits, or rolls back on error
                with conn:
                    conn.executemany("""
                        INSERT INTO kv_store (key, value)
                        VALUES (?, ?)
                        ON CONFLICT(key) DO UPDATE SET value = excluded.value
                    """, list(items.items()))
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error("Key-value write failed", db_path=self.db_path, keys=list(items))
            raise StorageError(f"Failed to write {', '.join(items)}: {e}") from e

    def remove_item(self, key: str) -> None:
        """
        Remove a key. Removing an absent key is not an error.

        Args:
            key: Storage key
        """
        try:
            conn = self._get_connection()
            try:
                with conn:
                    conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to remove {key!r}: {e}") from e

    def keys(self) -> list:
        """
        List all stored keys, sorted.

        Returns:
            List of key strings
        """
        try:
            conn = self._get_connection()
            try:
                rows = conn.execute("SELECT key FROM kv_store ORDER BY key").fetchall()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to list keys: {e}") from e

        return [row["key"] for row in rows]
