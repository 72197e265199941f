"""
Tests for SQLite-based key-value persistence.

This test suite verifies that SQLiteKeyValueStore:
- Persists values across instances
- Writes multi-key updates atomically
- Backs the invoice history end to end
"""

import sqlite3

import pytest

from invoice_book.exceptions import StorageError
from invoice_book.services.history import HISTORY_KEY, LAST_NUMBER_KEY, InvoiceHistoryStore
from invoice_book.services.storage import (
    InMemoryKeyValueStore,
    SQLiteKeyValueStore,
    create_key_value_store,
)


@pytest.fixture
def store(db_path):
    """Create a fresh SQLiteKeyValueStore for each test"""
    return SQLiteKeyValueStore(db_path)


def test_set_item_persists_to_db(store, db_path):
    """Test that set_item writes a row to the SQLite database"""
    store.set_item(LAST_NUMBER_KEY, "201/031")

    # Verify it's in the database by querying directly
    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()
    cursor.execute("SELECT value FROM kv_store WHERE key = ?", (LAST_NUMBER_KEY,))
    row = cursor.fetchone()
    conn.close()

    assert row is not None
    assert row[0] == "201/031"


def test_get_missing_key_returns_none(store):
    assert store.get_item("nonexistent-key") is None


def test_set_item_overwrites(store):
    store.set_item("k", "first")
    store.set_item("k", "second")

    assert store.get_item("k") == "second"
    assert store.keys() == ["k"]


def test_remove_item(store):
    store.set_item("k", "v")
    store.remove_item("k")
    store.remove_item("k")  # absent key is fine

    assert store.get_item("k") is None


def test_set_items_writes_all_keys(store):
    store.set_items({HISTORY_KEY: "[]", LAST_NUMBER_KEY: "201/040"})

    assert store.get_item(HISTORY_KEY) == "[]"
    assert store.get_item(LAST_NUMBER_KEY) == "201/040"
    assert store.keys() == sorted([HISTORY_KEY, LAST_NUMBER_KEY])


def test_set_items_is_atomic(store):
    """A failing multi-key write leaves earlier values in place"""
    store.set_item("a", "old")

    with pytest.raises(StorageError):
        # None violates NOT NULL on the second row
        store.set_items({"a": "new", "b": None})

    assert store.get_item("a") == "old"
    assert store.get_item("b") is None


def test_persistence_across_instances(db_path):
    """Test that data persists when creating new store instances"""
    store1 = SQLiteKeyValueStore(db_path)
    store1.set_item(LAST_NUMBER_KEY, "305/007")

    store2 = SQLiteKeyValueStore(db_path)

    assert store2.get_item(LAST_NUMBER_KEY) == "305/007"


def test_history_survives_restart(db_path, make_record):
    history1 = InvoiceHistoryStore(SQLiteKeyValueStore(db_path))
    history1.save_invoice(make_record("201/031", customer_name="Persistent Customer"))

    history2 = InvoiceHistoryStore(SQLiteKeyValueStore(db_path))
    items = history2.list_invoices()

    assert len(items) == 1
    assert items[0].customer_name == "Persistent Customer"
    assert history2.next_invoice_number() == "201/032"


def test_unopenable_database_raises_storage_error(tmp_path):
    with pytest.raises(StorageError):
        SQLiteKeyValueStore(str(tmp_path / "missing-dir" / "book.db"))


def test_factory_selects_backend(db_path):
    assert isinstance(create_key_value_store("sqlite", db_path), SQLiteKeyValueStore)
    assert isinstance(create_key_value_store(" Memory "), InMemoryKeyValueStore)

    with pytest.raises(ValueError):
        create_key_value_store("localstorage")
