"""
Invoice history persistence.

Saved invoices live as one JSON array (newest first) under the
``invoiceHistory`` key of a key-value store. The last used invoice number is
kept separately under ``last_invoice_number`` and seeds the numbering
sequence. Both keys are written together only by ``save_invoice``.

Writes copy the stored entries back verbatim, so an entry this version
cannot parse is hidden from ``list_invoices`` but never dropped from storage.

The store is a read-modify-write of a single blob with no locking: two
processes saving at the same time can lose one of the updates. That is
accepted for a single-user invoice book.
"""

import json
import threading
from datetime import datetime, UTC
from typing import Callable, Optional

from loguru import logger
from pydantic import ValidationError

from ..exceptions import DuplicateInvoiceNumberError, StorageError
from ..models.invoice import InvoiceHistoryItem, InvoiceRecord
from .drafts import reset_draft
from .numbering import SEED_INVOICE_NUMBER, next_invoice_number
from .storage.kv_store_base import KeyValueStoreBase

HISTORY_KEY = "invoiceHistory"
LAST_NUMBER_KEY = "last_invoice_number"

_id_lock = threading.Lock()
_last_id = 0


def generate_history_id(now: datetime) -> str:
    """
    Millisecond timestamp id, bumped when needed so ids never repeat.

    Args:
        now: Current instant

    Returns:
        Decimal string, strictly greater than any id issued before in this process
    """
    global _last_id
    candidate = int(now.timestamp() * 1000)
    with _id_lock:
        if candidate <= _last_id:
            candidate = _last_id + 1
        _last_id = candidate
    return str(candidate)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class InvoiceHistoryStore:
    """
    Save, list and delete invoices in a key-value store.

    Usage:
        history = InvoiceHistoryStore(SQLiteKeyValueStore("invoice_book.db"))
        draft = history.save_invoice(record)

        # No persistence available (e.g. a render-only context)
        history = InvoiceHistoryStore(None)
    """

    def __init__(
        self,
        store: Optional[KeyValueStoreBase],
        now: Callable[[], datetime] = _utc_now,
    ):
        """
        Args:
            store: Key-value medium, or None when persistence is unavailable
            now: Clock returning an aware datetime (injectable for tests)
        """
        self.store = store
        self._now = now

    @property
    def available(self) -> bool:
        return self.store is not None

    def _read_entries(self) -> list:
        """
        Raw stored entries, newest first.

        A blob that is not a JSON array reads as empty.

        Raises:
            StorageError: The store failed to read
        """
        raw = self.store.get_item(HISTORY_KEY)
        if not raw:
            return []

        try:
            entries = json.loads(raw)
        except ValueError as e:
            logger.error(f"Stored invoice history is not valid JSON, treating as empty: {e}")
            return []

        if not isinstance(entries, list):
            logger.error("Stored invoice history is not a list, treating as empty")
            return []
        return entries

    def _write_entries(self, entries: list, last_number: Optional[str] = None) -> None:
        items = {HISTORY_KEY: json.dumps(entries, ensure_ascii=False)}
        if last_number is not None:
            items[LAST_NUMBER_KEY] = last_number
        self.store.set_items(items)

    def list_invoices(self) -> list[InvoiceHistoryItem]:
        """
        Read the saved invoices, newest first.

        Entries that fail validation are logged and skipped; the rest are
        returned.

        Returns:
            The history; empty if there is no store, nothing saved yet, or
            the stored data cannot be read
        """
        if self.store is None:
            return []

        try:
            entries = self._read_entries()
        except StorageError as e:
            logger.error(f"Error reading history from store: {e}")
            return []

        items = []
        for position, entry in enumerate(entries):
            try:
                items.append(InvoiceHistoryItem.model_validate(entry))
            except ValidationError as e:
                logger.warning(
                    "Skipping malformed history entry",
                    position=position,
                    errors=e.error_count(),
                )
        return items

    def save_invoice(self, record: InvoiceRecord) -> InvoiceRecord:
        """
        Append an invoice to the history and return the draft for the next one.

        Args:
            record: The completed invoice

        Returns:
            Reset draft: same company details, per-invoice fields cleared,
            invoice number advanced

        Raises:
            DuplicateInvoiceNumberError: Number already saved; nothing is written
            StorageError: The store failed to read or write; nothing is written
                if the read failed
        """
        if self.store is None:
            return record.model_copy(deep=True)

        entries = self._read_entries()

        if any(
            isinstance(entry, dict) and entry.get("invoiceNumber") == record.invoice_number
            for entry in entries
        ):
            logger.warning("Duplicate invoice number rejected", invoice_number=record.invoice_number)
            raise DuplicateInvoiceNumberError(record.invoice_number)

        now = self._now()
        new_item = InvoiceHistoryItem(
            **record.model_dump(),
            id=generate_history_id(now),
            saved_at=now.isoformat(),
        )

        updated = [new_item.to_json_dict(), *entries]
        self._write_entries(updated, last_number=record.invoice_number)
        logger.info(
            "Invoice saved",
            invoice_number=record.invoice_number,
            history_id=new_item.id,
            history_size=len(updated),
        )

        return reset_draft(
            record,
            invoice_number=next_invoice_number(record.invoice_number),
            today=now.date(),
        )

    def delete_invoice(self, invoice_id: str) -> None:
        """
        Remove the saved invoice with this id. Unknown ids change nothing.

        Raises:
            StorageError: The store failed to read or write
        """
        if self.store is None:
            return

        entries = self._read_entries()
        updated = [
            entry for entry in entries
            if not (isinstance(entry, dict) and entry.get("id") == invoice_id)
        ]
        self._write_entries(updated)
        logger.info(
            "Invoice deleted",
            history_id=invoice_id,
            removed=len(entries) - len(updated),
        )

    def last_used_number(self) -> str:
        """Last saved invoice number, or the seed number if none is stored"""
        if self.store is None:
            return SEED_INVOICE_NUMBER

        try:
            value = self.store.get_item(LAST_NUMBER_KEY)
        except StorageError as e:
            logger.error(f"Error reading last invoice number: {e}")
            return SEED_INVOICE_NUMBER

        return value or SEED_INVOICE_NUMBER

    def next_invoice_number(self) -> str:
        """Number a fresh invoice form starts with"""
        return next_invoice_number(self.last_used_number())
