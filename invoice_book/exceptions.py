"""
Errors raised by the invoice book services.

Only these are surfaced to callers; malformed stored data and a missing
store are absorbed by the history store and logged instead.
"""


class InvoiceBookError(Exception):
    """Base class for invoice book failures"""


class DuplicateInvoiceNumberError(InvoiceBookError):
    """An invoice with the same number is already in the history"""

    def __init__(self, invoice_number: str):
        self.invoice_number = invoice_number
        super().__init__(f"Invoice number {invoice_number} already exists in history.")


class StorageError(InvoiceBookError):
    """The key-value medium failed to read or write"""
