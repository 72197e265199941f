"""
Shared pytest fixtures.

Stores are in-memory unless a test asks for a SQLite file, and the API
client gets its history store through a dependency override.
"""

import os
import tempfile
from datetime import datetime, UTC

import pytest
from fastapi.testclient import TestClient

from invoice_book.api.deps import get_history_store
from invoice_book.api.main import app
from invoice_book.models.invoice import InvoiceRecord, LineItem
from invoice_book.services.history import InvoiceHistoryStore
from invoice_book.services.storage import InMemoryKeyValueStore

FIXED_NOW = datetime(2026, 3, 14, 9, 30, 0, tzinfo=UTC)


@pytest.fixture
def db_path():
    """Create a temporary database file for testing"""
    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    yield path
    # Cleanup
    if os.path.exists(path):
        os.remove(path)


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def kv_store():
    return InMemoryKeyValueStore()


@pytest.fixture
def history(kv_store, fixed_now):
    """History store on an empty in-memory medium with a fixed clock"""
    return InvoiceHistoryStore(kv_store, now=lambda: fixed_now)


@pytest.fixture
def client(history):
    app.dependency_overrides[get_history_store] = lambda: history
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_record():
    """Factory for a filled-in invoice"""
    def _make(invoice_number="201/031", customer_name="Acme", **overrides):
        fields = dict(
            company_name="LORVEN PEST CONTROL",
            contact="9441757535",
            address="Waltair Main Road, Visakhapatnam",
            invoice_number=invoice_number,
            date="2026-03-10",
            customer_name=customer_name,
            customer_address="Dwaraka Nagar",
            customer_order_no="By Work Order",
            work_order="WO-77",
            contact_no="9000000000",
            work_carried_out_on="2026-03-09",
            items=[
                LineItem(description="Cockroach treatment", quantity="1", unit="Job",
                         unit_rate_rs="1500", unit_rate_ps="50",
                         amount_rs="1500", amount_ps="50"),
            ],
            terms_of_payment="Immediate",
            payment_method="Cheque",
            include_service_report=True,
            service_report_party_name="Acme",
            service_report_party_address="Dwaraka Nagar",
            service_report_office_name="Acme HQ",
            service_report_office_address="Beach Road",
            service_report_work_date="2026-03-09",
            service_report_services={"cockroach": True, "generalPest": True},
            service_report_area_treated="Kitchen",
        )
        fields.update(overrides)
        return InvoiceRecord(**fields)

    return _make
