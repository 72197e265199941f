from functools import lru_cache

from pydantic import BaseModel

from ..core.config import settings
from ..models.invoice import CAMEL_CONFIG
from ..services.history import InvoiceHistoryStore
from ..services.storage import create_key_value_store


@lru_cache(maxsize=1)
def get_history_store() -> InvoiceHistoryStore:
    """Application-wide history store, built on first use from settings"""
    store = create_key_value_store(settings.store_backend, settings.store_path)
    return InvoiceHistoryStore(store)


class InvoiceNumberResponse(BaseModel):
    model_config = CAMEL_CONFIG

    invoice_number: str


class PreviewResponse(BaseModel):
    model_config = CAMEL_CONFIG

    total_rs: int
    total_ps: int
    amount_in_words: str
    date: str
    work_carried_out_on: str
    service_report_work_date: str
