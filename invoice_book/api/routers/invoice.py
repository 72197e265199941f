from datetime import datetime, UTC

from fastapi import APIRouter, Depends, HTTPException, status
from loguru import logger

from ..deps import InvoiceNumberResponse, PreviewResponse, get_history_store
from ...exceptions import DuplicateInvoiceNumberError, StorageError
from ...models.invoice import InvoiceHistoryItem, InvoiceRecord
from ...services.amounts import format_display_date, invoice_totals, rupees_in_words
from ...services.drafts import new_draft, sync_service_report_party
from ...services.history import InvoiceHistoryStore

router = APIRouter(prefix="/invoices", tags=["invoices"])


@router.get("/last-number", response_model=InvoiceNumberResponse)
async def last_number(history: InvoiceHistoryStore = Depends(get_history_store)):
    """Last saved invoice number (the seed number for an empty book)"""
    return InvoiceNumberResponse(invoice_number=history.last_used_number())


@router.get("/next-number", response_model=InvoiceNumberResponse)
async def next_number(history: InvoiceHistoryStore = Depends(get_history_store)):
    return InvoiceNumberResponse(invoice_number=history.next_invoice_number())


@router.get("/draft", response_model=InvoiceRecord)
async def draft(history: InvoiceHistoryStore = Depends(get_history_store)):
    """
    Fresh invoice form: company defaults, today's dates, next invoice number.

    This is what the form loads with when the book is opened.
    """
    today = datetime.now(UTC).date()
    return new_draft(history.next_invoice_number(), today)


@router.post("/preview", response_model=PreviewResponse)
async def preview(record: InvoiceRecord):
    """
    Figures the printed invoice shows for this record.

    Example response:
    {
        "totalRs": 1250,
        "totalPs": 50,
        "amountInWords": "Rupees One Thousand Two Hundred Fifty Only.",
        "date": "19-10-2026",
        ...
    }
    """
    totals = invoice_totals(record.items)
    return PreviewResponse(
        total_rs=totals.rupees,
        total_ps=totals.paise,
        amount_in_words=rupees_in_words(totals),
        date=format_display_date(record.date),
        work_carried_out_on=format_display_date(record.work_carried_out_on),
        service_report_work_date=format_display_date(record.service_report_work_date),
    )


@router.get("/history", response_model=list[InvoiceHistoryItem])
async def list_history(history: InvoiceHistoryStore = Depends(get_history_store)):
    """Saved invoices, newest first"""
    return history.list_invoices()


@router.post("/history", response_model=InvoiceRecord)
async def save_to_history(
    record: InvoiceRecord,
    history: InvoiceHistoryStore = Depends(get_history_store),
):
    """
    Save an invoice and return the draft for the next one.

    Responses:
    - 200: reset draft with the invoice number advanced
    - 409: invoice number already saved (form should be left as is)
    - 422: customer name missing
    - 503: the store could not be written
    """
    if not record.customer_name.strip():
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Please enter a customer name before saving.",
        )

    record = sync_service_report_party(record)
    try:
        return history.save_invoice(record)
    except DuplicateInvoiceNumberError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except StorageError as e:
        logger.error(f"Saving invoice {record.invoice_number} failed: {e}")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Invoice history is unavailable")


@router.delete("/history/{invoice_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_from_history(
    invoice_id: str,
    history: InvoiceHistoryStore = Depends(get_history_store),
):
    """Delete a saved invoice; deleting an unknown id succeeds and changes nothing"""
    try:
        history.delete_invoice(invoice_id)
    except StorageError as e:
        logger.error(f"Deleting invoice {invoice_id} failed: {e}")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Invoice history is unavailable")
