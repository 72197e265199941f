"""
Form-state helpers for invoice drafts.

A draft is an InvoiceRecord that has not been saved yet. These helpers build
fresh drafts, clear the per-invoice fields after a save, and apply the edit
rules the invoice form enforces on customer fields and line items.
"""

import re
from datetime import date as date_type

from ..core.config import Settings, settings as default_settings
from ..models.invoice import InvoiceRecord, LineItem, ServiceReportServices

# Rupee and paise columns only ever hold digits
CURRENCY_FIELDS = ("unit_rate_rs", "unit_rate_ps", "amount_rs", "amount_ps")
_DIGITS_ONLY = re.compile(r"[0-9]*")

SERVICE_KIND_GENERAL = "general-service"
SERVICE_KIND_POST_CONSTRUCTION = "post-construction"

CUSTOMER_FIELDS = (
    "customer_name",
    "customer_address",
    "customer_order_no",
    "work_order",
    "contact_no",
    "work_carried_out_on",
)
_PARTY_MIRROR = {
    "customer_name": "service_report_party_name",
    "customer_address": "service_report_party_address",
}


def blank_line_item() -> LineItem:
    return LineItem()


def new_draft(invoice_number: str, today: date_type, settings: Settings | None = None) -> InvoiceRecord:
    """
    Build the form a user starts a new invoice book session with.

    Args:
        invoice_number: Number to pre-fill (usually the next in sequence)
        today: Date used for the invoice, work and service report dates
        settings: Source of company defaults (default: module settings)

    Returns:
        A fresh InvoiceRecord with one blank line item
    """
    settings = settings or default_settings
    today_str = today.isoformat()
    return InvoiceRecord(
        company_name=settings.company_name,
        contact=settings.company_contact,
        address=settings.company_address,
        invoice_number=invoice_number,
        date=today_str,
        customer_order_no=settings.default_customer_order_no,
        work_carried_out_on=today_str,
        items=[blank_line_item()],
        terms_of_payment=settings.default_terms_of_payment,
        payment_method=settings.default_payment_method,
        service_report_work_date=today_str,
    )


def reset_draft(record: InvoiceRecord, invoice_number: str, today: date_type) -> InvoiceRecord:
    """
    Clear the per-invoice fields of ``record`` for the next invoice.

    Company details, customer order no, terms and payment method carry
    over; everything that describes one particular job is reset.
    """
    today_str = today.isoformat()
    return record.model_copy(
        update={
            "invoice_number": invoice_number,
            "customer_name": "",
            "customer_address": "",
            "work_order": "",
            "contact_no": "",
            "date": today_str,
            "work_carried_out_on": today_str,
            "items": [blank_line_item()],
            "include_service_report": False,
            "service_report_party_name": "",
            "service_report_party_address": "",
            "service_report_office_name": "",
            "service_report_office_address": "",
            "service_report_work_date": today_str,
            "service_report_services": ServiceReportServices(),
            "service_report_area_treated": "",
        },
        deep=True,
    )


def edit_line_item(item: LineItem, field: str, value: str) -> LineItem:
    """
    Apply one form edit to a line item.

    Currency fields reject anything but digits: the edit is dropped and the
    item comes back unchanged.

    Raises:
        ValueError: If ``field`` is not a LineItem field
    """
    if field not in LineItem.model_fields:
        raise ValueError(f"Unknown line item field: {field}")

    if field in CURRENCY_FIELDS and not _DIGITS_ONLY.fullmatch(value):
        return item

    return item.model_copy(update={field: value})


def sync_service_report_party(record: InvoiceRecord) -> InvoiceRecord:
    """Default the service report party to the invoice customer"""
    if (
        record.include_service_report
        and not record.service_report_party_name
        and record.customer_name
    ):
        return record.model_copy(update={
            "service_report_party_name": record.customer_name,
            "service_report_party_address": record.customer_address,
        })
    return record


def service_description(kind: str, work_date: str) -> str:
    """
    Canned line item description for a service kind.

    Args:
        kind: "general-service" or "post-construction"
        work_date: Work date as YYYY-MM-DD; names the billed month

    Returns:
        Description text, or "" for an unknown kind
    """
    if kind == SERVICE_KIND_GENERAL:
        try:
            month_year = date_type.fromisoformat(work_date).strftime("%B %Y")
        except (TypeError, ValueError):
            month_year = "[Select Date]"
        return (
            "Being our charges to carry out\n"
            "general pestcontrol services for\n"
            f"the month of {month_year}"
        )
    if kind == SERVICE_KIND_POST_CONSTRUCTION:
        return "Being our charges to carry out Post Construction Anti-Termite Treatment"
    return ""


def add_line_item(record: InvoiceRecord) -> InvoiceRecord:
    """Append a blank line item"""
    return record.model_copy(update={"items": [*record.items, blank_line_item()]})


def remove_line_item(record: InvoiceRecord, index: int) -> InvoiceRecord:
    """
    Drop the line item at ``index``.

    An index outside the list leaves the items as they are.
    """
    items = [item for position, item in enumerate(record.items) if position != index]
    return record.model_copy(update={"items": items})


def edit_customer(record: InvoiceRecord, field: str, value: str) -> InvoiceRecord:
    """
    Apply one edit to a customer field.

    While the service report is included, the customer name and address
    are mirrored into the report's party name and address.

    Raises:
        ValueError: If ``field`` is not a customer field
    """
    if field not in CUSTOMER_FIELDS:
        raise ValueError(f"Unknown customer field: {field}")

    update = {field: value}
    if record.include_service_report:
        mirrored = _PARTY_MIRROR.get(field)
        if mirrored:
            update[mirrored] = value
    return record.model_copy(update=update)
