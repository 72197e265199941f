from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Stored and exchanged JSON keeps camelCase keys; Python code uses snake_case.
# Numbers in text fields (e.g. a quantity typed as 2) are read as strings.
CAMEL_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True, coerce_numbers_to_str=True)


class LineItem(BaseModel):
    model_config = CAMEL_CONFIG

    description: str = ""
    quantity: str = ""  # Free-form, e.g. "2 Nos" or "1200 sft"
    unit: str = ""
    unit_rate_rs: str = ""
    unit_rate_ps: str = ""
    amount_rs: str = ""
    amount_ps: str = ""


class ServiceReportServices(BaseModel):
    model_config = CAMEL_CONFIG

    general_pest: bool = False
    cockroach: bool = False
    ant_black_ant: bool = False
    rodent_control: bool = False
    pads_mosquito: bool = False
    crowling_insects: bool = False


class InvoiceRecord(BaseModel):
    model_config = CAMEL_CONFIG

    # Company (business-wide defaults)
    company_name: str = ""
    contact: str = ""
    address: str = ""

    invoice_number: str = ""
    date: str = ""  # YYYY-MM-DD

    # Customer
    customer_name: str = ""
    customer_address: str = ""
    customer_order_no: str = ""
    work_order: str = ""
    contact_no: str = ""
    work_carried_out_on: str = ""

    items: list[LineItem] = Field(default_factory=lambda: [LineItem()])
    terms_of_payment: str = ""
    payment_method: str = ""

    # Optional service report printed alongside the invoice
    include_service_report: bool = False
    service_report_party_name: str = ""
    service_report_party_address: str = ""
    service_report_office_name: str = ""
    service_report_office_address: str = ""
    service_report_work_date: str = ""
    service_report_services: ServiceReportServices = Field(default_factory=ServiceReportServices)
    service_report_area_treated: str = ""

    @field_validator("service_report_services", mode="before")
    @classmethod
    def _missing_services_are_unchecked(cls, value):
        return {} if value is None else value

    def to_json_dict(self) -> dict:
        """Dump with the camelCase keys used in storage and over the API"""
        return self.model_dump(by_alias=True)


class InvoiceHistoryItem(InvoiceRecord):
    """A saved invoice, identified by ``id`` and stamped with ``saved_at``"""

    id: str
    saved_at: str
