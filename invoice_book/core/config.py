from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    app_name: str = Field("invoice-book", alias="APP_NAME")
    app_env: str = Field("dev", alias="APP_ENV")

    # Logging
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Persistence: "sqlite" for a local file, "memory" for throwaway sessions
    store_backend: str = Field("sqlite", alias="STORE_BACKEND")
    store_path: str = Field("invoice_book.db", alias="STORE_PATH")

    # CORS allowed origins (comma-separated list for the form front end)
    cors_origins: str = Field("http://localhost:3000,http://127.0.0.1:3000", alias="CORS_ORIGINS")

    # Business-wide defaults carried from one invoice to the next
    company_name: str = Field("LORVEN PEST CONTROL", alias="COMPANY_NAME")
    company_contact: str = Field("9441757535, 7780353417", alias="COMPANY_CONTACT")
    company_address: str = Field(
        "11-6-7/a, Rockdale Layout, Waltair Main Road, Visakhapatnam – 02",
        alias="COMPANY_ADDRESS",
    )
    default_customer_order_no: str = Field("By Work Order", alias="DEFAULT_CUSTOMER_ORDER_NO")
    default_terms_of_payment: str = Field("Immediate", alias="DEFAULT_TERMS_OF_PAYMENT")
    default_payment_method: str = Field(
        "Please pay by account payee cheque/ Demand Draft",
        alias="DEFAULT_PAYMENT_METHOD",
    )

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

settings = Settings()
