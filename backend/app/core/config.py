from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from typing import Any, ClassVar
from pathlib import Path


class Settings(BaseSettings):
    API_V1_STR: str = "/api/v1"

    # Database URL
    # Use an absolute path so running the app from different directories
    # (e.g., repo root or backend/) always resolves the same DB file.
    BASE_DIR: ClassVar[Path] = Path(__file__).resolve().parents[2]
    SQLALCHEMY_DATABASE_URL: str = f"sqlite:///{BASE_DIR / 'booking.db'}"

    # One currency per deployment
    DEFAULT_CURRENCY: str = "THB"
    # Locale used when a caller passes an unknown or empty locale code
    DEFAULT_LOCALE: str = "en"

    # VAT applied to corporate customers that supplied a tax id (percent)
    CORPORATE_VAT_RATE: int = 7

    # Document windows (days from issue date)
    QUOTATION_VALID_DAYS: int = 30
    INVOICE_DUE_DAYS: int = 7

    # Document numbering prefixes: PREFIX-YYYYMM-00001
    QUOTATION_NUMBER_PREFIX: str = "QT"
    INVOICE_NUMBER_PREFIX: str = "INV"

    # Issuer block printed on every quotation and invoice
    ISSUER_NAME: str = "Bright Ears Co., Ltd."
    ISSUER_NAME_TH: str = "บริษัท ไบร์ทเอียร์ส จำกัด"
    ISSUER_TAX_ID: str = "0123456789012"
    ISSUER_ADDRESS: str = "123 Music Street, Sukhumvit, Bangkok 10110, Thailand"
    ISSUER_ADDRESS_TH: str = "123 ถนนมิวสิค สุขุมวิท กรุงเทพฯ 10110 ประเทศไทย"
    ISSUER_PHONE: str = "+66 2 123 4567"
    ISSUER_EMAIL: str = "billing@brightears.com"
    ISSUER_BANK_NAME: str = "Kasikorn Bank"
    ISSUER_ACCOUNT_NAME: str = "Bright Ears Co., Ltd."
    ISSUER_ACCOUNT_NUMBER: str = "123-4-56789-0"
    ISSUER_PROMPTPAY_NUMBER: str = "0123456789012"

    LOG_LEVEL: str = "INFO"

    @field_validator("DEFAULT_CURRENCY", mode="before")
    def upper_currency(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("DEFAULT_LOCALE", "LOG_LEVEL", mode="before")
    def strip_whitespace(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
