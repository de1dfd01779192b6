"""Configuration management for Clinic Billing."""

from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from clinic_billing.billing.rates import BillingRates


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Billing rates
    gst_rate: Decimal = Field(
        default=Decimal("0.12"),
        description="Tax rate applied to the discounted fee",
    )
    insurance_rate: Decimal = Field(
        default=Decimal("0.90"),
        description="Share of the total covered by the insurer",
    )
    co_pay_rate: Decimal = Field(
        default=Decimal("0.10"),
        description="Share of the total paid by the patient",
    )
    max_discount_percent: int = Field(
        default=10,
        ge=0,
        le=100,
        description="Cap on the loyalty discount percentage",
    )

    # API Settings
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8080)
    api_key: str = Field(
        default="",
        description="API key for authenticating requests",
    )

    # CORS
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8080"],
        description="Allowed CORS origins",
    )

    # Audit trail
    audit_enabled: bool = Field(
        default=True,
        description="Write bill and status-change events to JSON Lines files",
    )
    audit_log_dir: Path = Field(
        default=Path("./data/logs"),
        description="Directory for audit event files",
    )

    # Debug
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode (exposes error details in responses)",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")

    @property
    def billing_rates(self) -> BillingRates:
        """Rates snapshot handed to the billing calculator."""
        return BillingRates(
            gst_rate=self.gst_rate,
            insurance_rate=self.insurance_rate,
            co_pay_rate=self.co_pay_rate,
            max_discount_percent=self.max_discount_percent,
        )

    @property
    def has_api_key(self) -> bool:
        """Check if API key auth is configured."""
        return bool(self.api_key)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
