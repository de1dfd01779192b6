"""Billing rates and money rounding.

All monetary values are ``Decimal`` rounded HALF_UP to two places. Every
quantity is rounded exactly once, by :func:`to_money`.
"""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

MONEY_SCALE = 2
CENT = Decimal(1).scaleb(-MONEY_SCALE)  # Decimal("0.01")
ROUNDING_MODE = ROUND_HALF_UP


def to_money(value: Decimal) -> Decimal:
    """Round *value* to cents using HALF_UP."""
    return value.quantize(CENT, rounding=ROUNDING_MODE)


class BillingRates(BaseModel):
    """Read-only rate configuration passed into the calculators."""

    model_config = ConfigDict(frozen=True)

    gst_rate: Decimal = Field(default=Decimal("0.12"), ge=0)
    insurance_rate: Decimal = Field(default=Decimal("0.90"), ge=0, le=1)
    co_pay_rate: Decimal = Field(default=Decimal("0.10"), ge=0, le=1)
    max_discount_percent: int = Field(default=10, ge=0, le=100)

    @model_validator(mode="after")
    def _split_covers_total(self) -> "BillingRates":
        if self.insurance_rate + self.co_pay_rate != Decimal(1):
            raise ValueError(
                f"insurance_rate + co_pay_rate must equal 1 "
                f"(got {self.insurance_rate} + {self.co_pay_rate})"
            )
        return self


DEFAULT_RATES = BillingRates()
