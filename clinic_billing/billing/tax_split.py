"""Tax and insurer/patient split.

Insurance and co-pay are each rounded from the total independently, so
their sum can differ from the total by one cent on some fractional totals.
"""
from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from clinic_billing.billing.rates import DEFAULT_RATES, BillingRates, to_money


class TaxSplit(BaseModel):
    """Amounts derived from the discounted fee."""

    model_config = ConfigDict(frozen=True)

    discounted_amount: Decimal
    gst_amount: Decimal
    total_amount: Decimal
    insurance_amount: Decimal
    co_pay_amount: Decimal

    @property
    def split_difference(self) -> Decimal:
        """``total - (insurance + co_pay)``; zero except at rounding edges."""
        return self.total_amount - (self.insurance_amount + self.co_pay_amount)


def calculate_gst(discounted_amount: Decimal, rates: BillingRates = DEFAULT_RATES) -> Decimal:
    return to_money(discounted_amount * rates.gst_rate)


def calculate_insurance_amount(total_amount: Decimal, rates: BillingRates = DEFAULT_RATES) -> Decimal:
    return to_money(total_amount * rates.insurance_rate)


def calculate_co_pay_amount(total_amount: Decimal, rates: BillingRates = DEFAULT_RATES) -> Decimal:
    return to_money(total_amount * rates.co_pay_rate)


def apply_tax_and_split(
    base_fee: Decimal,
    discount: Decimal,
    rates: BillingRates = DEFAULT_RATES,
) -> TaxSplit:
    """Apply tax to ``base_fee - discount`` and split the total."""
    # Inputs are already at cent scale; subtraction and addition stay exact.
    discounted = base_fee - discount
    gst = calculate_gst(discounted, rates)
    total = discounted + gst
    return TaxSplit(
        discounted_amount=discounted,
        gst_amount=gst,
        total_amount=total,
        insurance_amount=calculate_insurance_amount(total, rates),
        co_pay_amount=calculate_co_pay_amount(total, rates),
    )
