"""Billing engine: orchestrates fee lookup, loyalty discount, tax and split.

Pure calculation: no storage access. :class:`BillingService` feeds it the
doctor's specialty and experience plus the patient's prior visit count.
"""
from __future__ import annotations

import uuid
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from clinic_billing.billing.discount import discount_amount, discount_percent
from clinic_billing.billing.fee_table import (
    ExperienceBracket,
    FeeSchedule,
    default_fee_schedule,
    experience_bracket,
)
from clinic_billing.billing.rates import DEFAULT_RATES, BillingRates
from clinic_billing.billing.tax_split import apply_tax_and_split
from clinic_billing.models import Bill


class BillBreakdown(BaseModel):
    """Every intermediate and final amount of one bill calculation."""

    model_config = ConfigDict(frozen=True)

    specialty: str
    experience_years: int
    bracket: ExperienceBracket
    prior_completed: int
    base_fee: Decimal
    discount_percent: int
    discount_amount: Decimal
    discounted_amount: Decimal
    gst_amount: Decimal
    total_amount: Decimal
    insurance_amount: Decimal
    co_pay_amount: Decimal

    def to_bill(self, appointment_id: uuid.UUID) -> Bill:
        return Bill(
            appointment_id=appointment_id,
            base_fee=self.base_fee,
            discount_percent=self.discount_percent,
            discount_amount=self.discount_amount,
            gst_amount=self.gst_amount,
            total_amount=self.total_amount,
            insurance_amount=self.insurance_amount,
            co_pay_amount=self.co_pay_amount,
        )


class BillingCalculator:
    """Runs the fixed fee -> discount -> tax & split pipeline.

    Args:
        fee_schedule: Registered fee strategies (defaults to ORTHO and CARDIO).
        rates: Tax, split and discount-cap configuration.
    """

    def __init__(
        self,
        fee_schedule: FeeSchedule | None = None,
        rates: BillingRates = DEFAULT_RATES,
    ) -> None:
        self.fee_schedule = fee_schedule or default_fee_schedule()
        self.rates = rates

    def base_fee(self, specialty: str, experience_years: int) -> Decimal:
        return self.fee_schedule.resolve_base_fee(specialty, experience_years)

    def calculate(
        self,
        specialty: str,
        experience_years: int,
        prior_completed: int,
    ) -> BillBreakdown:
        """Calculate a full bill breakdown.

        Each step consumes the already-rounded output of the previous one,
        so the order below must not change.
        """
        # 1. Base fee from the fee table
        base_fee = self.base_fee(specialty, experience_years)

        # 2. Loyalty discount
        percent = discount_percent(prior_completed, self.rates.max_discount_percent)
        discount = discount_amount(base_fee, percent)

        # 3. Tax, total and insurer/patient split
        split = apply_tax_and_split(base_fee, discount, self.rates)

        key = getattr(specialty, "value", specialty)
        return BillBreakdown(
            specialty=key,
            experience_years=experience_years,
            bracket=experience_bracket(experience_years),
            prior_completed=prior_completed,
            base_fee=base_fee,
            discount_percent=percent,
            discount_amount=discount,
            discounted_amount=split.discounted_amount,
            gst_amount=split.gst_amount,
            total_amount=split.total_amount,
            insurance_amount=split.insurance_amount,
            co_pay_amount=split.co_pay_amount,
        )
