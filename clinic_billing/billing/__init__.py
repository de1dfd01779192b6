"""Billing module: fee table, loyalty discount, tax and insurer split."""

from clinic_billing.billing.discount import discount_amount, discount_percent
from clinic_billing.billing.engine import BillBreakdown, BillingCalculator
from clinic_billing.billing.fee_table import (
    CARDIO_FEES,
    ORTHO_FEES,
    ExperienceBracket,
    FeeSchedule,
    FeeStrategy,
    UnknownSpecialtyError,
    default_fee_schedule,
    experience_bracket,
)
from clinic_billing.billing.rates import BillingRates, to_money
from clinic_billing.billing.service import BillingService
from clinic_billing.billing.tax_split import TaxSplit, apply_tax_and_split

__all__ = [
    "BillBreakdown",
    "BillingCalculator",
    "BillingRates",
    "BillingService",
    "CARDIO_FEES",
    "ExperienceBracket",
    "FeeSchedule",
    "FeeStrategy",
    "ORTHO_FEES",
    "TaxSplit",
    "UnknownSpecialtyError",
    "apply_tax_and_split",
    "default_fee_schedule",
    "discount_amount",
    "discount_percent",
    "experience_bracket",
    "to_money",
]
