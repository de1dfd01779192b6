"""Loyalty discount.

A patient earns one percentage point per prior completed appointment, up to
a cap (10% by default). The appointment being billed never counts as prior.
"""
from __future__ import annotations

from decimal import Decimal

from clinic_billing.billing.rates import DEFAULT_RATES, to_money


def discount_percent(
    prior_completed: int,
    max_percent: int = DEFAULT_RATES.max_discount_percent,
) -> int:
    """Return ``min(prior_completed, max_percent)``."""
    if prior_completed < 0:
        raise ValueError(f"Prior completed count cannot be negative: {prior_completed}")
    return min(prior_completed, max_percent)


def discount_amount(base_fee: Decimal, percent: int) -> Decimal:
    """Discount in money terms, rounded HALF_UP to cents."""
    return to_money(base_fee * Decimal(percent) / Decimal(100))
