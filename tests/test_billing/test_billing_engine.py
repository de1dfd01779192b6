"""Tests for the billing calculation pipeline."""

from decimal import Decimal
import uuid

import pytest
from pydantic import ValidationError

from clinic_billing.billing import (
    BillingCalculator,
    BillingRates,
    ExperienceBracket,
    UnknownSpecialtyError,
)
from clinic_billing.config import Settings
from clinic_billing.models import Bill, Specialty


@pytest.fixture
def calculator():
    return BillingCalculator()


class TestScenarios:
    def test_cardio_mid_no_prior_visits(self, calculator):
        b = calculator.calculate(Specialty.CARDIO, 26, 0)
        assert b.bracket is ExperienceBracket.MID
        assert b.base_fee == Decimal("1500.00")
        assert b.discount_percent == 0
        assert b.discount_amount == Decimal("0.00")
        assert b.gst_amount == Decimal("180.00")
        assert b.total_amount == Decimal("1680.00")
        assert b.insurance_amount == Decimal("1512.00")
        assert b.co_pay_amount == Decimal("168.00")

    def test_ortho_junior_five_prior_visits(self, calculator):
        b = calculator.calculate(Specialty.ORTHO, 5, 5)
        assert b.base_fee == Decimal("800.00")
        assert b.discount_percent == 5
        assert b.discount_amount == Decimal("40.00")
        assert b.discounted_amount == Decimal("760.00")
        assert b.gst_amount == Decimal("91.20")
        assert b.total_amount == Decimal("851.20")

    def test_cardio_senior_discount_capped(self, calculator):
        b = calculator.calculate(Specialty.CARDIO, 35, 15)
        assert b.base_fee == Decimal("2000.00")
        assert b.discount_percent == 10
        assert b.discount_amount == Decimal("200.00")
        assert b.gst_amount == Decimal("216.00")
        assert b.total_amount == Decimal("2016.00")

    def test_amounts_have_cent_scale(self, calculator):
        b = calculator.calculate(Specialty.ORTHO, 5, 5)
        for amount in (
            b.base_fee,
            b.discount_amount,
            b.gst_amount,
            b.total_amount,
            b.insurance_amount,
            b.co_pay_amount,
        ):
            assert amount.as_tuple().exponent == -2


class TestCalculator:
    def test_specialty_recorded_as_code(self, calculator):
        assert calculator.calculate(Specialty.ORTHO, 1, 0).specialty == "ORTHO"
        assert calculator.calculate("CARDIO", 1, 0).specialty == "CARDIO"

    def test_unknown_specialty(self, calculator):
        with pytest.raises(UnknownSpecialtyError):
            calculator.calculate("DERM", 10, 0)

    def test_rates_passed_explicitly(self):
        rates = BillingRates(gst_rate=Decimal("0"), max_discount_percent=3)
        b = BillingCalculator(rates=rates).calculate(Specialty.ORTHO, 5, 8)
        assert b.discount_percent == 3
        assert b.discount_amount == Decimal("24.00")
        assert b.gst_amount == Decimal("0.00")
        assert b.total_amount == Decimal("776.00")

    def test_to_bill_keeps_every_amount(self, calculator):
        appointment_id = uuid.uuid4()
        b = calculator.calculate(Specialty.ORTHO, 5, 5)
        bill = b.to_bill(appointment_id)
        assert bill.appointment_id == appointment_id
        assert bill.base_fee == b.base_fee
        assert bill.discount_percent == b.discount_percent
        assert bill.discount_amount == b.discount_amount
        assert bill.gst_amount == b.gst_amount
        assert bill.total_amount == b.total_amount
        assert bill.insurance_amount == b.insurance_amount
        assert bill.co_pay_amount == b.co_pay_amount
        assert bill.discounted_amount == Decimal("760.00")


class TestDiscountCapConfiguration:
    def test_default_cap_is_ten(self):
        assert Settings(_env_file=None).billing_rates.max_discount_percent == 10

    def test_raised_cap_flows_into_bill(self):
        settings = Settings(max_discount_percent=15, _env_file=None)
        b = BillingCalculator(rates=settings.billing_rates).calculate(Specialty.ORTHO, 5, 20)
        assert b.discount_percent == 15
        assert b.to_bill(uuid.uuid4()).discount_percent == 15

    def test_cap_above_hundred_rejected(self):
        with pytest.raises(ValidationError):
            Settings(max_discount_percent=101, _env_file=None)

    def test_bill_rejects_percent_above_hundred(self, calculator):
        fields = calculator.calculate(Specialty.ORTHO, 5, 5).to_bill(uuid.uuid4()).model_dump()
        fields["discount_percent"] = 101
        with pytest.raises(ValidationError):
            Bill(**fields)
