"""Tests for tax and insurer/patient split."""

from decimal import Decimal

import pytest

from clinic_billing.billing.rates import BillingRates, to_money
from clinic_billing.billing.tax_split import (
    apply_tax_and_split,
    calculate_co_pay_amount,
    calculate_gst,
    calculate_insurance_amount,
)


class TestToMoney:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("1.005", "1.01"),
            ("1.004", "1.00"),
            ("2.675", "2.68"),
            ("766.08", "766.08"),
            ("800", "800.00"),
        ],
    )
    def test_half_up_two_places(self, value, expected):
        assert str(to_money(Decimal(value))) == expected


class TestComponents:
    def test_gst_is_twelve_percent(self):
        assert calculate_gst(Decimal("760.00")) == Decimal("91.20")

    def test_insurance_is_ninety_percent(self):
        assert calculate_insurance_amount(Decimal("1680.00")) == Decimal("1512.00")

    def test_co_pay_is_ten_percent(self):
        assert calculate_co_pay_amount(Decimal("1680.00")) == Decimal("168.00")


class TestApplyTaxAndSplit:
    def test_no_discount(self):
        split = apply_tax_and_split(Decimal("1500.00"), Decimal("0.00"))
        assert split.discounted_amount == Decimal("1500.00")
        assert split.gst_amount == Decimal("180.00")
        assert split.total_amount == Decimal("1680.00")
        assert split.insurance_amount == Decimal("1512.00")
        assert split.co_pay_amount == Decimal("168.00")
        assert split.split_difference == Decimal("0")

    def test_with_discount(self):
        split = apply_tax_and_split(Decimal("800.00"), Decimal("40.00"))
        assert split.discounted_amount == Decimal("760.00")
        assert split.gst_amount == Decimal("91.20")
        assert split.total_amount == Decimal("851.20")
        assert split.insurance_amount == Decimal("766.08")
        assert split.co_pay_amount == Decimal("85.12")

    def test_independent_rounding_can_leave_one_cent_gap(self):
        # 0.40 + gst 0.05 = 0.45; 90% = 0.405 -> 0.41, 10% = 0.045 -> 0.05
        split = apply_tax_and_split(Decimal("0.40"), Decimal("0.00"))
        assert split.total_amount == Decimal("0.45")
        assert split.insurance_amount == Decimal("0.41")
        assert split.co_pay_amount == Decimal("0.05")
        assert split.split_difference == Decimal("-0.01")

    def test_custom_rates(self):
        rates = BillingRates(
            gst_rate=Decimal("0.05"),
            insurance_rate=Decimal("0.80"),
            co_pay_rate=Decimal("0.20"),
        )
        split = apply_tax_and_split(Decimal("1000.00"), Decimal("0.00"), rates)
        assert split.total_amount == Decimal("1050.00")
        assert split.insurance_amount == Decimal("840.00")
        assert split.co_pay_amount == Decimal("210.00")


class TestBillingRates:
    def test_split_must_cover_total(self):
        with pytest.raises(ValueError):
            BillingRates(insurance_rate=Decimal("0.90"), co_pay_rate=Decimal("0.20"))

    def test_rates_are_frozen(self):
        rates = BillingRates()
        with pytest.raises(Exception):
            rates.gst_rate = Decimal("0.5")
