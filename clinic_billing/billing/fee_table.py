"""Base fee resolution by specialty and experience bracket.

Fee table (per visit):

  | Specialty | 0-19 yrs | 20-30 yrs | 31+ yrs |
  |-----------|----------|-----------|---------|
  | ORTHO     | 800      | 1000      | 1500    |
  | CARDIO    | 1000     | 1500      | 2000    |

Each specialty is a :class:`FeeStrategy` holding its three bracket fees.
Bracket selection lives in one place (:func:`experience_bracket`), so a new
specialty is one more strategy registered on the :class:`FeeSchedule`.
"""
from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field

from clinic_billing.billing.rates import to_money
from clinic_billing.models import Specialty

JUNIOR_MAX_YEARS = 19
MID_MAX_YEARS = 30


class ExperienceBracket(str, Enum):
    JUNIOR = "JUNIOR"  # 0-19 years
    MID = "MID"  # 20-30 years
    SENIOR = "SENIOR"  # 31+ years


class UnknownSpecialtyError(LookupError):
    """No fee strategy is registered for a specialty (a configuration error)."""

    def __init__(self, specialty: str):
        super().__init__(f"No fee strategy registered for specialty: {specialty}")
        self.specialty = specialty


def experience_bracket(years: int) -> ExperienceBracket:
    """Map whole years of experience to a fee bracket."""
    if years < 0:
        raise ValueError(f"Experience years cannot be negative: {years}")
    if years <= JUNIOR_MAX_YEARS:
        return ExperienceBracket.JUNIOR
    if years <= MID_MAX_YEARS:
        return ExperienceBracket.MID
    return ExperienceBracket.SENIOR


class FeeStrategy(BaseModel):
    """Bracket fees for one specialty."""

    model_config = ConfigDict(frozen=True)

    specialty: str
    junior_fee: Decimal = Field(ge=0)
    mid_fee: Decimal = Field(ge=0)
    senior_fee: Decimal = Field(ge=0)

    def fee_for(self, bracket: ExperienceBracket) -> Decimal:
        fees = {
            ExperienceBracket.JUNIOR: self.junior_fee,
            ExperienceBracket.MID: self.mid_fee,
            ExperienceBracket.SENIOR: self.senior_fee,
        }
        return to_money(fees[bracket])

    def base_fee(self, experience_years: int) -> Decimal:
        return self.fee_for(experience_bracket(experience_years))


ORTHO_FEES = FeeStrategy(
    specialty=Specialty.ORTHO.value,
    junior_fee=Decimal("800"),
    mid_fee=Decimal("1000"),
    senior_fee=Decimal("1500"),
)

CARDIO_FEES = FeeStrategy(
    specialty=Specialty.CARDIO.value,
    junior_fee=Decimal("1000"),
    mid_fee=Decimal("1500"),
    senior_fee=Decimal("2000"),
)


class FeeSchedule:
    """Registry of fee strategies keyed by specialty code."""

    def __init__(self, strategies: Iterable[FeeStrategy] = ()) -> None:
        self._strategies: dict[str, FeeStrategy] = {}
        for strategy in strategies:
            self.register(strategy)

    def register(self, strategy: FeeStrategy) -> None:
        if strategy.specialty in self._strategies:
            raise ValueError(f"Fee strategy already registered for {strategy.specialty}")
        self._strategies[strategy.specialty] = strategy

    def strategy_for(self, specialty: str) -> FeeStrategy:
        key = specialty.value if isinstance(specialty, Specialty) else specialty
        try:
            return self._strategies[key]
        except KeyError:
            raise UnknownSpecialtyError(key) from None

    def resolve_base_fee(self, specialty: str, experience_years: int) -> Decimal:
        return self.strategy_for(specialty).base_fee(experience_years)

    @property
    def specialties(self) -> list[str]:
        return list(self._strategies)

    def __contains__(self, specialty: object) -> bool:
        key = specialty.value if isinstance(specialty, Specialty) else specialty
        return key in self._strategies


def default_fee_schedule() -> FeeSchedule:
    """Fee schedule with the built-in ORTHO and CARDIO strategies."""
    return FeeSchedule([ORTHO_FEES, CARDIO_FEES])
