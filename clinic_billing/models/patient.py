"""Patient and insurance models."""

import uuid
from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


def whole_years_between(start: date, end: date) -> int:
    """Return the number of full years elapsed from *start* to *end*."""
    years = end.year - start.year
    if (end.month, end.day) < (start.month, start.day):
        years -= 1
    return years


class InsuranceInfo(BaseModel):
    """Insurance identifiers carried on the patient record."""

    model_config = ConfigDict(frozen=True)

    bin_no: str = Field(min_length=1, description="Bank Identification Number")
    pcn_no: str = Field(min_length=1, description="Processor Control Number")
    member_id: str = Field(min_length=1)


class Patient(BaseModel):
    """A patient. Age is derived from date of birth, not stored."""

    model_config = ConfigDict(frozen=True)

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    dob: date
    insurance: InsuranceInfo

    def age_on(self, as_of: date) -> int:
        return whole_years_between(self.dob, as_of)

    @property
    def age(self) -> int:
        return self.age_on(date.today())

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
