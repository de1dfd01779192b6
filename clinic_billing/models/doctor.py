"""Doctor model and specialties."""

import uuid
from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from clinic_billing.models.patient import whole_years_between


class Specialty(str, Enum):
    """Medical specialties. Fees vary by specialty and experience."""

    ORTHO = "ORTHO"
    CARDIO = "CARDIO"


class Doctor(BaseModel):
    """A doctor. Immutable after creation; there is no update path."""

    model_config = ConfigDict(frozen=True)

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    npi_no: str = Field(min_length=1, description="National Provider Identifier")
    specialty: Specialty
    practice_start_date: date

    def experience_years_on(self, as_of: date) -> int:
        """Whole years of practice as of *as_of* (never negative)."""
        return max(whole_years_between(self.practice_start_date, as_of), 0)

    @property
    def experience_years(self) -> int:
        return self.experience_years_on(date.today())
