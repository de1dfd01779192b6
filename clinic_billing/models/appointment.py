"""Appointment model and lifecycle statuses."""

import uuid
from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class AppointmentStatus(str, Enum):
    """Appointment lifecycle statuses.

    SCHEDULED -> COMPLETED (eligible for billing)
    SCHEDULED -> CANCELLED (never billable)
    """

    SCHEDULED = "SCHEDULED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return self is not AppointmentStatus.SCHEDULED


class Appointment(BaseModel):
    """A booked appointment linking a patient to a doctor.

    Values are frozen; status changes produce a new instance via
    :func:`clinic_billing.scheduling.transitions.transition`.
    """

    model_config = ConfigDict(frozen=True)

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    patient_id: uuid.UUID
    doctor_id: uuid.UUID
    appointment_date: date
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
