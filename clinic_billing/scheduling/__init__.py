"""Appointment lifecycle for Clinic Billing."""

from clinic_billing.scheduling.service import AppointmentService
from clinic_billing.scheduling.transitions import can_transition, transition

__all__ = [
    "AppointmentService",
    "can_transition",
    "transition",
]
