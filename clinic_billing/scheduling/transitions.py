"""Appointment status state machine.

  SCHEDULED --> COMPLETED
  SCHEDULED --> CANCELLED

Every other (current, target) pair is rejected by the same two checks:
only a SCHEDULED appointment may move, and it may not move to SCHEDULED.
"""

from clinic_billing.core.errors import InvalidTransitionError
from clinic_billing.models import Appointment, AppointmentStatus


def can_transition(current: AppointmentStatus, target: AppointmentStatus) -> bool:
    return current is AppointmentStatus.SCHEDULED and target is not AppointmentStatus.SCHEDULED


def transition(appointment: Appointment, target: AppointmentStatus) -> Appointment:
    """Return a copy of *appointment* with ``status = target``.

    Raises:
        InvalidTransitionError: the appointment is already terminal, or the
            target is SCHEDULED.
    """
    target = AppointmentStatus(target)
    if appointment.status is not AppointmentStatus.SCHEDULED:
        raise InvalidTransitionError(
            f"Cannot change status of {appointment.status.value} appointment"
        )
    if target is AppointmentStatus.SCHEDULED:
        raise InvalidTransitionError("Appointment is already SCHEDULED")
    return appointment.model_copy(update={"status": target})
