"""Appointment service: booking, lookup and status transitions."""

from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import Optional

from clinic_billing.core.errors import (
    ConflictError,
    DomainError,
    ErrorCode,
    NotFoundError,
)
from clinic_billing.core.repository import (
    AppointmentRepository,
    BillRepository,
    DoctorRepository,
    PatientRepository,
)
from clinic_billing.models import Appointment, AppointmentStatus
from clinic_billing.observability import AuditLogger, NullAuditLogger
from clinic_billing.scheduling.transitions import transition

logger = logging.getLogger(__name__)


class AppointmentService:
    """Books appointments and drives them through their lifecycle."""

    def __init__(
        self,
        appointments: AppointmentRepository,
        patients: PatientRepository,
        doctors: DoctorRepository,
        bills: BillRepository,
        audit: Optional[AuditLogger] = None,
    ) -> None:
        self.appointments = appointments
        self.patients = patients
        self.doctors = doctors
        self.bills = bills
        self.audit = audit or NullAuditLogger()

    def create(
        self,
        patient_id: uuid.UUID,
        doctor_id: uuid.UUID,
        appointment_date: date,
    ) -> Appointment:
        """Book a SCHEDULED appointment after checking both references exist.

        Both records stay locked until the appointment is stored, so a
        concurrent patient or doctor delete either runs first (and the
        booking fails) or sees the new appointment (and is refused).
        """
        with self.patients.atomic(), self.doctors.atomic():
            if not self.patients.exists(patient_id):
                raise NotFoundError(
                    f"Patient not found with id: {patient_id}", ErrorCode.INVALID_PATIENT
                )
            if not self.doctors.exists(doctor_id):
                raise NotFoundError(
                    f"Doctor not found with id: {doctor_id}", ErrorCode.INVALID_DOCTOR
                )

            appointment = Appointment(
                patient_id=patient_id,
                doctor_id=doctor_id,
                appointment_date=appointment_date,
            )
            self.appointments.save(appointment)

        logger.info(f"Appointment {appointment.id} scheduled for {appointment_date}")
        return appointment

    def get(self, appointment_id: uuid.UUID) -> Appointment:
        appointment = self.appointments.get_by_id(appointment_id)
        if appointment is None:
            raise NotFoundError(
                f"Appointment not found with id: {appointment_id}",
                ErrorCode.APPOINTMENT_NOT_FOUND,
            )
        return appointment

    def list(
        self,
        patient_id: Optional[uuid.UUID] = None,
        doctor_id: Optional[uuid.UUID] = None,
    ) -> list[Appointment]:
        """List appointments, filtered by patient first, else by doctor."""
        if patient_id is not None:
            return self.appointments.list_by_patient(patient_id)
        if doctor_id is not None:
            return self.appointments.list_by_doctor(doctor_id)
        return self.appointments.list()

    def update_status(
        self,
        appointment_id: uuid.UUID,
        target_status: AppointmentStatus,
    ) -> Appointment:
        """Move an appointment to COMPLETED or CANCELLED.

        The read, the transition check and the write happen as one atomic
        update, so two concurrent requests cannot both leave SCHEDULED.
        """
        target_status = AppointmentStatus(target_status)
        previous: dict[str, AppointmentStatus] = {}

        def _apply(current: Appointment) -> Appointment:
            previous["status"] = current.status
            return transition(current, target_status)

        try:
            updated = self.appointments.update(appointment_id, _apply)
        except DomainError as e:
            logger.warning(
                f"Rejected status change for {appointment_id} -> {target_status.value}: {e.message}"
            )
            self.audit.log_status_change(
                appointment_id=str(appointment_id),
                from_status=previous["status"].value if previous else None,
                to_status=target_status.value,
                error_code=e.code.value,
            )
            raise

        if updated is None:
            raise NotFoundError(
                f"Appointment not found with id: {appointment_id}",
                ErrorCode.APPOINTMENT_NOT_FOUND,
            )

        logger.info(
            f"Appointment {appointment_id} {previous['status'].value} -> {updated.status.value}"
        )
        self.audit.log_status_change(
            appointment_id=str(appointment_id),
            from_status=previous["status"].value,
            to_status=updated.status.value,
        )
        return updated

    def delete(self, appointment_id: uuid.UUID) -> None:
        """Delete an appointment that has not been billed."""
        deleted = self.appointments.delete_if(
            appointment_id,
            lambda _appt: not self.bills.exists_by_appointment(appointment_id),
        )
        if deleted is None:
            raise NotFoundError(
                f"Appointment not found with id: {appointment_id}",
                ErrorCode.APPOINTMENT_NOT_FOUND,
            )
        if not deleted:
            raise ConflictError(
                f"Cannot delete billed appointment: {appointment_id}",
                ErrorCode.APPOINTMENT_HAS_BILL,
            )
