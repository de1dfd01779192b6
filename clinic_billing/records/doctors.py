"""Doctor record service.

Doctors are immutable after creation: there is no update operation.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date

from clinic_billing.core.errors import ConflictError, ErrorCode, NotFoundError
from clinic_billing.core.repository import AppointmentRepository, DoctorRepository
from clinic_billing.models import Doctor, Specialty

logger = logging.getLogger(__name__)


class DoctorService:
    def __init__(self, doctors: DoctorRepository, appointments: AppointmentRepository) -> None:
        self.doctors = doctors
        self.appointments = appointments

    def create(
        self,
        first_name: str,
        last_name: str,
        npi_no: str,
        specialty: Specialty,
        practice_start_date: date,
    ) -> Doctor:
        """Register a doctor; the NPI number must be unique."""
        doctor = Doctor(
            first_name=first_name,
            last_name=last_name,
            npi_no=npi_no,
            specialty=specialty,
            practice_start_date=practice_start_date,
        )
        if not self.doctors.add_if_absent(doctor):
            raise ConflictError(
                f"Doctor with NPI {npi_no} already exists", ErrorCode.DUPLICATE_NPI
            )
        logger.info(f"Doctor {doctor.id} registered ({doctor.specialty.value})")
        return doctor

    def get(self, doctor_id: uuid.UUID) -> Doctor:
        doctor = self.doctors.get_by_id(doctor_id)
        if doctor is None:
            raise NotFoundError(
                f"Doctor not found with id: {doctor_id}", ErrorCode.DOCTOR_NOT_FOUND
            )
        return doctor

    def list(self) -> list[Doctor]:
        return self.doctors.list()

    def delete(self, doctor_id: uuid.UUID) -> None:
        """Delete a doctor with no appointments.

        The appointment check runs under the doctor lock, the same lock
        appointment booking holds while it validates the doctor.
        """
        deleted = self.doctors.delete_if(
            doctor_id, lambda _doctor: not self.appointments.exists_by_doctor(doctor_id)
        )
        if deleted is None:
            raise NotFoundError(
                f"Doctor not found with id: {doctor_id}", ErrorCode.DOCTOR_NOT_FOUND
            )
        if not deleted:
            raise ConflictError(
                "Cannot delete doctor with existing appointments",
                ErrorCode.DOCTOR_HAS_APPOINTMENTS,
            )
        logger.info(f"Doctor {doctor_id} deleted")
