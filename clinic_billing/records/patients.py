"""Patient record service."""

from __future__ import annotations

import uuid
from datetime import date

from clinic_billing.core.errors import ConflictError, ErrorCode, NotFoundError
from clinic_billing.core.repository import AppointmentRepository, PatientRepository
from clinic_billing.models import InsuranceInfo, Patient


class PatientService:
    def __init__(self, patients: PatientRepository, appointments: AppointmentRepository) -> None:
        self.patients = patients
        self.appointments = appointments

    def create(
        self,
        first_name: str,
        last_name: str,
        dob: date,
        insurance: InsuranceInfo,
    ) -> Patient:
        patient = Patient(first_name=first_name, last_name=last_name, dob=dob, insurance=insurance)
        return self.patients.save(patient)

    def get(self, patient_id: uuid.UUID) -> Patient:
        patient = self.patients.get_by_id(patient_id)
        if patient is None:
            raise self._not_found(patient_id)
        return patient

    def list(self) -> list[Patient]:
        return self.patients.list()

    def update(
        self,
        patient_id: uuid.UUID,
        first_name: str,
        last_name: str,
        dob: date,
        insurance: InsuranceInfo,
    ) -> Patient:
        """Replace every field of an existing patient, keeping its id."""
        updated = self.patients.update(
            patient_id,
            lambda _current: Patient(
                id=patient_id,
                first_name=first_name,
                last_name=last_name,
                dob=dob,
                insurance=insurance,
            ),
        )
        if updated is None:
            raise self._not_found(patient_id)
        return updated

    def delete(self, patient_id: uuid.UUID) -> None:
        deleted = self.patients.delete_if(
            patient_id, lambda _patient: not self.appointments.exists_by_patient(patient_id)
        )
        if deleted is None:
            raise self._not_found(patient_id)
        if not deleted:
            raise ConflictError(
                "Cannot delete patient with existing appointments",
                ErrorCode.PATIENT_HAS_APPOINTMENTS,
            )

    @staticmethod
    def _not_found(patient_id: uuid.UUID) -> NotFoundError:
        return NotFoundError(
            f"Patient not found with id: {patient_id}", ErrorCode.PATIENT_NOT_FOUND
        )
