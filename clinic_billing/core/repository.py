"""Thread-safe in-memory repositories.

Each repository guards its collection with a re-entrant lock so that
request handlers running on different threads see consistent state.

Check-then-act sequences that span two repositories hold the outer
repository's lock (:meth:`atomic` or :meth:`delete_if`) while consulting
the inner one. Locks are always taken in the order

    patients -> doctors -> appointments -> bills

so nested holders can never deadlock.
"""

from __future__ import annotations

import threading
import uuid
from typing import Callable, Optional

from clinic_billing.models import Appointment, AppointmentStatus, Bill, Doctor, Patient


class PatientRepository:
    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._patients: dict[uuid.UUID, Patient] = {}

    def atomic(self) -> threading.RLock:
        """Lock to hold across several calls that must not interleave."""
        return self._lock

    def save(self, patient: Patient) -> Patient:
        with self._lock:
            self._patients[patient.id] = patient
        return patient

    def update(
        self,
        patient_id: uuid.UUID,
        fn: Callable[[Patient], Patient],
    ) -> Optional[Patient]:
        """Atomically replace a patient with ``fn(current)``; ``None`` if missing."""
        with self._lock:
            current = self._patients.get(patient_id)
            if current is None:
                return None
            updated = fn(current)
            if updated.id != patient_id:
                raise ValueError("update must not change the patient id")
            self._patients[patient_id] = updated
            return updated

    def get_by_id(self, patient_id: uuid.UUID) -> Optional[Patient]:
        with self._lock:
            return self._patients.get(patient_id)

    def list(self) -> list[Patient]:
        with self._lock:
            return list(self._patients.values())

    def exists(self, patient_id: uuid.UUID) -> bool:
        with self._lock:
            return patient_id in self._patients

    def delete(self, patient_id: uuid.UUID) -> bool:
        with self._lock:
            return self._patients.pop(patient_id, None) is not None

    def delete_if(
        self,
        patient_id: uuid.UUID,
        predicate: Callable[[Patient], bool],
    ) -> Optional[bool]:
        """Delete the patient only if ``predicate(current)`` holds.

        Returns ``None`` when missing, ``False`` when the predicate
        refused, ``True`` when deleted.
        """
        with self._lock:
            current = self._patients.get(patient_id)
            if current is None:
                return None
            if not predicate(current):
                return False
            del self._patients[patient_id]
            return True

    def count(self) -> int:
        with self._lock:
            return len(self._patients)


class DoctorRepository:
    """Doctors keyed by id, with a unique index on NPI number."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._doctors: dict[uuid.UUID, Doctor] = {}
        self._by_npi: dict[str, uuid.UUID] = {}

    def atomic(self) -> threading.RLock:
        return self._lock

    def add_if_absent(self, doctor: Doctor) -> bool:
        """Insert *doctor* unless its NPI is already registered.

        Returns ``False`` (and stores nothing) when the NPI is taken.
        """
        with self._lock:
            if doctor.npi_no in self._by_npi:
                return False
            self._doctors[doctor.id] = doctor
            self._by_npi[doctor.npi_no] = doctor.id
            return True

    def get_by_id(self, doctor_id: uuid.UUID) -> Optional[Doctor]:
        with self._lock:
            return self._doctors.get(doctor_id)

    def get_by_npi(self, npi_no: str) -> Optional[Doctor]:
        with self._lock:
            doctor_id = self._by_npi.get(npi_no)
            return self._doctors.get(doctor_id) if doctor_id else None

    def list(self) -> list[Doctor]:
        with self._lock:
            return list(self._doctors.values())

    def exists(self, doctor_id: uuid.UUID) -> bool:
        with self._lock:
            return doctor_id in self._doctors

    def exists_by_npi(self, npi_no: str) -> bool:
        with self._lock:
            return npi_no in self._by_npi

    def delete(self, doctor_id: uuid.UUID) -> bool:
        return bool(self.delete_if(doctor_id, lambda _doctor: True))

    def delete_if(
        self,
        doctor_id: uuid.UUID,
        predicate: Callable[[Doctor], bool],
    ) -> Optional[bool]:
        """Same contract as :meth:`PatientRepository.delete_if`; frees the NPI."""
        with self._lock:
            doctor = self._doctors.get(doctor_id)
            if doctor is None:
                return None
            if not predicate(doctor):
                return False
            del self._doctors[doctor_id]
            self._by_npi.pop(doctor.npi_no, None)
            return True

    def count(self) -> int:
        with self._lock:
            return len(self._doctors)


class AppointmentRepository:
    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._appointments: dict[uuid.UUID, Appointment] = {}

    def atomic(self) -> threading.RLock:
        return self._lock

    def save(self, appointment: Appointment) -> Appointment:
        with self._lock:
            self._appointments[appointment.id] = appointment
        return appointment

    def update(
        self,
        appointment_id: uuid.UUID,
        fn: Callable[[Appointment], Appointment],
    ) -> Optional[Appointment]:
        """Atomically replace an appointment with ``fn(current)``.

        Returns ``None`` if the appointment does not exist. Exceptions
        raised by *fn* propagate and leave the stored value untouched.
        """
        with self._lock:
            current = self._appointments.get(appointment_id)
            if current is None:
                return None
            updated = fn(current)
            if updated.id != appointment_id:
                raise ValueError("update must not change the appointment id")
            self._appointments[appointment_id] = updated
            return updated

    def get_by_id(self, appointment_id: uuid.UUID) -> Optional[Appointment]:
        with self._lock:
            return self._appointments.get(appointment_id)

    def list(self) -> list[Appointment]:
        with self._lock:
            return list(self._appointments.values())

    def list_by_patient(self, patient_id: uuid.UUID) -> list[Appointment]:
        with self._lock:
            return [a for a in self._appointments.values() if a.patient_id == patient_id]

    def list_by_doctor(self, doctor_id: uuid.UUID) -> list[Appointment]:
        with self._lock:
            return [a for a in self._appointments.values() if a.doctor_id == doctor_id]

    def count_completed_by_patient_excluding(
        self, patient_id: uuid.UUID, exclude_id: uuid.UUID
    ) -> int:
        """Count the patient's COMPLETED appointments other than *exclude_id*."""
        with self._lock:
            return sum(
                1
                for a in self._appointments.values()
                if a.patient_id == patient_id
                and a.status is AppointmentStatus.COMPLETED
                and a.id != exclude_id
            )

    def exists(self, appointment_id: uuid.UUID) -> bool:
        with self._lock:
            return appointment_id in self._appointments

    def exists_by_patient(self, patient_id: uuid.UUID) -> bool:
        with self._lock:
            return any(a.patient_id == patient_id for a in self._appointments.values())

    def exists_by_doctor(self, doctor_id: uuid.UUID) -> bool:
        with self._lock:
            return any(a.doctor_id == doctor_id for a in self._appointments.values())

    def delete(self, appointment_id: uuid.UUID) -> bool:
        with self._lock:
            return self._appointments.pop(appointment_id, None) is not None

    def delete_if(
        self,
        appointment_id: uuid.UUID,
        predicate: Callable[[Appointment], bool],
    ) -> Optional[bool]:
        """Same contract as :meth:`PatientRepository.delete_if`."""
        with self._lock:
            current = self._appointments.get(appointment_id)
            if current is None:
                return None
            if not predicate(current):
                return False
            del self._appointments[appointment_id]
            return True

    def count(self) -> int:
        with self._lock:
            return len(self._appointments)


class BillRepository:
    """Bills keyed by id, with a unique index on appointment id.

    Bills are immutable; there is no update or delete.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._bills: dict[uuid.UUID, Bill] = {}
        self._by_appointment: dict[uuid.UUID, uuid.UUID] = {}

    def add_if_absent(self, bill: Bill) -> bool:
        """Insert *bill* unless its appointment already has one.

        The existence check and the insert happen under one lock, so of
        several concurrent callers for the same appointment exactly one
        gets ``True``.
        """
        with self._lock:
            if bill.appointment_id in self._by_appointment:
                return False
            self._bills[bill.id] = bill
            self._by_appointment[bill.appointment_id] = bill.id
            return True

    def get_by_id(self, bill_id: uuid.UUID) -> Optional[Bill]:
        with self._lock:
            return self._bills.get(bill_id)

    def get_by_appointment(self, appointment_id: uuid.UUID) -> Optional[Bill]:
        with self._lock:
            bill_id = self._by_appointment.get(appointment_id)
            return self._bills.get(bill_id) if bill_id else None

    def list(self) -> list[Bill]:
        with self._lock:
            return list(self._bills.values())

    def exists_by_appointment(self, appointment_id: uuid.UUID) -> bool:
        with self._lock:
            return appointment_id in self._by_appointment

    def count(self) -> int:
        with self._lock:
            return len(self._bills)
