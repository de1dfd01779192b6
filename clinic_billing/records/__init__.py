"""Patient and doctor records."""

from clinic_billing.records.doctors import DoctorService
from clinic_billing.records.patients import PatientService

__all__ = ["DoctorService", "PatientService"]
