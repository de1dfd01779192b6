"""Domain models for Clinic Billing."""

from clinic_billing.models.appointment import Appointment, AppointmentStatus
from clinic_billing.models.bill import Bill
from clinic_billing.models.doctor import Doctor, Specialty
from clinic_billing.models.patient import InsuranceInfo, Patient, whole_years_between

__all__ = [
    "Appointment",
    "AppointmentStatus",
    "Bill",
    "Doctor",
    "InsuranceInfo",
    "Patient",
    "Specialty",
    "whole_years_between",
]
