"""Wiring of repositories and services for one process."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable

from clinic_billing.billing import BillingCalculator, BillingService, default_fee_schedule
from clinic_billing.config import Settings
from clinic_billing.core.repository import (
    AppointmentRepository,
    BillRepository,
    DoctorRepository,
    PatientRepository,
)
from clinic_billing.observability import AuditLogger
from clinic_billing.records import DoctorService, PatientService
from clinic_billing.scheduling import AppointmentService


@dataclass
class ClinicServices:
    """Everything a request handler needs, sharing one set of repositories."""

    patients: PatientService
    doctors: DoctorService
    appointments: AppointmentService
    billing: BillingService
    audit: AuditLogger


def build_services(
    settings: Settings,
    clock: Callable[[], date] = date.today,
) -> ClinicServices:
    """Create fresh in-memory repositories and the services over them."""
    patient_repo = PatientRepository()
    doctor_repo = DoctorRepository()
    appointment_repo = AppointmentRepository()
    bill_repo = BillRepository()

    audit = AuditLogger(log_dir=settings.audit_log_dir, enabled=settings.audit_enabled)
    calculator = BillingCalculator(
        fee_schedule=default_fee_schedule(),
        rates=settings.billing_rates,
    )

    return ClinicServices(
        patients=PatientService(patient_repo, appointment_repo),
        doctors=DoctorService(doctor_repo, appointment_repo),
        appointments=AppointmentService(
            appointment_repo, patient_repo, doctor_repo, bill_repo, audit=audit
        ),
        billing=BillingService(
            bill_repo,
            appointment_repo,
            doctor_repo,
            calculator=calculator,
            clock=clock,
            audit=audit,
        ),
        audit=audit,
    )
