"""Pytest configuration and fixtures."""

from datetime import date

import pytest

from clinic_billing.billing import BillingCalculator, BillingService
from clinic_billing.core.repository import (
    AppointmentRepository,
    BillRepository,
    DoctorRepository,
    PatientRepository,
)
from clinic_billing.models import (
    Appointment,
    AppointmentStatus,
    Doctor,
    InsuranceInfo,
    Patient,
    Specialty,
)
from clinic_billing.observability import AuditLogger
from clinic_billing.records import DoctorService, PatientService
from clinic_billing.scheduling import AppointmentService

TODAY = date(2026, 3, 2)


def years_ago(years: int, today: date = TODAY) -> date:
    """Practice start date giving exactly *years* whole years as of *today*."""
    return today.replace(year=today.year - years)


@pytest.fixture
def clock():
    return lambda: TODAY


@pytest.fixture
def patient_repo():
    return PatientRepository()


@pytest.fixture
def doctor_repo():
    return DoctorRepository()


@pytest.fixture
def appointment_repo():
    return AppointmentRepository()


@pytest.fixture
def bill_repo():
    return BillRepository()


@pytest.fixture
def audit(tmp_path):
    return AuditLogger(log_dir=tmp_path / "logs", enabled=True)


@pytest.fixture
def billing_service(bill_repo, appointment_repo, doctor_repo, clock, audit):
    return BillingService(
        bill_repo,
        appointment_repo,
        doctor_repo,
        calculator=BillingCalculator(),
        clock=clock,
        audit=audit,
    )


@pytest.fixture
def appointment_service(appointment_repo, patient_repo, doctor_repo, bill_repo, audit):
    return AppointmentService(appointment_repo, patient_repo, doctor_repo, bill_repo, audit=audit)


@pytest.fixture
def patient_service(patient_repo, appointment_repo):
    return PatientService(patient_repo, appointment_repo)


@pytest.fixture
def doctor_service(doctor_repo, appointment_repo):
    return DoctorService(doctor_repo, appointment_repo)


@pytest.fixture
def sample_insurance():
    return InsuranceInfo(bin_no="610014", pcn_no="MEDDPRIME", member_id="MBR-0042")


@pytest.fixture
def patient(patient_repo, sample_insurance):
    return patient_repo.save(
        Patient(first_name="Ada", last_name="Lovelace", dob=date(1985, 6, 1), insurance=sample_insurance)
    )


@pytest.fixture
def make_doctor(doctor_repo):
    """Factory registering a doctor with a given specialty and experience."""
    counter = iter(range(1000, 10_000))

    def _make(specialty: Specialty = Specialty.CARDIO, years: int = 26) -> Doctor:
        doctor = Doctor(
            first_name="Greg",
            last_name="House",
            npi_no=f"NPI{next(counter)}",
            specialty=specialty,
            practice_start_date=years_ago(years),
        )
        assert doctor_repo.add_if_absent(doctor)
        return doctor

    return _make


@pytest.fixture
def make_appointment(appointment_repo):
    """Factory storing an appointment directly in the repository."""

    def _make(
        patient: Patient,
        doctor: Doctor,
        status: AppointmentStatus = AppointmentStatus.COMPLETED,
        appointment_date: date = TODAY,
    ) -> Appointment:
        return appointment_repo.save(
            Appointment(
                patient_id=patient.id,
                doctor_id=doctor.id,
                appointment_date=appointment_date,
                status=status,
            )
        )

    return _make
