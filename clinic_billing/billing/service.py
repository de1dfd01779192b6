"""Billing service: turns a completed appointment into exactly one bill.

Billing rules:
- Only COMPLETED appointments can be billed.
- Each appointment is billed at most once, even under concurrent requests.
- The loyalty discount counts the patient's other COMPLETED appointments.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import Callable, Optional

from clinic_billing.billing.engine import BillingCalculator
from clinic_billing.core.errors import (
    BadRequestError,
    ConflictError,
    ErrorCode,
    NotFoundError,
)
from clinic_billing.core.repository import (
    AppointmentRepository,
    BillRepository,
    DoctorRepository,
)
from clinic_billing.models import AppointmentStatus, Bill
from clinic_billing.observability import AuditLogger, NullAuditLogger

logger = logging.getLogger(__name__)


class BillingService:
    """Generates and looks up bills.

    Args:
        bills: Bill storage with an atomic insert-if-absent.
        appointments: Appointment storage (status and prior-visit history).
        doctors: Doctor lookup for specialty and experience.
        calculator: Fee/discount/tax pipeline.
        clock: Returns "today" for experience calculation.
        audit: Audit trail sink.
    """

    def __init__(
        self,
        bills: BillRepository,
        appointments: AppointmentRepository,
        doctors: DoctorRepository,
        calculator: Optional[BillingCalculator] = None,
        clock: Callable[[], date] = date.today,
        audit: Optional[AuditLogger] = None,
    ) -> None:
        self.bills = bills
        self.appointments = appointments
        self.doctors = doctors
        self.calculator = calculator or BillingCalculator()
        self.clock = clock
        self.audit = audit or NullAuditLogger()

    def generate_bill(self, appointment_id: uuid.UUID) -> Bill:
        """Generate the bill for a completed appointment.

        Raises:
            NotFoundError: APPOINTMENT_NOT_FOUND or DOCTOR_NOT_FOUND.
            BadRequestError: APPOINTMENT_NOT_COMPLETED.
            ConflictError: BILL_ALREADY_EXISTS.
        """
        with self.audit.bill_generation(str(appointment_id)) as event:
            # 1. Appointment must exist and be COMPLETED
            appointment = self.appointments.get_by_id(appointment_id)
            if appointment is None:
                raise NotFoundError(
                    f"Appointment not found with id: {appointment_id}",
                    ErrorCode.APPOINTMENT_NOT_FOUND,
                )

            if appointment.status is not AppointmentStatus.COMPLETED:
                raise BadRequestError(
                    f"Cannot bill appointment with status: {appointment.status.value}. "
                    "Only COMPLETED appointments can be billed.",
                    ErrorCode.APPOINTMENT_NOT_COMPLETED,
                )

            # 2. Fast-path duplicate check; add_if_absent below is authoritative
            if self.bills.exists_by_appointment(appointment_id):
                raise self._already_billed(appointment_id)

            # 3. Doctor drives the fee
            doctor = self.doctors.get_by_id(appointment.doctor_id)
            if doctor is None:
                raise NotFoundError(
                    f"Doctor not found with id: {appointment.doctor_id}",
                    ErrorCode.DOCTOR_NOT_FOUND,
                )
            experience_years = doctor.experience_years_on(self.clock())

            # 4. Prior visits, excluding the appointment being billed
            prior_completed = self.appointments.count_completed_by_patient_excluding(
                appointment.patient_id, appointment_id
            )

            # 5. Fee -> discount -> tax & split
            breakdown = self.calculator.calculate(
                doctor.specialty, experience_years, prior_completed
            )
            bill = breakdown.to_bill(appointment_id)

            # 6. Persist exactly once. The appointment may have been deleted
            # since step 1; re-check under its lock, which a delete also
            # holds while it looks for a bill. COMPLETED is terminal, so
            # the status needs no re-check.
            with self.appointments.atomic():
                if not self.appointments.exists(appointment_id):
                    raise NotFoundError(
                        f"Appointment not found with id: {appointment_id}",
                        ErrorCode.APPOINTMENT_NOT_FOUND,
                    )
                if not self.bills.add_if_absent(bill):
                    raise self._already_billed(appointment_id)

            event.bill_id = str(bill.id)
            event.specialty = breakdown.specialty
            event.experience_years = experience_years
            event.prior_completed = prior_completed
            event.discount_percent = breakdown.discount_percent
            event.total_amount = breakdown.total_amount

        logger.info(
            f"Bill {bill.id} generated for appointment {appointment_id}: "
            f"total={bill.total_amount} discount={bill.discount_percent}%"
        )
        return bill

    def get_bill(self, bill_id: uuid.UUID) -> Bill:
        bill = self.bills.get_by_id(bill_id)
        if bill is None:
            raise NotFoundError(f"Bill not found with id: {bill_id}", ErrorCode.BILL_NOT_FOUND)
        return bill

    def get_bill_by_appointment(self, appointment_id: uuid.UUID) -> Bill:
        bill = self.bills.get_by_appointment(appointment_id)
        if bill is None:
            raise NotFoundError(
                f"Bill not found for appointment: {appointment_id}",
                ErrorCode.BILL_NOT_FOUND,
            )
        return bill

    def list_bills(self) -> list[Bill]:
        return self.bills.list()

    @staticmethod
    def _already_billed(appointment_id: uuid.UUID) -> ConflictError:
        return ConflictError(
            f"Bill already exists for appointment: {appointment_id}",
            ErrorCode.BILL_ALREADY_EXISTS,
        )
