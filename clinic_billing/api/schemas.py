"""Wire schemas shared by the API routes.

Dates travel as ``MM/DD/YYYY``; money travels as a two-decimal string.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, PlainSerializer

from clinic_billing.models import Appointment, AppointmentStatus, Bill, Doctor, Patient, Specialty

DATE_FORMAT = "%m/%d/%Y"


def _parse_us_date(value: Any) -> Any:
    if isinstance(value, str):
        try:
            return datetime.strptime(value, DATE_FORMAT).date()
        except ValueError:
            raise ValueError(f"Date must be in MM/DD/YYYY format: {value!r}") from None
    return value


USDate = Annotated[
    date,
    BeforeValidator(_parse_us_date),
    PlainSerializer(lambda d: d.strftime(DATE_FORMAT), return_type=str),
]

Money = Annotated[Decimal, PlainSerializer(lambda d: f"{d:.2f}", return_type=str)]


class InsuranceInfoSchema(BaseModel):
    bin_no: str
    pcn_no: str
    member_id: str


class PatientResponse(BaseModel):
    id: str
    first_name: str
    last_name: str
    dob: USDate
    age: int
    insurance: InsuranceInfoSchema

    @classmethod
    def from_domain(cls, patient: Patient) -> "PatientResponse":
        return cls(
            id=str(patient.id),
            first_name=patient.first_name,
            last_name=patient.last_name,
            dob=patient.dob,
            age=patient.age,
            insurance=InsuranceInfoSchema(**patient.insurance.model_dump()),
        )


class DoctorResponse(BaseModel):
    id: str
    first_name: str
    last_name: str
    npi_no: str
    specialty: Specialty
    practice_start_date: USDate
    experience_years: int

    @classmethod
    def from_domain(cls, doctor: Doctor) -> "DoctorResponse":
        return cls(
            id=str(doctor.id),
            first_name=doctor.first_name,
            last_name=doctor.last_name,
            npi_no=doctor.npi_no,
            specialty=doctor.specialty,
            practice_start_date=doctor.practice_start_date,
            experience_years=doctor.experience_years,
        )


class AppointmentResponse(BaseModel):
    id: str
    patient_id: str
    doctor_id: str
    appointment_date: USDate
    status: AppointmentStatus

    @classmethod
    def from_domain(cls, appt: Appointment) -> "AppointmentResponse":
        return cls(
            id=str(appt.id),
            patient_id=str(appt.patient_id),
            doctor_id=str(appt.doctor_id),
            appointment_date=appt.appointment_date,
            status=appt.status,
        )


class BillResponse(BaseModel):
    id: str
    appointment_id: str
    base_fee: Money
    discount_percent: int
    discount_amount: Money
    gst_amount: Money
    total_amount: Money
    insurance_amount: Money
    co_pay_amount: Money

    @classmethod
    def from_domain(cls, bill: Bill) -> "BillResponse":
        return cls(
            id=str(bill.id),
            appointment_id=str(bill.appointment_id),
            base_fee=bill.base_fee,
            discount_percent=bill.discount_percent,
            discount_amount=bill.discount_amount,
            gst_amount=bill.gst_amount,
            total_amount=bill.total_amount,
            insurance_amount=bill.insurance_amount,
            co_pay_amount=bill.co_pay_amount,
        )


class ErrorResponse(BaseModel):
    message: str
    error_code: str
