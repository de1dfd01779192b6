"""Doctor endpoints. There is no update endpoint: doctors are immutable."""

import uuid

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, Field

from clinic_billing.api.dependencies import get_services
from clinic_billing.api.schemas import DoctorResponse, USDate
from clinic_billing.core.services import ClinicServices
from clinic_billing.models import Specialty

router = APIRouter(prefix="/doctors")


class DoctorIn(BaseModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    npi_no: str = Field(min_length=1)
    specialty: Specialty
    practice_start_date: USDate


@router.post("", response_model=DoctorResponse, status_code=201)
def create_doctor(body: DoctorIn, services: ClinicServices = Depends(get_services)):
    doctor = services.doctors.create(
        first_name=body.first_name,
        last_name=body.last_name,
        npi_no=body.npi_no,
        specialty=body.specialty,
        practice_start_date=body.practice_start_date,
    )
    return DoctorResponse.from_domain(doctor)


@router.get("", response_model=list[DoctorResponse])
def list_doctors(services: ClinicServices = Depends(get_services)):
    return [DoctorResponse.from_domain(d) for d in services.doctors.list()]


@router.get("/{doctor_id}", response_model=DoctorResponse)
def get_doctor(doctor_id: uuid.UUID, services: ClinicServices = Depends(get_services)):
    return DoctorResponse.from_domain(services.doctors.get(doctor_id))


@router.delete("/{doctor_id}", status_code=204)
def delete_doctor(doctor_id: uuid.UUID, services: ClinicServices = Depends(get_services)):
    services.doctors.delete(doctor_id)
    return Response(status_code=204)
