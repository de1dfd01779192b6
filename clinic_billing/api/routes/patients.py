"""Patient endpoints."""

import uuid

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, Field

from clinic_billing.api.dependencies import get_services
from clinic_billing.api.schemas import InsuranceInfoSchema, PatientResponse, USDate
from clinic_billing.core.services import ClinicServices
from clinic_billing.models import InsuranceInfo

router = APIRouter(prefix="/patients")


class PatientIn(BaseModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    dob: USDate
    insurance: InsuranceInfoSchema

    def insurance_info(self) -> InsuranceInfo:
        return InsuranceInfo(**self.insurance.model_dump())


@router.post("", response_model=PatientResponse, status_code=201)
def create_patient(body: PatientIn, services: ClinicServices = Depends(get_services)):
    patient = services.patients.create(
        first_name=body.first_name,
        last_name=body.last_name,
        dob=body.dob,
        insurance=body.insurance_info(),
    )
    return PatientResponse.from_domain(patient)


@router.get("", response_model=list[PatientResponse])
def list_patients(services: ClinicServices = Depends(get_services)):
    return [PatientResponse.from_domain(p) for p in services.patients.list()]


@router.get("/{patient_id}", response_model=PatientResponse)
def get_patient(patient_id: uuid.UUID, services: ClinicServices = Depends(get_services)):
    return PatientResponse.from_domain(services.patients.get(patient_id))


@router.put("/{patient_id}", response_model=PatientResponse)
def update_patient(
    patient_id: uuid.UUID,
    body: PatientIn,
    services: ClinicServices = Depends(get_services),
):
    patient = services.patients.update(
        patient_id,
        first_name=body.first_name,
        last_name=body.last_name,
        dob=body.dob,
        insurance=body.insurance_info(),
    )
    return PatientResponse.from_domain(patient)


@router.delete("/{patient_id}", status_code=204)
def delete_patient(patient_id: uuid.UUID, services: ClinicServices = Depends(get_services)):
    services.patients.delete(patient_id)
    return Response(status_code=204)
