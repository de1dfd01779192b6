"""Appointment endpoints: booking and status transitions."""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from pydantic import BaseModel

from clinic_billing.api.dependencies import get_services
from clinic_billing.api.schemas import AppointmentResponse, USDate
from clinic_billing.core.services import ClinicServices
from clinic_billing.models import AppointmentStatus

router = APIRouter(prefix="/appointments")


class AppointmentCreate(BaseModel):
    patient_id: uuid.UUID
    doctor_id: uuid.UUID
    appointment_date: USDate


class StatusUpdate(BaseModel):
    status: AppointmentStatus


@router.post("", response_model=AppointmentResponse, status_code=201)
def create_appointment(
    body: AppointmentCreate,
    services: ClinicServices = Depends(get_services),
):
    appt = services.appointments.create(
        patient_id=body.patient_id,
        doctor_id=body.doctor_id,
        appointment_date=body.appointment_date,
    )
    return AppointmentResponse.from_domain(appt)


@router.get("", response_model=list[AppointmentResponse])
def list_appointments(
    patient_id: Optional[uuid.UUID] = Query(None),
    doctor_id: Optional[uuid.UUID] = Query(None),
    services: ClinicServices = Depends(get_services),
):
    appts = services.appointments.list(patient_id=patient_id, doctor_id=doctor_id)
    return [AppointmentResponse.from_domain(a) for a in appts]


@router.get("/{appointment_id}", response_model=AppointmentResponse)
def get_appointment(
    appointment_id: uuid.UUID,
    services: ClinicServices = Depends(get_services),
):
    return AppointmentResponse.from_domain(services.appointments.get(appointment_id))


@router.put("/{appointment_id}/status", response_model=AppointmentResponse)
def update_appointment_status(
    appointment_id: uuid.UUID,
    body: StatusUpdate,
    services: ClinicServices = Depends(get_services),
):
    """Only SCHEDULED -> COMPLETED and SCHEDULED -> CANCELLED are allowed."""
    appt = services.appointments.update_status(appointment_id, body.status)
    return AppointmentResponse.from_domain(appt)


@router.delete("/{appointment_id}", status_code=204)
def delete_appointment(
    appointment_id: uuid.UUID,
    services: ClinicServices = Depends(get_services),
):
    services.appointments.delete(appointment_id)
    return Response(status_code=204)
