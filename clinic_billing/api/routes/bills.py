"""Billing endpoints.

Bills are generated one appointment at a time: POST /bills?appointment_id=...
"""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query

from clinic_billing.api.dependencies import get_services
from clinic_billing.api.schemas import BillResponse
from clinic_billing.core.services import ClinicServices

router = APIRouter(prefix="/bills")


@router.post("", response_model=BillResponse, status_code=201)
def generate_bill(
    appointment_id: uuid.UUID = Query(...),
    services: ClinicServices = Depends(get_services),
):
    """Generate the bill for a completed appointment."""
    return BillResponse.from_domain(services.billing.generate_bill(appointment_id))


@router.get("", response_model=list[BillResponse])
def list_bills(
    appointment_id: Optional[uuid.UUID] = Query(None),
    services: ClinicServices = Depends(get_services),
):
    if appointment_id is not None:
        return [BillResponse.from_domain(services.billing.get_bill_by_appointment(appointment_id))]
    return [BillResponse.from_domain(b) for b in services.billing.list_bills()]


@router.get("/{bill_id}", response_model=BillResponse)
def get_bill(bill_id: uuid.UUID, services: ClinicServices = Depends(get_services)):
    return BillResponse.from_domain(services.billing.get_bill(bill_id))
