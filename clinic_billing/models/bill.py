"""Bill model: the immutable audit record of one billed appointment."""

import uuid
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class Bill(BaseModel):
    """Bill generated for a completed appointment.

    Holds every intermediate amount of the calculation:

    1. base_fee        = fee table (specialty + experience bracket)
    2. discount_percent = min(prior completed visits, cap), cap 10 by default
    3. discount_amount = base_fee * discount_percent / 100
    4. gst_amount      = (base_fee - discount_amount) * 12%
    5. total_amount    = (base_fee - discount_amount) + gst_amount
    6. insurance_amount = total_amount * 90%
    7. co_pay_amount   = total_amount * 10%
    """

    model_config = ConfigDict(frozen=True)

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    appointment_id: uuid.UUID
    base_fee: Decimal = Field(decimal_places=2)
    discount_percent: int = Field(ge=0, le=100)
    discount_amount: Decimal = Field(decimal_places=2)
    gst_amount: Decimal = Field(decimal_places=2)
    total_amount: Decimal = Field(decimal_places=2)
    insurance_amount: Decimal = Field(decimal_places=2)
    co_pay_amount: Decimal = Field(decimal_places=2)

    @property
    def discounted_amount(self) -> Decimal:
        return self.base_fee - self.discount_amount
