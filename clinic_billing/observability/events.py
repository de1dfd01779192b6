"""Structured audit events for billing and appointment lifecycle."""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class EventType(str, Enum):
    """Types of audit events."""

    BILL_START = "bill_start"
    BILL_SUCCESS = "bill_success"
    BILL_ERROR = "bill_error"
    STATUS_CHANGE = "status_change"
    STATUS_CHANGE_REJECTED = "status_change_rejected"


class AuditEvent(BaseModel):
    """Base class for all audit events."""

    event_type: EventType
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    request_id: Optional[str] = None
    duration_ms: Optional[float] = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class BillingEvent(AuditEvent):
    """Event for one bill generation attempt."""

    appointment_id: str
    bill_id: Optional[str] = None
    specialty: Optional[str] = None
    experience_years: Optional[int] = None
    prior_completed: Optional[int] = None
    discount_percent: Optional[int] = None
    total_amount: Optional[Decimal] = None

    # Error fields (populated on error)
    error_type: Optional[str] = None
    error_code: Optional[str] = None
    error_message: Optional[str] = None


class StatusChangeEvent(AuditEvent):
    """Event for an appointment status transition request."""

    event_type: EventType = EventType.STATUS_CHANGE
    appointment_id: str
    from_status: Optional[str] = None
    to_status: str
    error_code: Optional[str] = None
