"""Audit trail for bill generation and appointment status changes."""

from clinic_billing.observability.events import (
    AuditEvent,
    BillingEvent,
    EventType,
    StatusChangeEvent,
)
from clinic_billing.observability.logger import AuditLogger, NullAuditLogger

__all__ = [
    "AuditEvent",
    "AuditLogger",
    "BillingEvent",
    "EventType",
    "NullAuditLogger",
    "StatusChangeEvent",
]
