"""Audit logger writing structured events to JSON Lines files."""

import json
import logging
import threading
import time
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Optional

from clinic_billing.core.errors import DomainError
from clinic_billing.observability.events import (
    AuditEvent,
    BillingEvent,
    EventType,
    StatusChangeEvent,
)

logger = logging.getLogger(__name__)


class AuditLogger:
    """Append-only audit trail for bills and appointment status changes.

    Writes one JSON object per line, in a separate file per event family.
    A failed write is logged and never fails the business operation.
    """

    def __init__(
        self,
        log_dir: Optional[Path] = None,
        enabled: bool = True,
    ):
        """Initialize audit logger.

        Args:
            log_dir: Directory for log files (default: data/logs)
            enabled: Whether events are written at all
        """
        self.enabled = enabled

        if log_dir is None:
            log_dir = Path("data/logs")
        self.log_dir = log_dir
        if self.enabled:
            self.log_dir.mkdir(parents=True, exist_ok=True)

        self._log_files: dict[str, Path] = {
            "bills": self.log_dir / "bills.jsonl",
            "appointments": self.log_dir / "appointments.jsonl",
        }

        self._callbacks: list[Callable[[AuditEvent], None]] = []
        self._write_lock = threading.Lock()

    def generate_request_id(self) -> str:
        """Generate a short correlation ID."""
        return str(uuid.uuid4())[:8]

    def add_callback(self, callback: Callable[[AuditEvent], None]) -> None:
        """Add callback for real-time event monitoring."""
        self._callbacks.append(callback)

    def _write_event(self, event: AuditEvent, log_type: str) -> None:
        if not self.enabled:
            return

        try:
            log_file = self._log_files.get(log_type)
            if log_file:
                line = event.model_dump_json() + "\n"
                with self._write_lock, open(log_file, "a") as f:
                    f.write(line)

            for callback in self._callbacks:
                try:
                    callback(event)
                except Exception as e:
                    logger.warning(f"Audit callback failed: {e}")

        except OSError as e:
            logger.warning(f"Failed to write audit event: {e}")

    # Bill generation

    @contextmanager
    def bill_generation(
        self,
        appointment_id: str,
        request_id: Optional[str] = None,
    ):
        """Context manager recording one bill generation attempt.

        Usage:
            with audit.bill_generation(str(appointment_id)) as event:
                bill = ...
                event.bill_id = str(bill.id)
        """
        start_time = time.time()
        event = BillingEvent(
            event_type=EventType.BILL_START,
            appointment_id=appointment_id,
            request_id=request_id or self.generate_request_id(),
        )

        try:
            yield event
            event.event_type = EventType.BILL_SUCCESS

        except Exception as e:
            event.event_type = EventType.BILL_ERROR
            event.error_type = type(e).__name__
            event.error_message = str(e)[:200]
            if isinstance(e, DomainError):
                event.error_code = e.code.value
            raise

        finally:
            event.duration_ms = (time.time() - start_time) * 1000
            self._write_event(event, "bills")

    # Appointment lifecycle

    def log_status_change(
        self,
        appointment_id: str,
        to_status: str,
        from_status: Optional[str] = None,
        error_code: Optional[str] = None,
        request_id: Optional[str] = None,
    ) -> None:
        """Log an accepted or rejected status transition."""
        event = StatusChangeEvent(
            event_type=(
                EventType.STATUS_CHANGE_REJECTED if error_code else EventType.STATUS_CHANGE
            ),
            appointment_id=appointment_id,
            from_status=from_status,
            to_status=to_status,
            error_code=error_code,
            request_id=request_id,
        )
        self._write_event(event, "appointments")

    # Utility methods

    def get_recent_events(
        self,
        log_type: str,
        limit: int = 100,
    ) -> list[dict[str, Any]]:
        """Read recent events from a log file."""
        log_file = self._log_files.get(log_type)
        if not log_file or not log_file.exists():
            return []

        events = []
        with open(log_file) as f:
            for line in f:
                try:
                    events.append(json.loads(line))
                except json.JSONDecodeError:
                    continue

        return events[-limit:]

    def get_stats(self, log_type: str) -> dict[str, Any]:
        """Get basic statistics for a log type."""
        events = self.get_recent_events(log_type, limit=1000)
        if not events:
            return {"total": 0}

        total = len(events)
        errors = sum(
            1
            for e in events
            if e.get("event_type", "").endswith(("_error", "_rejected"))
        )
        avg_duration = sum(e.get("duration_ms") or 0 for e in events) / total

        return {
            "total": total,
            "errors": errors,
            "error_rate": errors / total,
            "avg_duration_ms": avg_duration,
        }


class NullAuditLogger(AuditLogger):
    """Audit logger that records nothing (used when auditing is disabled)."""

    def __init__(self) -> None:
        super().__init__(log_dir=Path("data/logs"), enabled=False)
