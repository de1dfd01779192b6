"""Domain error taxonomy.

Every error carries a stable machine-readable :class:`ErrorCode` and a
human-readable message. The API layer maps the three families onto
HTTP status codes; the core never retries.
"""

from enum import Enum


class ErrorCode(str, Enum):
    # Patient
    PATIENT_NOT_FOUND = "PATIENT_NOT_FOUND"
    PATIENT_HAS_APPOINTMENTS = "PATIENT_HAS_APPOINTMENTS"

    # Doctor
    DOCTOR_NOT_FOUND = "DOCTOR_NOT_FOUND"
    DOCTOR_HAS_APPOINTMENTS = "DOCTOR_HAS_APPOINTMENTS"
    DUPLICATE_NPI = "DUPLICATE_NPI"

    # Appointment
    APPOINTMENT_NOT_FOUND = "APPOINTMENT_NOT_FOUND"
    APPOINTMENT_HAS_BILL = "APPOINTMENT_HAS_BILL"
    INVALID_PATIENT = "INVALID_PATIENT"
    INVALID_DOCTOR = "INVALID_DOCTOR"
    INVALID_STATUS_TRANSITION = "INVALID_STATUS_TRANSITION"

    # Billing
    BILL_NOT_FOUND = "BILL_NOT_FOUND"
    APPOINTMENT_NOT_COMPLETED = "APPOINTMENT_NOT_COMPLETED"
    BILL_ALREADY_EXISTS = "BILL_ALREADY_EXISTS"


class DomainError(Exception):
    """Base class for business-rule failures surfaced to callers."""

    def __init__(self, message: str, code: ErrorCode):
        super().__init__(message)
        self.message = message
        self.code = code

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code.value!r}, message={self.message!r})"


class NotFoundError(DomainError):
    """A referenced entity does not exist."""


class ConflictError(DomainError):
    """The operation would violate a uniqueness or idempotency invariant."""


class BadRequestError(DomainError):
    """The operation violates a business rule on otherwise valid references."""


class InvalidTransitionError(BadRequestError):
    def __init__(self, message: str):
        super().__init__(message, ErrorCode.INVALID_STATUS_TRANSITION)
