"""FastAPI dependencies."""

from fastapi import Request

from clinic_billing.core.services import ClinicServices


def get_services(request: Request) -> ClinicServices:
    """Return the service container stored on the application state."""
    return request.app.state.services
