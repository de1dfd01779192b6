"""FastAPI application for Clinic Billing."""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from clinic_billing import __version__
from clinic_billing.api.middleware import APIKeyMiddleware, RequestLoggingMiddleware
from clinic_billing.api.routes import appointments, bills, doctors, health, patients
from clinic_billing.billing import UnknownSpecialtyError
from clinic_billing.config import Settings, get_settings
from clinic_billing.core.errors import (
    BadRequestError,
    ConflictError,
    DomainError,
    NotFoundError,
)
from clinic_billing.core.services import ClinicServices, build_services

logger = logging.getLogger(__name__)


def status_for(exc: DomainError) -> int:
    """Map a domain error family onto an HTTP status code."""
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, ConflictError):
        return 409
    if isinstance(exc, BadRequestError):
        return 400
    return 500


def create_app(
    settings: Optional[Settings] = None,
    services: Optional[ClinicServices] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use (default: cached environment settings).
        services: Pre-built service container; a fresh in-memory one is
            built when omitted.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Clinic Billing API",
        description="Appointment lifecycle and bill calculation",
        version=__version__,
    )
    app.state.settings = settings
    app.state.services = services or build_services(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(RequestLoggingMiddleware)

    if settings.has_api_key:
        app.add_middleware(APIKeyMiddleware, api_key=settings.api_key)

    app.include_router(health.router, tags=["health"])
    app.include_router(patients.router, prefix="/api/v1", tags=["patients"])
    app.include_router(doctors.router, prefix="/api/v1", tags=["doctors"])
    app.include_router(appointments.router, prefix="/api/v1", tags=["appointments"])
    app.include_router(bills.router, prefix="/api/v1", tags=["bills"])

    @app.exception_handler(DomainError)
    async def domain_exception_handler(request: Request, exc: DomainError):
        status_code = status_for(exc)
        logger.info(
            f"{request.method} {request.url.path} -> {status_code} {exc.code.value}"
        )
        return JSONResponse(
            status_code=status_code,
            content={"message": exc.message, "error_code": exc.code.value},
        )

    @app.exception_handler(UnknownSpecialtyError)
    async def unknown_specialty_handler(request: Request, exc: UnknownSpecialtyError):
        logger.exception(f"Fee table misconfigured: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "message": "Internal server error",
                "error_code": "FEE_TABLE_MISCONFIGURED",
                "detail": str(exc) if settings.debug_mode else None,
            },
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "message": "Internal server error",
                "error_code": "INTERNAL_ERROR",
                "detail": str(exc) if settings.debug_mode else None,
            },
        )

    return app
