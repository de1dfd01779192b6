"""Health check endpoints."""

from fastapi import APIRouter, Request

from clinic_billing import __version__

router = APIRouter()


@router.get("/health")
async def health_check() -> dict:
    """Basic health check."""
    return {
        "status": "healthy",
        "service": "clinic-billing",
        "version": __version__,
    }


@router.get("/health/ready")
def readiness_check(request: Request) -> dict:
    """Readiness check - verifies the service container is wired."""
    services = getattr(request.app.state, "services", None)
    if services is None:
        return {"status": "not_ready", "errors": ["Services not initialized"]}

    return {
        "status": "ready",
        "bills": len(services.billing.list_bills()),
        "audit_enabled": services.audit.enabled,
    }


@router.get("/health/live")
async def liveness_check() -> dict:
    """Liveness check - basic process health."""
    return {"status": "alive"}
