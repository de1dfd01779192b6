"""Request logging and API-key checks for the clinic API."""

import hmac
import logging
import time
from typing import Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """One log line per request with its status and elapsed time.

    Client errors (4xx) are logged at WARNING so rejected billing and
    status-change requests stand out; the elapsed seconds are also
    returned in ``X-Process-Time``.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - started

        level = logging.WARNING if 400 <= response.status_code < 500 else logging.INFO
        logger.log(
            level,
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"in {elapsed:.3f}s client={_client_host(request)}",
        )

        response.headers["X-Process-Time"] = f"{elapsed:.3f}"
        return response


def _client_host(request: Request) -> str:
    return request.client.host if request.client else "unknown"


class APIKeyMiddleware(BaseHTTPMiddleware):
    """Rejects requests without the configured key.

    The key is accepted as ``Authorization: Bearer <key>`` or ``X-API-Key``.
    Health probes and the OpenAPI docs stay open.
    """

    SKIP_PATHS = ("/health", "/health/ready", "/health/live", "/docs", "/openapi.json")

    def __init__(self, app, api_key: str):
        super().__init__(app)
        self.api_key = api_key

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path in self.SKIP_PATHS:
            return await call_next(request)

        auth_header = request.headers.get("Authorization")
        api_key_header = request.headers.get("X-API-Key")

        provided_key = None
        if auth_header and auth_header.startswith("Bearer "):
            provided_key = auth_header[7:]
        elif api_key_header:
            provided_key = api_key_header

        if not provided_key or not hmac.compare_digest(provided_key, self.api_key):
            logger.warning(
                f"Unauthorized request: {request.method} {request.url.path} "
                f"client={_client_host(request)}"
            )
            return JSONResponse(
                status_code=401,
                content={"message": "Invalid or missing API key", "error_code": "UNAUTHORIZED"},
            )

        return await call_next(request)
