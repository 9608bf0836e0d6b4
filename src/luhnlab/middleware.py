"""
HTTP middleware: response hardening and access logging.
"""

import logging
import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from luhnlab.config import settings

logger = logging.getLogger("luhnlab.access")

BASE_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}
HSTS_VALUE = "max-age=31536000; includeSubDomains"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Stamp hardening headers on every response and drop ``Server``."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        response.headers.update(BASE_SECURITY_HEADERS)
        # production is served over HTTPS only
        if settings.is_production:
            response.headers["Strict-Transport-Security"] = HSTS_VALUE
        if "server" in response.headers:
            del response.headers["server"]
        return response


def _request_id(request: Request) -> str:
    return request.headers.get("X-Request-ID") or f"req_{uuid.uuid4().hex[:12]}"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """One log line in, one out; echoes X-Request-ID and adds X-Process-Time."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = _request_id(request)
        peer = request.client.host if request.client else "unknown"
        logger.info("-> %s %s [%s] peer=%s", request.method, request.url.path, request_id, peer)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - started

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        logger.info(
            "<- %s %s [%s] %d in %.3fs",
            request.method,
            request.url.path,
            request_id,
            response.status_code,
            elapsed,
        )
        return response
