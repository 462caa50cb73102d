"""Middleware for security headers and request logging."""

import logging
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from src.core.config import get_settings
from src.core.metrics import observe_http_request
from src.core.structured_logging import log_json, new_request_id, request_id_context

logger = logging.getLogger(__name__)

REQUEST_ID_HEADERS = ("X-Request-ID", "X-Correlation-ID")
MAX_REQUEST_ID_LENGTH = 128


def resolve_request_id(request: Request) -> str:
    """Reuse a well-formed caller-supplied correlation ID or mint a new one."""
    for header in REQUEST_ID_HEADERS:
        candidate = (request.headers.get(header) or "").strip()
        if candidate and len(candidate) <= MAX_REQUEST_ID_LENGTH and not any(c in candidate for c in "\r\n"):
            return candidate
    return new_request_id()


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add basic security headers to all responses."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        response.headers.setdefault("Cache-Control", "no-store")

        if get_settings().environment == "production":
            scheme = request.headers.get("x-forwarded-proto") or request.url.scheme
            if scheme == "https":
                response.headers.setdefault(
                    "Strict-Transport-Security",
                    "max-age=63072000; includeSubDomains",
                )

        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one JSON line per request and record HTTP metrics.

    The correlation ID is bound for the duration of the request so workflow
    events logged by the service carry it too, and echoed back in
    ``X-Request-ID``.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = resolve_request_id(request)
        request.state.request_id = request_id

        start_time = time.perf_counter()
        method = request.method
        path = request.url.path

        with request_id_context(request_id):
            try:
                response = await call_next(request)
            except Exception as exc:
                log_json(
                    logger,
                    logging.ERROR,
                    "request_error",
                    method=method,
                    path=path,
                    status_code=500,
                    duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
                    exception=exc.__class__.__name__,
                )
                raise

            duration_ms = (time.perf_counter() - start_time) * 1000
            response.headers.setdefault("X-Request-ID", request_id)

            route = request.scope.get("route")
            observe_http_request(
                method=method,
                route=getattr(route, "path", None) or "unmatched",
                status_code=response.status_code,
                duration_ms=duration_ms,
            )

            if response.status_code >= 500:
                level = logging.ERROR
            elif response.status_code >= 400:
                level = logging.WARNING
            else:
                level = logging.INFO

            log_json(
                logger,
                level,
                "request",
                method=method,
                path=path,
                status_code=response.status_code,
                duration_ms=round(duration_ms, 2),
            )
            return response
