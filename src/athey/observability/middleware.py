"""FastAPI middleware for observability.

Provides correlation ID injection and request/response logging.
"""

import json
import re
import time
import uuid
from typing import Any

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from athey.observability.constants import CORRELATION_ID_HEADER, LogEvents
from athey.observability.context import set_correlation_id
from athey.observability.sanitizer import sanitize, sanitize_headers, truncate_body

logger = structlog.get_logger(__name__)

# Client-supplied IDs are echoed into logs and headers, so only plain tokens are kept
CORRELATION_ID_PATTERN = re.compile(r"[A-Za-z0-9._:-]{1,128}")


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """Middleware to extract or generate correlation IDs for request tracing.

    The correlation ID is:
    1. Taken from the X-Correlation-ID header when it is a well-formed token
    2. Generated as a new UUID v4 otherwise (missing, oversized or containing
       characters that could forge log lines)
    3. Stored in a ContextVar and bound to structlog for every log entry
    4. Returned in the response X-Correlation-ID header
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        """Process the request and inject correlation ID.

        Args:
            request: The incoming HTTP request.
            call_next: The next middleware/handler in the chain.

        Returns:
            The response with correlation ID header.
        """
        correlation_id = request.headers.get(CORRELATION_ID_HEADER, "")
        if not CORRELATION_ID_PATTERN.fullmatch(correlation_id):
            correlation_id = str(uuid.uuid4())

        set_correlation_id(correlation_id)

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=correlation_id)

        response = await call_next(request)
        response.headers[CORRELATION_ID_HEADER] = correlation_id

        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log request/response details.

    Logs request start, completion, and timing information
    with sanitized headers and request metadata.
    """

    def __init__(
        self,
        app: ASGIApp,
        log_request_headers: bool = False,
        log_request_body: bool = False,
        exclude_paths: set[str] | None = None,
    ) -> None:
        """Initialize the middleware.

        Args:
            app: The ASGI application.
            log_request_headers: Whether to log (sanitized) request headers.
            log_request_body: Whether to log (sanitized, truncated) JSON bodies.
            exclude_paths: Paths to exclude from logging (e.g., health checks).
        """
        super().__init__(app)
        self.log_request_headers = log_request_headers
        self.log_request_body = log_request_body
        self.exclude_paths = exclude_paths or {"/health", "/ready"}

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path in self.exclude_paths:
            return await call_next(request)

        start_time = time.perf_counter()

        request_context: dict[str, Any] = {
            "method": request.method,
            "path": request.url.path,
            "url": str(request.url),
            "client_ip": self._get_client_ip(request),
            "user_agent": request.headers.get("user-agent"),
        }

        started_context = {k: v for k, v in request_context.items() if v is not None}
        if self.log_request_headers:
            started_context["headers"] = sanitize_headers(dict(request.headers))
        if self.log_request_body:
            body = await self._read_json_body(request)
            if body is not None:
                started_context["body"] = body

        logger.info(LogEvents.REQUEST_STARTED, **started_context)

        try:
            response = await call_next(request)
        except Exception as exc:
            duration_ms = int((time.perf_counter() - start_time) * 1000)
            logger.error(
                LogEvents.REQUEST_FAILED,
                **request_context,
                duration_ms=duration_ms,
                error_type=type(exc).__name__,
                error_message=str(exc),
            )
            raise

        duration_ms = int((time.perf_counter() - start_time) * 1000)

        response_context = {
            **request_context,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        }

        if response.status_code >= 500:
            logger.error(LogEvents.REQUEST_FAILED, **response_context)
        elif response.status_code >= 400:
            logger.warning(LogEvents.REQUEST_COMPLETED, **response_context)
        else:
            logger.info(LogEvents.REQUEST_COMPLETED, **response_context)

        return response

    async def _read_json_body(self, request: Request) -> Any | None:
        """Read the body as JSON for logging; Starlette caches it for the handler."""
        raw = await request.body()
        if not raw:
            return None
        try:
            body = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError):
            return truncate_body(raw.decode("utf-8", errors="replace"))
        return truncate_body(sanitize(body))

    def _get_client_ip(self, request: Request) -> str:
        """Extract client IP from request, considering proxies."""
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("x-real-ip")
        if real_ip:
            return real_ip

        if request.client:
            return request.client.host

        return "unknown"
