"""
Request Context Middleware.

Binds request id, timing, and the requesting hostname to every page request.
The hostname is what the delivery client keys its config lookup on, so it
is carried in the log context for every record emitted during a request.
"""

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from intake.backend.core.logging import get_logger

logger = get_logger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Middleware that adds request context to every request.

    Headers:
    - X-Request-ID: Unique request identifier (generated if not provided)
    - X-Response-Time: Response duration in milliseconds

    Access in endpoints:
        request.state.request_id
        request.state.hostname
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request with context tracking."""
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        hostname = request.url.hostname or ""
        started = time.perf_counter()

        request.state.request_id = request_id
        request.state.hostname = hostname

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            hostname=hostname,
            method=request.method,
            path=request.url.path,
        )

        logger.debug(
            "Request started",
            extra={"client_host": request.client.host if request.client else None},
        )

        try:
            response = await call_next(request)

            duration_ms = int((time.perf_counter() - started) * 1000)
            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{duration_ms}ms"

            logger.debug(
                "Request completed",
                extra={"status_code": response.status_code, "duration_ms": duration_ms},
            )
            return response

        except Exception as exc:
            duration_ms = int((time.perf_counter() - started) * 1000)
            logger.error(
                "Request failed with exception",
                extra={"duration_ms": duration_ms, "error_type": type(exc).__name__},
            )
            raise

        finally:
            structlog.contextvars.clear_contextvars()
