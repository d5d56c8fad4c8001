"""Request context middleware.

- Extracts or generates the X-Request-ID header
- Binds request_id/method/path into the logging context
- Echoes X-Request-ID and the elapsed time on the response
"""

import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from jtts.utils.logging import LogContext, get_logger

logger = get_logger("api")


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Set up request-scoped logging context for each request."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        start_time = time.perf_counter()

        with LogContext(request_id=request_id, method=request.method, path=request.url.path):
            logger.debug("Request started", client_ip=self._get_client_ip(request))

            try:
                response = await call_next(request)
            except Exception as exc:
                logger.error(
                    "Request failed with exception",
                    error_type=type(exc).__name__,
                    duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
                )
                raise

            duration_ms = (time.perf_counter() - start_time) * 1000
            response.headers["X-Request-ID"] = request_id
            response.headers["X-Request-Duration-Ms"] = f"{duration_ms:.2f}"

            logger.info(
                "Request completed",
                status_code=response.status_code,
                duration_ms=round(duration_ms, 2),
            )
            return response

    def _get_client_ip(self, request: Request) -> str | None:
        """Extract client IP from request, honouring reverse-proxy headers."""
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip

        if request.client:
            return request.client.host

        return None
