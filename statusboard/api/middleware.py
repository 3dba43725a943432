import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from statusboard.common.logging import get_logger

logger = get_logger("middleware")


class RequestLogMiddleware(BaseHTTPMiddleware):
    """One log line per request, plus a duration header for the dashboard's network panel."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        logger.info(
            "%s %s %d %.1fms role=%s",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            request.headers.get("x-user-role", "admin"),
        )

        response.headers["X-Request-Duration-Ms"] = f"{duration_ms:.1f}"
        return response
