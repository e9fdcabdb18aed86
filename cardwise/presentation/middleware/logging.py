"""Request/response logging middleware with timing."""

import time
from typing import Callable
from urllib.parse import unquote

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from cardwise.core.metrics import record_http_request
from .request_context import get_request_id

logger = structlog.get_logger(__name__)


def _route_template(request: Request) -> str:
    """
    Full request path with path parameter values replaced by their names.

    Built from the URL rather than the matched route, whose path may lack
    the prefixes of the routers it was included through.
    """
    if request.scope.get("route") is None:
        return "unmatched"

    names = {str(value): name for name, value in request.path_params.items()}
    segments = [
        f"{{{names[unquote(segment)]}}}" if unquote(segment) in names else segment
        for segment in request.url.path.split("/")
    ]
    return "/".join(segments)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs request start, completion, and duration."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        method = request.method
        path = request.url.path

        log = logger.bind(
            request_id=get_request_id(),
            method=method,
            path=path,
        )

        log.debug("request_started")

        try:
            response = await call_next(request)
            duration = time.perf_counter() - start_time

            log.info(
                "request_completed",
                status_code=response.status_code,
                duration_ms=round(duration * 1000, 2),
            )
            record_http_request(method, _route_template(request), response.status_code, duration)

            return response

        except Exception as e:
            duration = time.perf_counter() - start_time

            log.error(
                "request_failed",
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=round(duration * 1000, 2),
            )
            record_http_request(method, _route_template(request), 500, duration)
            raise
