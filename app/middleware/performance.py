"""
Request timing middleware.
Stamps X-Processing-Time on every response and logs slow CRM requests.
"""

from typing import Callable, Dict, Any
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
import logging
import time

logger = logging.getLogger(__name__)


def route_label(request: Request) -> str:
    """Method plus the matched route template, e.g. 'GET /api/customers/{customer_id}'."""
    route = request.scope.get("route")
    path = getattr(route, "path", None) or request.url.path
    return f"{request.method} {path}"


class RequestTimingMiddleware(BaseHTTPMiddleware):
    """Times each request; anything over the threshold is logged as a warning."""

    def __init__(self, app: ASGIApp, slow_request_threshold: float = 2.0):
        super().__init__(app)
        self.slow_request_threshold = slow_request_threshold

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        started = time.perf_counter()

        response = await call_next(request)

        elapsed = time.perf_counter() - started
        response.headers["X-Processing-Time"] = f"{elapsed:.3f}"

        request_id = getattr(request.state, "request_id", "unknown")
        label = route_label(request)
        context: Dict[str, Any] = {
            "request_id": request_id,
            "route": label,
            "status_code": response.status_code,
            "processing_time": round(elapsed, 4),
        }

        if elapsed > self.slow_request_threshold:
            if request.query_params:
                context["query_params"] = dict(request.query_params)
            logger.warning(f"Slow request [{request_id}]: {label} took {elapsed:.3f}s", extra=context)
        else:
            logger.debug(f"[{request_id}] {label} {response.status_code} in {elapsed:.3f}s", extra=context)

        return response
