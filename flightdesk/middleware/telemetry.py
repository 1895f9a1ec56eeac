"""Telemetry middleware for request instrumentation."""

from __future__ import annotations

import time
from typing import Any

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from flightdesk.telemetry import observe_request

UNMATCHED_ROUTE = "unmatched"


class TelemetryMiddleware(BaseHTTPMiddleware):
    """Collect request metrics for Prometheus, labelled by route template."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        start_time = time.perf_counter()
        method = request.method

        try:
            response = await call_next(request)
        except Exception:
            duration_seconds = time.perf_counter() - start_time
            observe_request(method, self._resolve_route(request), 500, duration_seconds)
            raise

        duration_seconds = time.perf_counter() - start_time
        observe_request(
            method,
            self._resolve_route(request),
            response.status_code,
            duration_seconds,
        )
        response.headers["X-Process-Time-Ms"] = f"{duration_seconds * 1000:.2f}"
        return response

    @staticmethod
    def _resolve_route(request: Request) -> str:
        """Return the matched route template, e.g. ``/api/flights/{flight_id}``.

        The router fills ``scope["route"]`` while handling the request, so this
        must run after ``call_next``. Unmatched paths share one label to keep
        metric cardinality bounded.
        """

        scope_route: Any = request.scope.get("route")
        if scope_route is not None:
            path = getattr(scope_route, "path_format", None) or getattr(
                scope_route, "path", None
            )
            if path:
                return path

        return UNMATCHED_ROUTE
