"""Structured logging middleware for FastAPI requests."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Any

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from flightdesk.config.settings import settings

logger = logging.getLogger("flightdesk.middleware.structured")

COLOR_RESET = "\u001b[0m"
COLOR_GREEN = "\u001b[32m"
COLOR_CYAN = "\u001b[36m"
COLOR_YELLOW = "\u001b[33m"
COLOR_RED = "\u001b[31m"


class StructuredLoggingMiddleware(BaseHTTPMiddleware):
    """Emit one structured log line for each HTTP request."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        start_time = time.perf_counter()
        log_payload: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "method": request.method,
            "url": str(request.url),
            "path": request.url.path,
            "client_ip": request.client.host if request.client else None,
        }

        try:
            response = await call_next(request)
        except Exception as exc:
            log_payload["status_code"] = 500
            log_payload["duration_ms"] = self._elapsed_ms(start_time)
            log_payload["error"] = repr(exc)
            logger.exception(self._format_console_message(log_payload))
            raise

        log_payload["status_code"] = response.status_code
        log_payload["route"] = self._route_template(request)
        log_payload["duration_ms"] = self._elapsed_ms(start_time)
        logger.info(self._format_console_message(log_payload))
        await self._persist_log(log_payload)
        return response

    @staticmethod
    def _elapsed_ms(start_time: float) -> float:
        """Return elapsed milliseconds rounded to two decimals."""

        return round((time.perf_counter() - start_time) * 1000, 2)

    async def _persist_log(self, payload: dict[str, Any]) -> None:
        """Store the request log entry when persistence is enabled."""

        if not settings.persist_request_logs:
            return

        from flightdesk.database import session_scope
        from flightdesk.models.log import RequestLog

        timestamp_value = datetime.fromisoformat(payload["timestamp"])
        if timestamp_value.tzinfo is not None:
            timestamp_value = timestamp_value.astimezone(timezone.utc).replace(
                tzinfo=None
            )

        async with session_scope() as session:
            log_entry = RequestLog(
                received_at=timestamp_value,
                method=payload.get("method"),
                path=payload.get("path"),
                route=payload.get("route"),
                status_code=payload.get("status_code", 0),
                client_ip=payload.get("client_ip"),
                duration_ms=payload.get("duration_ms"),
            )

            session.add(log_entry)
            try:
                await session.commit()
            except Exception:
                await session.rollback()
                logger.exception("Failed to persist request log entry")

    @staticmethod
    def _route_template(request: Request) -> str | None:
        route = request.scope.get("route")
        return getattr(route, "path_format", None)

    @staticmethod
    def _format_console_message(payload: dict[str, Any]) -> str:
        """Return request metadata wrapped with ANSI color codes."""

        status = payload.get("status_code") or 0
        if 200 <= status < 300:
            color = COLOR_GREEN
        elif 400 <= status < 500:
            color = COLOR_YELLOW
        elif status >= 500:
            color = COLOR_RED
        else:
            color = COLOR_CYAN

        fields = [
            ("timestamp", payload.get("timestamp")),
            ("method", payload.get("method")),
            ("url", payload.get("url")),
            ("status", payload.get("status_code")),
            ("duration_ms", payload.get("duration_ms")),
            ("client_ip", payload.get("client_ip")),
        ]
        message = ", ".join(
            f"{name}={value if value is not None else '-'}" for name, value in fields
        )

        return f"{color}{message}{COLOR_RESET}"

