"""Persisted access log of API requests."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, DateTime, Float, Index, Integer, String

from .base import Base


class RequestLog(Base):
    """One handled request, written by the logging middleware when enabled."""

    __tablename__ = "request_logs"

    id = Column(Integer, primary_key=True)
    received_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    method = Column(String(10), nullable=False)
    path = Column(String(2048), nullable=False)
    # Route template such as /api/flights/{flight_id}; null when nothing matched.
    route = Column(String(255), nullable=True)
    status_code = Column(Integer, nullable=False)
    client_ip = Column(String(64), nullable=True)
    duration_ms = Column(Float, nullable=True)

    __table_args__ = (
        Index("ix_request_logs_route_status", "route", "status_code"),
        Index("ix_request_logs_received_at", "received_at"),
    )


__all__ = ["RequestLog"]
