"""SQLAlchemy model for scheduled flights."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from flightdesk.models.base import Base


class FlightStatus(str, Enum):
    """Operational states a flight moves through."""

    SCHEDULED = "Scheduled"
    DELAYED = "Delayed"
    CANCELLED = "Cancelled"
    BOARDING = "Boarding"
    DEPARTED = "Departed"
    ARRIVED = "Arrived"


class Flight(Base):
    """A single departure of a flight number on a given day."""

    __tablename__ = "flights"

    id = Column(Integer, primary_key=True, index=True)
    flight_number = Column(String(8), nullable=False, index=True)
    origin = Column(String(4), nullable=False, index=True)
    destination = Column(String(4), nullable=False, index=True)
    departure_time = Column(DateTime, nullable=False, index=True)
    arrival_time = Column(DateTime, nullable=False)
    capacity = Column(Integer, nullable=False)
    status = Column(String(20), nullable=False, default=FlightStatus.SCHEDULED.value)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    __table_args__ = (
        CheckConstraint(
            "capacity >= 1 AND capacity <= 1000",
            name="ck_flights_capacity_range",
        ),
        CheckConstraint(
            "arrival_time > departure_time",
            name="ck_flights_arrival_after_departure",
        ),
    )

    bookings = relationship(
        "Booking",
        back_populates="flight",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Booking.id",
    )


__all__ = ["Flight", "FlightStatus"]
