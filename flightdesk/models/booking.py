"""SQLAlchemy model for seat bookings."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from flightdesk.models.base import Base


class SeatClass(str, Enum):
    """Cabin a passenger is booked into."""

    ECONOMY = "Economy"
    BUSINESS = "Business"
    FIRST_CLASS = "First Class"


class BookingStatus(str, Enum):
    """Lifecycle of a booking. Cancelled bookings are deleted, not kept."""

    CONFIRMED = "Confirmed"


class Booking(Base):
    """A confirmed seat on one flight."""

    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    flight_id = Column(
        Integer,
        ForeignKey("flights.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    passenger_name = Column(String(100), nullable=False)
    seat_class = Column(String(20), nullable=False)
    status = Column(
        String(20),
        nullable=False,
        default=BookingStatus.CONFIRMED.value,
        index=True,
    )
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    flight = relationship("Flight", back_populates="bookings")


__all__ = ["Booking", "BookingStatus", "SeatClass"]
