"""Pydantic schemas for seat bookings."""

from __future__ import annotations

import unicodedata
from datetime import datetime
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from flightdesk.models.booking import BookingStatus, SeatClass
from flightdesk.utils.dates import as_utc

NAME_PUNCTUATION = frozenset(" ,.'-")


def validate_passenger_name(value: str) -> str:
    """Allow letters, combining marks, spaces and ``,.'-`` only."""

    if not value.strip():
        raise ValueError("passengerName cannot be empty")
    for char in value:
        if char in NAME_PUNCTUATION:
            continue
        if unicodedata.category(char)[0] not in ("L", "M"):
            raise ValueError(
                "passengerName may only contain letters, spaces and , . ' -"
            )
    return value


def parse_seat_class(value: Any) -> Any:
    if isinstance(value, str):
        for member in SeatClass:
            if member.value.lower() == value.strip().lower():
                return member
        raise ValueError("seatClass must be Economy, Business, or First Class")
    return value


class BookingCreateRequest(BaseModel):
    """Payload to book one seat."""

    passengerName: str = Field(
        ...,
        min_length=1,
        max_length=100,
        examples=["John Doe"],
        validation_alias=AliasChoices("passengerName", "passenger_name"),
        serialization_alias="passengerName",
    )
    seatClass: SeatClass = Field(
        ...,
        examples=["Economy"],
        validation_alias=AliasChoices("seatClass", "seat_class"),
        serialization_alias="seatClass",
    )

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    @field_validator("passengerName")
    @classmethod
    def validate_name(cls, value: str) -> str:
        return validate_passenger_name(value)

    @field_validator("seatClass", mode="before")
    @classmethod
    def validate_seat_class(cls, value: Any) -> Any:
        return parse_seat_class(value)


class BookingResponse(BaseModel):
    """Serialized booking."""

    id: int
    flightId: int = Field(
        ...,
        validation_alias=AliasChoices("flightId", "flight_id"),
        serialization_alias="flightId",
    )
    passengerName: str = Field(
        ...,
        validation_alias=AliasChoices("passengerName", "passenger_name"),
        serialization_alias="passengerName",
    )
    seatClass: SeatClass = Field(
        ...,
        validation_alias=AliasChoices("seatClass", "seat_class"),
        serialization_alias="seatClass",
    )
    status: BookingStatus
    createdAt: Optional[datetime] = Field(
        None,
        validation_alias=AliasChoices("createdAt", "created_at"),
        serialization_alias="createdAt",
    )

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    @field_validator("createdAt")
    @classmethod
    def attach_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is None:
            return value
        return as_utc(value)
