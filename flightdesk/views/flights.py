"""Pydantic schemas for flight scheduling and search."""

from __future__ import annotations

import re
from datetime import date as Date
from datetime import datetime
from typing import Any, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)

from flightdesk.models.flight import FlightStatus
from flightdesk.utils.dates import as_utc

FLIGHT_NUMBER_PATTERN = re.compile(r"^[A-Za-z0-9-]{3,8}$")
AIRPORT_CODE_PATTERN = re.compile(r"^[A-Za-z]{3,4}$")


def normalize_flight_number(value: str) -> str:
    if not isinstance(value, str) or not FLIGHT_NUMBER_PATTERN.fullmatch(value):
        raise ValueError(
            "flightNumber must be alphanumeric (e.g. JB-202) and between 3 and 8 characters"
        )
    return value.upper()


def normalize_airport_code(value: str) -> str:
    if not isinstance(value, str) or not AIRPORT_CODE_PATTERN.fullmatch(value):
        raise ValueError("airport code must be 3-4 letters (IATA/ICAO code)")
    return value.upper()


def parse_flight_status(value: Any) -> Any:
    """Accept a status in any letter case and return its canonical member."""

    if isinstance(value, str):
        for member in FlightStatus:
            if member.value.lower() == value.strip().lower():
                return member
        allowed = ", ".join(member.value for member in FlightStatus)
        raise ValueError(f"status must be one of: {allowed}")
    return value


class FlightCreateRequest(BaseModel):
    """Payload to schedule a flight."""

    flightNumber: str = Field(
        ...,
        examples=["JB-101"],
        validation_alias=AliasChoices("flightNumber", "flight_number"),
        serialization_alias="flightNumber",
    )
    origin: str = Field(..., examples=["JFK"])
    destination: str = Field(..., examples=["LAX"])
    departureTime: datetime = Field(
        ...,
        examples=["2025-03-15T14:00:00.000Z"],
        validation_alias=AliasChoices("departureTime", "departure_time"),
        serialization_alias="departureTime",
    )
    arrivalTime: datetime = Field(
        ...,
        examples=["2025-03-15T18:00:00.000Z"],
        validation_alias=AliasChoices("arrivalTime", "arrival_time"),
        serialization_alias="arrivalTime",
    )
    capacity: int = Field(..., ge=1, le=1000, examples=[200])

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    @field_validator("flightNumber")
    @classmethod
    def validate_flight_number(cls, value: str) -> str:
        return normalize_flight_number(value)

    @field_validator("origin", "destination")
    @classmethod
    def validate_airport(cls, value: str) -> str:
        return normalize_airport_code(value)


class FlightUpdateRequest(BaseModel):
    """Partial update; only the supplied fields change."""

    flightNumber: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("flightNumber", "flight_number"),
        serialization_alias="flightNumber",
    )
    origin: Optional[str] = None
    destination: Optional[str] = None
    departureTime: Optional[datetime] = Field(
        None,
        validation_alias=AliasChoices("departureTime", "departure_time"),
        serialization_alias="departureTime",
    )
    arrivalTime: Optional[datetime] = Field(
        None,
        validation_alias=AliasChoices("arrivalTime", "arrival_time"),
        serialization_alias="arrivalTime",
    )
    capacity: Optional[int] = Field(None, ge=1, le=1000)
    status: Optional[FlightStatus] = None

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    @field_validator("flightNumber")
    @classmethod
    def validate_flight_number(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return normalize_flight_number(value)

    @field_validator("origin", "destination")
    @classmethod
    def validate_airport(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return normalize_airport_code(value)

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, value: Any) -> Any:
        return parse_flight_status(value)

    def to_changes(self) -> dict[str, Any]:
        """Return the supplied fields keyed by model attribute name."""

        names = {
            "flightNumber": "flight_number",
            "departureTime": "departure_time",
            "arrivalTime": "arrival_time",
        }
        return {
            names.get(key, key): value
            for key, value in self.model_dump(exclude_unset=True).items()
        }


class FlightStatusUpdateRequest(BaseModel):
    """Payload for a status transition."""

    status: FlightStatus

    model_config = ConfigDict(extra="forbid")

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, value: Any) -> Any:
        return parse_flight_status(value)


class FlightSearchQuery(BaseModel):
    """Query-string filters for the flight listing."""

    origin: Optional[str] = None
    destination: Optional[str] = None
    date: Optional[Date] = Field(
        None,
        description="Departure day (YYYY-MM-DD, UTC)",
    )
    flightNumber: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("flightNumber", "flight_number"),
    )
    status: Optional[FlightStatus] = None

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    @field_validator("origin", "destination")
    @classmethod
    def validate_airport(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return normalize_airport_code(value)

    @field_validator("flightNumber")
    @classmethod
    def validate_flight_number(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return normalize_flight_number(value)

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, value: Any) -> Any:
        return parse_flight_status(value)


class FlightResponse(BaseModel):
    """Serialized flight."""

    id: int
    flightNumber: str = Field(
        ...,
        validation_alias=AliasChoices("flightNumber", "flight_number"),
        serialization_alias="flightNumber",
    )
    origin: str
    destination: str
    departureTime: datetime = Field(
        ...,
        validation_alias=AliasChoices("departureTime", "departure_time"),
        serialization_alias="departureTime",
    )
    arrivalTime: datetime = Field(
        ...,
        validation_alias=AliasChoices("arrivalTime", "arrival_time"),
        serialization_alias="arrivalTime",
    )
    capacity: int
    status: FlightStatus
    createdAt: Optional[datetime] = Field(
        None,
        validation_alias=AliasChoices("createdAt", "created_at"),
        serialization_alias="createdAt",
    )
    updatedAt: Optional[datetime] = Field(
        None,
        validation_alias=AliasChoices("updatedAt", "updated_at"),
        serialization_alias="updatedAt",
    )

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    @field_validator("departureTime", "arrivalTime", "createdAt", "updatedAt")
    @classmethod
    def attach_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is None:
            return value
        return as_utc(value)
