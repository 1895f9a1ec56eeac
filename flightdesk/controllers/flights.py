"""Flight catalog endpoints: scheduling, updates and search."""

from typing import Annotated

from fastapi import APIRouter, Query, Request, status

from flightdesk.controllers.dependencies import CatalogDep
from flightdesk.controllers.rate_limit import FLIGHT_CREATE_LIMIT, limiter
from flightdesk.views import (
    ErrorResponse,
    FlightCreateRequest,
    FlightResponse,
    FlightSearchQuery,
    FlightStatusUpdateRequest,
    FlightUpdateRequest,
)

router = APIRouter(
    prefix="/flights",
    tags=["flights"],
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    },
)


@router.get("", response_model=list[FlightResponse])
async def list_flights(
    filters: Annotated[FlightSearchQuery, Query()],
    catalog: CatalogDep,
) -> list[FlightResponse]:
    """List every flight, or only those matching the supplied filters."""

    if filters.model_dump(exclude_none=True):
        flights = await catalog.search(
            origin=filters.origin,
            destination=filters.destination,
            departure_date=filters.date,
            flight_number=filters.flightNumber,
            status=filters.status,
        )
    else:
        flights = await catalog.find_all()
    return [FlightResponse.model_validate(flight) for flight in flights]


@router.get("/{flight_id}", response_model=FlightResponse)
async def get_flight(flight_id: int, catalog: CatalogDep) -> FlightResponse:
    flight = await catalog.get(flight_id)
    return FlightResponse.model_validate(flight)


@router.post(
    "",
    response_model=FlightResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(FLIGHT_CREATE_LIMIT)
async def create_flight(
    request: Request,
    payload: FlightCreateRequest,
    catalog: CatalogDep,
) -> FlightResponse:
    """Schedule a flight; the number must be unused on that UTC day."""

    flight = await catalog.create(
        flight_number=payload.flightNumber,
        origin=payload.origin,
        destination=payload.destination,
        departure_time=payload.departureTime,
        arrival_time=payload.arrivalTime,
        capacity=payload.capacity,
    )
    return FlightResponse.model_validate(flight)


@router.patch("/{flight_id}", response_model=FlightResponse)
async def update_flight(
    flight_id: int,
    payload: FlightUpdateRequest,
    catalog: CatalogDep,
) -> FlightResponse:
    """Change any subset of a flight's fields."""

    flight = await catalog.update(flight_id, payload.to_changes())
    return FlightResponse.model_validate(flight)


@router.patch("/{flight_id}/status", response_model=FlightResponse)
async def update_flight_status(
    flight_id: int,
    payload: FlightStatusUpdateRequest,
    catalog: CatalogDep,
) -> FlightResponse:
    """Update flight status"""

    flight = await catalog.update_status(flight_id, payload.status)
    return FlightResponse.model_validate(flight)
