"""Booking endpoints scoped to a single flight."""

from fastapi import APIRouter, Request, status

from flightdesk.controllers.dependencies import LedgerDep
from flightdesk.controllers.rate_limit import BOOKING_CREATE_LIMIT, limiter
from flightdesk.views import (
    BookingCreateRequest,
    BookingResponse,
    ErrorResponse,
    MessageResponse,
)

router = APIRouter(
    prefix="/flights/{flight_id}/bookings",
    tags=["bookings"],
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    },
)


@router.get("", response_model=list[BookingResponse])
async def list_bookings(flight_id: int, ledger: LedgerDep) -> list[BookingResponse]:
    """Return the flight's bookings in creation order."""

    bookings = await ledger.get_bookings_for_flight(flight_id)
    return [BookingResponse.model_validate(booking) for booking in bookings]


@router.post(
    "",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(BOOKING_CREATE_LIMIT)
async def create_booking(
    request: Request,
    flight_id: int,
    payload: BookingCreateRequest,
    ledger: LedgerDep,
) -> BookingResponse:
    """Book one seat if the flight still has capacity."""

    booking = await ledger.create_booking(
        flight_id,
        passenger_name=payload.passengerName,
        seat_class=payload.seatClass,
    )
    return BookingResponse.model_validate(booking)


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    flight_id: int,
    booking_id: int,
    ledger: LedgerDep,
) -> BookingResponse:
    booking = await ledger.get_booking(flight_id, booking_id)
    return BookingResponse.model_validate(booking)


@router.delete("/{booking_id}", response_model=MessageResponse)
async def cancel_booking(
    flight_id: int,
    booking_id: int,
    ledger: LedgerDep,
) -> MessageResponse:
    """Cancel a booking; it must belong to this flight."""

    await ledger.cancel_booking(flight_id, booking_id)
    return MessageResponse(message="Booking canceled successfully")
