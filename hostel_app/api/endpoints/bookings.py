"""
Booking endpoints.

Every route needs a valid token; listing all bookings additionally needs the
``admin`` role. Creating and cancelling are limited to the booking's own user
unless the caller is an admin.
"""

from fastapi import APIRouter, Depends, status

from hostel_app.api import deps
from hostel_app.core.security import TokenClaims, authorize_owner
from hostel_app.models.enums import UserRole
from hostel_app.schemas.booking import (
    BookingCreate,
    BookingResponse,
    BookingSchema,
    BookingsResponse,
)
from hostel_app.services import BookingService

router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
def create_booking(
    payload: BookingCreate,
    claims: TokenClaims = Depends(deps.get_current_claims),
    service: BookingService = Depends(deps.get_booking_service),
):
    """Reserve a bed; fails with 409 on an existing active booking or taken bed."""
    if payload.user_id:
        authorize_owner(claims, payload.user_id)
    booking = service.create_booking(payload)
    return BookingResponse(
        message="Booking created successfully",
        booking=BookingSchema.model_validate(booking),
    )


@router.get("", response_model=BookingsResponse)
def list_bookings(
    claims: TokenClaims = Depends(deps.require_role(UserRole.ADMIN)),
    service: BookingService = Depends(deps.get_booking_service),
):
    bookings = service.list_bookings()
    return BookingsResponse(bookings=[BookingSchema.model_validate(b) for b in bookings])


@router.get("/users/{user_id}", response_model=BookingsResponse)
def list_user_bookings(
    user_id: str,
    claims: TokenClaims = Depends(deps.get_current_claims),
    service: BookingService = Depends(deps.get_booking_service),
):
    bookings = service.list_user_bookings(user_id)
    return BookingsResponse(bookings=[BookingSchema.model_validate(b) for b in bookings])


@router.get("/{booking_id}", response_model=BookingResponse)
def get_booking(
    booking_id: str,
    claims: TokenClaims = Depends(deps.get_current_claims),
    service: BookingService = Depends(deps.get_booking_service),
):
    booking = service.get_booking(booking_id)
    return BookingResponse(booking=BookingSchema.model_validate(booking))


@router.put("/{booking_id}/cancel", response_model=BookingResponse)
def cancel_booking(
    booking_id: str,
    claims: TokenClaims = Depends(deps.get_current_claims),
    service: BookingService = Depends(deps.get_booking_service),
):
    authorize_owner(claims, service.get_booking(booking_id).user_id)
    booking = service.cancel_booking(booking_id)
    return BookingResponse(
        message="Booking cancelled successfully",
        booking=BookingSchema.model_validate(booking),
    )
