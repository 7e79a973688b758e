"""
Booking request and response schemas.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from hostel_app.schemas.common import BaseResponse, BaseSchema

__all__ = [
    "BookingCreate",
    "BookingSchema",
    "BookingResponse",
    "BookingsResponse",
]


class BookingCreate(BaseSchema):
    """
    Booking creation request.

    ``user_id`` and ``bed_id`` are mandatory; the descriptive fields are
    copied onto the booking as given.
    """

    user_id: str = Field(default="", max_length=255)
    user_name: str = Field(default="", max_length=255)
    building_id: str = Field(default="", max_length=255)
    building_name: str = Field(default="", max_length=255)
    room_id: str = Field(default="", max_length=255)
    room_number: str = Field(default="", max_length=50)
    bed_id: str = Field(default="", max_length=255)
    bed_number: int = 0


class BookingSchema(BaseSchema):
    id: str
    user_id: str
    user_name: str
    building_id: str
    building_name: str
    room_id: str
    room_number: str
    bed_id: str
    bed_number: int
    booking_date: datetime
    status: str
    created_at: datetime
    updated_at: datetime


class BookingResponse(BaseResponse):
    booking: Optional[BookingSchema] = None


class BookingsResponse(BaseResponse):
    bookings: List[BookingSchema] = Field(default_factory=list)
