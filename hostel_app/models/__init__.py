"""Database models."""

from hostel_app.models.booking import Booking
from hostel_app.models.building import Bed, Building, Room
from hostel_app.models.enums import BookingStatus, RoomType, UserRole
from hostel_app.models.user import User

__all__ = [
    "Booking",
    "Building",
    "Room",
    "Bed",
    "User",
    "BookingStatus",
    "RoomType",
    "UserRole",
]
