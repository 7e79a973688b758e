from hostel_app.repositories.base_repository import BaseRepository
from hostel_app.repositories.booking_repository import BookingRepository
from hostel_app.repositories.building_repository import BuildingRepository
from hostel_app.repositories.user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "BookingRepository",
    "BuildingRepository",
    "UserRepository",
]
