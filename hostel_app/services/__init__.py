"""Business logic services."""

from hostel_app.services.auth_service import AuthService
from hostel_app.services.booking_service import BookingService
from hostel_app.services.building_service import BuildingService
from hostel_app.services.inventory_client import BedInventoryClient, HttpBedInventoryClient

__all__ = [
    "AuthService",
    "BookingService",
    "BuildingService",
    "BedInventoryClient",
    "HttpBedInventoryClient",
]
