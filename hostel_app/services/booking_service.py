"""
Booking lifecycle: create, cancel and read bookings.

A booking lives in the local store while the bed it points at lives in the
building service's inventory. The two are not joined by a transaction, so
create runs as an explicit two-step saga:

1. insert the booking row (the partial unique indexes on active bookings
   decide races between concurrent requests);
2. mark the bed occupied in the inventory.

If step 2 fails, the row written in step 1 is deleted before the error is
returned. Cancel is deliberately asymmetric: the status change is
authoritative and releasing the bed afterwards is best effort.
"""

import logging
from typing import List

from sqlalchemy.orm import Session

from hostel_app.core.exceptions import (
    BookingNotFoundError,
    ConflictError,
    DatabaseError,
    DependencyError,
    ErrorCode,
    ValidationError,
)
from hostel_app.models.base import utcnow
from hostel_app.models.booking import Booking
from hostel_app.models.enums import BookingStatus
from hostel_app.repositories.booking_repository import BookingRepository
from hostel_app.schemas.booking import BookingCreate
from hostel_app.services.inventory_client import INVENTORY_SERVICE, BedInventoryClient

logger = logging.getLogger(__name__)

ACTIVE_BOOKING_MESSAGE = "You already have an active booking. Cancel it first to book a new bed."
BED_OCCUPIED_MESSAGE = "This bed is already occupied"
ALREADY_CANCELLED_MESSAGE = "Booking is already cancelled"
OCCUPANCY_FAILED_MESSAGE = "Failed to update bed occupancy"


class BookingService:
    """
    Booking state machine: ``active`` -> ``cancelled``.

    Instances are cheap and bound to one request's session.
    """

    def __init__(self, db: Session, inventory: BedInventoryClient):
        self.db = db
        self.repository = BookingRepository(db)
        self.inventory = inventory

    # -------------------------------------------------------------------------
    # Create
    # -------------------------------------------------------------------------

    def create_booking(self, request: BookingCreate) -> Booking:
        """
        Reserve a bed for a user.

        Args:
            request: Booking payload; ``user_id`` and ``bed_id`` are required

        Returns:
            The persisted, active booking

        Raises:
            ValidationError: If ``user_id`` or ``bed_id`` is missing
            ConflictError: If the user already holds an active booking or the
                bed is already taken
            DependencyError: If the inventory update failed; the booking row
                has been removed again
        """
        self._validate_create(request)

        # Fast path; the unique indexes remain the real arbiter.
        if self.repository.get_active_for_user(request.user_id):
            raise self._user_conflict()
        if self.repository.get_active_for_bed(request.bed_id):
            raise self._bed_conflict()

        booking = Booking(
            **request.model_dump(),
            booking_date=utcnow(),
            status=BookingStatus.ACTIVE.value,
        )

        try:
            self.repository.create(booking)
        except ConflictError as e:
            raise self._conflict_after_insert(request) from e

        try:
            self.inventory.occupy(booking.bed_id, booking.user_id, booking.user_name)
        except DependencyError as e:
            self._compensate(booking)
            raise DependencyError(
                OCCUPANCY_FAILED_MESSAGE,
                service=INVENTORY_SERVICE,
                details={"bed_id": request.bed_id},
            ) from e

        logger.info(
            f"Booking {booking.id} created for user {booking.user_id}",
            extra={"booking_id": booking.id, "bed_id": booking.bed_id},
        )
        return booking

    def _validate_create(self, request: BookingCreate) -> None:
        field_errors = {}
        if not request.user_id:
            field_errors["user_id"] = ["This field is required"]
        if not request.bed_id:
            field_errors["bed_id"] = ["This field is required"]
        if field_errors:
            raise ValidationError(
                "user_id and bed_id are required",
                field_errors=field_errors,
                error_code=ErrorCode.MISSING_REQUIRED_FIELD,
            )

    def _conflict_after_insert(self, request: BookingCreate) -> ConflictError:
        """Name the index that rejected a concurrent insert."""
        if self.repository.get_active_for_user(request.user_id):
            return self._user_conflict()
        return self._bed_conflict()

    def _compensate(self, booking: Booking) -> None:
        """Delete a booking whose bed could not be marked occupied."""
        log_extra = {"booking_id": booking.id, "bed_id": booking.bed_id}
        logger.error(
            f"Rolling back booking {booking.id}: bed {booking.bed_id} occupancy update failed",
            extra=log_extra,
        )
        try:
            self.repository.delete(booking)
        except DatabaseError:
            # The occupancy failure is still what the caller sees
            logger.error(
                f"Orphaned booking {log_extra['booking_id']}: compensating delete failed",
                extra=log_extra,
                exc_info=True,
            )

    @staticmethod
    def _user_conflict() -> ConflictError:
        return ConflictError(ACTIVE_BOOKING_MESSAGE, ErrorCode.BOOKING_CONFLICT)

    @staticmethod
    def _bed_conflict() -> ConflictError:
        return ConflictError(BED_OCCUPIED_MESSAGE, ErrorCode.BED_OCCUPIED)

    # -------------------------------------------------------------------------
    # Cancel
    # -------------------------------------------------------------------------

    def cancel_booking(self, booking_id: str) -> Booking:
        """
        Cancel an active booking and release its bed.

        A failed bed release is logged and does not undo the cancellation.

        Raises:
            BookingNotFoundError: If the booking does not exist
            ConflictError: If the booking is already cancelled
        """
        booking = self.get_booking(booking_id)
        if not booking.is_active:
            raise self._already_cancelled(booking_id)

        if not self.repository.mark_cancelled(booking.id, utcnow()):
            raise self._already_cancelled(booking_id)
        self.db.refresh(booking)

        try:
            self.inventory.release(booking.bed_id)
        except DependencyError as e:
            logger.warning(
                f"Bed {booking.bed_id} not released after cancelling booking {booking.id}: {e.message}",
                extra={"booking_id": booking.id, "bed_id": booking.bed_id},
            )

        logger.info(
            f"Booking {booking.id} cancelled",
            extra={"booking_id": booking.id, "bed_id": booking.bed_id},
        )
        return booking

    @staticmethod
    def _already_cancelled(booking_id: str) -> ConflictError:
        return ConflictError(
            ALREADY_CANCELLED_MESSAGE,
            ErrorCode.BOOKING_ALREADY_CANCELLED,
            details={"booking_id": booking_id},
        )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_booking(self, booking_id: str) -> Booking:
        booking = self.repository.get_by_id(booking_id)
        if booking is None:
            raise BookingNotFoundError(booking_id)
        return booking

    def list_bookings(self) -> List[Booking]:
        return self.repository.list_all()

    def list_user_bookings(self, user_id: str) -> List[Booking]:
        return self.repository.list_for_user(user_id)
