"""
Booking repository.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hostel_app.core.exceptions import DatabaseError
from hostel_app.core.logging import get_logger
from hostel_app.models.booking import Booking
from hostel_app.models.enums import BookingStatus
from hostel_app.repositories.base_repository import BaseRepository

logger = get_logger(__name__)


class BookingRepository(BaseRepository[Booking]):
    """Data access for bookings."""

    def __init__(self, db: Session):
        super().__init__(Booking, db)

    def _newest_first(self):
        return (Booking.booking_date.desc(), Booking.created_at.desc(), Booking.id)

    def get_active_for_user(self, user_id: str) -> Optional[Booking]:
        return self.find_one(
            Booking.user_id == user_id,
            Booking.status == BookingStatus.ACTIVE.value,
        )

    def get_active_for_bed(self, bed_id: str) -> Optional[Booking]:
        return self.find_one(
            Booking.bed_id == bed_id,
            Booking.status == BookingStatus.ACTIVE.value,
        )

    def list_all(self) -> List[Booking]:
        """All bookings, most recent booking date first."""
        return self.find_all(order_by=self._newest_first())

    def list_for_user(self, user_id: str) -> List[Booking]:
        """A user's bookings, most recent booking date first."""
        return self.find_all(Booking.user_id == user_id, order_by=self._newest_first())

    def mark_cancelled(self, booking_id: str, when: datetime) -> bool:
        """
        Move an active booking to ``cancelled``.

        The status guard is part of the UPDATE itself, so two concurrent
        cancellations cannot both succeed.

        Returns:
            True if this call performed the transition
        """
        statement = (
            update(Booking)
            .where(
                Booking.id == booking_id,
                Booking.status == BookingStatus.ACTIVE.value,
            )
            .values(status=BookingStatus.CANCELLED.value, updated_at=when)
        )
        try:
            result = self.db.execute(statement)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Cancel update failed: {e}", exc_info=True)
            raise DatabaseError() from e

        return result.rowcount == 1
