"""
Booking model.

A booking ties one user to one bed. The two partial unique indexes make the
database the arbiter of "one active booking per user" and "one active
booking per bed"; application-level checks only give friendlier errors.
"""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from hostel_app.db.base import Base
from hostel_app.models.base import TimestampMixin, UUIDMixin, utcnow
from hostel_app.models.enums import BookingStatus

__all__ = ["Booking"]

_ACTIVE = text("status = 'active'")


class Booking(UUIDMixin, TimestampMixin, Base):
    """
    Bed reservation for a user.

    Lifecycle: ``active`` -> ``cancelled``. Rows are only ever deleted as the
    compensating step of a failed create.
    """

    __tablename__ = "bookings"

    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    user_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    building_id: Mapped[str] = mapped_column(String(255), nullable=False, default="", index=True)
    building_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    room_id: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    room_number: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    bed_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    bed_number: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    booking_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    status: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default=BookingStatus.ACTIVE.value,
        index=True,
    )

    __table_args__ = (
        CheckConstraint(
            "status IN ('active', 'cancelled')",
            name="ck_bookings_status",
        ),
        Index(
            "uq_bookings_active_user",
            "user_id",
            unique=True,
            postgresql_where=_ACTIVE,
            sqlite_where=_ACTIVE,
        ),
        Index(
            "uq_bookings_active_bed",
            "bed_id",
            unique=True,
            postgresql_where=_ACTIVE,
            sqlite_where=_ACTIVE,
        ),
    )

    @property
    def is_active(self) -> bool:
        return self.status == BookingStatus.ACTIVE.value

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, user_id={self.user_id}, bed_id={self.bed_id}, status={self.status})>"
