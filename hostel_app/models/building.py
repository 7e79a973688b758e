"""
Building, room and bed models.

Beds are the inventory the booking flow reserves; ``is_occupied`` is the
single source of truth for availability.
"""

from decimal import Decimal
from typing import List, Optional

from sqlalchemy import JSON, Boolean, ForeignKey, Integer, Numeric, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hostel_app.db.base import Base
from hostel_app.models.base import TimestampMixin, UUIDMixin
from hostel_app.models.enums import RoomType

__all__ = ["Building", "Room", "Bed"]

AmenitiesType = JSON().with_variant(JSONB(), "postgresql")


class Building(UUIDMixin, TimestampMixin, Base):
    """Hostel building with aggregate bed counts."""

    __tablename__ = "buildings"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    total_rooms: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_beds: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    available_beds: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    amenities: Mapped[List[str]] = mapped_column(AmenitiesType, nullable=False, default=list)
    image: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    rooms: Mapped[List["Room"]] = relationship(
        back_populates="building",
        order_by="Room.number",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Building(id={self.id}, name={self.name})>"


class Room(UUIDMixin, TimestampMixin, Base):
    """Room within a building."""

    __tablename__ = "rooms"

    building_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("buildings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    number: Mapped[str] = mapped_column(String(50), nullable=False)
    type: Mapped[str] = mapped_column(String(50), nullable=False, default=RoomType.SINGLE.value)
    total_beds: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    available_beds: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    amenities: Mapped[List[str]] = mapped_column(AmenitiesType, nullable=False, default=list)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=Decimal("0"))

    building: Mapped[Building] = relationship(back_populates="rooms")
    beds: Mapped[List["Bed"]] = relationship(
        back_populates="room",
        order_by="Bed.number",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        UniqueConstraint("building_id", "number", name="uq_rooms_building_number"),
    )

    def __repr__(self) -> str:
        return f"<Room(id={self.id}, number={self.number})>"


class Bed(UUIDMixin, Base):
    """Single bed and its current occupant."""

    __tablename__ = "beds"

    room_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("rooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    number: Mapped[int] = mapped_column(Integer, nullable=False)
    is_occupied: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    occupied_by: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, index=True)
    occupied_by_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    room: Mapped[Room] = relationship(back_populates="beds")

    __table_args__ = (
        UniqueConstraint("room_id", "number", name="uq_beds_room_number"),
    )

    def __repr__(self) -> str:
        return f"<Bed(id={self.id}, number={self.number}, occupied={self.is_occupied})>"
