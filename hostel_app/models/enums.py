"""Enumerations shared by models and schemas."""

import enum


class UserRole(str, enum.Enum):
    """Account role carried in identity tokens."""
    STUDENT = "student"
    ADMIN = "admin"


class BookingStatus(str, enum.Enum):
    """Booking lifecycle status. ``cancelled`` is terminal."""
    ACTIVE = "active"
    CANCELLED = "cancelled"


class RoomType(str, enum.Enum):
    SINGLE = "single"
    DOUBLE = "double"
    TRIPLE = "triple"
    QUAD = "quad"
