"""
User account model owned by the auth store.
"""

from sqlalchemy import CheckConstraint, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from hostel_app.db.base import Base
from hostel_app.models.base import TimestampMixin, UUIDMixin
from hostel_app.models.enums import UserRole

__all__ = ["User"]


class User(UUIDMixin, TimestampMixin, Base):
    """
    Registered account.

    ``password_hash`` never leaves the auth service; response schemas do not
    declare it.
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    role: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default=UserRole.STUDENT.value,
        index=True,
    )

    __table_args__ = (
        CheckConstraint(
            "role IN ('student', 'admin')",
            name="ck_users_role",
        ),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
