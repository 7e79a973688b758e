"""
Authentication schemas.
Pydantic v2 compliant.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from hostel_app.models.enums import UserRole
from hostel_app.schemas.common import BaseResponse, BaseSchema

__all__ = [
    "SignupRequest",
    "LoginRequest",
    "UserResponse",
    "AuthResponse",
    "ProfileResponse",
    "ClaimsResponse",
    "ValidateTokenResponse",
]

# bcrypt only reads the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


def _check_password_bytes(v: str) -> str:
    if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password cannot exceed {MAX_PASSWORD_BYTES} bytes")
    return v


class SignupRequest(BaseSchema):
    """User registration request."""

    email: EmailStr = Field(..., description="Email address (must be unique)")
    password: str = Field(..., min_length=6, max_length=72)
    name: str = Field(..., min_length=1, max_length=255)
    role: Optional[UserRole] = Field(
        default=None,
        description="Account role (defaults to student)",
    )

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, v: EmailStr) -> str:
        """Normalize email to lowercase."""
        return str(v).lower().strip()

    @field_validator("password")
    @classmethod
    def validate_password_bytes(cls, v: str) -> str:
        return _check_password_bytes(v)


class LoginRequest(BaseSchema):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=72)

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, v: EmailStr) -> str:
        return str(v).lower().strip()

    @field_validator("password")
    @classmethod
    def validate_password_bytes(cls, v: str) -> str:
        return _check_password_bytes(v)


class UserResponse(BaseSchema):
    """Public view of a user; never carries the password hash."""

    id: str
    email: str
    name: str
    role: str
    created_at: datetime
    updated_at: datetime


class AuthResponse(BaseResponse):
    token: str
    user: UserResponse


class ProfileResponse(BaseResponse):
    user: UserResponse


class ClaimsResponse(BaseSchema):
    user_id: str
    email: str
    name: str
    role: str
    issued_at: datetime
    expires_at: datetime


class ValidateTokenResponse(BaseSchema):
    valid: bool
    claims: Optional[ClaimsResponse] = None
