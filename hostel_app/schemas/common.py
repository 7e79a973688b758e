"""
Base schema classes with common configuration.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """
    Base schema with common Pydantic configuration.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class BaseResponse(BaseSchema):
    """Envelope shared by every success response."""

    success: bool = True
    message: Optional[str] = None


class HealthResponse(BaseSchema):
    status: str
    service: str
