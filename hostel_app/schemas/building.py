"""
Building, room and bed schemas.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from hostel_app.schemas.common import BaseResponse, BaseSchema


class BedSchema(BaseSchema):
    id: str
    room_id: str
    number: int
    is_occupied: bool
    occupied_by: Optional[str] = None
    occupied_by_name: Optional[str] = None


class RoomSchema(BaseSchema):
    id: str
    building_id: str
    number: str
    type: str
    total_beds: int
    available_beds: int
    amenities: List[str] = Field(default_factory=list)
    price: float
    created_at: datetime
    updated_at: datetime
    beds: List[BedSchema] = Field(default_factory=list)


class BuildingSchema(BaseSchema):
    id: str
    name: str
    description: str
    total_rooms: int
    total_beds: int
    available_beds: int
    amenities: List[str] = Field(default_factory=list)
    image: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    rooms: List[RoomSchema] = Field(default_factory=list)


class BedOccupancyUpdate(BaseSchema):
    """Body of ``PUT /beds/{bed_id}/occupancy``."""

    is_occupied: bool
    occupied_by: Optional[str] = None
    occupied_by_name: Optional[str] = None


class BuildingResponse(BaseResponse):
    building: BuildingSchema


class BuildingsResponse(BaseResponse):
    buildings: List[BuildingSchema] = Field(default_factory=list)


class RoomResponse(BaseResponse):
    room: RoomSchema


class BedsResponse(BaseResponse):
    beds: List[BedSchema] = Field(default_factory=list)


class BedResponse(BaseResponse):
    bed: BedSchema
