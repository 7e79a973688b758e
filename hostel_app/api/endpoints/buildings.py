"""
Building catalogue and bed occupancy endpoints.
"""

from fastapi import APIRouter, Depends, Query

from hostel_app.api import deps
from hostel_app.schemas.building import (
    BedOccupancyUpdate,
    BedResponse,
    BedSchema,
    BedsResponse,
    BuildingResponse,
    BuildingSchema,
    BuildingsResponse,
    RoomResponse,
    RoomSchema,
)
from hostel_app.services import BuildingService

router = APIRouter(prefix="/buildings", tags=["Buildings"])


@router.get("", response_model=BuildingsResponse)
def list_buildings(service: BuildingService = Depends(deps.get_building_service)):
    buildings = service.list_buildings()
    return BuildingsResponse(buildings=[BuildingSchema.model_validate(b) for b in buildings])


# Declared before "/{building_id}" so "search" is not captured as an id.
@router.get("/search", response_model=BuildingsResponse)
def search_buildings(
    q: str = Query(default="", max_length=255),
    service: BuildingService = Depends(deps.get_building_service),
):
    buildings = service.search_buildings(q)
    return BuildingsResponse(buildings=[BuildingSchema.model_validate(b) for b in buildings])


@router.get("/users/{user_id}/beds", response_model=BedsResponse)
def beds_for_user(user_id: str, service: BuildingService = Depends(deps.get_building_service)):
    beds = service.beds_for_user(user_id)
    return BedsResponse(beds=[BedSchema.model_validate(b) for b in beds])


@router.put("/beds/{bed_id}/occupancy", response_model=BedResponse)
def update_bed_occupancy(
    bed_id: str,
    payload: BedOccupancyUpdate,
    service: BuildingService = Depends(deps.get_building_service),
):
    """Called by the booking service when a bed is taken or freed."""
    bed = service.update_bed_occupancy(bed_id, payload)
    return BedResponse(message="Bed occupancy updated", bed=BedSchema.model_validate(bed))


@router.get("/{building_id}", response_model=BuildingResponse)
def get_building(building_id: str, service: BuildingService = Depends(deps.get_building_service)):
    building = service.get_building(building_id)
    return BuildingResponse(building=BuildingSchema.model_validate(building))


@router.get("/{building_id}/rooms/{room_id}", response_model=RoomResponse)
def get_room(
    building_id: str,
    room_id: str,
    service: BuildingService = Depends(deps.get_building_service),
):
    room = service.get_room(building_id, room_id)
    return RoomResponse(room=RoomSchema.model_validate(room))
