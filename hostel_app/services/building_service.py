"""
Building catalogue and bed inventory.

This is the owner of bed occupancy; the booking service reaches it over
HTTP through ``PUT /api/buildings/beds/{bed_id}/occupancy``.
"""

import logging
from typing import List

from sqlalchemy.orm import Session

from hostel_app.core.exceptions import BedNotFoundError, BuildingNotFoundError, RoomNotFoundError
from hostel_app.models.building import Bed, Building, Room
from hostel_app.repositories.building_repository import BuildingRepository
from hostel_app.schemas.building import BedOccupancyUpdate

logger = logging.getLogger(__name__)


class BuildingService:
    def __init__(self, db: Session):
        self.repository = BuildingRepository(db)

    def list_buildings(self) -> List[Building]:
        return self.repository.list_buildings()

    def search_buildings(self, term: str) -> List[Building]:
        """Search by name or description; a blank term lists everything."""
        term = (term or "").strip()
        if not term:
            return self.repository.list_buildings()
        return self.repository.search_buildings(term)

    def get_building(self, building_id: str) -> Building:
        building = self.repository.get_building(building_id)
        if building is None:
            raise BuildingNotFoundError(building_id)
        return building

    def get_room(self, building_id: str, room_id: str) -> Room:
        room = self.repository.get_room(building_id, room_id)
        if room is None:
            raise RoomNotFoundError(room_id)
        return room

    def beds_for_user(self, user_id: str) -> List[Bed]:
        return self.repository.beds_occupied_by(user_id)

    def update_bed_occupancy(self, bed_id: str, update: BedOccupancyUpdate) -> Bed:
        """
        Record who occupies a bed and refresh the availability counters.

        Raises:
            BedNotFoundError: If the bed does not exist
        """
        bed = self.repository.get_bed(bed_id)
        if bed is None:
            raise BedNotFoundError(bed_id)

        bed = self.repository.set_bed_occupancy(
            bed,
            update.is_occupied,
            update.occupied_by,
            update.occupied_by_name,
        )
        logger.info(
            f"Bed {bed_id} occupancy set to {update.is_occupied}",
            extra={"bed_id": bed_id, "occupied_by": bed.occupied_by},
        )
        return bed
