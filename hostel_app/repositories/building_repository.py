"""
Building, room and bed repository.
"""

from typing import List, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from hostel_app.core.exceptions import DatabaseError
from hostel_app.core.logging import get_logger
from hostel_app.models.building import Bed, Building, Room
from hostel_app.repositories.base_repository import BaseRepository

logger = get_logger(__name__)


class BuildingRepository(BaseRepository[Building]):
    """Data access for buildings and the rooms and beds beneath them."""

    def __init__(self, db: Session):
        super().__init__(Building, db)

    def _with_rooms(self):
        return selectinload(Building.rooms).selectinload(Room.beds)

    def list_buildings(self) -> List[Building]:
        query = select(Building).options(self._with_rooms()).order_by(Building.name)
        return self._all(query)

    def search_buildings(self, term: str) -> List[Building]:
        """Case-insensitive substring match on name or description."""
        pattern = f"%{term.lower()}%"
        query = (
            select(Building)
            .options(self._with_rooms())
            .where(
                or_(
                    func.lower(Building.name).like(pattern),
                    func.lower(Building.description).like(pattern),
                )
            )
            .order_by(Building.name)
        )
        return self._all(query)

    def get_building(self, building_id: str) -> Optional[Building]:
        query = select(Building).options(self._with_rooms()).where(Building.id == building_id)
        return self._one(query)

    def get_room(self, building_id: str, room_id: str) -> Optional[Room]:
        query = (
            select(Room)
            .options(selectinload(Room.beds))
            .where(Room.id == room_id, Room.building_id == building_id)
        )
        return self._one(query)

    def get_bed(self, bed_id: str) -> Optional[Bed]:
        return self._one(select(Bed).where(Bed.id == bed_id))

    def beds_occupied_by(self, user_id: str) -> List[Bed]:
        return self._all(select(Bed).where(Bed.occupied_by == user_id).order_by(Bed.number))

    def set_bed_occupancy(
        self,
        bed: Bed,
        is_occupied: bool,
        occupied_by: Optional[str],
        occupied_by_name: Optional[str],
    ) -> Bed:
        """
        Write a bed's occupancy and refresh the room and building counters
        in the same transaction.
        """
        bed.is_occupied = is_occupied
        bed.occupied_by = occupied_by if is_occupied else None
        bed.occupied_by_name = occupied_by_name if is_occupied else None

        try:
            self.db.flush()
            room = self.db.get(Room, bed.room_id)
            room.available_beds = self._count_free(Bed.room_id == room.id)
            building = self.db.get(Building, room.building_id)
            building.available_beds = self._count_free(Room.building_id == building.id)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Bed occupancy update failed: {e}", exc_info=True)
            raise DatabaseError() from e

        return bed

    def _count_free(self, scope) -> int:
        query = (
            select(func.count(Bed.id))
            .join(Room, Room.id == Bed.room_id)
            .where(scope, Bed.is_occupied.is_(False))
        )
        return self.db.scalar(query) or 0

    def _all(self, query) -> list:
        try:
            return list(self.db.scalars(query).unique().all())
        except SQLAlchemyError as e:
            logger.error(f"Building query failed: {e}", exc_info=True)
            raise DatabaseError() from e

    def _one(self, query):
        try:
            return self.db.scalars(query).first()
        except SQLAlchemyError as e:
            logger.error(f"Building query failed: {e}", exc_info=True)
            raise DatabaseError() from e
