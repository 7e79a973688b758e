from datetime import datetime, timezone

import pytest
from sqlalchemy import func, select

from hostel_app.core.exceptions import (
    BookingNotFoundError,
    ConflictError,
    DatabaseError,
    DependencyError,
    ErrorCode,
    ValidationError,
)
from hostel_app.models import Booking, BookingStatus
from hostel_app.repositories.booking_repository import BookingRepository
from hostel_app.schemas.booking import BookingCreate
from hostel_app.services.booking_service import BookingService


@pytest.fixture
def service(db_session, inventory):
    return BookingService(db_session, inventory)


def _request(user_id="user-a", bed_id="bed-1", **extra):
    fields = dict(
        user_id=user_id,
        user_name=f"Name of {user_id}",
        building_id="building-1",
        building_name="North Hall",
        room_id="room-1",
        room_number="101",
        bed_id=bed_id,
        bed_number=1,
    )
    fields.update(extra)
    return BookingCreate(**fields)


def _booking_count(db_session, **criteria):
    conditions = [getattr(Booking, name) == value for name, value in criteria.items()]
    return db_session.scalar(select(func.count(Booking.id)).where(*conditions))


def test_create_booking_marks_bed_occupied(service, inventory):
    booking = service.create_booking(_request())

    assert booking.id
    assert booking.status == BookingStatus.ACTIVE.value
    assert booking.user_name == "Name of user-a"
    assert inventory.beds["bed-1"] == (True, "user-a", "Name of user-a")


@pytest.mark.parametrize("missing", ["user_id", "bed_id"])
def test_create_requires_user_and_bed(service, inventory, missing):
    with pytest.raises(ValidationError) as exc_info:
        service.create_booking(_request(**{missing: ""}))

    assert exc_info.value.status_code == 400
    assert missing in exc_info.value.details["field_errors"]
    assert inventory.calls == []


def test_second_active_booking_for_user_conflicts(service, inventory):
    service.create_booking(_request(bed_id="bed-1"))

    with pytest.raises(ConflictError) as exc_info:
        service.create_booking(_request(bed_id="bed-2"))

    assert exc_info.value.error_code == ErrorCode.BOOKING_CONFLICT
    assert "already have an active booking" in exc_info.value.message
    assert "bed-2" not in inventory.beds


def test_occupied_bed_conflicts(service):
    service.create_booking(_request(user_id="user-a", bed_id="bed-1"))

    with pytest.raises(ConflictError) as exc_info:
        service.create_booking(_request(user_id="user-b", bed_id="bed-1"))

    assert exc_info.value.error_code == ErrorCode.BED_OCCUPIED
    assert exc_info.value.message == "This bed is already occupied"


def test_inventory_failure_removes_booking(service, inventory, db_session):
    inventory.fail = True

    with pytest.raises(DependencyError) as exc_info:
        service.create_booking(_request())

    assert exc_info.value.message == "Failed to update bed occupancy"
    assert exc_info.value.status_code == 502
    assert _booking_count(db_session) == 0


def test_retry_after_inventory_failure_succeeds(service, inventory, db_session):
    inventory.fail = True
    with pytest.raises(DependencyError):
        service.create_booking(_request())

    inventory.fail = False
    booking = service.create_booking(_request())

    assert _booking_count(db_session) == 1
    assert service.get_booking(booking.id).is_active


def test_cancel_releases_bed(service, inventory):
    booking = service.create_booking(_request())

    cancelled = service.cancel_booking(booking.id)

    assert cancelled.status == BookingStatus.CANCELLED.value
    assert inventory.beds["bed-1"] == (False, None, None)


def test_double_cancel_conflicts(service):
    booking = service.create_booking(_request())
    service.cancel_booking(booking.id)

    with pytest.raises(ConflictError) as exc_info:
        service.cancel_booking(booking.id)

    assert exc_info.value.error_code == ErrorCode.BOOKING_ALREADY_CANCELLED


def test_cancel_survives_release_failure(service, inventory):
    booking = service.create_booking(_request())
    inventory.fail = True

    cancelled = service.cancel_booking(booking.id)

    assert cancelled.status == BookingStatus.CANCELLED.value
    assert service.get_booking(booking.id).status == BookingStatus.CANCELLED.value


def test_cancel_unknown_booking(service):
    with pytest.raises(BookingNotFoundError):
        service.cancel_booking("does-not-exist")


def test_cancel_loses_race_to_other_cancel(service, db_session):
    booking = service.create_booking(_request())
    assert BookingRepository(db_session).mark_cancelled(booking.id, booking.created_at)

    with pytest.raises(ConflictError):
        service.cancel_booking(booking.id)


def test_switch_beds_scenario(service, inventory):
    first = service.create_booking(_request(bed_id="bed-1"))

    with pytest.raises(ConflictError) as exc_info:
        service.create_booking(_request(bed_id="bed-2"))
    assert exc_info.value.error_code == ErrorCode.BOOKING_CONFLICT

    service.cancel_booking(first.id)
    assert not inventory.is_occupied("bed-1")

    second = service.create_booking(_request(bed_id="bed-2"))
    assert second.is_active
    assert second.id != first.id
    assert inventory.is_occupied("bed-2")


def test_cancelled_bed_can_be_booked_by_someone_else(service):
    first = service.create_booking(_request(user_id="user-a", bed_id="bed-1"))
    service.cancel_booking(first.id)

    booking = service.create_booking(_request(user_id="user-b", bed_id="bed-1"))

    assert booking.user_id == "user-b"


def test_unique_index_decides_when_prechecks_miss(service, monkeypatch, db_session, inventory):
    """Both requests pass the read-side checks; only one insert may win."""
    monkeypatch.setattr(BookingRepository, "get_active_for_user", lambda self, user_id: None)
    monkeypatch.setattr(BookingRepository, "get_active_for_bed", lambda self, bed_id: None)

    service.create_booking(_request(user_id="user-a", bed_id="bed-1"))
    with pytest.raises(ConflictError) as exc_info:
        service.create_booking(_request(user_id="user-b", bed_id="bed-1"))

    assert exc_info.value.error_code == ErrorCode.BED_OCCUPIED
    assert _booking_count(db_session, bed_id="bed-1", status="active") == 1
    assert [call[0] for call in inventory.calls] == ["bed-1"]


def test_unique_index_per_user(service, monkeypatch, db_session):
    monkeypatch.setattr(BookingRepository, "get_active_for_bed", lambda self, bed_id: None)
    real_lookup = BookingRepository.get_active_for_user
    calls = []

    def second_lookup_misses(self, user_id):
        calls.append(user_id)
        return None if len(calls) == 2 else real_lookup(self, user_id)

    monkeypatch.setattr(BookingRepository, "get_active_for_user", second_lookup_misses)

    service.create_booking(_request(user_id="user-a", bed_id="bed-1"))
    with pytest.raises(ConflictError) as exc_info:
        service.create_booking(_request(user_id="user-a", bed_id="bed-2"))

    assert exc_info.value.error_code == ErrorCode.BOOKING_CONFLICT
    assert _booking_count(db_session, user_id="user-a", status="active") == 1


def test_lists_are_newest_first(service, monkeypatch):
    ticks = iter(datetime(2024, 9, day, tzinfo=timezone.utc) for day in range(1, 10))
    monkeypatch.setattr("hostel_app.services.booking_service.utcnow", lambda: next(ticks))

    first = service.create_booking(_request(user_id="user-a", bed_id="bed-1"))
    service.cancel_booking(first.id)
    second = service.create_booking(_request(user_id="user-a", bed_id="bed-2"))
    other = service.create_booking(_request(user_id="user-b", bed_id="bed-3"))

    assert [b.id for b in service.list_user_bookings("user-a")] == [second.id, first.id]
    assert [b.id for b in service.list_bookings()] == [other.id, second.id, first.id]
    assert service.list_user_bookings("nobody") == []


def test_failed_rollback_still_reports_occupancy_failure(service, inventory, monkeypatch):
    def broken_delete(self, entity, commit=True):
        raise DatabaseError()

    monkeypatch.setattr(BookingRepository, "delete", broken_delete)
    inventory.fail = True

    with pytest.raises(DependencyError) as exc_info:
        service.create_booking(_request())

    assert exc_info.value.message == "Failed to update bed occupancy"
    assert exc_info.value.details["bed_id"] == "bed-1"
