from decimal import Decimal
from typing import Dict, List, Optional, Tuple

import pytest
from fastapi.testclient import TestClient

from hostel_app.config.settings import Settings
from hostel_app.core.context import AppContext
from hostel_app.core.exceptions import DependencyError
from hostel_app.core.security import PasswordHasher, TokenService
from hostel_app.db import Database, drop_db, init_db
from hostel_app.main import create_app
from hostel_app.models import Bed, Building, Room, User, UserRole
from hostel_app.services.inventory_client import BedInventoryClient

TEST_SECRET = "test-secret-key"


class FakeInventory(BedInventoryClient):
    """In-process bed inventory that records every occupancy write."""

    def __init__(self):
        self.beds: Dict[str, Tuple[bool, Optional[str], Optional[str]]] = {}
        self.calls: List[Tuple[str, bool, Optional[str], Optional[str]]] = []
        self.fail = False

    def set_occupancy(self, bed_id, is_occupied, occupied_by=None, occupied_by_name=None):
        self.calls.append((bed_id, is_occupied, occupied_by, occupied_by_name))
        if self.fail:
            raise DependencyError("Bed inventory unreachable", service="building-service")
        self.beds[bed_id] = (is_occupied, occupied_by, occupied_by_name)

    def is_occupied(self, bed_id: str) -> bool:
        return self.beds.get(bed_id, (False, None, None))[0]


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        DATABASE_URL="sqlite:///:memory:",
        JWT_SECRET=TEST_SECRET,
        PASSWORD_BCRYPT_ROUNDS=4,
        ENVIRONMENT="testing",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def database(settings):
    db = Database.from_settings(settings)
    init_db(db)
    yield db
    drop_db(db)
    db.dispose()


@pytest.fixture
def db_session(database):
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def inventory():
    return FakeInventory()


@pytest.fixture
def token_service():
    return TokenService(TEST_SECRET, ttl="1h")


@pytest.fixture
def password_hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def context(settings, database, token_service, password_hasher, inventory):
    return AppContext(
        settings=settings,
        database=database,
        token_service=token_service,
        password_hasher=password_hasher,
        inventory=inventory,
    )


@pytest.fixture
def client(context):
    app = create_app(context=context)
    with TestClient(app) as test_client:
        yield test_client


def make_user(db_session, email="student@example.com", name="Stu Dent", role=UserRole.STUDENT):
    user = User(email=email, name=name, password_hash="not-a-real-hash", role=role.value)
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def student(db_session):
    return make_user(db_session)


@pytest.fixture
def admin(db_session):
    return make_user(db_session, email="admin@example.com", name="Ad Min", role=UserRole.ADMIN)


@pytest.fixture
def student_headers(token_service, student):
    return {"Authorization": f"Bearer {token_service.issue(student)}"}


@pytest.fixture
def admin_headers(token_service, admin):
    return {"Authorization": f"Bearer {token_service.issue(admin)}"}


@pytest.fixture
def building(db_session):
    """One building with a two-bed room and a single room, all beds free."""
    building = Building(
        name="North Hall",
        description="Quiet dormitory near the library",
        total_rooms=2,
        total_beds=3,
        available_beds=3,
        amenities=["wifi", "laundry"],
    )
    double = Room(number="101", type="double", total_beds=2, available_beds=2, price=Decimal("250.00"))
    double.beds = [Bed(number=1), Bed(number=2)]
    single = Room(number="102", type="single", total_beds=1, available_beds=1, price=Decimal("400.00"))
    single.beds = [Bed(number=1)]
    building.rooms = [double, single]

    db_session.add(building)
    db_session.commit()
    return building
