"""
Test configuration and shared fixtures for the slot booking test suite.

Each test gets its own file-backed SQLite database under tmp_path, created with
Base.metadata and dropped afterwards. File-backed (not in-memory) so that the
threaded concurrency tests share one store across connections.

Set TEST_DATABASE_URL to run the same suite against PostgreSQL.
"""

import os
from decimal import Decimal
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from core.config import Settings
from core.database import Database
from main import create_app
from models import Resource, TimeSlot, User
from services import (
    AvailabilityService,
    BookingService,
    ConflictService,
    QueryService,
    ResourceService,
    TimeSlotService,
    UserService,
)
from tests.helpers import at


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing at a throwaway database."""
    database_url = os.getenv("TEST_DATABASE_URL") or f"sqlite:///{tmp_path / 'test.db'}"
    return Settings(
        database_url=database_url,
        environment="test",
        log_level="DEBUG",
        db_pool_size=10,
        db_lock_timeout_ms=10000,
        cors_origins=["http://testserver"],
    )


@pytest.fixture
def database(settings) -> Generator[Database, None, None]:
    """Database with a fresh schema, dropped after the test."""
    db = Database(settings)
    db.drop_tables()
    db.create_tables()

    yield db

    db.drop_tables()
    db.dispose()


@pytest.fixture
def booking_service(database) -> BookingService:
    return BookingService(database)


@pytest.fixture
def availability_service(database) -> AvailabilityService:
    return AvailabilityService(database)


@pytest.fixture
def conflict_service(database) -> ConflictService:
    return ConflictService(database)


@pytest.fixture
def query_service(database) -> QueryService:
    return QueryService(database)


@pytest.fixture
def resource_service(database) -> ResourceService:
    return ResourceService(database)


@pytest.fixture
def time_slot_service(database) -> TimeSlotService:
    return TimeSlotService(database)


@pytest.fixture
def user_service(database) -> UserService:
    return UserService(database)


@pytest.fixture
def user(user_service) -> User:
    return user_service.create_user(email="alice@example.com", name="Alice")


@pytest.fixture
def other_user(user_service) -> User:
    return user_service.create_user(email="bob@example.com", name="Bob")


@pytest.fixture
def court(resource_service) -> Resource:
    """A tennis court that takes one booking per slot."""
    return resource_service.create_resource(name="Court A", category="court", capacity=1)


@pytest.fixture
def group_room(resource_service) -> Resource:
    """A facility whose slots take several bookings."""
    return resource_service.create_resource(name="Group Room", category="facility", capacity=3)


@pytest.fixture
def court_slot(time_slot_service, court) -> TimeSlot:
    """Court A, 10:00-11:00, capacity 1, price 25.50."""
    return time_slot_service.create_time_slot(
        resource_id=court.id,
        start_time=at(10),
        end_time=at(11),
        capacity=1,
        price=Decimal("25.50"),
    )


@pytest.fixture
def group_slot(time_slot_service, group_room) -> TimeSlot:
    """Group Room, 14:00-15:00, capacity 3."""
    return time_slot_service.create_time_slot(
        resource_id=group_room.id,
        start_time=at(14),
        end_time=at(15),
        capacity=3,
    )


@pytest.fixture
def client(settings, database) -> Generator[TestClient, None, None]:
    """HTTP client against an app wired to the test database."""
    app = create_app(settings=settings, database=database)
    with TestClient(app) as test_client:
        yield test_client
