"""
Pytest configuration and shared fixtures
"""
import os

# must be set before frontdesk.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["AUTO_CHECKOUT_ENABLED"] = "false"

import pytest
from datetime import datetime, timedelta
from decimal import Decimal
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from frontdesk.database import Base, get_db
from frontdesk.models import ontology  # noqa: F401
from frontdesk.models.ontology import (
    Drink, DrinkCategory, Guest, PaymentStatus, Room, RoomStatus, RoomType, StaffRole
)
from frontdesk.models.schemas import BookingCreate, SignUpRequest
from frontdesk.services.booking_service import BookingService
from frontdesk.services.staff_service import StaffService
from frontdesk.main import app

TEST_PASSWORD = "secret123"


@pytest.fixture(scope="function")
def db_engine():
    """In-memory database engine"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine):
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture(scope="function")
def client(db_session):
    """Test client bound to the test session"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ============== Auth fixtures ==============

def make_staff(db, email, role=StaffRole.RECEPTIONIST, full_name="Test Staff"):
    return StaffService(db).sign_up(SignUpRequest(
        email=email, password=TEST_PASSWORD, full_name=full_name, role=role
    ))


def sign_in_token(db, email):
    return StaffService(db).sign_in(email, TEST_PASSWORD)["access_token"]


@pytest.fixture
def manager(db_session):
    return make_staff(db_session, "manager@hotel.test", StaffRole.MANAGER, "Mary Manager")


@pytest.fixture
def receptionist(db_session):
    return make_staff(db_session, "front@hotel.test", StaffRole.RECEPTIONIST, "Femi Front")


@pytest.fixture
def manager_token(db_session, manager):
    return sign_in_token(db_session, manager.email)


@pytest.fixture
def receptionist_token(db_session, receptionist):
    return sign_in_token(db_session, receptionist.email)


@pytest.fixture
def manager_auth_headers(manager_token):
    return {"Authorization": f"Bearer {manager_token}"}


@pytest.fixture
def receptionist_auth_headers(receptionist_token):
    return {"Authorization": f"Bearer {receptionist_token}"}


@pytest.fixture
def auth_headers(receptionist_auth_headers):
    return receptionist_auth_headers


# ============== Entity fixtures ==============

@pytest.fixture
def sample_room(db_session):
    """Deluxe room 101 at 20,000 a night"""
    room = Room(
        room_number="101",
        type=RoomType.DELUXE,
        rate=Decimal("20000.00"),
        status=RoomStatus.AVAILABLE
    )
    db_session.add(room)
    db_session.commit()
    db_session.refresh(room)
    return room


@pytest.fixture
def sample_room_102(db_session):
    """Standard room 102 at 15,000 a night"""
    room = Room(
        room_number="102",
        type=RoomType.STANDARD,
        rate=Decimal("15000.00"),
        status=RoomStatus.AVAILABLE
    )
    db_session.add(room)
    db_session.commit()
    db_session.refresh(room)
    return room


@pytest.fixture
def sample_guest(db_session):
    guest = Guest(
        full_name="Adaeze Okafor",
        email="adaeze@example.com",
        phone="08030000000",
        address="12 Marina, Lagos"
    )
    db_session.add(guest)
    db_session.commit()
    db_session.refresh(guest)
    return guest


@pytest.fixture
def active_booking(db_session, sample_room, sample_guest):
    """Unpaid booking on room 101: started yesterday, ends in two days"""
    now = datetime.now().replace(microsecond=0)
    return BookingService(db_session).create_booking(BookingCreate(
        room_id=sample_room.id,
        guest_id=sample_guest.id,
        check_in=now - timedelta(days=1),
        check_out=now + timedelta(days=2),
    ))


@pytest.fixture
def paid_booking(db_session, sample_room_102, sample_guest):
    now = datetime.now().replace(microsecond=0)
    return BookingService(db_session).create_booking(BookingCreate(
        room_id=sample_room_102.id,
        guest_id=sample_guest.id,
        check_in=now - timedelta(days=1),
        check_out=now + timedelta(days=1),
        payment_status=PaymentStatus.PAID,
    ))


@pytest.fixture
def sample_drink(db_session):
    """Heineken at 1,500"""
    category = DrinkCategory(name="Beer")
    db_session.add(category)
    db_session.flush()
    drink = Drink(name="Heineken", price=Decimal("1500.00"), category_id=category.id, is_available=True)
    db_session.add(drink)
    db_session.commit()
    db_session.refresh(drink)
    return drink
