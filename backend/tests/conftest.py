# backend/tests/conftest.py
"""
Shared fixtures for the booking backend test suite.

Every test gets a fresh in-memory SQLite schema. Route tests go through
``TestClient`` with ``get_db`` overridden to the same session, and
authenticate with real HS256 tokens.
"""

import os

# Must be set before app.core.config is imported anywhere
os.environ.setdefault("IS_TESTING", "true")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")

from datetime import datetime
from typing import Iterator

from fastapi.testclient import TestClient
import pytest
from sqlalchemy.orm import Session, sessionmaker

from app import models  # noqa: F401
from app.api.dependencies import get_db, get_notification_service
from app.core.enums import UserType
from app.database import Base, create_db_engine
from app.main import app
from app.models.booking import Booking, BookingStatus
from app.models.mentor_service import MentorService
from app.models.user import User
from app.services.notification_service import NotificationService
from tests.helpers import RecordingNotifier, auth_headers_for

TEST_DATABASE_URL = "sqlite://"

test_engine = create_db_engine(TEST_DATABASE_URL)
TestSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, bind=test_engine, expire_on_commit=False
)


@pytest.fixture(scope="function")
def db() -> Iterator[Session]:
    """Fresh schema and session for each test."""
    Base.metadata.create_all(bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        Base.metadata.drop_all(bind=test_engine)


def _make_user(db: Session, email: str, user_type: UserType, **overrides) -> User:
    user = User(
        email=email,
        first_name=overrides.pop("first_name", "Test"),
        last_name=overrides.pop("last_name", user_type.value.title()),
        user_type=user_type.value,
        **overrides,
    )
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def test_student(db: Session) -> User:
    return _make_user(db, "student@example.com", UserType.STUDENT, first_name="Sam")


@pytest.fixture
def test_student_2(db: Session) -> User:
    return _make_user(db, "student2@example.com", UserType.STUDENT, first_name="Riley")


@pytest.fixture
def test_mentor(db: Session) -> User:
    return _make_user(db, "mentor@example.com", UserType.MENTOR, first_name="Morgan")


@pytest.fixture
def test_mentor_2(db: Session) -> User:
    return _make_user(db, "mentor2@example.com", UserType.MENTOR, first_name="Avery")


@pytest.fixture
def test_service(db: Session, test_mentor: User) -> MentorService:
    service = MentorService(
        mentor_id=test_mentor.id,
        service_name="Career guidance",
        mentor_price=100,
        platform_fee=14,
        taxes_fee=26,
        total_price=140,
    )
    db.add(service)
    db.commit()
    return service


@pytest.fixture
def make_booking(db: Session, test_student: User, test_mentor: User, test_service: MentorService):
    """Insert a booking directly, bypassing the service-layer checks."""

    def _make(
        start: datetime,
        status: BookingStatus = BookingStatus.PENDING,
        duration_minutes: int = 60,
        student: User | None = None,
    ) -> Booking:
        booking = Booking(
            mentor_id=test_mentor.id,
            student_id=(student or test_student).id,
            service_id=test_service.id,
            session_start=start,
            duration_minutes=duration_minutes,
            status=status.value,
            **test_service.pricing_snapshot(),
        )
        db.add(booking)
        db.commit()
        return booking

    return _make


@pytest.fixture
def auth_headers_student(test_student: User) -> dict:
    return auth_headers_for(test_student)


@pytest.fixture
def auth_headers_mentor(test_mentor: User) -> dict:
    return auth_headers_for(test_mentor)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def client(db: Session, notifier: RecordingNotifier) -> Iterator[TestClient]:
    """Create a test client bound to the test session."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notification_service] = lambda: NotificationService(notifier)

    test_client = TestClient(app)
    yield test_client

    app.dependency_overrides.clear()
    test_client.close()
