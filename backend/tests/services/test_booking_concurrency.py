# backend/tests/services/test_booking_concurrency.py
"""
Two students racing for the same mentor slot on a file-backed SQLite DB.

Each thread has its own session, as separate requests would; the per-mentor
booking lock must let exactly one of them through.
"""

from concurrent.futures import ThreadPoolExecutor
import threading

import pytest
from sqlalchemy.orm import sessionmaker

from app.core.enums import UserType
from app.core.exceptions import BookingConflictException
from app.database import Base, create_db_engine
from app.models.booking import Booking
from app.models.mentor_service import MentorService
from app.models.user import User
from app.services.booking_service import BookingService
from tests.helpers import FUTURE_MONDAY


@pytest.fixture
def file_session_factory(tmp_path):
    engine = create_db_engine(f"sqlite:///{tmp_path / 'bookings.db'}")
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    yield factory
    engine.dispose()


def _seed(factory):
    with factory() as session:
        mentor = User(email="m@example.com", first_name="M", last_name="Mentor", user_type=UserType.MENTOR.value)
        students = [
            User(email=f"s{i}@example.com", first_name="S", last_name=str(i), user_type=UserType.STUDENT.value)
            for i in range(2)
        ]
        session.add_all([mentor, *students])
        session.flush()
        service = MentorService(
            mentor_id=mentor.id,
            service_name="Career guidance",
            mentor_price=100,
            platform_fee=14,
            taxes_fee=26,
            total_price=140,
        )
        session.add(service)
        session.commit()
        return mentor.id, service.id, students


@pytest.mark.parametrize("offset_minutes", [0, 30])
def test_exactly_one_of_two_overlapping_requests_wins(file_session_factory, offset_minutes):
    mentor_id, service_id, students = _seed(file_session_factory)
    starts = [FUTURE_MONDAY.replace(hour=10), FUTURE_MONDAY.replace(hour=10, minute=offset_minutes)]
    barrier = threading.Barrier(2)

    def attempt(index):
        with file_session_factory() as session:
            service = BookingService(session)
            barrier.wait(timeout=5)
            try:
                booking = service.create_booking(
                    students[index], mentor_id, service_id, starts[index].isoformat()
                )
                return ("ok", booking.id)
            except BookingConflictException:
                return ("conflict", None)

    with ThreadPoolExecutor(max_workers=2) as pool:
        outcomes = list(pool.map(attempt, range(2)))

    assert sorted(kind for kind, _ in outcomes) == ["conflict", "ok"]
    with file_session_factory() as session:
        assert session.query(Booking).filter(Booking.mentor_id == mentor_id).count() == 1


def test_different_mentors_both_succeed(file_session_factory):
    mentor_id, service_id, students = _seed(file_session_factory)
    with file_session_factory() as session:
        other = User(email="m2@example.com", first_name="O", last_name="Mentor", user_type=UserType.MENTOR.value)
        session.add(other)
        session.flush()
        other_service = MentorService(
            mentor_id=other.id,
            service_name="Mock interview",
            mentor_price=50,
            platform_fee=0,
            taxes_fee=0,
            total_price=50,
        )
        session.add(other_service)
        session.commit()
        targets = [(mentor_id, service_id), (other.id, other_service.id)]

    start = FUTURE_MONDAY.replace(hour=10).isoformat()

    def attempt(index):
        with file_session_factory() as session:
            target_mentor, target_service = targets[index]
            return BookingService(session).create_booking(
                students[index], target_mentor, target_service, start
            ).id

    with ThreadPoolExecutor(max_workers=2) as pool:
        ids = list(pool.map(attempt, range(2)))

    assert len(set(ids)) == 2
