# backend/tests/core/test_booking_lock.py
import gc
import threading
from unittest.mock import Mock, patch

from sqlalchemy.orm import Session

from app.core.booking_lock import _LOCAL_LOCKS, advisory_lock_key, mentor_booking_lock


def test_advisory_key_is_stable_and_fits_bigint():
    key = advisory_lock_key("01J0MENTOR0000000000000000")
    assert key == advisory_lock_key("01J0MENTOR0000000000000000")
    assert 0 <= key < 2**63
    assert key != advisory_lock_key("01J0MENTOR0000000000000001")


def test_postgres_uses_transaction_scoped_advisory_lock():
    db = Mock(spec=Session)
    with patch("app.core.booking_lock.is_postgres", return_value=True):
        with mentor_booking_lock(db, "mentor-a"):
            pass
    statement, params = db.execute.call_args.args
    assert "pg_advisory_xact_lock" in str(statement)
    assert params == {"key": advisory_lock_key("mentor-a")}


def test_local_lock_blocks_same_mentor_only():
    db = Mock(spec=Session)
    entered = threading.Event()
    other_mentor_done = threading.Event()
    same_mentor_entered = threading.Event()

    def other_mentor():
        with mentor_booking_lock(db, "mentor-b"):
            other_mentor_done.set()

    def same_mentor():
        with mentor_booking_lock(db, "mentor-a"):
            same_mentor_entered.set()

    with patch("app.core.booking_lock.is_postgres", return_value=False):
        with mentor_booking_lock(db, "mentor-a"):
            entered.set()
            t_other = threading.Thread(target=other_mentor)
            t_same = threading.Thread(target=same_mentor)
            t_other.start()
            t_same.start()
            assert other_mentor_done.wait(timeout=2)
            assert not same_mentor_entered.wait(timeout=0.2)
        t_same.join(timeout=2)
        t_other.join(timeout=2)

    assert same_mentor_entered.is_set()


def test_local_lock_is_forgotten_once_released():
    db = Mock(spec=Session)
    with patch("app.core.booking_lock.is_postgres", return_value=False):
        with mentor_booking_lock(db, "mentor-gone"):
            assert "mentor-gone" in _LOCAL_LOCKS
    gc.collect()
    assert "mentor-gone" not in _LOCAL_LOCKS
