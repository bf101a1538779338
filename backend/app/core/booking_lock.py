"""
Per-mentor serialisation of booking creation.

The conflict check and the insert of a new booking must not interleave with
another attempt for the same mentor. On PostgreSQL a transaction-scoped
advisory lock keyed by the mentor id does this and is released by the
database at commit or rollback. Other dialects fall back to a process-local
lock, which the caller holds around the whole transaction.

Usage:
    with mentor_booking_lock(db, mentor_id):
        with self.transaction():
            ...  # check + insert
"""

from __future__ import annotations

from contextlib import contextmanager
import hashlib
import logging
import threading
import time
from typing import Iterator
import weakref

from sqlalchemy import text
from sqlalchemy.orm import Session

from app.database.session_utils import is_postgres
from app.monitoring.prometheus_metrics import prometheus_metrics

logger = logging.getLogger(__name__)

# Entries vanish once no caller holds or waits on the mentor's lock
_LOCAL_LOCKS: weakref.WeakValueDictionary[str, threading.Lock] = weakref.WeakValueDictionary()
_LOCAL_LOCKS_GUARD = threading.Lock()


def advisory_lock_key(mentor_id: str) -> int:
    """Stable signed 63-bit key for ``pg_advisory_xact_lock``."""
    digest = hashlib.sha256(f"mentor-booking:{mentor_id}".encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big") & 0x7FFF_FFFF_FFFF_FFFF


def _local_lock(mentor_id: str) -> threading.Lock:
    with _LOCAL_LOCKS_GUARD:
        lock = _LOCAL_LOCKS.get(mentor_id)
        if lock is None:
            lock = threading.Lock()
            _LOCAL_LOCKS[mentor_id] = lock
        return lock


@contextmanager
def mentor_booking_lock(db: Session, mentor_id: str) -> Iterator[None]:
    """Hold the booking lock for ``mentor_id``; different mentors never contend."""
    start = time.monotonic()

    if is_postgres(db):
        # Released by PostgreSQL when the enclosing transaction ends
        db.execute(text("SELECT pg_advisory_xact_lock(:key)"), {"key": advisory_lock_key(mentor_id)})
        prometheus_metrics.observe_booking_lock_wait("advisory", time.monotonic() - start)
        yield
        return

    lock = _local_lock(mentor_id)
    lock.acquire()
    try:
        prometheus_metrics.observe_booking_lock_wait("local", time.monotonic() - start)
        logger.debug("booking_lock_acquired", extra={"mentor_id": mentor_id})
        yield
    finally:
        lock.release()
