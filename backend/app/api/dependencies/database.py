# backend/app/api/dependencies/database.py
"""
Database-related dependencies.
"""

from typing import Generator

from sqlalchemy.orm import Session

from ...database import get_db as original_get_db


def get_db() -> Generator[Session, None, None]:
    """
    Get database session dependency.

    Routes and services must resolve the session through this function so
    tests can swap it with ``app.dependency_overrides``.

    Yields:
        Database session that will be closed after use
    """
    yield from original_get_db()
