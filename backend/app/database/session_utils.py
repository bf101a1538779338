"""
Dialect lookups for code that must behave differently on PostgreSQL and SQLite.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import UnboundExecutionError
from sqlalchemy.orm import Session


def resolve_session_bind(session: Session) -> Optional[Connection | Engine]:
    try:
        return session.get_bind()
    except UnboundExecutionError:
        return None


def get_dialect_name(session: Session, default: str = "sqlite") -> str:
    """
    Dialect name of the session's bind, e.g. ``postgresql`` or ``sqlite``.

    Unbound sessions and test doubles report ``default``.
    """
    bind = resolve_session_bind(session)
    if bind is None:
        return default
    name = getattr(getattr(bind, "dialect", None), "name", None)
    return name if isinstance(name, str) and name else default


def is_postgres(session: Session) -> bool:
    """True when per-mentor locking can use transaction-scoped advisory locks."""
    return get_dialect_name(session) == "postgresql"
