# backend/app/api/dependencies/auth.py
"""
Authentication and role dependencies.

The JWT subject is the user id; the user is then loaded through the request's
own session so tests that override ``get_db`` see the same data.
"""

import logging

from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from ...auth import get_token_subject
from ...models.user import User
from ...repositories.user_repository import UserRepository
from .database import get_db

logger = logging.getLogger(__name__)


async def get_current_user(
    user_id: str = Depends(get_token_subject),
    db: Session = Depends(get_db),
) -> User:
    """
    Get the current authenticated user from the database.

    Raises:
        HTTPException: 401 if the token subject does not name an active user
    """
    user = UserRepository(db).get_by_id(user_id)
    if user is None or not user.is_active:
        logger.info("Token subject %s does not resolve to an active user", user_id)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


async def require_mentor(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_mentor:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Access denied. Mentor only."
        )
    return current_user


async def require_student(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_student:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Access denied. Student only."
        )
    return current_user
