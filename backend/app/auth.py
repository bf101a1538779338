"""
JWT helpers for the booking API.

Tokens are issued by the auth collaborator; this module only decodes them
(and mints them for tests and internal tooling). The subject claim carries
the user id and ``userType`` mirrors the stored role.
"""

from datetime import datetime, timedelta, timezone
import logging
from typing import Any, Dict, Optional, cast

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
import jwt
from jwt import PyJWTError

from .core.config import settings

logger = logging.getLogger(__name__)

oauth2_scheme_optional = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)


def _secret_value(secret_obj: Any) -> str:
    getter = getattr(secret_obj, "get_secret_value", None)
    if callable(getter):
        return cast(str, getter())
    return cast(str, secret_obj)


def create_access_token(
    subject: str, user_type: str, expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a JWT access token.

    Args:
        subject: The user id to encode as ``sub``
        user_type: ``student`` or ``mentor``
        expires_delta: Optional expiration time delta

    Returns:
        str: The encoded JWT token
    """
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.access_token_expire_minutes
        )

    to_encode = {"sub": subject, "userType": user_type, "exp": expire}
    return jwt.encode(to_encode, _secret_value(settings.secret_key), algorithm=settings.algorithm)


def decode_access_token(token: str) -> Dict[str, Any]:
    payload_raw = jwt.decode(
        token,
        _secret_value(settings.secret_key),
        algorithms=[settings.algorithm],
    )
    return cast(Dict[str, Any], payload_raw)


async def get_token_subject(
    request: Request, token: Optional[str] = Depends(oauth2_scheme_optional)
) -> str:
    """
    Dependency returning the authenticated user id from the JWT.

    The bearer header wins; the session cookie is the fallback used by the
    browser frontend.

    Raises:
        HTTPException: 401 if the token is missing, expired or malformed
    """
    not_authenticated = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if not token:
        token = request.cookies.get(settings.auth_cookie_name)
        if token:
            logger.debug("Using %s cookie for authentication", settings.auth_cookie_name)
    if not token:
        raise not_authenticated

    try:
        payload = decode_access_token(token)
    except PyJWTError as e:
        logger.warning("JWT validation error: %s", e)
        raise not_authenticated

    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        logger.warning("Token payload missing 'sub' field")
        raise not_authenticated
    return subject
