"""
Session verification for the gallery.

Sessions are signed JWTs carried in an HTTP-only cookie (browser) or an
Authorization header (scripts). Issuing sessions belongs to the identity
provider in front of the app; this module only verifies them.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Annotated
from uuid import UUID

import jwt
from fastapi import Cookie, Header, HTTPException, status

from backend.config import settings
from backend.models.user import User
from backend.repos.user_repo import UserRepo

user_repo = UserRepo()

SESSION_COOKIE = "session"

NOT_AUTHENTICATED = "Not authenticated. Please sign in."
SESSION_EXPIRED = "Session expired. Please sign in again."
INVALID_SESSION = "Invalid session token. Please sign in again."
UNKNOWN_USER = "User not found. Please sign in again."


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


def create_jwt(user_id: UUID, expires_in: timedelta | None = None) -> str:
    """
    Sign a session token for a user.

    The app never hands these out itself; the identity provider and the
    test suite do.

    Args:
        user_id: Subject of the token
        expires_in: Lifetime, JWT_EXPIRY_HOURS when omitted
    """
    issued_at = datetime.now(UTC)
    lifetime = expires_in if expires_in is not None else timedelta(hours=settings.JWT_EXPIRY_HOURS)
    claims = {"sub": str(user_id), "iat": issued_at, "exp": issued_at + lifetime}
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_jwt(token: str) -> dict:
    """
    Verify a session token's signature and expiry and return its claims.

    Raises:
        HTTPException: 401 if the token is expired or does not verify
    """
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError as e:
        raise _unauthorized(SESSION_EXPIRED) from e
    except jwt.InvalidTokenError as e:
        raise _unauthorized(INVALID_SESSION) from e


def _subject(claims: dict) -> UUID:
    try:
        return UUID(claims["sub"])
    except (KeyError, TypeError, ValueError) as e:
        raise _unauthorized(INVALID_SESSION) from e


def _bearer(authorization: str | None) -> str | None:
    if authorization and authorization.startswith("Bearer "):
        return authorization.removeprefix("Bearer ")
    return None


async def get_user_from_token(token: str) -> User:
    """
    Resolve a session token to the user it names.

    Raises:
        HTTPException: 401 if the token does not verify or the user is gone
    """
    user = await user_repo.get(_subject(decode_jwt(token)))
    if user is None:
        raise _unauthorized(UNKNOWN_USER)
    return user


async def get_current_user(
    session: Annotated[str | None, Cookie()] = None,
    authorization: Annotated[str | None, Header()] = None,
) -> User:
    """
    FastAPI dependency for routes that need a signed-in user.

    A bearer header wins over the session cookie when both are sent.

    Raises:
        HTTPException: 401 if no session is present or it does not verify
    """
    token = _bearer(authorization) or session
    if not token:
        raise _unauthorized(NOT_AUTHENTICATED)
    return await get_user_from_token(token)


async def get_optional_user(
    session: Annotated[str | None, Cookie()] = None,
    authorization: Annotated[str | None, Header()] = None,
) -> User | None:
    """
    Like get_current_user, but returns None instead of raising.

    Page routes use this to redirect to /login rather than answer 401.
    """
    try:
        return await get_current_user(session=session, authorization=authorization)
    except HTTPException as e:
        if e.status_code == status.HTTP_401_UNAUTHORIZED:
            return None
        raise
