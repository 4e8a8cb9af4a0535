"""Session routes — who am I, and sign out."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from backend.auth import SESSION_COOKIE, get_current_user
from backend.config import settings
from backend.models.user import User, UserPublic

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/me", status_code=200)
async def get_me(user: User = Depends(get_current_user)) -> UserPublic:
    """Return the signed-in user."""
    return UserPublic.from_user(user)


@router.post("/logout", status_code=200)
async def logout(response: Response) -> dict[str, str]:
    """Clear the session cookie."""
    response.delete_cookie(
        key=SESSION_COOKIE,
        httponly=True,
        secure=settings.SECURE_COOKIES,
        samesite="lax",
    )
    return {"message": "Logged out successfully"}
