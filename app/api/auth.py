"""
Session endpoints.

Sign-in itself happens at the hosted auth provider; this service reports the
current session and tells clients where to sign in.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query

from app.schemas.auth import AuthEntry, AuthUser, SessionRead
from app.core.config import settings
from app.core.security import get_current_user, safe_return_path

router = APIRouter(prefix="/auth", tags=["Auth"])

# Mounted without the API prefix; unauthenticated writes are redirected here
entry_router = APIRouter(tags=["Auth"])


@router.get("/session", response_model=SessionRead)
async def read_session(current_user: Optional[AuthUser] = Depends(get_current_user)):
    """The signed-in user, or null when the token is missing, invalid or expired."""
    return SessionRead(user=current_user)


@entry_router.get(settings.AUTH_ROUTE, response_model=AuthEntry)
async def auth_entry(next: str = Query("/", description="Path to return to after signing in")):
    return AuthEntry(sign_in_url=settings.AUTH_SIGN_IN_URL, next=safe_return_path(next) or "/")
