from pydantic import BaseModel
from typing import Optional
from uuid import UUID


class AuthUser(BaseModel):
    """Signed-in user as described by the hosted auth session"""
    id: UUID
    email: Optional[str] = None
    role: Optional[str] = None


class SessionRead(BaseModel):
    user: Optional[AuthUser] = None


class AuthEntry(BaseModel):
    """Where a visitor goes to sign in, and where to send them afterwards"""
    sign_in_url: Optional[str] = None
    next: str = "/"
    detail: str = "Please sign in to continue."
