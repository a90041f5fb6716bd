"""
Session verification for tokens issued by the hosted auth provider.
We never mint session tokens ourselves; we only check them.
"""

import logging
from typing import Optional
from urllib.parse import urlparse

from jose import JWTError, jwt
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import ValidationError

from app.core.config import settings
from app.core.exceptions import AuthenticationRequired
from app.schemas.auth import AuthUser

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def verify_token(token: str) -> dict:
    """Decode a session JWT; raises JWTError when it is invalid or expired."""
    return jwt.decode(
        token,
        settings.AUTH_JWT_SECRET,
        algorithms=[settings.JWT_ALGORITHM],
        audience=settings.JWT_AUDIENCE,
    )


def user_from_token(token: str) -> Optional[AuthUser]:
    try:
        payload = verify_token(token)
    except JWTError as e:
        logger.warning(f"Rejected session token: {str(e)}")
        return None

    if not payload.get("sub"):
        return None

    try:
        return AuthUser(id=payload["sub"], email=payload.get("email"), role=payload.get("role"))
    except ValidationError:
        logger.warning("Session token subject is not a user id")
        return None


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> Optional[AuthUser]:
    """Current user, or None for anonymous visitors and stale sessions."""
    if not credentials:
        return None
    return user_from_token(credentials.credentials)


def safe_return_path(path: Optional[str]) -> Optional[str]:
    """The path itself when it stays on this site, otherwise None."""
    if not path or not path.startswith("/") or path.startswith(("//", "/\\")):
        return None
    if urlparse(path).netloc:
        return None
    return path


def _return_path(request: Request) -> str:
    explicit = safe_return_path(request.query_params.get("next"))
    if explicit:
        return explicit
    referer = request.headers.get("referer")
    if referer:
        return safe_return_path(urlparse(referer).path) or "/"
    return "/"


async def require_user(
    request: Request,
    current_user: Optional[AuthUser] = Depends(get_current_user)
) -> AuthUser:
    """Gate for every write: anonymous callers are sent to sign in."""
    if current_user is None:
        raise AuthenticationRequired(next_path=_return_path(request))
    return current_user
