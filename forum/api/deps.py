"""FastAPI dependency injection functions for authentication and database access."""

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import APIKeyCookie, OAuth2PasswordBearer
from sqlalchemy.orm import Session

from forum.config import settings
from forum.core.exceptions import ForbiddenException, UnauthorizedException
from forum.core.security import get_token_subject
from forum.crud import crud_session, crud_user
from forum.database import get_db
from forum.models.session import UserSession
from forum.models.user import User

logger = logging.getLogger(__name__)

# The session token travels in the session cookie or as a Bearer header
session_cookie = APIKeyCookie(name=settings.SESSION_COOKIE_NAME, auto_error=False)
oauth2_scheme_optional = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)


def get_session_token(
    cookie_token: Optional[str] = Depends(session_cookie),
    bearer_token: Optional[str] = Depends(oauth2_scheme_optional),
) -> Optional[str]:
    """Raw session token from the request, Bearer header first."""
    return bearer_token or cookie_token or None


def get_optional_session(
    token: Optional[str] = Depends(get_session_token),
    db: Session = Depends(get_db)
) -> Optional[UserSession]:
    """
    Live session referenced by the request token, or None.

    Expired sessions and tokens that fail signature checks are treated as absent.
    """
    if not token:
        return None

    session_uuid = get_token_subject(token)
    if session_uuid is None:
        logger.info("[AUTH] Rejected session token with invalid signature or expiry")
        return None

    return crud_session.get_active(db, session_uuid)


def get_optional_current_user(
    session: Optional[UserSession] = Depends(get_optional_session),
    db: Session = Depends(get_db)
) -> Optional[User]:
    """
    Dependency to optionally get the logged-in user.

    Useful for pages that anonymous visitors may read.
    """
    if session is None:
        return None
    return crud_user.get(db, session.user_id)


def get_current_user(
    current_user: Optional[User] = Depends(get_optional_current_user)
) -> User:
    """
    Dependency to get the logged-in user.

    Raises:
        UnauthorizedException: 401 if there is no live session
    """
    if current_user is None:
        raise UnauthorizedException()
    return current_user


def get_current_active_user(
    current_user: User = Depends(get_current_user)
) -> User:
    """
    Dependency for write actions: the user must not be suspended.

    Raises:
        ForbiddenException: 403 if the account is suspended
    """
    if current_user.is_suspended:
        logger.info(f"[AUTH] Suspended user {current_user.id} attempted a write action")
        raise ForbiddenException("Your account is suspended")
    return current_user


def require_admin(
    current_user: User = Depends(get_current_user)
) -> User:
    """
    Dependency restricting an endpoint to administrators.

    Raises:
        ForbiddenException: 403 for non-admin users
    """
    if not current_user.is_admin:
        raise ForbiddenException("Admin access required")
    return current_user


__all__ = [
    "session_cookie",
    "oauth2_scheme_optional",
    "get_db",
    "get_session_token",
    "get_optional_session",
    "get_current_user",
    "get_current_active_user",
    "get_optional_current_user",
    "require_admin",
]
