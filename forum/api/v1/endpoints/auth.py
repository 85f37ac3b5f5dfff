"""Authentication endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from forum.api.deps import (
    get_current_user,
    get_db,
    get_optional_session,
)
from forum.config import settings
from forum.core.exceptions import ForumValidationException, UnauthorizedException
from forum.core.security import create_session_token
from forum.crud import crud_session, crud_user
from forum.models.session import UserSession
from forum.models.user import User
from forum.schemas.user import (
    LoginResponse,
    UserCreate,
    UserLogin,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
)


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_TTL_HOURS * 3600,
        httponly=True,
        samesite="lax",
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(key=settings.SESSION_COOKIE_NAME, path="/")


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new user",
)
def register(
    user_in: UserCreate,
    db: Session = Depends(get_db),
) -> UserResponse:
    """
    Register a new account.

    Raises:
        ForumValidationException: 422 listing every field whose value is taken
    """
    conflicts = crud_user.find_conflicts(db, username=user_in.username, email=user_in.email)
    if conflicts:
        message = "; ".join(f"{field.capitalize()} already exists" for field in conflicts)
        raise ForumValidationException(message, conflicts)

    db_user = crud_user.create_user(db, user_in=user_in)
    logger.info(f"[AUTH] Registered user id={db_user.id} username={db_user.username}")
    return UserResponse.model_validate(db_user)


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    summary="Login user",
)
def login(
    credentials: UserLogin,
    response: Response,
    db: Session = Depends(get_db),
) -> LoginResponse:
    """
    Login with email and password.

    Creates a server-side session, sets the session cookie and returns the
    same token for clients that prefer the Authorization header.

    Raises:
        UnauthorizedException: 401 if credentials are invalid
    """
    user = crud_user.authenticate(db, email=credentials.email, password=credentials.password)
    if not user:
        logger.warning(f"[AUTH] Failed login for email={credentials.email}")
        raise UnauthorizedException("Invalid email or password")

    session = crud_session.create_session(db, user_id=user.id)
    token = create_session_token(session.uuid, expires_at=session.expires_at)
    set_session_cookie(response, token)
    logger.info(f"[AUTH] Session created for user id={user.id}")

    return LoginResponse(
        access_token=token,
        expires_at=session.expires_at,
        user=UserResponse.model_validate(user),
    )


@router.post(
    "/logout",
    status_code=status.HTTP_200_OK,
    summary="Logout user",
)
def logout(
    response: Response,
    session: Optional[UserSession] = Depends(get_optional_session),
    db: Session = Depends(get_db),
) -> dict:
    """Destroy the current session, if any, and clear the cookie."""
    if session is not None:
        crud_session.delete_by_uuid(db, session.uuid)
        logger.info(f"[AUTH] Session destroyed for user id={session.user_id}")
    clear_session_cookie(response)
    return {"message": "Logged out"}


@router.get(
    "/me",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Get current user",
)
def read_current_user(
    current_user: User = Depends(get_current_user),
) -> UserResponse:
    return UserResponse.model_validate(current_user)
