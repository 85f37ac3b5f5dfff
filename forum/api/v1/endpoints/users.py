"""User profile endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from forum.api.deps import (
    get_current_active_user,
    get_current_user,
    get_db,
    get_optional_current_user,
)
from forum.api.v1.endpoints.auth import clear_session_cookie
from forum.api.v1.endpoints.posts import post_responses, sees_suspended
from forum.core.exceptions import ForumValidationException, NotFoundException
from forum.crud import PostScope, crud_post, crud_user
from forum.models.user import User
from forum.schemas.user import (
    AccountDeleteRequest,
    ProfileResponse,
    PublicUserResponse,
    UserProfileUpdate,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/users",
    tags=["Users"],
)


@router.get(
    "/{username}",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
    summary="Get user profile",
)
def get_profile(
    username: str,
    current_user: Optional[User] = Depends(get_optional_current_user),
    db: Session = Depends(get_db),
) -> ProfileResponse:
    """
    Public profile with the member's posts and activity counts.

    Owners and admins see every post of the profile; other viewers only see
    posts that pass the suspension filter.
    """
    user = crud_user.get_by_username(db, username)
    if not user:
        raise NotFoundException("User not found")

    is_own_profile = current_user is not None and current_user.id == user.id
    rows = crud_post.list_posts(
        db,
        scope=PostScope.author(user.id),
        include_suspended=is_own_profile or sees_suspended(current_user),
    )
    return ProfileResponse(
        user=PublicUserResponse.model_validate(user),
        posts=post_responses(db, rows, current_user),
        stats=crud_user.get_stats(db, user.id),
        is_own_profile=is_own_profile,
    )


@router.put(
    "/me",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Edit own profile",
)
def update_profile(
    profile_in: UserProfileUpdate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> UserResponse:
    """Replace the profile picture URL and signature."""
    user = crud_user.update_profile(db, user=current_user, obj_in=profile_in)
    return UserResponse.model_validate(user)


@router.delete(
    "/me",
    status_code=status.HTTP_200_OK,
    summary="Delete own account",
)
def delete_account(
    delete_in: AccountDeleteRequest,
    response: Response,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> dict:
    """
    Permanently delete the current account with its posts, comments and votes.

    The request must repeat the username as confirmation.

    Raises:
        ForumValidationException: 422 if the confirmation does not match
    """
    username = current_user.username
    if delete_in.confirmation.strip() != username:
        raise ForumValidationException(
            "Please type your username exactly to confirm deletion", ["confirmation"]
        )

    user_id = current_user.id
    crud_user.delete_cascade(db, user_id=user_id)
    clear_session_cookie(response)
    logger.info(f"[AUTH] User id={user_id} deleted their account")
    return {"message": "Profile successfully deleted"}
