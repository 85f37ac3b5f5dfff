"""Admin moderation endpoints."""

import logging
from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from forum.api.deps import get_db, require_admin
from forum.core.exceptions import (
    ForbiddenException,
    ForumValidationException,
    NotFoundException,
)
from forum.crud import crud_user
from forum.models.user import User
from forum.schemas.user import AccountDeleteRequest, UserResponse, UserWithStatsResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
)


@router.get(
    "/users",
    response_model=List[UserWithStatsResponse],
    status_code=status.HTTP_200_OK,
    summary="List users with statistics",
)
def list_users(
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> List[UserWithStatsResponse]:
    """Every account, newest first, with post, comment and received-like counts."""
    result = []
    for user in crud_user.list_all(db):
        stats = crud_user.get_stats(db, user.id)
        result.append(UserWithStatsResponse(
            **UserResponse.model_validate(user).model_dump(),
            **stats.model_dump(),
        ))
    return result


def _set_suspension(db: Session, admin: User, user_id: int, suspend: bool) -> UserResponse:
    try:
        if suspend:
            user = crud_user.suspend(db, user_id=user_id)
        else:
            user = crud_user.unsuspend(db, user_id=user_id)
    except ValueError as e:
        raise NotFoundException(str(e))
    except PermissionError as e:
        raise ForbiddenException(str(e))

    logger.info(
        f"[ADMIN] Admin id={admin.id} {'suspended' if suspend else 'unsuspended'} user id={user_id}"
    )
    return UserResponse.model_validate(user)


@router.post(
    "/users/{user_id}/suspend",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Suspend user",
)
def suspend_user(
    user_id: int = Path(..., gt=0),
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> UserResponse:
    """Hide a user's content from non-admins and block their write actions. Admins cannot be suspended."""
    return _set_suspension(db, current_user, user_id, suspend=True)


@router.post(
    "/users/{user_id}/unsuspend",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Unsuspend user",
)
def unsuspend_user(
    user_id: int = Path(..., gt=0),
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> UserResponse:
    return _set_suspension(db, current_user, user_id, suspend=False)


@router.delete(
    "/users/{user_id}",
    status_code=status.HTTP_200_OK,
    summary="Delete user",
)
def delete_user(
    delete_in: AccountDeleteRequest,
    user_id: int = Path(..., gt=0),
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> dict:
    """
    Delete a member and all of their content.

    Raises:
        NotFoundException: 404 if the user does not exist
        ForbiddenException: 403 for admin accounts or the caller's own account
        ForumValidationException: 422 if the confirmation is not the username
    """
    target = crud_user.get(db, user_id)
    if not target:
        raise NotFoundException("User not found")
    if target.is_admin:
        raise ForbiddenException("Cannot delete admin users")
    if target.id == current_user.id:
        raise ForbiddenException("Cannot delete yourself")
    if delete_in.confirmation.strip() != target.username:
        raise ForumValidationException(
            "Confirmation must match the username", ["confirmation"]
        )

    removed = crud_user.delete_cascade(db, user_id=user_id)
    logger.info(f"[ADMIN] Admin id={current_user.id} deleted user id={user_id}")
    return {"message": "User deleted", "removed": removed}
