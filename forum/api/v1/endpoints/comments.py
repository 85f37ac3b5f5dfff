"""Comment endpoints."""

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from forum.api.deps import get_current_active_user, get_db
from forum.core.exceptions import NotFoundException
from forum.crud import crud_comment, crud_comment_vote
from forum.models.user import User
from forum.schemas.vote import VoteRequest, VoteResponse, VoteStatus

router = APIRouter(
    prefix="/comments",
    tags=["Comments"],
)


@router.post(
    "/{comment_id}/vote",
    response_model=VoteResponse,
    status_code=status.HTTP_200_OK,
    summary="Like or dislike a comment",
)
def vote_comment(
    vote_in: VoteRequest,
    comment_id: int = Path(..., gt=0),
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> VoteResponse:
    """Toggle the current user's vote on a comment."""
    if crud_comment.get_visible(db, comment_id=comment_id, include_suspended=current_user.is_admin) is None:
        raise NotFoundException("Comment not found")

    try:
        state = crud_comment_vote.toggle(
            db, user_id=current_user.id, target_id=comment_id, is_like=vote_in.action.is_like
        )
    except ValueError as e:
        raise NotFoundException(str(e))

    likes, dislikes = crud_comment_vote.counts(db, target_id=comment_id)
    status_view = VoteStatus.from_state(state)
    return VoteResponse(
        target_id=comment_id,
        target_kind="comment",
        state=state,
        liked=status_view.liked,
        disliked=status_view.disliked,
        likes_count=likes,
        dislikes_count=dislikes,
        message=f"Comment vote is now {state.value}",
    )
