"""Post endpoints: home listing, detail page, creation and voting."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from forum.api.deps import get_current_active_user, get_db, get_optional_current_user
from forum.core.exceptions import ForumValidationException, NotFoundException
from forum.crud import (
    PostScope,
    crud_category,
    crud_comment,
    crud_comment_vote,
    crud_post,
    crud_post_vote,
)
from forum.models.user import User
from forum.schemas.comment import CommentCreate, CommentNodeResponse, CommentResponse
from forum.schemas.post import (
    PostCreate,
    PostDetailResponse,
    PostFilter,
    PostListResponse,
    PostResponse,
    SortKey,
    SortOrder,
)
from forum.schemas.vote import VoteRequest, VoteResponse, VoteStatus
from forum.services.comment_tree import build_comment_tree, count_comments, find_unreachable
from forum.services.voting import VoteState

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/posts",
    tags=["Posts"],
)


def sees_suspended(user: Optional[User]) -> bool:
    """Admins see content of suspended users; everybody else does not."""
    return user is not None and user.is_admin


def post_responses(db: Session, rows, viewer: Optional[User]) -> List[PostResponse]:
    """Annotated rows as responses, with the viewer's vote on each post."""
    states = {}
    if viewer is not None:
        states = crud_post_vote.get_states(
            db, user_id=viewer.id, target_ids=[row.Post.id for row in rows]
        )
    return [
        PostResponse.from_row(row, states.get(row.Post.id, VoteState.NONE))
        for row in rows
    ]


@router.get(
    "",
    response_model=PostListResponse,
    status_code=status.HTTP_200_OK,
    summary="List posts",
    description="""
    Home page listing.

    **Filters:** `my-posts` and `liked-posts` need a logged-in user and return
    nothing otherwise. Without a filter, `category_id` narrows the listing.

    **Sorting:** `sort` is one of `date`, `likes`, `comments`, `title`;
    `order` is `asc` or `desc`. Unknown values fall back to `date` / `desc`.
    """,
)
def list_posts(
    filter_: Optional[str] = Query(None, alias="filter", description="my-posts or liked-posts"),
    category_id: Optional[int] = Query(None, gt=0, description="Category ID"),
    sort: Optional[str] = Query(None, description="Sort key"),
    order: Optional[str] = Query(None, description="Sort order"),
    current_user: Optional[User] = Depends(get_optional_current_user),
    db: Session = Depends(get_db),
) -> PostListResponse:
    sort_key = SortKey.parse(sort)
    sort_order = SortOrder.parse(order)

    scope = PostScope.all()
    if filter_ in (PostFilter.MY_POSTS.value, PostFilter.LIKED_POSTS.value):
        if current_user is None:
            return PostListResponse(posts=[], total=0, filter=filter_, sort=sort_key, order=sort_order)
        if filter_ == PostFilter.MY_POSTS.value:
            scope = PostScope.author(current_user.id)
        else:
            scope = PostScope.liked_by(current_user.id)
    elif category_id is not None:
        scope = PostScope.category(category_id)

    rows = crud_post.list_posts(
        db,
        scope=scope,
        sort_by=sort_key,
        sort_order=sort_order,
        include_suspended=sees_suspended(current_user),
    )
    posts = post_responses(db, rows, current_user)
    return PostListResponse(
        posts=posts,
        total=len(posts),
        filter=filter_,
        category_id=category_id,
        sort=sort_key,
        order=sort_order,
    )


@router.post(
    "",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create new post",
)
def create_post(
    post_in: PostCreate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> PostResponse:
    """Create a new forum post in an existing category."""
    if crud_category.get(db, post_in.category_id) is None:
        raise ForumValidationException("Valid category is required", ["category_id"])

    post = crud_post.create_post(db, user_id=current_user.id, obj_in=post_in)
    row = crud_post.get_post(db, post_id=post.id, include_suspended=True)
    return PostResponse.from_row(row)


@router.get(
    "/{post_id}",
    response_model=PostDetailResponse,
    status_code=status.HTTP_200_OK,
    summary="Get post detail",
)
def get_post(
    post_id: int = Path(..., gt=0),
    current_user: Optional[User] = Depends(get_optional_current_user),
    db: Session = Depends(get_db),
) -> PostDetailResponse:
    """
    Post with its threaded comments.

    Comments by suspended users are hidden from non-admins, and so are the
    replies below them.
    """
    include_suspended = sees_suspended(current_user)
    row = crud_post.get_post(db, post_id=post_id, include_suspended=include_suspended)
    if row is None:
        raise NotFoundException("Post not found")

    comment_rows = crud_comment.list_comments(
        db, post_id=post_id, include_suspended=include_suspended
    )

    post_state = VoteState.NONE
    comment_states = {}
    if current_user is not None:
        post_state = crud_post_vote.get_state(db, user_id=current_user.id, target_id=post_id)
        comment_states = crud_comment_vote.get_states(
            db, user_id=current_user.id, target_ids=[r.Comment.id for r in comment_rows]
        )

    comments = [
        CommentResponse.from_row(r, comment_states.get(r.Comment.id, VoteState.NONE))
        for r in comment_rows
    ]
    forest = build_comment_tree(comments)
    dropped = find_unreachable(comments, forest)
    if dropped:
        logger.warning(
            "[COMMENTS] Post %s: %d comments unreachable from a top-level comment: %s",
            post_id, len(dropped), [c.id for c in dropped],
        )

    base = PostResponse.from_row(row, post_state)
    return PostDetailResponse(
        **base.model_dump(),
        comments=CommentNodeResponse.from_forest(forest),
        total_comments=count_comments(forest),
    )


@router.post(
    "/{post_id}/vote",
    response_model=VoteResponse,
    status_code=status.HTTP_200_OK,
    summary="Like or dislike a post",
    description="""
    Voting the same way twice withdraws the vote; voting the other way flips it.
    """,
)
def vote_post(
    vote_in: VoteRequest,
    post_id: int = Path(..., gt=0),
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> VoteResponse:
    if crud_post.get_post(db, post_id=post_id, include_suspended=sees_suspended(current_user)) is None:
        raise NotFoundException("Post not found")

    try:
        state = crud_post_vote.toggle(
            db, user_id=current_user.id, target_id=post_id, is_like=vote_in.action.is_like
        )
    except ValueError as e:
        raise NotFoundException(str(e))

    likes, dislikes = crud_post_vote.counts(db, target_id=post_id)
    status_view = VoteStatus.from_state(state)
    return VoteResponse(
        target_id=post_id,
        target_kind="post",
        state=state,
        liked=status_view.liked,
        disliked=status_view.disliked,
        likes_count=likes,
        dislikes_count=dislikes,
        message=f"Post vote is now {state.value}",
    )


@router.post(
    "/{post_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a post",
)
def create_comment(
    comment_in: CommentCreate,
    post_id: int = Path(..., gt=0),
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> CommentResponse:
    """Add a comment, or a reply when `parent_id` names a comment of the same post."""
    if crud_post.get_post(db, post_id=post_id, include_suspended=sees_suspended(current_user)) is None:
        raise NotFoundException("Post not found")

    try:
        comment = crud_comment.create_comment(
            db, post_id=post_id, user_id=current_user.id, obj_in=comment_in
        )
    except ValueError as e:
        raise ForumValidationException(str(e), ["parent_id"])

    return CommentResponse(
        id=comment.id,
        post_id=comment.post_id,
        user_id=comment.user_id,
        username=current_user.username,
        parent_id=comment.parent_id,
        content=comment.content,
        created_at=comment.created_at,
    )
