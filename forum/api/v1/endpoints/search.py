"""Search endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from forum.api.deps import get_db, get_optional_current_user
from forum.api.v1.endpoints.posts import post_responses, sees_suspended
from forum.crud import crud_post
from forum.models.user import User
from forum.schemas.post import SearchResponse, SearchSuggestion

router = APIRouter(
    prefix="/search",
    tags=["Search"],
)


@router.get(
    "",
    response_model=SearchResponse,
    status_code=status.HTTP_200_OK,
    summary="Search posts",
)
def search_posts(
    q: str = Query("", description="Search term"),
    current_user: Optional[User] = Depends(get_optional_current_user),
    db: Session = Depends(get_db),
) -> SearchResponse:
    """Up to 50 posts whose title or content contains the term, newest first."""
    term = q.strip()
    rows = crud_post.search_posts(
        db, term=term, limit=50, include_suspended=sees_suspended(current_user)
    )
    posts = post_responses(db, rows, current_user)
    return SearchResponse(query=term, posts=posts, total=len(posts))


@router.get(
    "/suggestions",
    response_model=List[SearchSuggestion],
    status_code=status.HTTP_200_OK,
    summary="Search suggestions",
)
def search_suggestions(
    q: str = Query("", description="Search term"),
    current_user: Optional[User] = Depends(get_optional_current_user),
    db: Session = Depends(get_db),
) -> List[SearchSuggestion]:
    rows = crud_post.search_suggestions(
        db, term=q, limit=5, include_suspended=sees_suspended(current_user)
    )
    return [SearchSuggestion(id=row.id, title=row.title) for row in rows]
