"""Pydantic schemas for Post (Forum Discussion)."""

from datetime import datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from forum.schemas.comment import CommentNodeResponse
from forum.services.voting import VoteState


class SortKey(str, Enum):
    """Post listing sort keys."""
    DATE = "date"
    LIKES = "likes"
    COMMENTS = "comments"
    TITLE = "title"

    @classmethod
    def parse(cls, value: Optional[str]) -> "SortKey":
        """Unknown or missing keys sort by date. Matching ignores case."""
        try:
            return cls((value or "").lower())
        except ValueError:
            return cls.DATE


class SortOrder(str, Enum):
    """Post listing sort direction."""
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: Optional[str]) -> "SortOrder":
        """Anything other than ``asc`` (in any case) is descending."""
        return cls.ASC if (value or "").lower() == cls.ASC.value else cls.DESC


class PostFilter(str, Enum):
    """Home page filters that depend on the current user."""
    MY_POSTS = "my-posts"
    LIKED_POSTS = "liked-posts"


class PostCreate(BaseModel):
    """Schema for creating a new post."""
    title: str = Field(..., max_length=500, description="Post title")
    content: str = Field(..., description="Post content")
    category_id: int = Field(..., gt=0, description="Category ID")

    @field_validator("title", "content")
    @classmethod
    def require_text(cls, v: str, info) -> str:
        v = v.strip()
        if not v:
            raise ValueError(f"{info.field_name.capitalize()} is required")
        return v


class PostResponse(BaseModel):
    """Schema for Post response."""
    id: int
    title: str
    content: str
    user_id: int
    username: Optional[str] = None
    category_id: int
    category_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    likes_count: int = 0
    dislikes_count: int = 0
    comments_count: int = 0
    user_liked: bool = False  # Populated for the current user
    user_disliked: bool = False  # Populated for the current user

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_row(cls, row, state: VoteState = VoteState.NONE) -> "PostResponse":
        """Build from an annotated post row of the query layer."""
        post = row.Post
        return cls(
            id=post.id,
            title=post.title,
            content=post.content,
            user_id=post.user_id,
            username=row.username,
            category_id=post.category_id,
            category_name=row.category_name,
            created_at=post.created_at,
            updated_at=post.updated_at,
            likes_count=row.likes_count,
            dislikes_count=row.dislikes_count,
            comments_count=row.comments_count,
            user_liked=state is VoteState.LIKED,
            user_disliked=state is VoteState.DISLIKED,
        )


class PostListResponse(BaseModel):
    """Response for listing posts."""
    posts: List[PostResponse]
    total: int
    filter: Optional[str] = None
    category_id: Optional[int] = None
    sort: SortKey = SortKey.DATE
    order: SortOrder = SortOrder.DESC


class PostDetailResponse(PostResponse):
    """Detailed post response with the threaded comments."""
    comments: List[CommentNodeResponse] = []
    total_comments: int = Field(0, description="Number of comments shown in the thread")


class SearchResponse(BaseModel):
    """Response for full search."""
    query: str
    posts: List[PostResponse]
    total: int


class SearchSuggestion(BaseModel):
    """Lightweight post reference for search-as-you-type."""
    id: int
    title: str
