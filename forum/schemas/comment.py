"""Pydantic schemas for Comment."""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from forum.services.comment_tree import CommentNode
from forum.services.voting import VoteState


class CommentCreate(BaseModel):
    """Schema for creating a comment or a reply."""
    content: str = Field(..., description="Comment content")
    parent_id: Optional[int] = Field(None, gt=0, description="Comment being replied to")

    @field_validator("content")
    @classmethod
    def require_content(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Comment content is required")
        return v


class CommentResponse(BaseModel):
    """Schema for Comment response."""
    id: int
    post_id: int
    user_id: int
    username: Optional[str] = None
    parent_id: Optional[int] = None
    content: str
    created_at: Optional[datetime] = None
    likes_count: int = 0
    dislikes_count: int = 0
    user_liked: bool = False
    user_disliked: bool = False

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_row(cls, row, state: VoteState = VoteState.NONE) -> "CommentResponse":
        """Build from an annotated comment row of the query layer."""
        comment = row.Comment
        return cls(
            id=comment.id,
            post_id=comment.post_id,
            user_id=comment.user_id,
            username=row.username,
            parent_id=comment.parent_id,
            content=comment.content,
            created_at=comment.created_at,
            likes_count=row.likes_count,
            dislikes_count=row.dislikes_count,
            user_liked=state is VoteState.LIKED,
            user_disliked=state is VoteState.DISLIKED,
        )


class CommentNodeResponse(CommentResponse):
    """Comment with its nested replies."""
    replies: List["CommentNodeResponse"] = []

    @classmethod
    def from_forest(cls, forest: List[CommentNode]) -> List["CommentNodeResponse"]:
        """Convert a forest built over ``CommentResponse`` items, keeping reply order."""
        roots = [cls(**node.comment.model_dump()) for node in forest]
        pending = list(zip(forest, roots))
        while pending:
            node, item = pending.pop()
            for reply in node.replies:
                child = cls(**reply.comment.model_dump())
                item.replies.append(child)
                pending.append((reply, child))
        return roots


CommentNodeResponse.model_rebuild()
