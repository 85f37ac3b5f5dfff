"""Pydantic schemas for like/dislike votes."""

from enum import Enum
from pydantic import BaseModel

from forum.services.voting import VoteState


class VoteAction(str, Enum):
    LIKE = "like"
    DISLIKE = "dislike"

    @property
    def is_like(self) -> bool:
        return self is VoteAction.LIKE


class VoteRequest(BaseModel):
    """Schema for voting on a post or comment."""
    action: VoteAction


class VoteStatus(BaseModel):
    """Current user's vote on a target."""
    liked: bool = False
    disliked: bool = False

    @classmethod
    def from_state(cls, state: VoteState) -> "VoteStatus":
        return cls(
            liked=state is VoteState.LIKED,
            disliked=state is VoteState.DISLIKED,
        )


class VoteResponse(BaseModel):
    """Response for a vote action."""
    target_id: int
    target_kind: str
    state: VoteState
    liked: bool
    disliked: bool
    likes_count: int
    dislikes_count: int
    message: str
