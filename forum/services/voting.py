"""Like/dislike state machine shared by post and comment votes."""

from enum import Enum
from typing import Optional


class VoteState(str, Enum):
    """A user's vote on a single target. No stored row means NONE."""
    NONE = "none"
    LIKED = "liked"
    DISLIKED = "disliked"

    @classmethod
    def from_polarity(cls, is_like: Optional[bool]) -> "VoteState":
        if is_like is None:
            return cls.NONE
        return cls.LIKED if is_like else cls.DISLIKED


def next_polarity(current: Optional[bool], is_like: bool) -> Optional[bool]:
    """Return the stored polarity after a like (True) or dislike (False) action.

    Repeating the current vote withdraws it, the opposite vote flips it and
    voting with nothing stored records it.
    """
    if current is None:
        return is_like
    if current == is_like:
        return None
    return is_like
