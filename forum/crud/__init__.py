"""CRUD operations package - exports singleton instances for all models."""

from .base import CRUDBase
from .user import crud_user
from .category import crud_category
from .post import crud_post, PostScope
from .comment import crud_comment
from .vote import crud_post_vote, crud_comment_vote
from .session import crud_session


__all__ = [
    # Base
    "CRUDBase",
    # Query helpers
    "PostScope",
    # CRUD instances
    "crud_user",
    "crud_category",
    "crud_post",
    "crud_comment",
    "crud_post_vote",
    "crud_comment_vote",
    "crud_session",
]
