"""
SQLAlchemy Models for the forum
"""

from ..database import Base
from .user import User, UserRole, UserStatus
from .category import Category
from .post import Post
from .comment import Comment
from .vote import PostVote, CommentVote
from .session import UserSession

# Export all models
__all__ = [
    "Base",
    "User",
    "UserRole",
    "UserStatus",
    "Category",
    "Post",
    "Comment",
    "PostVote",
    "CommentVote",
    "UserSession",
]
