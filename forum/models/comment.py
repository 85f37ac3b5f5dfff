"""Comment model for post comments and nested replies."""

from sqlalchemy import Column, Integer, Text, TIMESTAMP, ForeignKey, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base


class Comment(Base):
    """Comment on a post; ``parent_id`` points at the comment being answered."""

    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)

    # Foreign Keys
    post_id = Column(
        Integer,
        ForeignKey("posts.id"),
        nullable=False,
        index=True
    )
    user_id = Column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
        index=True
    )
    parent_id = Column(
        Integer,
        ForeignKey("comments.id"),
        nullable=True,
        index=True
    )  # None for top-level comments

    # Comment Content
    content = Column(Text, nullable=False)

    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now(), index=True)

    # Constraints & Indexes
    __table_args__ = (
        Index('idx_comment_post_created', 'post_id', 'created_at'),
        Index('idx_comment_user_created', 'user_id', 'created_at'),
    )

    # Relationships
    author = relationship("User", foreign_keys=[user_id])
