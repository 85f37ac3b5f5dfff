"""Like/dislike vote models for posts and comments."""

from sqlalchemy import Boolean, Column, Integer, TIMESTAMP, ForeignKey, UniqueConstraint, Index
from sqlalchemy.sql import func
from ..database import Base


class PostVote(Base):
    """Vote on a post. ``is_like`` is True for a like, False for a dislike."""

    __tablename__ = "post_votes"

    id = Column(Integer, primary_key=True, index=True)

    # Foreign Keys
    user_id = Column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
        index=True
    )
    post_id = Column(
        Integer,
        ForeignKey("posts.id"),
        nullable=False,
        index=True
    )

    is_like = Column(Boolean, nullable=False)

    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now())

    # Constraints
    __table_args__ = (
        # One vote per user per post
        UniqueConstraint('user_id', 'post_id', name='uq_post_vote'),
        Index('idx_post_vote_post', 'post_id', 'is_like'),
    )


class CommentVote(Base):
    """Vote on a comment. ``is_like`` is True for a like, False for a dislike."""

    __tablename__ = "comment_votes"

    id = Column(Integer, primary_key=True, index=True)

    # Foreign Keys
    user_id = Column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
        index=True
    )
    comment_id = Column(
        Integer,
        ForeignKey("comments.id"),
        nullable=False,
        index=True
    )

    is_like = Column(Boolean, nullable=False)

    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now())

    # Constraints
    __table_args__ = (
        # One vote per user per comment
        UniqueConstraint('user_id', 'comment_id', name='uq_comment_vote'),
        Index('idx_comment_vote_comment', 'comment_id', 'is_like'),
    )
