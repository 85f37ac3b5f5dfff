"""Post model for forum discussion."""

from sqlalchemy import Column, Integer, String, Text, TIMESTAMP, ForeignKey, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base


class Post(Base):
    """Forum post.

    Like, dislike and comment counts are not stored here; the query layer
    computes them from vote and comment rows on every read.
    """

    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)

    # Post Content
    title = Column(String(500), nullable=False)
    content = Column(Text, nullable=False)

    # Foreign Keys
    user_id = Column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
        index=True
    )
    category_id = Column(
        Integer,
        ForeignKey("categories.id"),
        nullable=False,
        index=True
    )

    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now(), index=True)
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    # Constraints & Indexes
    __table_args__ = (
        Index('idx_post_user_created', 'user_id', 'created_at'),
        Index('idx_post_category_created', 'category_id', 'created_at'),
    )

    # Relationships
    author = relationship("User", foreign_keys=[user_id])
    category = relationship("Category", back_populates="posts")
