"""CRUD operations for Comment."""

from typing import List, Optional
from sqlalchemy import asc, func, select
from sqlalchemy.engine import Row
from sqlalchemy.orm import Session, aliased

from forum.crud.base import CRUDBase, commit_or_rollback
from forum.models.comment import Comment
from forum.models.post import Post
from forum.models.user import User, UserStatus
from forum.models.vote import CommentVote
from forum.schemas.comment import CommentCreate


def _vote_count(is_like: bool, label: str):
    return (
        select(func.count(CommentVote.id))
        .where(CommentVote.comment_id == Comment.id, CommentVote.is_like == is_like)
        .correlate(Comment)
        .scalar_subquery()
        .label(label)
    )


class CRUDComment(CRUDBase[Comment, CommentCreate, CommentCreate]):
    """CRUD operations for Comment."""

    def list_comments(
        self,
        db: Session,
        *,
        post_id: int,
        include_suspended: bool = False
    ) -> List[Row]:
        """All comments of a post, oldest first.

        Rows expose ``Comment``, ``username``, ``likes_count`` and
        ``dislikes_count``. Replies are included flat; see
        :func:`forum.services.comment_tree.build_comment_tree`.
        """
        stmt = (
            select(
                Comment,
                User.username.label("username"),
                _vote_count(True, "likes_count"),
                _vote_count(False, "dislikes_count"),
            )
            .join(User, Comment.user_id == User.id)
            .where(Comment.post_id == post_id)
            .order_by(asc(Comment.created_at), asc(Comment.id))
        )
        if not include_suspended:
            stmt = stmt.where(User.status != UserStatus.SUSPENDED.value)
        return list(db.execute(stmt).all())

    def get_visible(
        self,
        db: Session,
        *,
        comment_id: int,
        include_suspended: bool = False
    ) -> Optional[Comment]:
        """The comment, or None when it or its post belongs to a suspended user."""
        if include_suspended:
            return self.get(db, comment_id)

        post_author = aliased(User)
        stmt = (
            select(Comment)
            .join(User, Comment.user_id == User.id)
            .join(Post, Comment.post_id == Post.id)
            .join(post_author, Post.user_id == post_author.id)
            .where(
                Comment.id == comment_id,
                User.status != UserStatus.SUSPENDED.value,
                post_author.status != UserStatus.SUSPENDED.value,
            )
        )
        return db.scalars(stmt).first()

    def create_comment(
        self,
        db: Session,
        *,
        post_id: int,
        user_id: int,
        obj_in: CommentCreate
    ) -> Comment:
        """Create a comment, or a reply when ``parent_id`` is set.

        Raises:
            ValueError: If the parent comment does not belong to the post
        """
        if obj_in.parent_id is not None:
            parent = self.get(db, obj_in.parent_id)
            if parent is None or parent.post_id != post_id:
                raise ValueError("Parent comment not found on this post")

        comment = Comment(
            post_id=post_id,
            user_id=user_id,
            parent_id=obj_in.parent_id,
            content=obj_in.content,
        )
        db.add(comment)
        commit_or_rollback(db)
        db.refresh(comment)
        return comment


# Singleton instance
crud_comment = CRUDComment(Comment)
