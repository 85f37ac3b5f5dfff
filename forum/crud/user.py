"""CRUD operations for `User` model."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Set

from sqlalchemy import delete, desc, func, or_, select
from sqlalchemy.orm import Session

from forum.core.security import get_password_hash, verify_password
from forum.crud.base import CRUDBase, commit_or_rollback
from forum.models.comment import Comment
from forum.models.post import Post
from forum.models.session import UserSession
from forum.models.user import User, UserRole, UserStatus
from forum.models.vote import CommentVote, PostVote
from forum.schemas.user import UserCreate, UserProfileUpdate, UserStats

logger = logging.getLogger(__name__)


class CRUDUser(CRUDBase[User, UserCreate, UserProfileUpdate]):
    def get_by_email(self, db: Session, email: Optional[str]) -> Optional[User]:
        if not email:
            return None
        stmt = select(User).where(User.email == email).limit(1)
        return db.scalars(stmt).first()

    def get_by_username(self, db: Session, username: Optional[str]) -> Optional[User]:
        if not username:
            return None
        stmt = select(User).where(User.username == username).limit(1)
        return db.scalars(stmt).first()

    def find_conflicts(self, db: Session, *, username: str, email: str) -> List[str]:
        """Names of the fields whose value is already taken by another account."""
        fields = []
        if self.get_by_email(db, email):
            fields.append("email")
        if self.get_by_username(db, username):
            fields.append("username")
        return fields

    def create_user(
        self,
        db: Session,
        *,
        user_in: UserCreate,
        role: UserRole = UserRole.USER,
    ) -> User:
        user_data = user_in.model_dump(exclude_unset=True)
        raw_password = user_data.pop("password")
        user_data["password_hash"] = get_password_hash(raw_password)
        user_data["role"] = role.value
        user_data["status"] = UserStatus.ACTIVE.value

        db_obj = User(**user_data)
        db.add(db_obj)
        commit_or_rollback(db)
        db.refresh(db_obj)
        return db_obj

    def authenticate(self, db: Session, *, email: str, password: str) -> Optional[User]:
        user = self.get_by_email(db, email)
        if not user:
            return None
        if not verify_password(password, user.password_hash):
            return None
        return user

    def update_profile(self, db: Session, *, user: User, obj_in: UserProfileUpdate) -> User:
        return self.update(db, db_obj=user, obj_in=obj_in.model_dump())

    def list_all(self, db: Session) -> List[User]:
        """Every user, newest account first."""
        stmt = select(User).order_by(desc(User.created_at), desc(User.id))
        return list(db.scalars(stmt).all())

    def get_stats(self, db: Session, user_id: int) -> UserStats:
        posts = db.scalar(select(func.count(Post.id)).where(Post.user_id == user_id)) or 0
        comments = db.scalar(select(func.count(Comment.id)).where(Comment.user_id == user_id)) or 0
        likes = db.scalar(
            select(func.count(PostVote.id))
            .join(Post, PostVote.post_id == Post.id)
            .where(Post.user_id == user_id, PostVote.is_like == True)  # noqa: E712
        ) or 0
        return UserStats(posts_count=posts, comments_count=comments, likes_received=likes)

    # ----- Moderation -----
    def set_status(self, db: Session, *, user_id: int, status: UserStatus) -> User:
        """Change a user's moderation status.

        Raises:
            ValueError: If the user does not exist
            PermissionError: If an admin would be suspended
        """
        user = self.get(db, user_id)
        if not user:
            raise ValueError("User not found")
        if status is UserStatus.SUSPENDED and user.is_admin:
            raise PermissionError("Cannot suspend admin users")
        return self.update(db, db_obj=user, obj_in={"status": status.value})

    def suspend(self, db: Session, *, user_id: int) -> User:
        return self.set_status(db, user_id=user_id, status=UserStatus.SUSPENDED)

    def unsuspend(self, db: Session, *, user_id: int) -> User:
        return self.set_status(db, user_id=user_id, status=UserStatus.ACTIVE)

    # ----- Deletion -----
    def _comments_to_remove(self, db: Session, user_id: int) -> Set[int]:
        """Comments on the user's posts, comments by the user and every reply below them."""
        own_posts = select(Post.id).where(Post.user_id == user_id)
        removed = set(db.scalars(
            select(Comment.id).where(or_(Comment.post_id.in_(own_posts), Comment.user_id == user_id))
        ).all())
        frontier = set(removed)
        while frontier:
            replies = set(db.scalars(select(Comment.id).where(Comment.parent_id.in_(sorted(frontier)))).all())
            frontier = replies - removed
            removed |= frontier
        return removed

    def delete_cascade(self, db: Session, *, user_id: int) -> Dict[str, int]:
        """Delete a user and everything that hangs off the account in one transaction.

        Order: comment votes, post votes, comments, posts, sessions, user.
        Nothing is removed if any step fails.

        Returns:
            Number of deleted rows per table

        Raises:
            ValueError: If the user does not exist
        """
        if self.get(db, user_id) is None:
            raise ValueError("User not found")

        own_posts = select(Post.id).where(Post.user_id == user_id)
        try:
            comment_ids = sorted(self._comments_to_remove(db, user_id))
            removed = {}
            removed["comment_votes"] = db.execute(
                delete(CommentVote)
                .where(or_(CommentVote.comment_id.in_(comment_ids), CommentVote.user_id == user_id))
                .execution_options(synchronize_session=False)
            ).rowcount
            removed["post_votes"] = db.execute(
                delete(PostVote)
                .where(or_(PostVote.post_id.in_(own_posts), PostVote.user_id == user_id))
                .execution_options(synchronize_session=False)
            ).rowcount
            removed["comments"] = db.execute(
                delete(Comment)
                .where(Comment.id.in_(comment_ids))
                .execution_options(synchronize_session=False)
            ).rowcount
            removed["posts"] = db.execute(
                delete(Post)
                .where(Post.user_id == user_id)
                .execution_options(synchronize_session=False)
            ).rowcount
            removed["sessions"] = db.execute(
                delete(UserSession)
                .where(UserSession.user_id == user_id)
                .execution_options(synchronize_session=False)
            ).rowcount
            removed["users"] = db.execute(
                delete(User)
                .where(User.id == user_id)
                .execution_options(synchronize_session=False)
            ).rowcount
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info("[ADMIN] Deleted user %s and related rows: %s", user_id, removed)
        return removed


crud_user = CRUDUser(User)
