"""CRUD operations for Post, including the annotated listing queries."""

from dataclasses import dataclass
from typing import List, Optional, Union

from sqlalchemy import Select, String, asc, desc, exists, func, select
from sqlalchemy.engine import Row
from sqlalchemy.orm import Session

from forum.crud.base import CRUDBase, commit_or_rollback
from forum.models.category import Category
from forum.models.comment import Comment
from forum.models.post import Post
from forum.models.user import User, UserStatus
from forum.models.vote import PostVote
from forum.schemas.post import PostCreate, SortKey, SortOrder

# Byte-wise collations per dialect. SQLite compares with BINARY by default.
TITLE_COLLATIONS = {
    "postgresql": "C",
    "mysql": "utf8mb4_bin",
    "mariadb": "utf8mb4_bin",
}


@dataclass(frozen=True)
class PostScope:
    """Which posts a listing covers.

    ``kind`` is one of ``all``, ``category``, ``author`` or ``liked_by``;
    ``target_id`` is the category or user id for the latter three.
    """

    kind: str = "all"
    target_id: Optional[int] = None

    @classmethod
    def all(cls) -> "PostScope":
        return cls()

    @classmethod
    def category(cls, category_id: int) -> "PostScope":
        return cls("category", category_id)

    @classmethod
    def author(cls, user_id: int) -> "PostScope":
        return cls("author", user_id)

    @classmethod
    def liked_by(cls, user_id: int) -> "PostScope":
        return cls("liked_by", user_id)


def _vote_count(is_like: bool):
    return (
        select(func.count(PostVote.id))
        .where(PostVote.post_id == Post.id, PostVote.is_like == is_like)
        .correlate(Post)
        .scalar_subquery()
    )


likes_count = _vote_count(True).label("likes_count")
dislikes_count = _vote_count(False).label("dislikes_count")
comments_count = (
    select(func.count(Comment.id))
    .where(Comment.post_id == Post.id)
    .correlate(Post)
    .scalar_subquery()
    .label("comments_count")
)


def annotated_posts() -> Select:
    """Posts joined with author and category, with vote and comment counts."""
    return (
        select(
            Post,
            User.username.label("username"),
            Category.name.label("category_name"),
            likes_count,
            dislikes_count,
            comments_count,
        )
        .join(User, Post.user_id == User.id)
        .join(Category, Post.category_id == Category.id)
    )


def visible(stmt: Select, include_suspended: bool) -> Select:
    if include_suspended:
        return stmt
    return stmt.where(User.status != UserStatus.SUSPENDED.value)


def contains_text(column, term: str):
    """Case-insensitive substring match; ``%`` and ``_`` in the term are literal."""
    return func.lower(column, type_=String).contains(term.lower(), autoescape=True)


class CRUDPost(CRUDBase[Post, PostCreate, PostCreate]):
    """CRUD operations for Post."""

    def create_post(
        self,
        db: Session,
        *,
        user_id: int,
        obj_in: PostCreate
    ) -> Post:
        """Create a new post."""
        post = Post(
            user_id=user_id,
            category_id=obj_in.category_id,
            title=obj_in.title,
            content=obj_in.content,
        )
        db.add(post)
        commit_or_rollback(db)
        db.refresh(post)
        return post

    def title_sort_column(self, db: Session):
        collation = TITLE_COLLATIONS.get(db.get_bind().dialect.name)
        if collation is None:
            return Post.title
        return Post.title.collate(collation)

    def list_posts(
        self,
        db: Session,
        *,
        scope: PostScope = PostScope(),
        sort_by: Union[SortKey, str, None] = SortKey.DATE,
        sort_order: Union[SortOrder, str, None] = SortOrder.DESC,
        include_suspended: bool = False
    ) -> List[Row]:
        """List annotated posts in a scope.

        Each row exposes ``Post``, ``username``, ``category_name``,
        ``likes_count``, ``dislikes_count`` and ``comments_count``. Unknown
        sort keys fall back to date and unknown orders to descending; ties
        are broken by post id in the same direction.
        """
        stmt = visible(annotated_posts(), include_suspended)

        if scope.kind == "category":
            stmt = stmt.where(Post.category_id == scope.target_id)
        elif scope.kind == "author":
            stmt = stmt.where(Post.user_id == scope.target_id)
        elif scope.kind == "liked_by":
            stmt = stmt.where(
                exists().where(
                    PostVote.post_id == Post.id,
                    PostVote.user_id == scope.target_id,
                    PostVote.is_like == True,  # noqa: E712
                )
            )

        key = SortKey.parse(sort_by.value if isinstance(sort_by, SortKey) else sort_by)
        order = SortOrder.parse(sort_order.value if isinstance(sort_order, SortOrder) else sort_order)
        direction = asc if order is SortOrder.ASC else desc

        if key is SortKey.LIKES:
            primary = likes_count
        elif key is SortKey.COMMENTS:
            primary = comments_count
        elif key is SortKey.TITLE:
            primary = self.title_sort_column(db)
        else:
            primary = Post.created_at

        stmt = stmt.order_by(direction(primary), direction(Post.id))
        return list(db.execute(stmt).all())

    def get_post(
        self,
        db: Session,
        *,
        post_id: int,
        include_suspended: bool = False
    ) -> Optional[Row]:
        """Single annotated post, or None when missing or hidden."""
        stmt = visible(annotated_posts(), include_suspended).where(Post.id == post_id)
        return db.execute(stmt).first()

    def search_posts(
        self,
        db: Session,
        *,
        term: str,
        limit: int = 50,
        include_suspended: bool = False
    ) -> List[Row]:
        """Case-insensitive substring search over titles and content, newest first."""
        term = term.strip()
        if not term:
            return []
        stmt = (
            visible(annotated_posts(), include_suspended)
            .where(
                contains_text(Post.title, term)
                | contains_text(Post.content, term)
            )
            .order_by(desc(Post.created_at), desc(Post.id))
            .limit(limit)
        )
        return list(db.execute(stmt).all())

    def search_suggestions(
        self,
        db: Session,
        *,
        term: str,
        limit: int = 5,
        include_suspended: bool = False
    ) -> List[Row]:
        """``(id, title)`` of the newest posts whose title contains the term."""
        term = term.strip()
        if not term:
            return []
        stmt = (
            select(Post.id, Post.title)
            .join(User, Post.user_id == User.id)
            .where(contains_text(Post.title, term))
            .order_by(desc(Post.created_at), desc(Post.id))
            .limit(limit)
        )
        stmt = visible(stmt, include_suspended)
        return list(db.execute(stmt).all())


# Singleton instance
crud_post = CRUDPost(Post)
