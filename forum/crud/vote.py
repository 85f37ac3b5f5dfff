"""CRUD operations for post and comment votes."""

import logging
from typing import Dict, Iterable, Optional, Tuple, Type

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from forum.crud.base import CRUDBase, commit_or_rollback
from forum.models.comment import Comment
from forum.models.post import Post
from forum.models.vote import CommentVote, PostVote
from forum.services.voting import VoteState, next_polarity

logger = logging.getLogger(__name__)


class CRUDVote(CRUDBase):
    """Like/dislike toggling for one vote table.

    ``target_field`` is the vote column that references the voted object
    (``post_id`` or ``comment_id``) and ``target_model`` its table.
    """

    def __init__(self, model: Type, target_field: str, target_model: Type):
        super().__init__(model)
        self.target_field = target_field
        self.target_model = target_model

    @property
    def target_column(self):
        return getattr(self.model, self.target_field)

    def get_vote(
        self,
        db: Session,
        *,
        user_id: int,
        target_id: int,
        for_update: bool = False
    ):
        stmt = select(self.model).where(
            self.model.user_id == user_id,
            self.target_column == target_id,
        )
        if for_update:
            stmt = stmt.with_for_update()
        return db.scalars(stmt).first()

    def get_state(self, db: Session, *, user_id: int, target_id: int) -> VoteState:
        vote = self.get_vote(db, user_id=user_id, target_id=target_id)
        return VoteState.from_polarity(vote.is_like if vote else None)

    def get_states(
        self,
        db: Session,
        *,
        user_id: int,
        target_ids: Iterable[int]
    ) -> Dict[int, VoteState]:
        """The user's votes on several targets; targets without a vote are omitted."""
        ids = list(target_ids)
        if not ids:
            return {}
        stmt = select(self.target_column, self.model.is_like).where(
            self.model.user_id == user_id,
            self.target_column.in_(ids),
        )
        return {
            target_id: VoteState.from_polarity(is_like)
            for target_id, is_like in db.execute(stmt).all()
        }

    def counts(self, db: Session, *, target_id: int) -> Tuple[int, int]:
        """``(likes, dislikes)`` currently recorded for the target."""
        stmt = (
            select(self.model.is_like, func.count(self.model.id))
            .where(self.target_column == target_id)
            .group_by(self.model.is_like)
        )
        totals = {bool(is_like): count for is_like, count in db.execute(stmt).all()}
        return totals.get(True, 0), totals.get(False, 0)

    def toggle(
        self,
        db: Session,
        *,
        user_id: int,
        target_id: int,
        is_like: bool
    ) -> VoteState:
        """Apply a like (``is_like=True``) or dislike and return the resulting state.

        Raises:
            ValueError: If the target does not exist
        """
        if db.get(self.target_model, target_id) is None:
            raise ValueError(f"{self.target_model.__name__} not found")

        try:
            return self._apply(db, user_id=user_id, target_id=target_id, is_like=is_like)
        except IntegrityError:
            # Another request inserted the first vote; rerun against its row.
            logger.info(
                "[VOTE] Concurrent %s vote by user %s on %s, retrying",
                self.target_field, user_id, target_id,
            )
            return self._apply(db, user_id=user_id, target_id=target_id, is_like=is_like)

    def _apply(self, db: Session, *, user_id: int, target_id: int, is_like: bool) -> VoteState:
        vote = self.get_vote(db, user_id=user_id, target_id=target_id, for_update=True)
        current = vote.is_like if vote else None
        polarity = next_polarity(current, is_like)

        if vote is None:
            db.add(self.model(user_id=user_id, is_like=polarity, **{self.target_field: target_id}))
        elif polarity is None:
            db.delete(vote)
        else:
            vote.is_like = polarity
        commit_or_rollback(db)

        state = VoteState.from_polarity(polarity)
        logger.debug(
            "[VOTE] user=%s %s=%s %s -> %s",
            user_id, self.target_field, target_id,
            VoteState.from_polarity(current).value, state.value,
        )
        return state


# Singleton instances
crud_post_vote = CRUDVote(PostVote, "post_id", Post)
crud_comment_vote = CRUDVote(CommentVote, "comment_id", Comment)
