"""CRUD operations for login sessions."""

import uuid
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from forum.config import settings
from forum.crud.base import CRUDBase, commit_or_rollback
from forum.models.session import UserSession


class CRUDSession(CRUDBase[UserSession, dict, dict]):
    """CRUD operations for UserSession."""

    def create_session(
        self,
        db: Session,
        *,
        user_id: int,
        ttl_hours: Optional[int] = None
    ) -> UserSession:
        """Create a session expiring ``ttl_hours`` from now (default from settings)."""
        hours = settings.SESSION_TTL_HOURS if ttl_hours is None else ttl_hours
        session = UserSession(
            user_id=user_id,
            uuid=str(uuid.uuid4()),
            expires_at=datetime.utcnow() + timedelta(hours=hours),
        )
        db.add(session)
        commit_or_rollback(db)
        db.refresh(session)
        return session

    def get_active(self, db: Session, session_uuid: str) -> Optional[UserSession]:
        """Session with this uuid if it has not expired."""
        stmt = select(UserSession).where(
            UserSession.uuid == session_uuid,
            UserSession.expires_at > datetime.utcnow(),
        )
        return db.scalars(stmt).first()

    def delete_by_uuid(self, db: Session, session_uuid: str) -> bool:
        result = db.execute(delete(UserSession).where(UserSession.uuid == session_uuid))
        commit_or_rollback(db)
        return result.rowcount > 0

    def clean_expired(self, db: Session) -> int:
        """Delete every expired session and return how many rows went."""
        result = db.execute(
            delete(UserSession).where(UserSession.expires_at <= datetime.utcnow())
        )
        commit_or_rollback(db)
        return result.rowcount


# Singleton instance
crud_session = CRUDSession(UserSession)
