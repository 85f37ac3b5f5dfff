"""Login session model."""

from sqlalchemy import Column, Integer, String, TIMESTAMP, ForeignKey
from sqlalchemy.sql import func
from ..database import Base


class UserSession(Base):
    """Server-side login session, referenced by the token in the session cookie."""

    __tablename__ = "sessions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
        index=True
    )
    uuid = Column(String(36), unique=True, nullable=False, index=True)
    expires_at = Column(TIMESTAMP, nullable=False, index=True)

    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now())
