from enum import Enum

from sqlalchemy import Column, Integer, String, TIMESTAMP, CheckConstraint
from sqlalchemy.sql import func
from ..database import Base


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


class UserStatus(str, Enum):
    ACTIVE = "active"
    SUSPENDED = "suspended"


class User(Base):
    __tablename__ = "users"

    # Primary Key
    id = Column(Integer, primary_key=True, index=True)

    # Authentication & Contact
    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(254), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    # Profile
    profile_picture = Column(String(500), nullable=False, default="")
    signature = Column(String(500), nullable=False, default="")

    # Role & Moderation
    role = Column(String(20), nullable=False, default=UserRole.USER.value, index=True)
    status = Column(String(20), nullable=False, default=UserStatus.ACTIVE.value, index=True)

    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now())

    # Constraints
    __table_args__ = (
        CheckConstraint("role IN ('user', 'admin')", name="check_user_role"),
        CheckConstraint("status IN ('active', 'suspended')", name="check_user_status"),
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    @property
    def is_suspended(self) -> bool:
        return self.status == UserStatus.SUSPENDED.value
