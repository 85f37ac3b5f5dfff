"""Create the schema and seed the bootstrap admin and default categories."""

import logging

from sqlalchemy.orm import Session

import forum.models  # noqa: F401  registers every model on Base.metadata
from forum.config import settings
from forum.core.security import get_password_hash
from forum.crud import crud_category, crud_user
from forum.crud.base import commit_or_rollback
from forum.database import Base, SessionLocal, engine
from forum.models.user import User, UserRole, UserStatus

logger = logging.getLogger(__name__)


def seed_admin(db: Session) -> bool:
    """Create the bootstrap admin unless its username or email is already taken."""
    if crud_user.get_by_username(db, settings.ADMIN_USERNAME) or crud_user.get_by_email(db, settings.ADMIN_EMAIL):
        return False
    db.add(User(
        username=settings.ADMIN_USERNAME,
        email=settings.ADMIN_EMAIL,
        password_hash=get_password_hash(settings.ADMIN_PASSWORD),
        role=UserRole.ADMIN.value,
        status=UserStatus.ACTIVE.value,
    ))
    commit_or_rollback(db)
    logger.info("[ADMIN] Created bootstrap admin '%s'", settings.ADMIN_USERNAME)
    return True


def seed(db: Session) -> None:
    seed_admin(db)
    added = crud_category.seed_defaults(db)
    if added:
        logger.info("Seeded %d default categories", added)


def init_database() -> None:
    Base.metadata.create_all(bind=engine)
    with SessionLocal() as db:
        seed(db)


def main():
    logging.basicConfig(level=settings.LOG_LEVEL)
    init_database()
    logger.info("Tables created and seed data loaded")


if __name__ == "__main__":
    main()
