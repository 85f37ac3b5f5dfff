"""CRUD operations for Category."""

from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.orm import Session

from forum.crud.base import CRUDBase, commit_or_rollback
from forum.models.category import Category


DEFAULT_CATEGORIES = [
    ("General Discussion", "General book-related discussions and recommendations"),
    ("Fiction", "Discussions about fiction books and novels"),
    ("Non-Fiction", "Non-fiction books, biographies, and educational content"),
    ("Mystery & Thriller", "Mystery, thriller, and suspense novels"),
    ("Romance", "Romance novels and love stories"),
    ("Science Fiction & Fantasy", "Sci-fi, fantasy, and speculative fiction"),
    ("Classics", "Classic literature and timeless works"),
    ("Book Reviews", "Share and read book reviews"),
    ("Author Discussions", "Discussions about specific authors"),
    ("Book Club Picks", "Monthly book club selections and discussions"),
]


class CRUDCategory(CRUDBase[Category, dict, dict]):
    """CRUD operations for Category."""

    def get_all(self, db: Session) -> List[Category]:
        """All categories ordered by name."""
        stmt = select(Category).order_by(Category.name)
        return list(db.scalars(stmt).all())

    def get_by_name(self, db: Session, name: str) -> Optional[Category]:
        return self.get_by_field(db, "name", name)

    def seed_defaults(self, db: Session) -> int:
        """Insert the default categories that are missing. Returns how many were added."""
        added = 0
        for name, description in DEFAULT_CATEGORIES:
            if self.get_by_name(db, name) is None:
                db.add(Category(name=name, description=description))
                added += 1
        if added:
            commit_or_rollback(db)
        return added


# Singleton instance
crud_category = CRUDCategory(Category)
