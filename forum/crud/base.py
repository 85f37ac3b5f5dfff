"""Generic CRUD base class for SQLAlchemy models."""

from __future__ import annotations

from typing import Any, Dict, Generic, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.orm import Session

from forum.database import Base


ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


def commit_or_rollback(db: Session) -> None:
	"""Commit the unit of work, rolling it back entirely if the commit fails."""
	try:
		db.commit()
	except Exception:
		db.rollback()
		raise


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
	"""Shared lookups and writes for forum tables.

	Methods take the caller's session and return ORM objects, not schemas.
	"""

	def __init__(self, model: Type[ModelType]):
		self.model = model

	# ----- Read -----
	def get(self, db: Session, id: Any) -> Optional[ModelType]:
		"""Get one record by primary key."""
		return db.get(self.model, id)

	def get_by_field(self, db: Session, field_name: str, value: Any) -> Optional[ModelType]:
		"""Get first record where given field equals value."""
		if not hasattr(self.model, field_name):
			raise AttributeError(f"Model '{self.model.__name__}' has no field '{field_name}'")
		stmt = select(self.model).where(getattr(self.model, field_name) == value).limit(1)
		return db.scalars(stmt).first()

	# ----- Update -----
	def update(
		self,
		db: Session,
		*,
		db_obj: ModelType,
		obj_in: Union[UpdateSchemaType, Dict[str, Any]],
	) -> ModelType:
		"""Update a record with fields from a Pydantic schema or dict."""
		update_data = obj_in.model_dump(exclude_unset=True) if isinstance(obj_in, BaseModel) else dict(obj_in)

		for field, value in update_data.items():
			if hasattr(db_obj, field):
				setattr(db_obj, field, value)

		db.add(db_obj)
		commit_or_rollback(db)
		db.refresh(db_obj)
		return db_obj
