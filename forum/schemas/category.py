"""Pydantic schemas for Category."""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict


class CategoryResponse(BaseModel):
    """Schema for Category response."""
    id: int
    name: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class CategoryListResponse(BaseModel):
    """Response for listing categories."""
    categories: List[CategoryResponse]
