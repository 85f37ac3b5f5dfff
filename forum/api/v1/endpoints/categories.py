"""Category endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from forum.api.deps import get_db
from forum.crud import crud_category
from forum.schemas.category import CategoryListResponse, CategoryResponse

router = APIRouter(
    prefix="/categories",
    tags=["Categories"],
)


@router.get(
    "",
    response_model=CategoryListResponse,
    status_code=status.HTTP_200_OK,
    summary="List categories",
)
def list_categories(db: Session = Depends(get_db)) -> CategoryListResponse:
    """All categories ordered by name."""
    categories = crud_category.get_all(db)
    return CategoryListResponse(
        categories=[CategoryResponse.model_validate(c) for c in categories]
    )
