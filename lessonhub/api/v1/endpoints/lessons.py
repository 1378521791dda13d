from typing import List
from fastapi import APIRouter, Depends, HTTPException, status

from lessonhub.core.deps import get_catalog_store
from lessonhub.schemas.common import ErrorResponse
from lessonhub.schemas.lesson import Lesson
from lessonhub.services.catalog import CatalogStore, get_lesson

router = APIRouter()


@router.get("", response_model=List[Lesson])
async def list_lessons(store: CatalogStore = Depends(get_catalog_store)):
    """Get all indexed lessons ordered by week."""
    return store.catalog.ordered_lessons()


@router.get(
    "/{week}",
    response_model=Lesson,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid week number"},
        404: {"model": ErrorResponse, "description": "Lesson not found"},
    },
)
async def read_lesson(week: int, store: CatalogStore = Depends(get_catalog_store)):
    """Get the lesson for a global week number."""
    if week < 1 or week > store.layout.max_week:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid week number",
        )

    lesson, found = get_lesson(store.catalog, week)
    if not found:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Lesson not found",
        )
    return lesson
