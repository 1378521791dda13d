from datetime import datetime
from fastapi import APIRouter, Depends

from lessonhub.core.deps import get_catalog_store
from lessonhub.schemas.catalog import SyllabusResponse
from lessonhub.schemas.course import Course
from lessonhub.services.catalog import CatalogStore

router = APIRouter()


@router.get("/course", response_model=Course)
async def get_course(store: CatalogStore = Depends(get_catalog_store)):
    """Get the course metadata."""
    return store.course


@router.get("/syllabus", response_model=SyllabusResponse)
async def get_syllabus(store: CatalogStore = Depends(get_catalog_store)):
    """Get the course together with every indexed lesson and section."""
    catalog = store.catalog
    weeks = sorted(catalog.lessons)

    return SyllabusResponse(
        course=store.course,
        instructor_info=store.course.instructor_info,
        lessons={week: catalog.lessons[week] for week in weeks},
        sections={section.id: section for section in catalog.ordered_sections()},
        weeks=weeks,
        last_updated=datetime.now(),
        total_files=len(catalog.lessons),
    )
