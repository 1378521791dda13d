from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import PlainTextResponse

from lessonhub.core.deps import get_catalog_store
from lessonhub.schemas.catalog import Catalog
from lessonhub.schemas.common import ErrorResponse
from lessonhub.schemas.lesson import Lesson
from lessonhub.schemas.section import Section, SectionSyllabusResponse
from lessonhub.schemas.toc import TOCResponse
from lessonhub.services.catalog import CatalogStore, get_section, get_section_lesson
from lessonhub.utils.toc import extract_toc

router = APIRouter()

NOT_FOUND_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid week number"},
    404: {"model": ErrorResponse, "description": "Section or lesson not found"},
}


def _require_section(catalog: Catalog, section_id: str) -> Section:
    section, found = get_section(catalog, section_id)
    if not found:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Section not found",
        )
    return section


def _check_local_week(section: Section, week: int) -> None:
    if week < 1 or week > section.week_end - section.week_start + 1:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid week number",
        )


@router.get("", response_model=List[Section])
async def list_sections(store: CatalogStore = Depends(get_catalog_store)):
    """Get all sections in course order."""
    return store.catalog.ordered_sections()


@router.get(
    "/{section_id}",
    response_model=Section,
    responses={404: {"model": ErrorResponse, "description": "Section not found"}},
)
async def read_section(section_id: str, store: CatalogStore = Depends(get_catalog_store)):
    """Get a section with its lessons."""
    return _require_section(store.catalog, section_id)


@router.get(
    "/{section_id}/syllabus",
    response_model=SectionSyllabusResponse,
    responses={404: {"model": ErrorResponse, "description": "Section not found"}},
)
async def read_section_syllabus(
    section_id: str, store: CatalogStore = Depends(get_catalog_store)
):
    """Get a section together with its syllabus details from the course file."""
    section = _require_section(store.catalog, section_id)
    return SectionSyllabusResponse(
        **section.model_dump(),
        syllabus_info=store.course.section_syllabus(section_id),
    )


@router.get("/{section_id}/week/{week}", response_model=Lesson, responses=NOT_FOUND_RESPONSES)
async def read_section_lesson(
    section_id: str, week: int, store: CatalogStore = Depends(get_catalog_store)
):
    """Get a lesson by its week number within a section (1-based)."""
    catalog = store.catalog
    section = _require_section(catalog, section_id)
    _check_local_week(section, week)

    lesson, found = get_section_lesson(catalog, section_id, week)
    if not found:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Lesson not found",
        )
    return lesson


@router.get(
    "/{section_id}/week/{week}/toc",
    response_model=TOCResponse,
    response_model_exclude_none=True,
    responses=NOT_FOUND_RESPONSES,
)
async def read_lesson_toc(
    section_id: str, week: int, store: CatalogStore = Depends(get_catalog_store)
):
    """Get the table of contents for a section lesson."""
    catalog = store.catalog
    section = _require_section(catalog, section_id)
    _check_local_week(section, week)

    lesson, found = get_section_lesson(catalog, section_id, week)
    toc_items, source = extract_toc(lesson.content if found else None)

    return TOCResponse(toc_items=toc_items, source=source, week=week, section=section_id)


@router.get(
    "/{section_id}/week/{week}/content",
    response_class=PlainTextResponse,
    responses=NOT_FOUND_RESPONSES,
)
async def read_lesson_content(
    section_id: str, week: int, store: CatalogStore = Depends(get_catalog_store)
):
    """Get the raw markdown body of a section lesson."""
    catalog = store.catalog
    section = _require_section(catalog, section_id)
    _check_local_week(section, week)

    lesson, found = get_section_lesson(catalog, section_id, week)
    if not found:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Lesson content not found",
        )
    return PlainTextResponse(lesson.content, media_type="text/markdown; charset=utf-8")
