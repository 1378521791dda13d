import os
import threading
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from lessonhub.core.logger import logger
from lessonhub.schemas.catalog import Catalog
from lessonhub.schemas.course import DEFAULT_COURSE, Course
from lessonhub.schemas.lesson import Lesson
from lessonhub.schemas.section import Section, SectionConfig
from lessonhub.services.course import CourseFileError, load_course
from lessonhub.services.lesson_loader import load_lesson
from lessonhub.services.sections import CourseLayout, new_section, resolve_section


def _markdown_files(directory: Path) -> List[Path]:
    """All .md files below directory, in lexicographic path order."""
    return sorted(
        path
        for path in directory.rglob("*")
        if path.is_file() and path.name.lower().endswith(".md")
    )


def empty_catalog(layout: CourseLayout) -> Catalog:
    return Catalog(
        sections={config.id: new_section(config) for config in layout.sections},
        section_order=[config.id for config in layout.sections],
    )


def scan_catalog(root: Union[str, os.PathLike], layout: CourseLayout) -> Catalog:
    """
    Rebuild the lesson catalog from the files under root.

    Each configured section directory is walked recursively, then root-level
    files matching the layout's glob are picked up. Files are processed in
    lexicographic order and a later file resolving to an already indexed week
    replaces the earlier one. Unreadable files are logged and skipped.

    Args:
        root: Lesson root directory
        layout: Section table and week limits

    Returns:
        A new Catalog; nothing shared with any previous snapshot
    """
    root = Path(root)
    logger.info(f"Scanning lessons directory: {root}")

    lessons: Dict[int, Lesson] = {}
    placement: Dict[int, Optional[str]] = {}

    if not root.is_dir():
        logger.info("Lessons directory doesn't exist, skipping scan")
        catalog = empty_catalog(layout)
        catalog.scanned_at = datetime.now()
        return catalog

    for config in layout.sections:
        section_path = root / config.id
        if not section_path.is_dir():
            logger.info(f"Section directory {config.id} doesn't exist, skipping")
            continue

        for path in _markdown_files(section_path):
            try:
                lesson = load_lesson(
                    path,
                    section_id=config.id,
                    section_name=config.name,
                    base_week=config.week_start,
                    max_week=layout.max_week,
                )
            except OSError as e:
                logger.structured_error(
                    "Error parsing lesson", error=e, path=str(path), section=config.id
                )
                continue

            if not config.contains(lesson.week):
                logger.debug(
                    f"Skipping {path}: week {lesson.week} outside {config.id} "
                    f"(weeks {config.week_start}-{config.week_end})"
                )
                continue

            target = resolve_section(
                layout.sections, lesson.week, declared=lesson.section, default=config
            )
            _place(lessons, placement, lesson, target)
            logger.info(
                f"Added lesson for week {lesson.week} in {target.id}: {lesson.title}"
            )

    for path in sorted(root.glob(layout.legacy_glob)):
        if not path.is_file():
            continue
        try:
            lesson = load_lesson(path, max_week=layout.max_week)
        except OSError as e:
            logger.structured_error("Error parsing legacy lesson", error=e, path=str(path))
            continue

        if not 1 <= lesson.week <= layout.max_week:
            logger.debug(f"Skipping {path}: no usable week number ({lesson.week})")
            continue

        target = resolve_section(layout.sections, lesson.week, declared=lesson.section)
        _place(lessons, placement, lesson, target)
        logger.info(f"Added legacy lesson for week {lesson.week}: {lesson.title}")

    sections: Dict[str, Section] = {}
    for config in layout.sections:
        members = [
            lessons[week]
            for week in sorted(lessons)
            if placement.get(week) == config.id
        ]
        sections[config.id] = new_section(config, members)

    logger.info(f"Found {len(lessons)} valid lessons across {len(sections)} sections")
    return Catalog(
        lessons=lessons,
        sections=sections,
        section_order=[config.id for config in layout.sections],
        scanned_at=datetime.now(),
    )


def _place(
    lessons: Dict[int, Lesson],
    placement: Dict[int, Optional[str]],
    lesson: Lesson,
    target: Optional[SectionConfig],
) -> None:
    if lessons.get(lesson.week) is not None:
        logger.warning(
            f"Week {lesson.week} already indexed from {lessons[lesson.week].file_path}, "
            f"replacing with {lesson.file_path}"
        )
    if target is not None:
        lesson.section = target.id
        lesson.section_name = target.name
    lessons[lesson.week] = lesson
    placement[lesson.week] = target.id if target is not None else None


def get_lesson(catalog: Catalog, week: int) -> Tuple[Optional[Lesson], bool]:
    lesson = catalog.lessons.get(week)
    return lesson, lesson is not None


def get_section(catalog: Catalog, section_id: str) -> Tuple[Optional[Section], bool]:
    section = catalog.sections.get(section_id)
    return section, section is not None


def get_section_lesson(
    catalog: Catalog, section_id: str, local_week: int
) -> Tuple[Optional[Lesson], bool]:
    """Look up a lesson by its 1-based week within a section.

    Local weeks outside the section (below 1 or past its length) are not found,
    so a lookup never reaches into a neighbouring section.
    """
    section, found = get_section(catalog, section_id)
    if not found:
        return None, False
    if local_week < 1 or local_week > section.week_end - section.week_start + 1:
        return None, False
    return get_lesson(catalog, section.week_start + local_week - 1)


class CatalogStore:
    """
    Holder of the published catalog and course snapshots.

    Readers take ``store.catalog`` / ``store.course`` once per response and
    never mutate what they get. Readers never take the lock: a rebuild
    assembles a fresh Catalog and publishes it with a single reference swap,
    so a reader sees either the whole previous catalog or the whole new one.
    The lock only serialises writers.
    """

    def __init__(self, root: Union[str, os.PathLike], layout: CourseLayout):
        self.root = Path(root)
        self.layout = layout
        self._lock = threading.Lock()
        self._catalog = empty_catalog(layout)
        self._course = DEFAULT_COURSE.model_copy(deep=True)
        self._version = 0

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def course(self) -> Course:
        return self._course

    @property
    def version(self) -> int:
        """Number of catalog snapshots published so far."""
        return self._version

    def rebuild(self) -> Catalog:
        with self._lock:
            catalog = scan_catalog(self.root, self.layout)
            self._catalog = catalog
            self._version += 1
        return catalog

    def reload_course(self) -> Course:
        """Reload the course file; on failure the previous course stays published."""
        with self._lock:
            try:
                course = load_course(self.root)
            except CourseFileError as e:
                logger.structured_error("Error reloading course info", error=e)
                return self._course
            self._course = course
        return course
