import logging
import os
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import ValidationError

from lessonhub.schemas.course import DEFAULT_COURSE, Course

logger = logging.getLogger(__name__)

COURSE_FILENAMES = ("course.yaml", "course.yml")


class CourseFileError(Exception):
    """Raised when a course file exists but cannot be read or decoded."""


def find_course_file(root: Union[str, os.PathLike]) -> Optional[Path]:
    for filename in COURSE_FILENAMES:
        candidate = Path(root) / filename
        if candidate.is_file():
            return candidate
    return None


def load_course(root: Union[str, os.PathLike]) -> Course:
    """
    Load course metadata from course.yaml (or course.yml) under root.

    Returns:
        The decoded Course, or a copy of DEFAULT_COURSE when neither file exists

    Raises:
        CourseFileError: If the file exists but cannot be read or decoded
    """
    course_file = find_course_file(root)
    if course_file is None:
        logger.info("Using default course info (no course.yaml found)")
        return DEFAULT_COURSE.model_copy(deep=True)

    try:
        raw = yaml.safe_load(course_file.read_text(encoding="utf-8"))
    except OSError as e:
        raise CourseFileError(f"failed to read course file {course_file}: {e}") from e
    except yaml.YAMLError as e:
        raise CourseFileError(f"failed to parse course file {course_file}: {e}") from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise CourseFileError(
            f"course file {course_file} must contain a mapping, got {type(raw).__name__}"
        )

    try:
        course = Course.model_validate(raw)
    except ValidationError as e:
        raise CourseFileError(f"invalid course file {course_file}: {e}") from e

    logger.info(f"Course info loaded: {course.title}")
    return course
