"""Split lesson documents into YAML front matter and markdown body."""

import logging
from typing import Optional, Tuple

import yaml
from pydantic import ValidationError

from lessonhub.schemas.lesson import LessonMetadata

logger = logging.getLogger(__name__)

DELIMITER = "---"


def parse_front_matter(text: str) -> Tuple[Optional[LessonMetadata], str]:
    """
    Parse the optional front matter block at the start of a lesson.

    The document must start with ``---``; it is split on the delimiter into at
    most three parts and the middle part is decoded as YAML. A block that is
    missing, not a mapping, or fails to decode yields no metadata, and the raw
    text is returned unchanged as the body.

    Returns:
        (metadata, body). ``body`` is stripped of surrounding whitespace when
        metadata was decoded.
    """
    if not text.startswith(DELIMITER):
        return None, text

    parts = text.split(DELIMITER, 2)
    if len(parts) < 3:
        return None, text

    try:
        raw = yaml.safe_load(parts[1])
    except yaml.YAMLError as e:
        logger.debug(f"Ignoring undecodable front matter: {str(e)}")
        return None, text

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        logger.debug(f"Ignoring front matter of type {type(raw).__name__}")
        return None, text

    try:
        metadata = LessonMetadata.model_validate(raw)
    except ValidationError as e:
        logger.debug(f"Ignoring invalid front matter: {e.error_count()} error(s)")
        return None, text

    return metadata, parts[2].strip()
