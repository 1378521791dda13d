import os
from datetime import datetime
from pathlib import Path
from typing import Union

from lessonhub.schemas.lesson import Lesson
from lessonhub.utils.frontmatter import parse_front_matter
from lessonhub.utils.week import DEFAULT_MAX_WEEK, extract_week_from_filename


def load_lesson(
    file_path: Union[str, os.PathLike],
    section_id: str = "",
    section_name: str = "",
    base_week: int = 1,
    max_week: int = DEFAULT_MAX_WEEK,
) -> Lesson:
    """
    Build a Lesson from one markdown file.

    The week comes from front matter when it is nonzero, otherwise from the
    filename. Inside a section directory whose base week is above 1 the
    filename number is section-local and is shifted to a global week. A week of
    0 means none could be resolved; callers decide whether to index it.

    Args:
        file_path: Path to the markdown file
        section_id: Identifier of the section directory being scanned, if any
        section_name: Display name of that section
        base_week: First global week of that section
        max_week: Week ceiling applied to filename numbers

    Returns:
        The loaded Lesson

    Raises:
        OSError: If the file cannot be read or stat'ed
    """
    path = Path(file_path)
    raw = path.read_bytes()
    stat = path.stat()
    text = raw.decode("utf-8", errors="replace")

    metadata, body = parse_front_matter(text)

    title = ""
    description = ""
    week = 0
    section = section_id
    content = ""
    if metadata is not None:
        title = metadata.title
        description = metadata.description
        week = metadata.week
        content = body
        if metadata.section:
            section = metadata.section

    if week == 0:
        week_num = extract_week_from_filename(path.name, max_week=max_week)
        if week_num > 0:
            if section_id and base_week > 1:
                week = base_week + week_num - 1
            else:
                week = week_num

    if not title:
        title = f"Week {week} Lesson"

    if not content:
        content = text

    return Lesson(
        week=week,
        section=section,
        section_name=section_name,
        title=title,
        description=description,
        content=content,
        created_at=datetime.fromtimestamp(stat.st_mtime),
        file_path=str(path),
        file_size=stat.st_size,
    )
