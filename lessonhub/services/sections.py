import logging
from typing import Dict, List, Optional, Sequence

from lessonhub.schemas.section import Section, SectionConfig

logger = logging.getLogger(__name__)


class CourseLayout:
    """Static course shape: section table, week ceiling and root-level lesson glob."""

    def __init__(
        self,
        name: str,
        sections: Sequence[SectionConfig],
        max_week: int,
        legacy_glob: str = "week*.md",
    ):
        self.name = name
        self.sections = list(sections)
        self.max_week = max_week
        self.legacy_glob = legacy_glob

        seen = set()
        for config in self.sections:
            if config.id in seen:
                raise ValueError(f"Duplicate section id {config.id!r} in layout {name!r}")
            seen.add(config.id)

    def __repr__(self) -> str:
        return f"CourseLayout({self.name!r}, sections={len(self.sections)}, max_week={self.max_week})"


CERTIFICATE_SECTIONS = [
    SectionConfig(id="section1-html-css", name="HTML/CSS Fundamentals", week_start=1, week_end=12),
    SectionConfig(id="section2-javascript", name="JavaScript Programming", week_start=13, week_end=24),
    SectionConfig(id="section3-backend", name="Backend Development", week_start=25, week_end=36),
    SectionConfig(id="section4-react", name="React & Frontend", week_start=37, week_end=48),
]

LAYOUTS: Dict[str, CourseLayout] = {
    "certificate": CourseLayout("certificate", CERTIFICATE_SECTIONS, max_week=48),
    "flat": CourseLayout(
        "flat",
        [SectionConfig(id="lessons", name="Lessons", week_start=1, week_end=10)],
        max_week=10,
        legacy_glob="*.md",
    ),
    "open": CourseLayout(
        "open",
        [SectionConfig(id="lessons", name="Lessons", week_start=1, week_end=100)],
        max_week=100,
        legacy_glob="*.md",
    ),
}


def get_layout(name: str) -> CourseLayout:
    try:
        return LAYOUTS[name]
    except KeyError:
        raise ValueError(
            f"Unknown course layout: {name!r}. Available layouts: {sorted(LAYOUTS)}"
        ) from None


def new_section(config: SectionConfig, lessons: Optional[List] = None) -> Section:
    return Section(
        id=config.id,
        name=config.name,
        description=f"Weeks {config.week_start}-{config.week_end}",
        week_start=config.week_start,
        week_end=config.week_end,
        lessons=lessons or [],
    )


def section_for_week(sections: Sequence[SectionConfig], week: int) -> Optional[SectionConfig]:
    """Return the first configured section whose range contains ``week``."""
    for config in sections:
        if config.contains(week):
            return config
    return None


def resolve_section(
    sections: Sequence[SectionConfig],
    week: int,
    declared: str = "",
    default: Optional[SectionConfig] = None,
) -> Optional[SectionConfig]:
    """
    Decide which configured section a lesson belongs to.

    A section named in the lesson's front matter wins when it is configured and
    its range contains the week. Otherwise ``default`` is used when it contains
    the week, and failing that the first section whose range does.

    Returns:
        The matching SectionConfig, or None when no range contains the week
    """
    if declared:
        for config in sections:
            if config.id == declared:
                if config.contains(week):
                    return config
                logger.debug(
                    f"Declared section {declared!r} does not cover week {week}, "
                    f"falling back to range lookup"
                )
                break

    if default is not None and default.contains(week):
        return default

    return section_for_week(sections, week)
