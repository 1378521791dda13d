from datetime import datetime
from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from lessonhub.schemas.course import Course, InstructorInfo
from lessonhub.schemas.lesson import Lesson
from lessonhub.schemas.section import Section


class Catalog(BaseModel):
    """One published snapshot of the lesson index.

    ``lessons`` is keyed by global week number and ``sections`` by section
    identifier. ``section_order`` keeps the configured section order so
    listings do not depend on dict ordering.
    """

    lessons: Dict[int, Lesson] = Field(default_factory=dict)
    sections: Dict[str, Section] = Field(default_factory=dict)
    section_order: List[str] = Field(default_factory=list)
    scanned_at: Optional[datetime] = None

    def ordered_lessons(self) -> List[Lesson]:
        return [self.lessons[week] for week in sorted(self.lessons)]

    def ordered_sections(self) -> List[Section]:
        return [self.sections[sid] for sid in self.section_order if sid in self.sections]


class SyllabusResponse(BaseModel):
    course: Course
    instructor_info: InstructorInfo = Field(default_factory=InstructorInfo)
    lessons: Dict[int, Lesson]
    sections: Dict[str, Section]
    weeks: List[int]
    last_updated: datetime
    total_files: int
