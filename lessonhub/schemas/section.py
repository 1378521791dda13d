from typing import List
from pydantic import BaseModel, Field, model_validator

from lessonhub.schemas.course import SectionSyllabus
from lessonhub.schemas.lesson import Lesson


class SectionConfig(BaseModel):
    """One row of the static section table: identifier, name, inclusive week range."""

    id: str
    name: str
    week_start: int = Field(..., ge=1)
    week_end: int = Field(..., ge=1)

    @model_validator(mode="after")
    def check_range(self):
        if self.week_end < self.week_start:
            raise ValueError(
                f"Section {self.id!r} ends (week {self.week_end}) before it starts "
                f"(week {self.week_start})"
            )
        return self

    def contains(self, week: int) -> bool:
        return self.week_start <= week <= self.week_end


class Section(BaseModel):
    id: str
    name: str
    description: str = ""
    week_start: int
    week_end: int
    lessons: List[Lesson] = Field(default_factory=list)


class SectionSyllabusResponse(Section):
    syllabus_info: SectionSyllabus = Field(default_factory=SectionSyllabus)
