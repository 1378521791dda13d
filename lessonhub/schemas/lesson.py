from datetime import datetime
from pydantic import BaseModel, ConfigDict


class LessonMetadata(BaseModel):
    """Recognised keys of a lesson's YAML front matter."""

    model_config = ConfigDict(coerce_numbers_to_str=True, extra="ignore")

    title: str = ""
    description: str = ""
    week: int = 0
    section: str = ""


class Lesson(BaseModel):
    week: int
    section: str = ""
    section_name: str = ""
    title: str
    description: str = ""
    content: str
    created_at: datetime
    file_path: str
    file_size: int
