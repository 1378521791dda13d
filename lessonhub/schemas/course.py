from typing import Dict, List
from pydantic import BaseModel, ConfigDict, Field


class InstructorInfo(BaseModel):
    """Contact details published with the course syllabus."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str = ""
    telephone_numbers: List[str] = Field(default_factory=list)
    emails: List[str] = Field(default_factory=list)
    preferred_contact: str = ""
    response_time: str = ""


class SectionSyllabus(BaseModel):
    """Catalog details for one section, keyed by section id in course.yaml."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    course_code: str = ""
    credits: str = ""
    prerequisites: str = ""
    description: str = ""
    objectives: List[str] = Field(default_factory=list)
    topics: List[str] = Field(default_factory=list)
    assessment: List[str] = Field(default_factory=list)
    resources: List[str] = Field(default_factory=list)


class Course(BaseModel):
    # YAML scalars such as `duration: 48` are read as strings
    model_config = ConfigDict(coerce_numbers_to_str=True)

    title: str = ""
    description: str = ""
    duration: str = ""
    instructor: str = ""
    requirements: List[str] = Field(default_factory=list)

    # Served by the syllabus routes, not by /course
    instructor_info: InstructorInfo = Field(default_factory=InstructorInfo, exclude=True)
    syllabus: Dict[str, SectionSyllabus] = Field(default_factory=dict, exclude=True)

    def section_syllabus(self, section_id: str) -> SectionSyllabus:
        """Syllabus block for section_id, empty when none is configured."""
        return self.syllabus.get(section_id) or SectionSyllabus()


# Served when the lesson root has no course.yaml / course.yml
DEFAULT_COURSE = Course(
    title="Web Application Developer Certificate",
    description="A comprehensive program covering web development fundamentals",
    duration="48 weeks (4 sections)",
    instructor="Course Instructor",
    requirements=[
        "Build and maintain websites.",
        "Work with stakeholders to create websites.",
        "Research, assess, and appropriately apply emerging technology to support websites as needed in industry.",
        "Comply with the ethics related to the use of copyrighted materials and intellectual property rights.",
        "Demonstrate an entrepreneurial approach to web development sites and pages.",
        "Manage career goals through creating effective resumes/CVs, developing interviewing skills, and setting goals.",
    ],
)
