# This file makes the endpoints directory a proper Python package
from lessonhub.api.v1.endpoints import course, lessons, sections

__all__ = ["course", "lessons", "sections"]
