from fastapi import APIRouter
from lessonhub.api.v1.endpoints import course, lessons, sections

api_router = APIRouter()

# Include all routers
api_router.include_router(course.router, tags=["course"])
api_router.include_router(lessons.router, prefix="/lessons", tags=["lessons"])
api_router.include_router(sections.router, prefix="/sections", tags=["sections"])
