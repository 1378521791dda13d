import uvicorn
from lessonhub.core.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "lessonhub.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
        log_level=settings.LOG_LEVEL.lower(),
        workers=1,
    )
