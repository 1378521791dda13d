from pathlib import Path

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lessonhub import __version__
from lessonhub.api.v1.router import api_router
from lessonhub.core.config import settings
from lessonhub.core.deps import get_catalog_store
from lessonhub.core.logger import logger
from lessonhub.core.middleware import RequestTimingMiddleware
from lessonhub.schemas.common import HealthResponse
from lessonhub.services.catalog import CatalogStore
from lessonhub.services.sections import get_layout
from lessonhub.services.watcher import start_watcher


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=__version__,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
    debug=settings.DEBUG,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],
)

# Include API router
app.include_router(api_router, prefix=settings.API_PREFIX)

app.add_middleware(
    RequestTimingMiddleware, slow_request_seconds=settings.SLOW_REQUEST_SECONDS
)


@app.on_event("startup")
async def startup_event():
    lessons_dir = Path(settings.LESSONS_DIR)
    try:
        lessons_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.structured_warning(
            "Failed to create lessons directory", path=str(lessons_dir), error=str(e)
        )

    store = CatalogStore(lessons_dir, get_layout(settings.COURSE_LAYOUT))
    store.reload_course()
    catalog = store.rebuild()
    app.state.catalog_store = store
    app.state.watcher = None

    if settings.WATCH_ENABLED:
        app.state.watcher = start_watcher(
            lessons_dir,
            store.reload_course,
            store.rebuild,
            debounce_ms=settings.WATCH_DEBOUNCE_MS,
            force_polling=settings.WATCH_FORCE_POLLING,
        )

    logger.structured_info(
        "Lesson catalog ready",
        lessons_dir=str(lessons_dir),
        layout=store.layout.name,
        lessons=len(catalog.lessons),
        sections=len(catalog.sections),
        watching=settings.WATCH_ENABLED,
    )


@app.on_event("shutdown")
async def shutdown_event():
    watcher = getattr(app.state, "watcher", None)
    if watcher is not None:
        watcher.close()
        logger.info("File watcher closed")


@app.get("/")
async def root():
    return {
        "message": f"Welcome to {settings.PROJECT_NAME}",
        "api": settings.API_PREFIX,
    }


@app.get("/healthz", response_model=HealthResponse)
async def healthz(store: CatalogStore = Depends(get_catalog_store)):
    catalog = store.catalog
    return HealthResponse(
        status="ok", lessons=len(catalog.lessons), sections=len(catalog.sections)
    )
