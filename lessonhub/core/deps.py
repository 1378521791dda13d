from fastapi import HTTPException, Request, status

from lessonhub.services.catalog import CatalogStore


def get_catalog_store(request: Request) -> CatalogStore:
    store = getattr(request.app.state, "catalog_store", None)
    if store is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Lesson catalog is not loaded yet",
        )
    return store
