"""HTTP service exposing route search, suggestions and health."""

import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .catalog import load_catalog
from .config import get_settings
from .models import ErrorResponse, HealthResponse, SearchResponse
from .route_search import search_routes, suggest_places

logger = logging.getLogger(__name__)

router = APIRouter(tags=["routes"])


def get_catalog() -> list[Any]:
    """Read the route catalog for the current request."""
    return load_catalog()


@router.get("/search", response_model=SearchResponse)
def search(
    origin: str | None = Query(None, description="Part of the departure place"),
    destination: str | None = Query(None, description="Part of the destination or via place"),
    catalog: list[Any] = Depends(get_catalog),
) -> SearchResponse:
    routes = search_routes(catalog, origin, destination)
    return SearchResponse(count=len(routes), routes=routes)


@router.get("/suggest", response_model=list[str])
def suggest(
    q: str = Query("", description="Place name prefix"),
    catalog: list[Any] = Depends(get_catalog),
) -> list[str]:
    return suggest_places(catalog, q)


@router.get("/health", response_model=HealthResponse)
def health(catalog: list[Any] = Depends(get_catalog)) -> HealthResponse:
    return HealthResponse(
        route_count=len(catalog),
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        return _error(404, "not found")
    return _error(exc.status_code, str(exc.detail))


async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return _error(500, "internal error")


def create_app() -> FastAPI:
    """Build the FastAPI application."""
    app = FastAPI(title="bus-finder", version=__version__)
    app.include_router(router)
    # Legacy path prefix
    app.include_router(router, prefix="/api")
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, internal_error_handler)
    return app


app = create_app()


def serve() -> None:
    """Entry point for console script."""
    import uvicorn

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info("Loaded %d bus routes", len(load_catalog()))
    logger.info("Serving on http://%s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    serve()
