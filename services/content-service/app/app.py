"""
Main FastAPI application for the content service.

This file wires together all layers:
- Domain: Publications, comments and results
- Infrastructure: Image storage backends
- Repositories: Publication and comment persistence
- Services: Business logic orchestration
- Routers: HTTP endpoints
"""

from contextlib import asynccontextmanager
from typing import Optional, Tuple

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .config import Settings, settings
from .database import create_db_engine, create_session_factory, init_db
from .dependencies import set_services
from .domain.exceptions import ContentServiceException
from .infrastructure.image_storage import IImageStorage
from .infrastructure.memory_image_storage import InMemoryImageStorage
from .infrastructure.supabase_image_storage import SupabaseImageStorage
from .logging_config import setup_logging
from .metrics import metrics_endpoint
from .repositories.comment_repository import ICommentRepository
from .repositories.memory_repository import (
    InMemoryCommentRepository,
    InMemoryPublicationRepository,
)
from .repositories.publication_repository import IPublicationRepository
from .repositories.sql_repository import SqlCommentRepository, SqlPublicationRepository
from .routers import comments_router, health_router, publications_router
from .services.comment_service import CommentService
from .services.publication_service import PublicationService
from .validators import build_validator

logger = structlog.get_logger(__name__)


def create_repositories(
    config: Settings,
) -> Tuple[IPublicationRepository, ICommentRepository]:
    """
    Create publication and comment repositories for the configured backend.

    Args:
        config: Service settings

    Returns:
        Tuple of (publication repository, comment repository)
    """
    if config.STORAGE_BACKEND == "sql":
        engine = create_db_engine(config.DATABASE_URL)
        init_db(engine)
        session_factory = create_session_factory(engine)
        return SqlPublicationRepository(session_factory), SqlCommentRepository(session_factory)

    logger.warning("Using in-memory storage, data is lost on restart")
    return InMemoryPublicationRepository(), InMemoryCommentRepository()


def create_image_storage(config: Settings) -> IImageStorage:
    if config.IMAGE_STORAGE_BACKEND == "supabase":
        return SupabaseImageStorage.from_credentials(
            config.SUPABASE_URL, config.SUPABASE_SERVICE_KEY, config.IMAGES_BUCKET
        )
    return InMemoryImageStorage()


def create_services(
    config: Settings,
    publication_repo: Optional[IPublicationRepository] = None,
    comment_repo: Optional[ICommentRepository] = None,
    image_storage: Optional[IImageStorage] = None,
) -> Tuple[PublicationService, CommentService]:
    """
    Create and configure the publication and comment services.

    Collaborators not passed in are built from the settings.

    Returns:
        Tuple of (publication service, comment service)
    """
    if publication_repo is None or comment_repo is None:
        publication_repo, comment_repo = create_repositories(config)
    if image_storage is None:
        image_storage = create_image_storage(config)

    comment_service = CommentService(
        validator=build_validator(config.COMMENT_MIN_LENGTH, config.CONTENT_MAX_LENGTH),
        comment_repo=comment_repo,
        publication_repo=publication_repo,
        featured_limit=config.FEATURED_COMMENTS_LIMIT,
    )
    publication_service = PublicationService(
        validator=build_validator(config.PUBLICATION_MIN_LENGTH, config.CONTENT_MAX_LENGTH),
        publication_repo=publication_repo,
        comment_service=comment_service,
        image_storage=image_storage,
    )
    return publication_service, comment_service


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    setup_logging(settings.LOG_LEVEL)
    logger.info("Starting Content Service...", version=__version__)

    try:
        publication_service, comment_service = create_services(settings)
        set_services(publication_service, comment_service)
        logger.info(
            "Content services initialized",
            storage=settings.STORAGE_BACKEND,
            image_storage=settings.IMAGE_STORAGE_BACKEND,
        )
    except Exception as e:
        logger.error("Failed to initialize content services", error=str(e))
        raise

    yield

    logger.info("Content Service shut down complete")


# Create FastAPI app
app = FastAPI(
    title="Content Service",
    description="Publications, hashtags and threaded comments",
    version=__version__,
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)


# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-TotalCount"],
)


# Request ID middleware
@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Add request ID for distributed tracing."""
    request_id = request.headers.get("X-Request-ID", f"req-{id(request)}")

    structlog.contextvars.bind_contextvars(request_id=request_id)

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id

    structlog.contextvars.clear_contextvars()

    return response


# Include routers
app.include_router(publications_router.router)
app.include_router(comments_router.router)
app.include_router(health_router.router)

# Prometheus metrics endpoint
app.add_api_route("/metrics", metrics_endpoint, methods=["GET"], include_in_schema=False)


@app.exception_handler(ContentServiceException)
async def content_service_exception_handler(request: Request, exc: ContentServiceException):
    """Report storage backend failures without leaking driver details."""
    logger.error(
        "Storage backend failure",
        path=request.url.path,
        method=request.method,
        error=exc.message,
        details=exc.details,
    )

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": type(exc).__name__,
            "message": "A storage backend operation failed",
            "request_id": request.headers.get("X-Request-ID"),
        },
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.app:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
