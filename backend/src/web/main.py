"""
Main Application - FastAPI app factory and lifespan management
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from .config import AppConfig, config
from .limiter import create_limiter
from .routers import files, health, publish
from .services.task_executor import AsyncioTaskExecutor
from ..db.connection import DatabaseManager
from ..db.crud import CourtListStatusRepository
from ..services.clients import (
    CourtListDataClient,
    DocumentGeneratorClient,
    PublicationHubClient,
    ReferenceDataClient,
)
from ..services.courtlist import CourtListFetcher, SchemaValidator
from ..services.errors import (
    BadRequestError,
    NotFoundError,
    SchemaValidationException,
)
from ..services.pdf import PdfRenderer
from ..services.pipeline import PublishPipeline
from ..services.status import PublishStatusService
from ..services.storage import create_blob_store
from ..services.tasks import TaskTrigger


logger = logging.getLogger(__name__)


def _client_config(app_config: AppConfig, base_url: str, transport, **extra) -> dict:
    return {
        "base_url": base_url,
        "timeout": app_config.http_timeout,
        "retry_attempts": app_config.http_retry_attempts,
        "transport": transport,
        **extra,
    }


def _build_services(
    app: FastAPI,
    app_config: AppConfig,
    transport: Optional[httpx.AsyncBaseTransport],
) -> list:
    """Wire repository, clients, pipeline and executor onto app.state; returns clients to close."""
    clients = []

    fetcher = None
    if app_config.common_platform_base_url:
        court_list_data = CourtListDataClient(
            _client_config(app_config, app_config.common_platform_base_url, transport)
        )
        reference_data = ReferenceDataClient(
            _client_config(app_config, app_config.common_platform_base_url, transport)
        )
        clients += [court_list_data, reference_data]
        fetcher = CourtListFetcher(court_list_data, reference_data)

    publisher = None
    if app_config.publication_hub_url:
        publisher = PublicationHubClient(
            _client_config(
                app_config,
                app_config.publication_hub_url,
                transport,
                token=app_config.publication_hub_token,
            )
        )
        clients.append(publisher)

    renderer = None
    if app_config.document_generator_base_url:
        generator = DocumentGeneratorClient(
            _client_config(app_config, app_config.document_generator_base_url, transport)
        )
        clients.append(generator)
        renderer = PdfRenderer(generator)

    blob_store = create_blob_store(
        app_config.blob_backend,
        local_dir=app_config.blob_local_dir,
        public_base_url=app_config.blob_public_base_url or None,
        connection_string=app_config.azure_storage_connection_string,
        container_name=app_config.azure_storage_container,
        sas_expiry_minutes=app_config.sas_expiry_minutes,
    )

    status_service = PublishStatusService(CourtListStatusRepository(app.state.db))
    pipeline = PublishPipeline(
        status=status_service,
        validator=SchemaValidator(),
        payload_source=fetcher,
        publisher=publisher,
        renderer=renderer,
        store=blob_store,
        offline_file_url_template=app_config.offline_file_url_template,
        pdf_failure_marks_failed=app_config.pdf_failure_marks_failed,
    )
    executor = AsyncioTaskExecutor(pipeline)

    app.state.status_service = status_service
    app.state.blob_store = blob_store
    app.state.pipeline = pipeline
    app.state.executor = executor
    app.state.task_trigger = TaskTrigger(executor)
    return clients


def _make_lifespan(app_config: AppConfig, transport: Optional[httpx.AsyncBaseTransport]):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifecycle management"""
        logger.info("Starting Court List Publishing service...")

        db_path = app_config.database_path
        logger.info("Database path: %s", db_path)

        # Initialize DatabaseManager and create schema (idempotent)
        db = DatabaseManager(db_path)
        try:
            await db.init()
            logger.info("Database initialized successfully")
        except Exception as e:
            logger.exception("Failed to initialize database")
            raise RuntimeError(f"Database initialization failed: {e}") from e

        app.state.db = db
        clients = _build_services(app, app_config, transport)

        yield

        logger.info("Shutting down...")

        # Let in-flight publish jobs record their outcome
        if not await app.state.executor.wait_idle(timeout=app_config.http_timeout):
            logger.warning("Publish jobs still running at shutdown")

        for client in clients:
            try:
                await client.close()
            except Exception:
                logger.exception("Failed to close %s cleanly", type(client).__name__)

        try:
            await db.close()
            logger.info("Database connection closed")
        except Exception:
            logger.exception("Failed to close database cleanly")

    return lifespan


def create_app(
    app_config: Optional[AppConfig] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_config: Settings to use instead of the environment-derived config
        transport: httpx transport shared by all downstream clients
    """
    app_config = app_config or config
    app = FastAPI(
        title="Court List Publishing API",
        version="1.0.0",
        lifespan=_make_lifespan(app_config, transport),
    )

    # Rate limiting
    app.state.limiter = create_limiter(app_config)
    app.add_middleware(SlowAPIMiddleware)

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
        """Handle rate limit exceeded with JSON response."""
        return JSONResponse(
            status_code=429,
            content={"detail": "Rate limit exceeded", "retry_after": exc.detail},
        )

    # Service exceptions
    @app.exception_handler(BadRequestError)
    async def bad_request_handler(request: Request, exc: BadRequestError):
        logger.info("Bad request on %s: %s", request.url.path, exc.message)
        return JSONResponse(status_code=400, content={"detail": exc.message})

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"detail": exc.message})

    @app.exception_handler(SchemaValidationException)
    async def schema_validation_handler(request: Request, exc: SchemaValidationException):
        logger.warning("Schema validation failed: %s", exc.message)
        return JSONResponse(
            status_code=422,
            content={"detail": "Schema validation failed", "errors": exc.errors},
        )

    # Global exception handlers
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle FastAPI request validation errors with clean response."""
        errors = []
        for error in exc.errors():
            loc = " -> ".join(str(x) for x in error["loc"])
            errors.append({"field": loc, "message": error["msg"]})
        logger.warning("Validation error: %s", errors)
        return JSONResponse(
            status_code=400,
            content={"detail": "Validation error", "errors": errors},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions with logging."""
        logger.exception("Unexpected error: %s", exc)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    # Include routers
    app.include_router(health.router)
    app.include_router(publish.router)
    app.include_router(files.router)

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.DEBUG if config.debug else logging.INFO)
    uvicorn.run(app, host=config.host, port=config.port)
