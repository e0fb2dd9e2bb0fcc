"""FastAPI application factory."""

import uuid
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from charity_console.api.routes import (
    address_router,
    bank_info_router,
    campaign_router,
    dashboard_router,
    event_router,
    family_router,
    health_router,
    location_router,
    package_router,
    settings_router,
)
from charity_console.config import Environment, get_settings
from charity_console.container import get_container, reset_container
from charity_console.exceptions import CharityConsoleError
from charity_console.logging_config import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Configure logging and open the document store; close it on shutdown."""
    settings = get_settings()
    configure_logging(settings)

    logger.info(
        "application_starting",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment.value,
        document_store=settings.document_store.value,
    )

    container = get_container()
    _ = container.document_store

    logger.info("application_started", ai_assist_enabled=settings.ai_assist_enabled)

    yield

    logger.info("application_stopping")
    reset_container()
    logger.info("application_stopped")


REQUEST_ID_HEADER = "X-Request-Id"


async def request_context_middleware(request: Request, call_next):
    """Tag every log line of a request and echo its id back to the caller."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:12]
    clear_context()
    bind_context(request_id=request_id, route=f"{request.method} {request.url.path}")
    try:
        response = await call_next(request)
    finally:
        clear_context()
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


async def console_error_handler(
    request: Request, exc: CharityConsoleError
) -> JSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        "request_rejected",
        error_code=exc.error_code,
        status_code=exc.status_code,
        detail=exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description=(
            f"Back office for {settings.organization_name}: families, donation "
            "campaigns, packages and distribution events"
        ),
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.middleware("http")(request_context_middleware)
    app.add_exception_handler(CharityConsoleError, console_error_handler)

    app.include_router(health_router)
    app.include_router(family_router)
    app.include_router(campaign_router)
    app.include_router(package_router)
    app.include_router(event_router)
    app.include_router(location_router)
    app.include_router(bank_info_router)
    app.include_router(settings_router)
    app.include_router(dashboard_router)
    app.include_router(address_router)

    return app


app = create_app()


def run() -> None:
    """Serve the API with uvicorn on the configured host and port."""
    settings = get_settings()
    uvicorn.run(
        "charity_console.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.environment == Environment.DEVELOPMENT,
        log_config=None,
    )
