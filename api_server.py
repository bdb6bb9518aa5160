#!/usr/bin/env python3
"""
Vigil Maintenance API Server

Endpoints:
- /equipment              : register, list, fetch, delete equipment
- /sensors                : ingest a sensor reading (refreshes the prediction)
- /maintenance            : record maintenance work
- /predictions/{id}       : prediction history / on-demand recompute
- /health                 : database health check
- /docs                   : Swagger UI (auto-generated)
"""

import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from config import Settings, get_settings
from core.exceptions import (
    NoDataError,
    ResourceNotFound,
    StoreError,
    ValidationError,
    VigilError,
)
from database import Database
from logger import RequestContextMiddleware, configure_logging, get_logger
from maintenance_api import routers
from schemas.response import ORJSONResponse

logger = get_logger(__name__)

# Domain error -> HTTP status
ERROR_STATUS = {
    ResourceNotFound: 404,
    NoDataError: 422,
    ValidationError: 400,
    StoreError: 500,
}


def _status_for(exc: VigilError) -> int:
    for error_type in type(exc).__mro__:
        if error_type in ERROR_STATUS:
            return ERROR_STATUS[error_type]
    return 500


# =============================================================================
# LIFESPAN (Startup/Shutdown)
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize the database handle on startup, dispose it on shutdown."""
    database: Database = app.state.database
    settings: Settings = app.state.settings

    logger.info(
        "Starting API server",
        app=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )
    await database.init()

    yield  # Server runs here

    logger.info("Shutting down API server")
    await database.shutdown()


# =============================================================================
# GLOBAL EXCEPTION HANDLERS
# =============================================================================
async def domain_exception_handler(request: Request, exc: VigilError):
    """Map domain errors to their HTTP status with a clean body."""
    status_code = _status_for(exc)
    log = logger.error if status_code >= 500 else logger.info
    log(
        "Request rejected",
        path=request.url.path,
        method=request.method,
        status_code=status_code,
        error_type=type(exc).__name__,
        error=exc.message,
    )
    return ORJSONResponse(status_code=status_code, content=exc.to_dict())


async def global_exception_handler(request: Request, exc: Exception):
    """
    Catch-all for unexpected exceptions.
    Logs the full trace but returns a clean error with a reference ID.
    """
    error_id = str(uuid.uuid4())
    logger.exception(
        "Unhandled exception",
        reference_id=error_id,
        path=request.url.path,
        method=request.method,
        error_type=type(exc).__name__,
    )
    return ORJSONResponse(
        status_code=500,
        content={
            "error": "InternalError",
            "message": f"An internal error occurred. Reference ID: {error_id}",
            "details": {"reference_id": error_id},
        },
    )


# =============================================================================
# APP FACTORY
# =============================================================================
def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Application settings; loaded from the environment if omitted.
        database: Database handle; built from ``settings.database`` if omitted.
    """
    settings = settings or get_settings()
    configure_logging(
        settings.log,
        service=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Equipment, sensor, maintenance and failure-prediction records.",
        version=settings.app_version,
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
    )
    app.state.settings = settings
    app.state.database = database or Database(settings.database, echo=settings.debug)

    app.add_exception_handler(VigilError, domain_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    for router in routers:
        app.include_router(router)

    @app.get("/health", tags=["System"])
    async def health_check(request: Request):
        """Public health check for load balancers."""
        health = await request.app.state.database.health()
        status_code = 200 if health["status"] == "healthy" else 503
        return ORJSONResponse(content=health, status_code=status_code)

    return app


def main() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log.level.lower(),
    )


if __name__ == "__main__":
    main()
