"""Main FastAPI application module.

This module builds the FastAPI application around an explicitly provided
``Database`` handle and registers all route handlers.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from api.routes import assignments, auth, system, users
from config import API_HOST, API_PORT, API_PREFIX, CORS_ALLOWED_ORIGINS
from core.database import Database
from core.logging_config import setup_logging

logger = logging.getLogger(__name__)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed requests as 400 Bad Request."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


async def store_unavailable_handler(request: Request, exc: OperationalError) -> JSONResponse:
    logger.exception("Store unavailable during %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Store unavailable"},
    )


async def store_failure_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Store failure during %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Store failure"},
    )


def create_app(database: Optional[Database] = None) -> FastAPI:
    """Build the application.

    Args:
        database: Store handle; a handle on ``DATABASE_URL`` when omitted.
            It is initialized on startup and disposed on shutdown.

    Returns:
        Configured FastAPI application.
    """
    database = database or Database()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database.init()
        yield
        database.dispose()

    app = FastAPI(
        title="Homework Tracker API",
        description="Assignments with per-user completion tracking.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.database = database

    # Configure CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(OperationalError, store_unavailable_handler)
    app.add_exception_handler(SQLAlchemyError, store_failure_handler)

    # Register route handlers
    app.include_router(system.router)
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(assignments.router)

    @app.get(f"{API_PREFIX}/health", summary="Health check", tags=["Health"])
    def health() -> dict:
        return {"status": "ok"}

    return app


# Setup logging
setup_logging()

app = create_app()


# --- Startup code for direct execution ---
if __name__ == "__main__":
    import uvicorn

    logger.info("Starting Homework Tracker API on http://%s:%s", API_HOST, API_PORT)
    logger.info("API docs: http://%s:%s/docs", API_HOST, API_PORT)
    uvicorn.run("app:app", host=API_HOST, port=API_PORT, reload=True)
