"""AutoDoc Backend - Main FastAPI Application

Vehicle registration with document uploads.

This module creates and configures the main FastAPI application, including:
- API routers (vehicles, observability)
- Middleware (request ID correlation, CORS)
- Exception handlers (registration errors rendered as one user-facing message)
"""

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from config import get_settings
from database import init_db
from domain.vehicles.errors import RegistrationError
from observability.logging_config import configure_logging
from observability.middleware import RequestIDMiddleware
from observability.router import router as observability_router
from vehicles.router import router as vehicles_router

settings = get_settings()

configure_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables on startup."""
    logger.info("AutoDoc API starting up...")
    logger.info(f"Environment: {settings.ENV}")
    init_db()

    yield

    logger.info("AutoDoc API shutting down...")


app = FastAPI(
    title="AutoDoc API",
    description="Vehicle registration with document uploads",
    version="0.1.0",
    docs_url="/docs" if settings.ENV != "production" else None,
    redoc_url="/redoc" if settings.ENV != "production" else None,
    openapi_url="/openapi.json" if settings.ENV != "production" else None,
    lifespan=lifespan,
)


# =============================================================================
# MIDDLEWARE CONFIGURATION
# =============================================================================

app.add_middleware(RequestIDMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

@app.exception_handler(RegistrationError)
async def registration_exception_handler(
    request: Request,
    exc: RegistrationError
) -> JSONResponse:
    """Render any registration workflow failure as one user-visible message."""
    logger.warning(
        f"Registration failed on {request.method} {request.url.path}: {exc.code}",
        extra={"status_code": exc.status_code},
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Handle malformed requests (e.g. a non-numeric year)."""
    logger.warning(f"Validation error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": jsonable_errors(exc),
        },
    )


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(
    request: Request,
    exc: SQLAlchemyError
) -> JSONResponse:
    """Log database errors in full but return a generic message."""
    logger.error(f"Database error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "DATABASE_ERROR",
            "message": "A database error occurred. Please try again later.",
        },
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    # ctx may hold exception instances, which are not JSON serializable
    return [
        {key: value for key, value in error.items() if key != "ctx"}
        for error in exc.errors()
    ]


# =============================================================================
# ROUTER REGISTRATION
# =============================================================================

app.include_router(observability_router)
app.include_router(vehicles_router, prefix="/api/v1")


@app.get("/", include_in_schema=False)
async def root() -> dict[str, Any]:
    """Root endpoint - API information."""
    return {
        "name": "AutoDoc API",
        "version": "0.1.0",
        "status": "running",
        "docs": "/docs" if settings.ENV != "production" else None,
    }


def create_app() -> FastAPI:
    """Return the configured application (ASGI servers and tests)."""
    return app


if __name__ == "__main__":
    import os

    import uvicorn

    uvicorn.run(
        "main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=settings.ENV == "development",
        log_level=settings.LOG_LEVEL.lower(),
    )
