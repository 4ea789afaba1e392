"""
JobToken API - FastAPI Application Entry Point.

Token-based job board: seekers spend prepaid tokens to apply, employers
review applicants, admins watch the numbers.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.core.config import settings
from app.core.database import close_db, init_db
from app.core.exceptions import APIException, ValidationException
from app.core.logging import RequestIDMiddleware, get_logger, setup_logging
from app.core.rate_limit import limiter
from app.api.routes import api_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler - startup and shutdown."""
    setup_logging()
    logger.info("starting_app", app_name=settings.app_name, env=settings.environment)
    await init_db()
    logger.info("database_initialized")

    yield

    logger.info("shutting_down")
    await close_db()


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Token-based job board: apply with tokens, review applicants, track revenue",
    version=settings.app_version,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan,
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Request ID correlation
app.add_middleware(RequestIDMiddleware)

# CORS middleware - explicit methods and headers, not wildcards
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
)


def _validation_message(error: dict) -> str:
    field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    if error.get("type") == "missing":
        return f"{field} is required"
    return f"{field}: {error.get('msg')}" if field else error.get("msg", "Invalid request")


# Exception handlers
@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException):
    """Handle custom API exceptions."""
    if exc.status_code >= 500:
        logger.error("api_error", code=exc.code, message=exc.message, path=request.url.path)
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.code,
            "message": exc.message,
            "details": exc.details,
        },
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Missing or malformed fields are a 400, named in the message."""
    errors = exc.errors()
    message = _validation_message(errors[0]) if errors else "Invalid request"
    logger.info("request_invalid", path=request.url.path, message=message)
    return await api_exception_handler(
        request,
        ValidationException(
            message,
            details=[
                {"field": ".".join(str(p) for p in e.get("loc", ())), "message": e.get("msg")}
                for e in errors
            ],
        ),
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Unexpected failures (usually the database) surface their message as a 500."""
    logger.error(
        "unhandled_exception",
        exc_type=type(exc).__name__,
        exc_message=str(exc),
        path=request.url.path,
        exc_info=True,
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "INTERNAL_ERROR",
            "message": str(exc) or "An unexpected error occurred",
        },
    )


# Include API routes
app.include_router(api_router, prefix=settings.api_prefix)


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint - API info."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs" if settings.debug else None,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
