from contextlib import asynccontextmanager
from datetime import datetime
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError, SQLAlchemyError, TimeoutError as PoolTimeoutError
from sqlalchemy import text
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from vidtube.core.config import settings
from vidtube.core.database import engine
from vidtube.core.exceptions import (
    DependencyUnavailableError,
    RateLimitExceededError,
    VidTubeException,
)
from vidtube.core.rate_limit import limiter
from vidtube.core.security import TokenConfig
from vidtube.core.middleware import SecurityHeadersMiddleware, RequestValidationMiddleware
from vidtube.services.token_service import TokenService
from vidtube.api import (
    users_router,
    videos_router,
    comments_router,
    likes_router,
    subscriptions_router,
    tweets_router,
    playlists_router,
    dashboard_router,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


def run_migrations():
    """Run database migrations on startup."""
    from alembic.config import Config
    from alembic import command

    logger.info("Running database migrations...")
    alembic_cfg = Config("alembic.ini")
    command.upgrade(alembic_cfg, "head")
    logger.info("Database migrations completed successfully")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info("Starting VidTube API...")

    if settings.is_production:
        errors = settings.validate_required_secrets()
        if errors:
            for error in errors:
                logger.error("Configuration error: %s", error)
            raise RuntimeError("Refusing to start with invalid configuration")
        run_migrations()

    logger.info("VidTube API started successfully")
    yield
    logger.info("Shutting down VidTube API...")


app = FastAPI(
    title="VidTube API",
    description="Video sharing platform backend",
    version="1.0.0",
    lifespan=lifespan,
    # Disable docs in production
    docs_url=None if settings.is_production else "/docs",
    redoc_url=None if settings.is_production else "/redoc",
)

# Token signing configuration, shared by every request
app.state.token_service = TokenService(TokenConfig.from_settings(settings))

# Add rate limiting
app.state.limiter = limiter


def error_response(
    status_code: int,
    detail: str,
    error_code: str,
    exc: Exception | None = None,
    headers: dict | None = None,
    **extra,
) -> JSONResponse:
    """Uniform error envelope. Debug details are never sent in production."""
    content = {
        "success": False,
        "status_code": status_code,
        "detail": detail,
        "error_code": error_code,
        **extra,
    }
    if exc is not None and not settings.is_production:
        content["debug"] = {"type": type(exc).__name__, "message": str(exc)}
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content), headers=headers)


# Exception handlers
@app.exception_handler(VidTubeException)
async def vidtube_exception_handler(request: Request, exc: VidTubeException):
    """Handle custom VidTube exceptions."""
    return error_response(
        exc.status_code,
        exc.detail,
        exc.error_code or "ERROR",
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies and query parameters are a 400, not a 422."""
    return error_response(
        400,
        "Invalid request",
        "VALIDATION_ERROR",
        errors=[
            {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
            for err in exc.errors()
        ],
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Framework errors (unknown route, wrong method) in the same envelope."""
    return error_response(
        exc.status_code,
        str(exc.detail),
        "HTTP_ERROR",
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RateLimitExceeded)
async def rate_limit_exception_handler(request: Request, exc: RateLimitExceeded):
    error = RateLimitExceededError()
    return error_response(error.status_code, error.detail, error.error_code)


@app.exception_handler(OperationalError)
@app.exception_handler(PoolTimeoutError)
async def database_unavailable_handler(request: Request, exc: SQLAlchemyError):
    """Timed-out or unreachable store: retryable."""
    logger.error(f"Database unavailable: {exc}")
    error = DependencyUnavailableError()
    return error_response(error.status_code, error.detail, error.error_code, exc=exc, headers=error.headers)


@app.exception_handler(SQLAlchemyError)
async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError):
    """Handle database errors."""
    logger.error(f"Database error: {exc}")
    return error_response(500, "A database error occurred", "DATABASE_ERROR", exc=exc)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors."""
    logger.error(f"Unexpected error: {exc}", exc_info=True)
    return error_response(500, "An unexpected error occurred", "INTERNAL_ERROR", exc=exc)

# Security middleware (order matters - first added = last executed)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestValidationMiddleware)

# CORS with credentials, so auth cookies travel cross-site
app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.CORS_ORIGIN.split(",") if origin.strip()],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=[
        "Authorization",
        "Content-Type",
        "Accept",
        "Origin",
        "X-Requested-With",
    ],
    max_age=600,
)

# Include routers
app.include_router(users_router, prefix=API_PREFIX)
app.include_router(videos_router, prefix=API_PREFIX)
app.include_router(comments_router, prefix=API_PREFIX)
app.include_router(likes_router, prefix=API_PREFIX)
app.include_router(subscriptions_router, prefix=API_PREFIX)
app.include_router(tweets_router, prefix=API_PREFIX)
app.include_router(playlists_router, prefix=API_PREFIX)
app.include_router(dashboard_router, prefix=API_PREFIX)


@app.get(f"{API_PREFIX}/healthcheck")
def health_check():
    """Health check endpoint for load balancers and monitoring."""
    health_status = {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
    }

    # Check database connectivity
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        health_status["database"] = "connected"
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        health_status["status"] = "unhealthy"
        health_status["database"] = "disconnected"

    return health_status
