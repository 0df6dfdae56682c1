### Description ###
# CaseDesk - Multi-tenant HR Case Management API
# - API Server -
# Author: CaseDesk Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
CaseDesk API - Main Application

FastAPI application entry point that provides:
- Tenant-scoped REST endpoints for complaints, investigations, users and
  the resource catalog
- JWT bearer authentication with role allow-lists
- Request logging and rate limiting
- OpenAPI documentation at /api/docs

Usage:
    # Development
    uvicorn casedesk.main:app --reload --port 8000

    # Production
    python -m casedesk.cli serve
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from casedesk.config import get_api_settings, get_project_root
from casedesk.database import engine, init_db
from casedesk.middleware import RequestLoggingMiddleware
from casedesk.middleware.rate_limit import limiter, rate_limit_exceeded_handler
from casedesk.routers import (
    auth_router,
    complaints_router,
    investigations_router,
    resources_router,
    users_router,
)
from casedesk.schemas.responses import ErrorResponse, HealthResponse
from casedesk.services.errors import ServiceError
from casedesk.utils import setup_logger

# Load settings
settings = get_api_settings()

logger = setup_logger("casedesk")


def _check_pending_migrations():
    """
    Check for pending Alembic migrations on startup.

    Logs a warning if the database schema is not up to date.
    Does not block startup - just warns the administrator.
    """
    try:
        from alembic.config import Config
        from alembic.runtime.migration import MigrationContext
        from alembic.script import ScriptDirectory

        alembic_cfg = Config(str(get_project_root() / "alembic.ini"))
        alembic_cfg.set_main_option("script_location", str(get_project_root() / "migrations"))
        script = ScriptDirectory.from_config(alembic_cfg)

        with engine.connect() as conn:
            current_rev = MigrationContext.configure(conn).get_current_revision()
        head_rev = script.get_current_head()

        if current_rev is None:
            logger.warning(
                "Database is not under Alembic control. "
                "Stamp an existing database with 'alembic stamp head' or run 'alembic upgrade head'."
            )
        elif current_rev != head_rev:
            logger.warning(
                f"Pending database migrations: current {current_rev}, latest {head_rev}. "
                "Run 'alembic upgrade head'."
            )
        else:
            logger.info(f"Database schema is up to date (revision: {current_rev})")
    except Exception as e:
        # Don't fail startup on migration check errors
        logger.warning(f"Could not check migrations: {e}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager

    Startup creates missing tables and checks migrations.
    """
    logger.info(f"Starting {settings.api_title} v{settings.api_version} ({settings.environment})")

    init_db()
    app.state.app_db_connected = True
    _check_pending_migrations()

    yield

    logger.info(f"Shutting down {settings.api_title}...")
    engine.dispose()


# Create FastAPI application
app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
    description="""
## CaseDesk API

Multi-tenant case management for workplace harassment complaints.

### Authentication
Log in with `POST /api/auth/login` sending the `X-Tenant-Slug` header, then
pass the access token on every other request:

```
Authorization: Bearer <access_token>
```
    """,
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

# Add rate limiter
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add request logging middleware
app.add_middleware(RequestLoggingMiddleware)


# ========================================
# Exception Handlers
# ========================================

def _error_response(request: Request, status_code: int, message: str, errors=None, code=None, headers=None) -> JSONResponse:
    body = ErrorResponse(
        message=message,
        errors=errors,
        code=code,
        request_id=getattr(request.state, "request_id", None),
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Domain errors raised by the services package"""
    return _error_response(request, exc.status_code, exc.message, errors=exc.errors, code=exc.code)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """HTTP errors raised by dependencies (auth, tenant resolution) and routing"""
    if isinstance(exc.detail, dict):
        message = exc.detail.get("message", "Request failed")
        code = exc.detail.get("code")
    else:
        message = str(exc.detail)
        code = None
    return _error_response(request, exc.status_code, message, code=code, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Request validation errors as 400 with one entry per field"""
    errors = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path", "header")]
        errors.append({"field": ".".join(location) or None, "message": error.get("msg", "Invalid value")})
    return _error_response(request, status.HTTP_400_BAD_REQUEST, "Invalid input data", errors=errors)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught exceptions"""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error",
        errors=None if settings.is_production else [{"message": str(exc)}],
    )


# ========================================
# System Endpoints
# ========================================

@app.get(
    "/health",
    tags=["System"],
    response_model=HealthResponse,
    summary="Health check",
    description="Check API health and database connectivity",
)
async def health_check() -> HealthResponse:
    database_connected = True
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Health check database error: {e}")
        database_connected = False

    return HealthResponse(
        status="healthy" if database_connected else "degraded",
        version=settings.api_version,
        environment=settings.environment,
        database_connected=database_connected,
    )


@app.get("/", tags=["System"], summary="API Info")
async def root():
    """API root - returns basic API information"""
    return {
        "name": settings.api_title,
        "version": settings.api_version,
        "docs": "/api/docs",
        "health": "/health",
    }


# Include routers
app.include_router(auth_router, prefix=f"{settings.api_prefix}/auth", tags=["Authentication"])
app.include_router(users_router, prefix=f"{settings.api_prefix}/users", tags=["Users"])
app.include_router(complaints_router, prefix=f"{settings.api_prefix}/complaints", tags=["Complaints"])
app.include_router(investigations_router, prefix=f"{settings.api_prefix}/investigations", tags=["Investigations"])
app.include_router(resources_router, prefix=f"{settings.api_prefix}/resources", tags=["Resources"])


# Entry point for running directly
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "casedesk.main:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
    )
