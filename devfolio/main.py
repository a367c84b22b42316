"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from devfolio import middleware
from devfolio.api import (
    auth,
    blogs,
    courses,
    notifications,
    portfolios,
    projects,
    skills,
    students,
    websocket,
)
from devfolio.config import get_settings
from devfolio.database import check_connection, init_db
from devfolio.middleware import error_response

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Verify the database before serving; the process exits if it is unreachable."""
    try:
        check_connection()
    except Exception as e:
        logger.critical(f"Database connection failed: {e}")
        raise SystemExit(1) from e
    init_db()
    logger.info(f"Database connected ({settings.environment})")
    yield


app = FastAPI(
    title="Devfolio API",
    description="Student portfolios, projects, skills, courses and blogs",
    version="1.0.0",
    lifespan=lifespan,
)

# Registered innermost first: security headers wrap every response,
# including rate-limit and size rejections
app.middleware("http")(middleware.rate_limit)
app.middleware("http")(middleware.limit_body_size)
app.middleware("http")(middleware.security_headers)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

# Register routers
app.include_router(auth.router)
app.include_router(students.router)
app.include_router(projects.router)
app.include_router(skills.router)
app.include_router(courses.router)
app.include_router(blogs.router)
app.include_router(portfolios.router)
app.include_router(notifications.router)
app.include_router(websocket.router)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render raised HTTP errors in the `{success, message}` envelope."""
    return error_response(exc.status_code, str(exc.detail), headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report request validation failures as 400 with per-field messages."""
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"][1:]) or str(error["loc"][0]),
            "message": error["msg"].removeprefix("Value error, "),
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "message": "Validation failed", "errors": errors},
    )


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    """A unique key was claimed concurrently between our check and the commit."""
    logger.warning(f"Integrity error on {request.method} {request.url.path}: {exc.orig}")
    return error_response(status.HTTP_400_BAD_REQUEST, "Duplicate field value entered")


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Log unexpected failures and answer with a generic 500."""
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server Error")


@app.get("/")
async def root():
    """Service banner listing the resource roots."""
    return {
        "message": "Devfolio API",
        "status": "running",
        "version": app.version,
        "endpoints": {
            "health": "/api/health",
            "auth": "/api/auth",
            "students": "/api/students",
            "projects": "/api/projects",
            "skills": "/api/skills",
            "courses": "/api/courses",
            "blogs": "/api/blogs",
            "portfolios": "/api/portfolios",
            "notifications": "/api/notifications",
        },
    }


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "Backend is running",
        "timestamp": datetime.now(UTC).isoformat(),
        "environment": settings.environment,
    }
