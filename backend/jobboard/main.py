import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from jobboard.core.config import settings
from jobboard.core.errors import JobBoardError, StorageError, ValidationFailed
from jobboard.core.logging import configure_logging
from jobboard.db.base import Base
from jobboard.db.session import engine

# Import all models so SQLAlchemy can discover them for table creation
from jobboard.models import Company, Job, User  # noqa: F401

# Import API router
from jobboard.api.api import api_router

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create database tables on startup."""
    Base.metadata.create_all(bind=engine)
    logger.info("%s API started", settings.APP_NAME)
    yield


app = FastAPI(
    title=settings.APP_NAME,
    description="Job board with companies, job postings and applications",
    version="1.0.0",
    lifespan=lifespan,
)


@app.exception_handler(JobBoardError)
async def job_board_error_handler(request: Request, exc: JobBoardError):
    """Render domain errors as ``{"msg", "reason"}`` with their status code."""
    if isinstance(exc, StorageError):
        logger.error("%s %s failed with a storage error", request.method, request.url.path)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Body and query validation failures answer 400 with a field map."""
    errors = {}
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        errors[".".join(location) or "body"] = error.get("msg", "Invalid value")
    failure = ValidationFailed(errors)
    return JSONResponse(status_code=failure.status_code, content=failure.to_dict())


# CORS Middleware - allowlist from env (comma-separated)
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in settings.BACKEND_CORS_ORIGINS.split(",")
    if origin.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint."""
    return {"message": f"{settings.APP_NAME} API Running"}


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


# Include API router with /api prefix
app.include_router(api_router, prefix="/api")
