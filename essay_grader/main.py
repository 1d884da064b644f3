"""
FastAPI Backend for the Essay Grader
Scanned essay -> transcript -> rubric grade
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .config import settings
from .core import BaseAPIException
from .routes import assessments, config as config_routes, folders, grading, rubrics, upload

logger = logging.getLogger("essay_grader.main")

API_VERSION = "1.0.0"

# (router module, prefix, tag)
ROUTERS = [
    (upload, "/api/upload", "Upload"),
    (folders, "/api/folders", "Folders"),
    (rubrics, "/api/rubrics", "Rubrics"),
    (assessments, "/api/assessments", "Assessments"),
    (grading, "/api/grading", "Grading"),
    (config_routes, "/api/config", "Configuration"),
]


def error_response(status_code: int, message: str, error_code: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message, "error_code": error_code},
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create data directories and log the active providers"""
    for directory in (settings.DATA_DIR, settings.essays_dir, settings.uploads_dir, settings.records_dir):
        directory.mkdir(parents=True, exist_ok=True)

    mode = "development" if settings.DEBUG else "production"
    logger.info(f"Essay Grader API {API_VERSION} starting ({mode})")
    logger.info(f"Text generation: {settings.LLM_PROVIDER}, essays under {settings.essays_dir}")
    yield
    logger.info("Essay Grader API stopped")


def register_exception_handlers(app: FastAPI) -> None:
    """Every failure leaves the API as {success, error, error_code}"""

    @app.exception_handler(BaseAPIException)
    async def api_exception_handler(request: Request, exc: BaseAPIException):
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(f"{exc.error_code} on {request.method} {request.url.path}: {exc.detail}")
        return error_response(exc.status_code, exc.detail, exc.error_code)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        first = exc.errors()[0] if exc.errors() else {}
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = f"{location}: {first.get('msg', 'invalid request')}" if location else "Invalid request"
        logger.warning(f"VALIDATION_ERROR on {request.method} {request.url.path}: {message}")
        return error_response(400, message, "VALIDATION_ERROR")

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
        return error_response(500, "An unexpected error occurred", "INTERNAL_ERROR")


def create_app() -> FastAPI:
    application = FastAPI(
        title="Essay Grader API",
        description="OCR transcription and rubric grading of scanned essays",
        version=API_VERSION,
        lifespan=lifespan,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(application)

    for module, prefix, tag in ROUTERS:
        application.include_router(module.router, prefix=prefix, tags=[tag])

    # Scans and transcripts, read-only
    application.mount("/static/essays", StaticFiles(directory=str(settings.essays_dir)), name="essays")
    return application


app = create_app()


@app.get("/")
async def root():
    return {
        "name": "Essay Grader API",
        "version": API_VERSION,
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy", "version": API_VERSION, "provider": settings.LLM_PROVIDER}
