"""Main FastAPI application."""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from database.connection import DatabaseConnection
from api.schemas.requests import FIELD_MESSAGES
from api.routes import (
    admin_router,
    admin_writers_router,
    auth_router,
    public_router,
    setup_router,
    uploads_router,
    writer_router,
)
from shared.config import settings
from shared.exceptions import ErrorCode, PlatformError, ValidationError

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    await DatabaseConnection.init_mongo()
    await DatabaseConnection.init_redis()

    yield

    # Shutdown
    await DatabaseConnection.close_connections()


# Create FastAPI app
app = FastAPI(
    title="Almonhna Editorial Platform",
    description="Writer submissions, editorial moderation and the public reading site",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PlatformError)
async def platform_error_handler(request: Request, exc: PlatformError):
    """Render domain errors with their localized message."""
    if exc.status_code >= 500:
        logger.error(f"{exc.code.value} on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def _localized_message(error: dict) -> str:
    message = error.get("msg", "")
    if message.startswith("Value error, "):
        return message[len("Value error, "):]
    field = str(error.get("loc", ("",))[-1])
    if error.get("type") in ("value_error", "string_too_short") and field in FIELD_MESSAGES:
        return FIELD_MESSAGES[field]
    return message


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Surface the first field error as a single localized message."""
    errors = exc.errors()
    message = _localized_message(errors[0]) if errors else None
    body = ValidationError(message).to_dict()
    body["errors"] = [
        {"field": ".".join(str(part) for part in err.get("loc", ())), "message": err.get("msg")}
        for err in errors
    ]
    return JSONResponse(status_code=422, content=body)


# Exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler."""
    logger.exception(f"Unhandled error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": "خطأ", "detail": "حدث خطأ ما", "code": ErrorCode.INTERNAL_ERROR.value}
    )


# Include routers
app.include_router(auth_router)
app.include_router(setup_router)
app.include_router(uploads_router)
app.include_router(writer_router)
app.include_router(admin_router)
app.include_router(admin_writers_router)
app.include_router(public_router)

# Uploaded images
Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
app.mount(settings.media_url_prefix, StaticFiles(directory=settings.upload_dir), name="media")


# Health check endpoint
@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug
    )
