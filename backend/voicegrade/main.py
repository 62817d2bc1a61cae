"""
VoiceGrade - Backend Application

FastAPI application entry point.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from voicegrade import __version__
from voicegrade.api import api_router
from voicegrade.core.config import get_config, get_log_path
from voicegrade.core.errors import VoiceGradeError
from voicegrade.core.logging import get_logger, setup_logging

# Record startup time globally
_startup_time = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    """
    global _startup_time
    _startup_time = datetime.now(timezone.utc).isoformat()
    logger = setup_logging()
    logger.info("Starting VoiceGrade...")
    logger.debug("Log level: %s, log file: %s", get_config().logging.level, get_log_path())

    # Tables are created by scripts/init_db.py, not on startup.
    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application...")


app = FastAPI(
    title="VoiceGrade",
    description="Essay feedback in the voice of a specific teacher",
    version=__version__,
    lifespan=lifespan,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger = get_logger()
    method = request.method
    path = request.url.path
    logger.debug("Request started: %s %s", method, path)
    response = await call_next(request)
    logger.debug("Request completed: %s %s -> %s", method, path, response.status_code)
    return response


@app.exception_handler(VoiceGradeError)
async def voicegrade_error_handler(request: Request, exc: VoiceGradeError):
    """Render every service error as {"error": message} with its status."""
    if exc.status_code >= 500:
        get_logger().error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.public_message})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are a caller error (400), not 422."""
    errors = exc.errors()
    detail = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return JSONResponse(status_code=400, content={"error": f"Invalid request: {detail}"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    get_logger().exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


app.add_middleware(
    CORSMiddleware,
    allow_origins=get_config().server.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.get("/")
async def root():
    """Root endpoint - health check."""
    return {
        "name": "VoiceGrade",
        "version": __version__,
        "status": "running",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint with startup time."""
    return {
        "status": "healthy",
        "startup_time": _startup_time,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


if __name__ == "__main__":
    import uvicorn

    config = get_config()
    uvicorn.run(
        "voicegrade.main:app",
        host=config.server.host,
        port=config.server.port,
        reload=config.server.debug,
    )
