"""
AutoShorts API
FastAPI application for automated short-form video generation

This is the main entry point that wires together all routes and services.
"""

import os
import uuid
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from .config import (
    API_TITLE,
    API_DESCRIPTION,
    API_VERSION,
    CORS_ORIGINS,
)
from .routes import (
    generation_router,
    jobs_router,
    automation_router,
    trigger_router,
)
from .core import (
    setup_logging,
    get_logger,
    set_request_id,
    clear_context,
    parse_bool_env,
)
from .services.infrastructure.keys import ApiKeyPool
from .services.lifecycle import StartupManager
from .services.pipeline import GenerationPipeline
from .services.registry import get_key_pool, get_pipeline

# Initialize logging
log_level = os.getenv("LOG_LEVEL", "INFO")
log_file = os.getenv("LOG_FILE")
use_json_logs = parse_bool_env(os.getenv("JSON_LOGS"), default=False)

setup_logging(
    level=log_level,
    log_file=Path(log_file) if log_file else None,
    use_json=use_json_logs,
)

logger = get_logger(__name__, service="api")
logger.info("Starting AutoShorts API", extra={
    "log_level": log_level,
    "json_logs": use_json_logs,
})


@asynccontextmanager
async def lifespan(app: FastAPI):
    manager = StartupManager(app)
    await manager.run_startup()
    try:
        yield
    finally:
        await manager.run_shutdown()


# Create FastAPI app
app = FastAPI(
    title=API_TITLE,
    description=API_DESCRIPTION,
    version=API_VERSION,
    lifespan=lifespan,
)


@app.middleware("http")
async def add_request_correlation(request: Request, call_next):
    """Add a correlation ID to every request and its log lines."""
    request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
    set_request_id(request_id)
    path = request.url.path

    logger.info(f"{request.method} {path}", extra={
        "method": request.method,
        "path": path,
    })

    try:
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id

        logger.info(f"Response: {response.status_code}", extra={
            "status_code": response.status_code,
            "method": request.method,
            "path": path,
        })

        return response
    finally:
        clear_context()


# CORS middleware for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(generation_router)
app.include_router(jobs_router)
app.include_router(automation_router)
app.include_router(trigger_router)


@app.get("/")
async def root():
    """Root endpoint - API info"""
    return {
        "message": "AutoShorts API - Automated short-form video generation",
        "version": API_VERSION,
    }


@app.get("/health")
async def health_check(
    key_pool: ApiKeyPool = Depends(get_key_pool),
    pipeline: GenerationPipeline = Depends(get_pipeline),
):
    """
    Health check endpoint for container orchestration.

    Reports the number of configured credentials (never the credentials
    themselves) and whether a generation is running. Returns 503 when no key
    is configured, since no generation can succeed.
    """
    checks = {
        "status": "healthy",
        "checks": {
            "api_keys": {
                "configured": key_pool.size > 0,
                "count": key_pool.size,
            },
            "pipeline": {
                "busy": pipeline.is_busy,
            },
        },
    }

    runtime_report = getattr(app.state, "runtime_report", None)
    if runtime_report is not None:
        checks["checks"]["runtime_startup"] = runtime_report

    if key_pool.size == 0:
        checks["status"] = "unhealthy"
        checks["checks"]["api_keys"]["error"] = "No API key configured: set API_KEYS or API_KEY"
        logger.warning("Health check: no API key configured")
        raise HTTPException(status_code=503, detail=checks)

    return checks


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "autoshorts.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8000")),
    )
