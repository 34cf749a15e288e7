"""FastAPI application entry point."""

import os
import sys
import logging
import tomllib
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

# Load environment variables from .env file
# Must be called before settings are first read
load_dotenv()

# Add src to path
# main.py is at src/api/main.py, so src is 2 levels up
_src_path = Path(__file__).parent.parent
sys.path.insert(0, str(_src_path))

from api.dependencies import get_settings
from api.routes import define, generate, translate, usage, words, preferences, health
from domain.model.errors import RateLimitExceededError
from utils.logging import setup_structured_logging

settings = get_settings()

# Set up structured JSON logging
setup_structured_logging(settings.log_level)

logger = logging.getLogger(__name__)

# Read version from pyproject.toml (single source of truth)
_project_root = _src_path.parent
with open(_project_root / "pyproject.toml", "rb") as f:
    VERSION = tomllib.load(f)["project"]["version"]

SERVICE_NAME = "WordTap Reader API"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown logic."""
    logger.info("Starting service", extra={
        "version": VERSION,
        "model": settings.model,
        "providerConfigured": settings.has_provider_key,
        "storageBackend": settings.storage_backend,
        "rateLimit": f"{settings.rate_limit_max_requests}/{settings.rate_limit_window_seconds:g}s",
        "trustedProxyHops": settings.trusted_proxy_hops,
    })
    yield  # App runs here


# Create FastAPI app
app = FastAPI(
    title=SERVICE_NAME,
    description="Reading aid API - paragraphs, tap-to-define, translation and usage tracking",
    version=VERSION,
    lifespan=lifespan,
)

# CORS: "*" cannot be combined with credentials, explicit origins can
if settings.cors_origins == "*":
    cors_origins = ["*"]
    allow_credentials = False
    logger.warning(
        "CORS configured with wildcard origin ('*'). "
        "For production, set CORS_ORIGINS to specific domains (e.g., 'https://app.example.com')"
    )
else:
    cors_origins = [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()]
    allow_credentials = True
    logger.info(f"CORS configured with specific origins: {cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RateLimitExceededError)
async def rate_limit_handler(request: Request, exc: RateLimitExceededError):
    logger.warning("Rate limit exceeded", extra={
        "path": request.url.path,
        "retryAfterSeconds": exc.retry_after_seconds,
    })
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={"detail": str(exc), "retryAfterSeconds": exc.retry_after_seconds},
        headers={"Retry-After": str(exc.retry_after_seconds)},
    )


# Register routes
app.include_router(define.router)
app.include_router(generate.router)
app.include_router(translate.router)
app.include_router(usage.router)
app.include_router(words.router)
app.include_router(preferences.router)
app.include_router(health.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": SERVICE_NAME,
        "version": VERSION,
        "status": "running"
    }


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    # Application logs go through structured logging; uvicorn's access log would duplicate them
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=port,
        access_log=False
    )
