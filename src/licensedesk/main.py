"""
LicenseDesk API - Main Application Entry Point

This module initializes and configures the FastAPI application including:
- Logging
- Outbound HTTP client for the script endpoint
- Upload strategy selection (direct media host vs. script relay)
- CORS middleware
- API routing
- Health check endpoints
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from licensedesk.api import api_router
from licensedesk.core.config import settings
from licensedesk.core.http import close_http_client, init_http_client
from licensedesk.core.logging_config import setup_logging
from licensedesk.modules.proxy import configure_upload_strategy

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events including:
    - Outbound HTTP client
    - Upload strategy selection
    """
    # Startup
    setup_logging()
    logger.info(f"Starting LicenseDesk API in {settings.python_env} mode...")

    if not settings.apps_script_url:
        logger.warning("APPS_SCRIPT_URL is not set - forwarded actions will fail")
        if settings.is_production:
            raise RuntimeError("APPS_SCRIPT_URL must be set in production")

    await init_http_client()
    logger.info("[OK] HTTP client ready")

    strategy = configure_upload_strategy()
    logger.info(f"[OK] Upload strategy selected: {strategy.name}")

    yield  # Application runs here

    # Shutdown
    logger.info("Shutting down LicenseDesk API...")
    await close_http_client()
    logger.info("[OK] Cleanup complete")


app = FastAPI(
    title="LicenseDesk API",
    description="Driving license application intake proxy",
    version="0.1.0",
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
    lifespan=lifespan,
)

app.include_router(api_router)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint for container orchestration."""
    return {"status": "healthy"}


@app.get("/ready", tags=["Health"])
async def readiness_check() -> dict[str, str]:
    """Readiness check endpoint."""
    return {"status": "ready"}
