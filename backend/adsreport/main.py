"""FastAPI application entrypoint.

Configures logging and CORS, includes routers, and exposes a healthcheck endpoint.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .deps import get_settings
from .routers import legacy_reports as legacy_reports_router
from .routers import reports as reports_router
from . import schemas

logging.basicConfig(level=getattr(logging, get_settings().LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(
        title="adsreport API",
        description="""
        adsreport is a REST facade over the Google Ads and Google Sheets APIs.

        This API provides endpoints for:
        - Checking the Google Ads connection and manager account data
        - Downloading campaign and account metrics as CSV
        - Pushing campaign, account and per-day metrics into a spreadsheet tab

        ## Data Model
        - **Campaign metrics**: per campaign totals for a period
        - **Account metrics**: per account totals for a period
        - **Metrics per day**: account totals split by day
        """,
        version="1.0.1",
        license_info={
            "name": "Proprietary",
        },
    )

    settings = get_settings()

    # BACKEND_CORS_ORIGINS is a comma-separated list
    allowed_origins = [origin.strip() for origin in settings.BACKEND_CORS_ORIGINS.split(",") if origin.strip()]
    logger.info("[CORS] Allowed origins: %s", allowed_origins)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(reports_router.router)
    app.include_router(legacy_reports_router.router)

    @app.get(
        "/health",
        response_model=schemas.HealthResponse,
        tags=["Health"],
        summary="Health check",
        description="""
        Simple health check endpoint to verify the API is running.

        This endpoint does not call Google and can be used for load balancer
        health checks.
        """
    )
    def health():
        return schemas.HealthResponse(status="ok")

    return app


app = create_app()
