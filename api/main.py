"""
api/main.py — FastAPI entry point.

The LineCalculator is built once in create_app() from Settings and shared
through app.state; it is read-only, so requests need no locking.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI

from api.routers import evaluate
from api.schemas import HealthResponse
from config import Settings
from pipeline import LineCalculator

logger = logging.getLogger("line_calc")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
    )
    app.state.settings = settings
    app.state.calculator = LineCalculator.from_settings(settings)
    logger.info("LineCalc API ready (precision %d bits).", settings.precision_bits)

    # Routers
    app.include_router(evaluate.router)

    # Health
    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health():
        return HealthResponse(status="ok", version=settings.app_version)

    return app


app = create_app()
