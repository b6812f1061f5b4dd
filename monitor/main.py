"""
monitor/main.py

FastAPI application entry point for the poultry monitor service.
Owns the activity log and the optional inference backend, and registers routers.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config import settings
from monitor.errors import MonitorError
from monitor.routers.activity import router as activity_router
from monitor.routers.diagnostics import router as diagnostics_router
from monitor.routers.predictions import router as predictions_router
from monitor.services.activity import ActivityLog
from monitor.services.inference import InferenceBackend

logger = structlog.get_logger(__name__)


def configure_logging(level: str = settings.log_level) -> None:
    """Filter structlog output below the configured level."""
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
    )


def create_app(
    activity_log: Optional[ActivityLog] = None,
    inference_backend: Optional[InferenceBackend] = None,
) -> FastAPI:
    """Build the application with its injected state containers."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Manage application lifecycle: startup and shutdown."""
        configure_logging()
        logger.info(
            "monitor_starting",
            port=settings.api_port,
            inference_backend=inference_backend is not None,
        )
        yield
        logger.info("monitor_shutting_down")

    app = FastAPI(
        title="Poultry Monitor",
        description="Droppings diagnostics and environmental risk forecasting",
        version="1.0.0",
        lifespan=lifespan,
    )
    if activity_log is None:
        activity_log = ActivityLog(max_len=settings.activity_log_max_len)
    app.state.activity_log = activity_log
    app.state.inference_backend = inference_backend

    @app.exception_handler(MonitorError)
    async def handle_monitor_error(request: Request, exc: MonitorError) -> JSONResponse:
        logger.warning(
            "request_rejected",
            path=request.url.path,
            error=exc.kind,
            detail=str(exc),
        )
        return JSONResponse(
            status_code=422,
            content={"error": exc.kind, "detail": str(exc)},
        )

    app.include_router(predictions_router)
    app.include_router(diagnostics_router)
    app.include_router(activity_router)
    return app


app = create_app()
