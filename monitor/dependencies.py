"""
monitor/dependencies.py

FastAPI dependency providers for objects owned by the composition root.
"""

from typing import Optional

from fastapi import HTTPException, Request

from monitor.services.activity import ActivityLog
from monitor.services.inference import InferenceBackend


def get_activity_log(request: Request) -> ActivityLog:
    return request.app.state.activity_log


def get_inference_backend(request: Request) -> InferenceBackend:
    """Return the configured inference adapter, or 503 when none is installed."""
    backend: Optional[InferenceBackend] = getattr(
        request.app.state, "inference_backend", None
    )
    if backend is None:
        raise HTTPException(status_code=503, detail="inference backend unavailable")
    return backend
