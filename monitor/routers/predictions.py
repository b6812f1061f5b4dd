"""
monitor/routers/predictions.py

Environmental forecast endpoints.
- GET /thresholds: the bands that apply to a flock age
- POST /predictions: analyze a regressor output vector
- POST /predictions/sequence: run the regressor on a sensor window, then analyze
"""

from typing import Any, Optional

import structlog
from fastapi import APIRouter, Body, Depends

from config import settings
from monitor.dependencies import get_activity_log, get_inference_backend
from monitor.schemas import AgeThresholds, PredictionAnalysis, PredictionRequest
from monitor.services.activity import ActivityLog
from monitor.services.aggregator import analyze_predictions
from monitor.services.inference import InferenceBackend, run_sequence_analysis
from monitor.services.thresholds import thresholds_for_age, validate_age

logger = structlog.get_logger(__name__)

router = APIRouter()


def _resolve_age(age: Optional[int]) -> int:
    if age is None:
        age = settings.default_bird_age_days
    return validate_age(age, clamp=settings.clamp_negative_age)


@router.get("/thresholds", response_model=AgeThresholds)
async def get_thresholds(age: Optional[int] = None) -> AgeThresholds:
    """Return every threshold table for the given age (default flock age if omitted)."""
    return thresholds_for_age(_resolve_age(age))


@router.post("/predictions", response_model=PredictionAnalysis)
async def create_prediction(
    request: PredictionRequest,
    activity_log: ActivityLog = Depends(get_activity_log),
) -> PredictionAnalysis:
    """
    Analyze a 12-value regressor output.

    Flow:
    1. Resolve the flock age (reject or clamp negatives per settings)
    2. Evaluate every horizon and the global risk
    3. Record the analysis in the activity log
    """
    age = _resolve_age(request.age)
    analysis = analyze_predictions(
        request.values,
        age,
        strict_gas_bands=settings.strict_gas_bands,
    )
    activity_log.record_prediction(analysis)
    logger.info(
        "prediction_analyzed",
        age=age,
        global_risk=analysis.global_risk,
    )
    return analysis


@router.post("/predictions/sequence", response_model=PredictionAnalysis)
async def create_sequence_prediction(
    document: Any = Body(...),
    age: Optional[int] = None,
    backend: InferenceBackend = Depends(get_inference_backend),
    activity_log: ActivityLog = Depends(get_activity_log),
) -> PredictionAnalysis:
    """Run the sequence regressor on a sensor window and analyze its forecast."""
    analysis = await run_sequence_analysis(
        backend,
        document,
        _resolve_age(age),
        strict_gas_bands=settings.strict_gas_bands,
    )
    activity_log.record_prediction(analysis)
    return analysis
