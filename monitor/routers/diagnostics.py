"""
monitor/routers/diagnostics.py

POST /diagnostics endpoint.
Interprets droppings classifier probabilities and records the diagnostic.
"""

import structlog
from fastapi import APIRouter, Depends

from monitor.dependencies import get_activity_log
from monitor.schemas import DiagnosticRequest, DiagnosticResult
from monitor.services.activity import ActivityLog
from monitor.services.diagnostic import interpret_classification

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/diagnostics", response_model=DiagnosticResult)
async def create_diagnostic(
    request: DiagnosticRequest,
    activity_log: ActivityLog = Depends(get_activity_log),
) -> DiagnosticResult:
    diagnostic = interpret_classification(request.results)
    activity_log.record_diagnostic(diagnostic)
    return diagnostic
