"""
monitor/services/severity.py

Reduces per-variable risk levels to one worst-case severity.
The reduction is a max over RISK_SCORES, so evaluation order does not matter.
"""

from typing import Iterable, Optional

from monitor.constants import DASHBOARD_LABELS, RISK_ICONS, RISK_SCORES, RISK_SUBTITLES
from monitor.schemas import (
    DashboardStatus,
    DiagnosticResult,
    HorizonResults,
    PredictionAnalysis,
    RiskLevel,
)


def max_risk(levels: Iterable[str]) -> RiskLevel:
    """Return the most severe level in `levels`, or "optimal" when empty."""
    return max(levels, key=RISK_SCORES.__getitem__, default="optimal")


def resolve_global_risk(horizons: HorizonResults) -> RiskLevel:
    """Worst level found across every variable of every horizon."""
    return max_risk(
        level for result in horizons.values() for level in result.levels()
    )


def risk_subtitle(level: str) -> str:
    return RISK_SUBTITLES[level]


def dashboard_status(
    last_prediction: Optional[PredictionAnalysis],
    last_diagnostic: Optional[DiagnosticResult],
) -> DashboardStatus:
    """Combine the latest forecast and droppings diagnostic into one status."""
    levels = []
    if last_prediction is not None:
        levels.append(last_prediction.global_risk)
    if last_diagnostic is not None:
        levels.append(last_diagnostic.severity)

    level = max_risk(levels)
    return DashboardStatus(
        level=level,
        label=DASHBOARD_LABELS[level],
        icon=RISK_ICONS[level],
        subtitle=RISK_SUBTITLES[level],
    )
