"""
monitor/services/diagnostic.py

Interprets droppings-image classifier output.
The top-probability class is mapped to its disease description and severity.
"""

from typing import Iterable

import structlog

from monitor.constants import DISEASE_CLASSES
from monitor.errors import ValidationError
from monitor.schemas import Classification, DiagnosticResult

logger = structlog.get_logger(__name__)


def rank_classifications(results: Iterable[Classification]) -> list[Classification]:
    """Sort classifier results by descending probability."""
    return sorted(results, key=lambda r: r.probability, reverse=True)


def interpret_classification(results: Iterable[Classification]) -> DiagnosticResult:
    """
    Build a DiagnosticResult from the classifier's class probabilities.

    Raises ValidationError when no result is given or the top label is not a
    known class.
    """
    ranked = rank_classifications(results)
    if not ranked:
        raise ValidationError("classifier returned no results")

    top = ranked[0]
    info = DISEASE_CLASSES.get(top.label)
    if info is None:
        raise ValidationError(f"unknown classifier label: {top.label!r}")

    logger.info(
        "diagnostic_interpreted",
        label=top.label,
        confidence=top.probability,
        severity=info["severity"],
    )
    return DiagnosticResult(
        label=top.label,
        name=info["name"],
        severity=info["severity"],
        confidence=top.probability,
        description=info["description"],
        recommendations=tuple(info["recommendations"]),
        ranked=tuple(ranked),
    )
