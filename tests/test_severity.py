"""
tests/test_severity.py

Unit tests for monitor/services/severity.py.
"""

import pytest

from monitor.services.aggregator import analyze_predictions
from monitor.services.diagnostic import interpret_classification
from monitor.services.severity import dashboard_status, max_risk, risk_subtitle
from tests.fixtures import TEST_BIRD_AGE, build_classifications, build_outputs


def test_max_risk_of_nothing_is_optimal() -> None:
    assert max_risk([]) == "optimal"


@pytest.mark.parametrize(
    "levels, expected",
    [
        (["optimal", "optimal"], "optimal"),
        (["warning", "optimal"], "warning"),
        (["danger", "warning", "optimal"], "danger"),
        (["optimal", "critical", "danger"], "critical"),
    ],
)
def test_max_risk_follows_total_order(levels, expected) -> None:
    assert max_risk(levels) == expected
    assert max_risk(reversed(levels)) == expected


@pytest.mark.parametrize(
    "level, subtitle",
    [
        ("optimal", "Conditions excellentes"),
        ("warning", "Surveillance accrue"),
        ("danger", "Correction nécessaire"),
        ("critical", "Intervention immédiate requise"),
    ],
)
def test_risk_subtitles(level: str, subtitle: str) -> None:
    assert risk_subtitle(level) == subtitle


def test_dashboard_without_history_is_optimal() -> None:
    status = dashboard_status(None, None)
    assert status.level == "optimal"
    assert status.label == "OPTIMAL"


def test_dashboard_takes_worst_of_prediction_and_diagnostic() -> None:
    prediction = analyze_predictions(build_outputs({1: 75.0}), TEST_BIRD_AGE)  # danger
    diagnostic = interpret_classification(build_classifications("salmo"))  # warning

    status = dashboard_status(prediction, diagnostic)
    assert status.level == "danger"
    assert status.label == "DANGER"
    assert status.icon == "alert"


def test_dashboard_critical_diagnostic_dominates() -> None:
    prediction = analyze_predictions(build_outputs(), TEST_BIRD_AGE)
    diagnostic = interpret_classification(build_classifications("ncd"))

    status = dashboard_status(prediction, diagnostic)
    assert status.level == "critical"
    assert status.label == "CRITIQUE"
