"""
tests/test_aggregator.py

Unit tests for monitor/services/aggregator.py.
Covers horizon slicing, shape errors, the assembled document and idempotence.
"""

import numpy as np
import pydantic
import pytest

from monitor.constants import RISK_SCORES
from monitor.errors import ShapeError, ValidationError
from monitor.services.aggregator import (
    analyze_predictions,
    evaluate_horizons,
    split_horizons,
)
from tests.fixtures import (
    OPTIMAL_CO,
    TEST_ANALYZED_AT,
    TEST_BIRD_AGE,
    build_labeled_outputs,
    build_outputs,
)


def test_split_horizons_reads_fixed_positions() -> None:
    values = [float(i) for i in range(12)]
    groups = split_horizons(values)

    assert list(groups) == ["1h", "6h", "24h"]
    assert groups["1h"] == [0.0, 1.0, 2.0, 3.0]
    assert groups["6h"] == [4.0, 5.0, 6.0, 7.0]
    assert groups["24h"] == [8.0, 9.0, 10.0, 11.0]


def test_split_horizons_ignores_trailing_values() -> None:
    groups = split_horizons([float(i) for i in range(16)])
    assert groups["24h"] == [8.0, 9.0, 10.0, 11.0]


@pytest.mark.parametrize("length", [0, 4, 11])
def test_short_output_raises_shape_error(length: int) -> None:
    with pytest.raises(ShapeError):
        analyze_predictions(build_outputs(length=length), TEST_BIRD_AGE)


def test_all_optimal_outputs_give_optimal_global_risk() -> None:
    analysis = analyze_predictions(
        build_outputs(), TEST_BIRD_AGE, analyzed_at=TEST_ANALYZED_AT
    )

    assert analysis.global_risk == "optimal"
    assert analysis.subtitle == "Conditions excellentes"
    assert analysis.age == TEST_BIRD_AGE
    assert analysis.analyzed_at == TEST_ANALYZED_AT
    assert analysis.horizons.keys() == ["1h", "6h", "24h"]


def test_single_critical_reading_makes_global_risk_critical() -> None:
    """CO at the 24h horizon (index 9) alone drives the global risk."""
    analysis = analyze_predictions(build_outputs({9: 2.5}), TEST_BIRD_AGE)

    assert analysis.horizons["24h"].co.level == "critical"
    assert analysis.horizons["1h"].co.level == "optimal"
    assert analysis.global_risk == "critical"
    assert analysis.subtitle == "Intervention immédiate requise"


def test_verdicts_carry_value_and_ranges() -> None:
    analysis = analyze_predictions(build_outputs({4: 32.5}), TEST_BIRD_AGE)
    temperature = analysis.horizons["6h"].temperature

    assert temperature.value == 32.5
    assert temperature.level == "danger"
    assert temperature.optimal_range == (30.0, 31.0)
    assert temperature.acceptable_range == (29.0, 32.0)
    assert temperature.thresholds is None

    co = analysis.horizons["6h"].co
    assert co.value == OPTIMAL_CO
    assert co.thresholds.critical == 2000
    assert co.optimal_range is None


@pytest.mark.parametrize(
    "overrides",
    [
        {},
        {0: 29.5},
        {1: 75.0, 6: 0.012},
        {2: 0.022, 11: 0.07},
        {8: 40.0, 5: 42.0},
    ],
)
def test_global_risk_is_max_of_individual_levels(overrides) -> None:
    analysis = analyze_predictions(build_outputs(overrides), TEST_BIRD_AGE)
    levels = [
        level for horizon in analysis.horizons.values() for level in horizon.levels()
    ]

    assert len(levels) == 12
    assert analysis.global_risk in levels
    assert RISK_SCORES[analysis.global_risk] == max(RISK_SCORES[l] for l in levels)


def test_analysis_is_idempotent() -> None:
    values = build_outputs({3: 0.07, 7: 0.9})
    first = analyze_predictions(values, TEST_BIRD_AGE, analyzed_at=TEST_ANALYZED_AT)
    second = analyze_predictions(values, TEST_BIRD_AGE, analyzed_at=TEST_ANALYZED_AT)

    assert first == second
    assert first.model_dump() == second.model_dump()


def test_input_vector_is_not_mutated() -> None:
    values = build_outputs({0: 36.0})
    snapshot = list(values)
    analyze_predictions(values, TEST_BIRD_AGE)
    assert values == snapshot


def test_labeled_outputs_are_accepted() -> None:
    analysis = analyze_predictions(build_labeled_outputs({9: 2.5}), TEST_BIRD_AGE)
    assert analysis.global_risk == "critical"


def test_age_selects_thresholds() -> None:
    """30.5 °C is optimal at 21 days but critical for chicks."""
    chicks = evaluate_horizons(build_outputs(), 3)
    assert chicks["1h"].temperature.level == "critical"
    assert chicks["1h"].temperature.message == "HYPOTHERMIE CRITIQUE"


def test_negative_age_is_rejected() -> None:
    with pytest.raises(ValidationError):
        analyze_predictions(build_outputs(), -1)


def test_strict_gas_bands_are_applied_to_every_horizon() -> None:
    analysis = analyze_predictions(
        build_outputs({2: 0.006}), TEST_BIRD_AGE, strict_gas_bands=True
    )
    assert analysis.horizons["1h"].nh3.level == "warning"
    assert analysis.global_risk == "warning"


def test_analysis_serializes_with_camel_case_keys() -> None:
    document = analyze_predictions(
        build_outputs(), TEST_BIRD_AGE, analyzed_at=TEST_ANALYZED_AT
    ).model_dump(by_alias=True)

    assert "globalRisk" in document
    assert "analyzedAt" in document
    assert "optimalRange" in document["horizons"]["1h"]["temperature"]


def test_analysis_document_cannot_be_mutated() -> None:
    """Horizons reject item assignment and deletion, fields reject assignment."""
    analysis = analyze_predictions(build_outputs(), TEST_BIRD_AGE)
    horizons = analysis.horizons

    with pytest.raises(TypeError):
        horizons["1h"] = horizons["24h"]
    with pytest.raises(TypeError):
        del horizons["6h"]
    with pytest.raises(pydantic.ValidationError):
        horizons.one_hour = horizons.one_day
    with pytest.raises(pydantic.ValidationError):
        analysis.global_risk = "critical"
    with pytest.raises(pydantic.ValidationError):
        horizons["1h"].temperature.level = "critical"

    assert analysis.horizons.keys() == ["1h", "6h", "24h"]
    assert analysis.horizons["1h"].temperature.level == "optimal"


def test_unknown_horizon_raises_key_error() -> None:
    analysis = analyze_predictions(build_outputs(), TEST_BIRD_AGE)

    assert "12h" not in analysis.horizons
    with pytest.raises(KeyError):
        analysis.horizons["12h"]


def test_numpy_age_and_outputs_are_accepted() -> None:
    analysis = analyze_predictions(np.array(build_outputs()), np.int64(TEST_BIRD_AGE))

    assert analysis.age == TEST_BIRD_AGE
    assert type(analysis.age) is int
    assert analysis.global_risk == "optimal"
