"""
monitor/services/aggregator.py

Turns the flat sequence-regressor output into a PredictionAnalysis.
- split_horizons: fixed positional slicing into 1h / 6h / 24h groups
- evaluate_horizon: evaluates temperature, humidity, NH3 and CO for one group
- analyze_predictions: full pipeline including the global severity

Pure functions: no I/O, no shared state, inputs are never mutated.
"""

from datetime import datetime, timezone
from typing import Optional, Sequence, Union

from monitor.constants import HORIZONS, MODEL_OUTPUT_LEN, VARIABLES
from monitor.errors import ShapeError
from monitor.schemas import (
    AgeThresholds,
    HorizonResult,
    HorizonResults,
    ModelOutput,
    PredictionAnalysis,
    RiskVerdict,
    VariableVerdict,
)
from monitor.services.risk import (
    evaluate_gas_risk,
    evaluate_humidity,
    evaluate_temperature,
)
from monitor.services.severity import resolve_global_risk, risk_subtitle
from monitor.services.thresholds import thresholds_for_age, validate_age

OutputValue = Union[float, int, ModelOutput]


def _as_float(item: OutputValue) -> float:
    if isinstance(item, ModelOutput):
        return float(item.value)
    return float(item)


def split_horizons(values: Sequence[OutputValue]) -> dict[str, list[float]]:
    """
    Slice the regressor output into one group of four values per horizon.

    Indices [0:4) are 1h, [4:8) are 6h, [8:12) are 24h, each ordered
    temperature, humidity, nh3, co. Trailing values are ignored.
    Raises ShapeError when fewer than MODEL_OUTPUT_LEN values are given.
    """
    if len(values) < MODEL_OUTPUT_LEN:
        raise ShapeError(
            f"expected at least {MODEL_OUTPUT_LEN} model outputs, got {len(values)}"
        )

    width = len(VARIABLES)
    return {
        horizon: [_as_float(v) for v in values[i * width : (i + 1) * width]]
        for i, horizon in enumerate(HORIZONS)
    }


def _with_value(verdict: RiskVerdict, value: float, **ranges) -> VariableVerdict:
    return VariableVerdict(
        value=value,
        level=verdict.level,
        message=verdict.message,
        icon=verdict.icon,
        **ranges,
    )


def evaluate_horizon(
    values: Sequence[float],
    thresholds: AgeThresholds,
    strict_gas_bands: bool = False,
) -> HorizonResult:
    """Evaluate one horizon's (temperature, humidity, nh3, co) readings."""
    temp, humidity, nh3, co = values

    return HorizonResult(
        temperature=_with_value(
            evaluate_temperature(temp, thresholds.temperature),
            temp,
            optimal_range=thresholds.temperature.optimal,
            acceptable_range=thresholds.temperature.acceptable,
        ),
        humidity=_with_value(
            evaluate_humidity(humidity, thresholds.humidity),
            humidity,
            optimal_range=thresholds.humidity.optimal,
            acceptable_range=thresholds.humidity.acceptable,
        ),
        nh3=_with_value(
            evaluate_gas_risk(nh3, "nh3", thresholds.nh3, strict_bands=strict_gas_bands),
            nh3,
            thresholds=thresholds.nh3,
        ),
        co=_with_value(
            evaluate_gas_risk(co, "co", thresholds.co, strict_bands=strict_gas_bands),
            co,
            thresholds=thresholds.co,
        ),
    )


def evaluate_horizons(
    values: Sequence[OutputValue],
    age: int,
    strict_gas_bands: bool = False,
) -> HorizonResults:
    """
    Evaluate all three horizons against the tables for `age`.

    Raises ValidationError for a negative age; callers that clamp do so first.
    """
    groups = split_horizons(values)
    thresholds = thresholds_for_age(validate_age(age))
    return HorizonResults.model_validate(
        {
            horizon: evaluate_horizon(group, thresholds, strict_gas_bands)
            for horizon, group in groups.items()
        }
    )


def analyze_predictions(
    values: Sequence[OutputValue],
    age: int,
    analyzed_at: Optional[datetime] = None,
    strict_gas_bands: bool = False,
) -> PredictionAnalysis:
    """
    Build the complete risk assessment for one regressor output.

    `analyzed_at` defaults to the current UTC time; pass it explicitly to get
    identical documents for identical inputs.
    """
    age = validate_age(age)
    horizons = evaluate_horizons(values, age, strict_gas_bands)
    global_risk = resolve_global_risk(horizons)

    return PredictionAnalysis(
        horizons=horizons,
        global_risk=global_risk,
        subtitle=risk_subtitle(global_risk),
        age=age,
        analyzed_at=analyzed_at or datetime.now(timezone.utc),
    )
