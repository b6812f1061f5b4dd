"""
monitor/services/risk.py

Per-variable risk evaluation.
- evaluate_temperature / evaluate_humidity: four tiers around nested bands
- evaluate_gas_risk: four ppm tiers checked most-severe-first

Every check runs most-severe-first and the first match wins.
Non-finite readings are rejected instead of falling through to "optimal".
"""

import math

from monitor.constants import (
    HUMIDITY_CRITICAL_MARGIN,
    PPM_PER_FRACTION,
    RISK_ICONS,
    TEMPERATURE_CRITICAL_MARGIN,
)
from monitor.errors import ValidationError
from monitor.schemas import GasThresholds, RiskVerdict, ThresholdSet

# (critical_low, critical_high, danger_low, danger_high, warning, optimal)
_TEMPERATURE_MESSAGES = (
    "HYPOTHERMIE CRITIQUE",
    "HYPERTHERMIE CRITIQUE",
    "Hypothermie - Danger",
    "Hyperthermie - Danger",
    "Température acceptable",
    "Température optimale",
)

_HUMIDITY_MESSAGES = (
    "AIR TRÈS SEC - CRITIQUE",
    "AIR TRÈS HUMIDE - CRITIQUE",
    "Air trop sec - Danger",
    "Air trop humide - Danger",
    "Humidité acceptable",
    "Humidité optimale",
)


def _verdict(level: str, message: str) -> RiskVerdict:
    return RiskVerdict(level=level, message=message, icon=RISK_ICONS[level])


def _require_finite(value: float, variable: str) -> None:
    if not math.isfinite(value):
        raise ValidationError(f"{variable} reading is not a finite number: {value!r}")


def _evaluate_band(
    value: float,
    thresholds: ThresholdSet,
    margin: float,
    messages: tuple[str, ...],
) -> RiskVerdict:
    crit_low, crit_high, danger_low, danger_high, warning, optimal = messages
    opt_low, opt_high = thresholds.optimal
    acc_low, acc_high = thresholds.acceptable
    too_low = value < acc_low

    if value < acc_low - margin or value > acc_high + margin:
        return _verdict("critical", crit_low if too_low else crit_high)

    if value < acc_low or value > acc_high:
        return _verdict("danger", danger_low if too_low else danger_high)

    if value < opt_low or value > opt_high:
        return _verdict("warning", warning)

    return _verdict("optimal", optimal)


def evaluate_temperature(value: float, thresholds: ThresholdSet) -> RiskVerdict:
    """
    Classify a temperature (°C) against its age bands.

    More than TEMPERATURE_CRITICAL_MARGIN degrees outside the acceptable band
    is critical, anywhere else outside it is danger, inside acceptable but
    outside optimal is warning.
    """
    _require_finite(value, "temperature")
    return _evaluate_band(
        value, thresholds, TEMPERATURE_CRITICAL_MARGIN, _TEMPERATURE_MESSAGES
    )


def evaluate_humidity(value: float, thresholds: ThresholdSet) -> RiskVerdict:
    """Same tiers as evaluate_temperature with a HUMIDITY_CRITICAL_MARGIN point margin."""
    _require_finite(value, "humidity")
    return _evaluate_band(
        value, thresholds, HUMIDITY_CRITICAL_MARGIN, _HUMIDITY_MESSAGES
    )


def to_ppm(fraction: float) -> float:
    """Convert a regressor gas output (fraction) to parts per million."""
    return fraction * PPM_PER_FRACTION


def evaluate_gas_risk(
    fraction: float,
    gas_type: str,
    thresholds: GasThresholds,
    strict_bands: bool = False,
) -> RiskVerdict:
    """
    Classify a gas concentration given as a fraction of the model's unit.

    The value is converted to ppm, then compared with `>=` at each tier.
    Everything under the warning tier is optimal unless `strict_bands` is set,
    in which case [optimal, warning) is reported as warning.
    """
    _require_finite(fraction, gas_type)
    ppm = to_ppm(fraction)
    name = gas_type.upper()

    if ppm >= thresholds.critical:
        return _verdict("critical", f"{name} CRITIQUE - ÉVACUATION")

    if ppm >= thresholds.danger:
        return _verdict("danger", f"{name} élevé - Danger")

    if ppm >= thresholds.warning:
        return _verdict("warning", f"{name} modéré - Avertissement")

    if ppm >= thresholds.optimal:
        if strict_bands:
            return _verdict("warning", f"{name} modéré - Avertissement")
        return _verdict("optimal", f"{name} acceptable")

    return _verdict("optimal", f"{name} optimal")
