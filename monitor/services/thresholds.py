"""
monitor/services/thresholds.py

Threshold tables selected by flock age.
- temperature_thresholds / humidity_thresholds: age-bucketed bands, first match wins
- gas_thresholds: fixed ppm tiers for NH3 and CO

Uses constants from monitor/constants.py; no magic numbers allowed.
"""

import numbers

from monitor.constants import (
    GAS_THRESHOLDS_PPM,
    HUMIDITY_BANDS,
    HUMIDITY_FALLBACK_BAND,
    TEMPERATURE_BANDS,
    TEMPERATURE_FALLBACK_BAND,
)
from monitor.errors import ValidationError
from monitor.schemas import AgeThresholds, GasThresholds, ThresholdSet


def _select_band(age: int, bands, fallback) -> ThresholdSet:
    # Buckets are ordered by ascending upper bound; the first one that holds wins.
    for max_age, optimal, acceptable in bands:
        if age <= max_age:
            return ThresholdSet(optimal=optimal, acceptable=acceptable)
    optimal, acceptable = fallback
    return ThresholdSet(optimal=optimal, acceptable=acceptable)


def temperature_thresholds(age: int) -> ThresholdSet:
    """Return the temperature bands (°C) for a flock aged `age` days."""
    return _select_band(age, TEMPERATURE_BANDS, TEMPERATURE_FALLBACK_BAND)


def humidity_thresholds(age: int) -> ThresholdSet:
    """Return the relative humidity bands (%) for a flock aged `age` days."""
    return _select_band(age, HUMIDITY_BANDS, HUMIDITY_FALLBACK_BAND)


def gas_thresholds(gas_type: str) -> GasThresholds:
    """
    Return the fixed ppm tiers for a gas.

    Raises ValidationError for anything other than "nh3" or "co".
    """
    try:
        tiers = GAS_THRESHOLDS_PPM[gas_type]
    except KeyError:
        raise ValidationError(f"unknown gas type: {gas_type!r}") from None
    return GasThresholds(**tiers)


def thresholds_for_age(age: int) -> AgeThresholds:
    """Bundle every table that applies at `age` days."""
    return AgeThresholds(
        age=age,
        temperature=temperature_thresholds(age),
        humidity=humidity_thresholds(age),
        nh3=gas_thresholds("nh3"),
        co=gas_thresholds("co"),
    )


def validate_age(age: int, clamp: bool = False) -> int:
    """
    Check that a flock age is a usable bucket key.

    Any integral type is accepted (numpy integers included) and returned as int.
    Negative ages are rejected, or clamped to 0 when `clamp` is set.
    """
    if isinstance(age, bool) or not isinstance(age, numbers.Integral):
        raise ValidationError(f"age must be an integer number of days, got {age!r}")
    if age < 0:
        if clamp:
            return 0
        raise ValidationError(f"age must be >= 0 days, got {age}")
    return int(age)
