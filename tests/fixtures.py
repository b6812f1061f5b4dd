"""
tests/fixtures.py

Shared test data and helper functions for constructing test payloads.
All tests must use these fixtures instead of hardcoding test values.
"""

from datetime import datetime, timezone
from typing import Optional

from monitor.constants import FEATURE_COUNT, SEQUENCE_LENGTH
from monitor.schemas import Classification, ModelOutput

# ── Test flock profile ──────────────────────────────────────

TEST_BIRD_AGE: int = 21  # temperature optimal [30, 31], acceptable [29, 32]
TEST_ANALYZED_AT: datetime = datetime(2024, 6, 15, 13, 30, 0, tzinfo=timezone.utc)

# Readings that are optimal at TEST_BIRD_AGE for every variable
OPTIMAL_TEMPERATURE: float = 30.5
OPTIMAL_HUMIDITY: float = 55.0
OPTIMAL_NH3: float = 0.002  # 2 ppm
OPTIMAL_CO: float = 0.005  # 5 ppm


def build_outputs(
    overrides: Optional[dict[int, float]] = None,
    length: int = 12,
) -> list[float]:
    """Build a regressor output vector that is optimal everywhere except `overrides`."""
    horizon = [OPTIMAL_TEMPERATURE, OPTIMAL_HUMIDITY, OPTIMAL_NH3, OPTIMAL_CO]
    values = [horizon[i % 4] for i in range(length)]
    for index, value in (overrides or {}).items():
        values[index] = value
    return values


def build_labeled_outputs(overrides: Optional[dict[int, float]] = None) -> list[ModelOutput]:
    """Same as build_outputs, wrapped the way the native bridge returns them."""
    names = [
        f"{prefix}_{horizon}"
        for horizon in ("1h", "6h", "24h")
        for prefix in ("temp", "humidity", "nh3", "co")
    ]
    return [
        ModelOutput(label=name, value=value)
        for name, value in zip(names, build_outputs(overrides))
    ]


def build_sequence(
    timesteps: int = SEQUENCE_LENGTH,
    features: int = FEATURE_COUNT,
    fill: float = 0.5,
) -> list[list[float]]:
    """Build a sensor window of the given dimensions."""
    return [[fill] * features for _ in range(timesteps)]


def build_classifications(top: str = "healthy", confidence: float = 0.87) -> list[Classification]:
    """Build classifier output where `top` has the highest probability."""
    others = [label for label in ("cocci", "healthy", "ncd", "salmo") if label != top]
    remainder = (1.0 - confidence) / len(others)
    results = [Classification(label=label, probability=remainder) for label in others]
    results.append(Classification(label=top, probability=confidence))
    return results
