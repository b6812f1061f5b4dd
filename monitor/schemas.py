"""
monitor/schemas.py

Pydantic data models for the monitor layer.
- ThresholdSet / GasThresholds: band definitions used by the risk evaluator
- VariableVerdict / HorizonResult / PredictionAnalysis: the result document
- Classification / DiagnosticResult: droppings classifier output
- ActivityEntry / DashboardStatus: documents served to the presentation layer
Result documents serialize with camelCase keys (globalRisk, analyzedAt, ...).
"""

from datetime import datetime
from typing import Iterator, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

RiskLevel = Literal["optimal", "warning", "danger", "critical"]
GasType = Literal["nh3", "co"]
ActivityKind = Literal["prediction", "diagnostic"]


class Document(BaseModel):
    """Immutable base for every document produced by the engine."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ThresholdSet(Document):
    """Optimal band nested inside an acceptable band (°C or %RH)."""

    optimal: tuple[float, float]
    acceptable: tuple[float, float]

    @model_validator(mode="after")
    def _check_nesting(self) -> "ThresholdSet":
        opt_low, opt_high = self.optimal
        acc_low, acc_high = self.acceptable
        if opt_low > opt_high or acc_low > acc_high:
            raise ValueError("band bounds must be ordered low <= high")
        if opt_low < acc_low or opt_high > acc_high:
            raise ValueError("optimal band must lie inside the acceptable band")
        return self


class GasThresholds(Document):
    """Four-tier concentration bounds in ppm."""

    optimal: float
    warning: float
    danger: float
    critical: float

    @model_validator(mode="after")
    def _check_increasing(self) -> "GasThresholds":
        if not self.optimal < self.warning < self.danger < self.critical:
            raise ValueError("gas thresholds must be strictly increasing")
        return self


class AgeThresholds(Document):
    """Every threshold table that applies to a flock of a given age."""

    age: int
    temperature: ThresholdSet
    humidity: ThresholdSet
    nh3: GasThresholds
    co: GasThresholds


class RiskVerdict(Document):
    """Level and message for one observed value, before the value is attached."""

    level: RiskLevel
    message: str
    icon: str


class VariableVerdict(RiskVerdict):
    """Verdict for one (variable, horizon) pair."""

    value: float
    optimal_range: Optional[tuple[float, float]] = None
    acceptable_range: Optional[tuple[float, float]] = None
    thresholds: Optional[GasThresholds] = None


class HorizonResult(Document):
    """Verdicts for the four monitored variables at one forecast horizon."""

    temperature: VariableVerdict
    humidity: VariableVerdict
    nh3: VariableVerdict
    co: VariableVerdict

    def levels(self) -> list[str]:
        return [
            self.temperature.level,
            self.humidity.level,
            self.nh3.level,
            self.co.level,
        ]


# Horizon label -> field name on HorizonResults
_HORIZON_FIELDS: dict[str, str] = {
    "1h": "one_hour",
    "6h": "six_hours",
    "24h": "one_day",
}


class HorizonResults(Document):
    """
    The three forecast horizons, keyed "1h", "6h" and "24h".

    Read-only mapping access (`results["6h"]`, `.items()`) mirrors the
    serialized document; item assignment and deletion are not supported.
    """

    one_hour: HorizonResult = Field(alias="1h")
    six_hours: HorizonResult = Field(alias="6h")
    one_day: HorizonResult = Field(alias="24h")

    def __getitem__(self, horizon: str) -> HorizonResult:
        try:
            return getattr(self, _HORIZON_FIELDS[horizon])
        except KeyError:
            raise KeyError(horizon) from None

    def __len__(self) -> int:
        return len(_HORIZON_FIELDS)

    def __contains__(self, horizon: object) -> bool:
        return horizon in _HORIZON_FIELDS

    def keys(self) -> list[str]:
        return list(_HORIZON_FIELDS)

    def values(self) -> list[HorizonResult]:
        return [self[horizon] for horizon in _HORIZON_FIELDS]

    def items(self) -> Iterator[tuple[str, HorizonResult]]:
        return ((horizon, self[horizon]) for horizon in _HORIZON_FIELDS)


class PredictionAnalysis(Document):
    """Complete risk assessment of one sequence-regressor inference."""

    horizons: HorizonResults
    global_risk: RiskLevel
    subtitle: str
    age: int
    analyzed_at: datetime


class ModelOutput(BaseModel):
    """One labeled value emitted by the sequence regressor."""

    model_config = ConfigDict(frozen=True)

    label: str
    value: float


class Classification(BaseModel):
    """One class probability emitted by the image classifier."""

    model_config = ConfigDict(frozen=True)

    label: str
    probability: float


class DiagnosticResult(Document):
    """Interpretation of the top class of a droppings classification."""

    label: str
    name: str
    severity: RiskLevel
    confidence: float
    description: str
    recommendations: tuple[str, ...]
    ranked: tuple[Classification, ...]


class ActivityEntry(Document):
    """One row of the capped activity history."""

    id: int
    kind: ActivityKind
    title: str
    timestamp: datetime
    result: Union[PredictionAnalysis, DiagnosticResult]


class DashboardStatus(Document):
    """Overall farm status combining the latest prediction and diagnostic."""

    level: RiskLevel
    label: str
    icon: str
    subtitle: str


class PredictionRequest(BaseModel):
    """Raw regressor output submitted for risk analysis."""

    values: list[Union[float, ModelOutput]]
    age: Optional[int] = None  # defaults to settings.default_bird_age_days


class DiagnosticRequest(BaseModel):
    """Raw classifier output submitted for interpretation."""

    results: list[Classification]


class SequenceWrapped(BaseModel):
    """Sensor window wrapped in an object under the `sequence` key."""

    sequence: list[list[float]]
