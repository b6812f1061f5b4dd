"""
monitor/services/inference.py

Boundary between the risk engine and the on-device inference models.
- InferenceBackend: capability implemented by a platform adapter
- normalize_sequence: turns either accepted JSON shape into one float window
- label_outputs: names raw regressor values with the model target labels
- run_sequence_analysis: awaits the regressor, then runs the risk engine

The engine only depends on the data shapes exchanged here, never on an adapter.
"""

from datetime import datetime
from typing import Any, Optional, Protocol, Sequence, Union

import numpy as np
import pydantic
import structlog
from pydantic import TypeAdapter

from monitor.constants import FEATURE_COUNT, HORIZONS, SEQUENCE_LENGTH, TARGET_PREFIXES
from monitor.errors import ShapeError, ValidationError
from monitor.schemas import (
    Classification,
    ModelOutput,
    PredictionAnalysis,
    SequenceWrapped,
)
from monitor.services.aggregator import analyze_predictions

logger = structlog.get_logger(__name__)

SequenceDocument = Union[list[list[float]], SequenceWrapped]

_sequence_adapter: TypeAdapter = TypeAdapter(SequenceDocument)


class InferenceBackend(Protocol):
    """Asynchronous access to the image classifier and the sequence regressor."""

    async def classify_image(self, image: bytes) -> list[Classification]:
        ...

    async def predict_sequence(
        self, window: np.ndarray
    ) -> Sequence[Union[float, ModelOutput]]:
        ...


def default_target_names() -> list[str]:
    """Regressor output labels used when the model config provides none."""
    return [f"{prefix}_{horizon}" for horizon in HORIZONS for prefix in TARGET_PREFIXES]


def label_outputs(values: Sequence[float], names: Optional[Sequence[str]] = None) -> list[ModelOutput]:
    """Attach target labels to raw regressor values, falling back to out_<i>."""
    names = list(names) if names else default_target_names()
    return [
        ModelOutput(label=names[i] if i < len(names) else f"out_{i}", value=float(v))
        for i, v in enumerate(values)
    ]


def _labeled(outputs: Sequence[Union[float, ModelOutput]]) -> list[ModelOutput]:
    # Adapters may return bare floats (or an ndarray); label them positionally.
    if all(isinstance(item, ModelOutput) for item in outputs):
        return list(outputs)
    return label_outputs(outputs)


def normalize_sequence(document: Any) -> np.ndarray:
    """
    Resolve a sensor-window JSON document into a (SEQUENCE_LENGTH, FEATURE_COUNT) array.

    Accepts a bare array of rows or an object holding the rows under
    `sequence`. Raises ValidationError for any other document and ShapeError
    when the window does not have the expected dimensions.
    """
    try:
        parsed = _sequence_adapter.validate_python(document)
    except pydantic.ValidationError as exc:
        raise ValidationError(
            "sequence document must be an array of rows or contain 'sequence'"
        ) from exc

    rows = parsed.sequence if isinstance(parsed, SequenceWrapped) else parsed

    if len(rows) != SEQUENCE_LENGTH:
        raise ShapeError(
            f"sequence length must be {SEQUENCE_LENGTH} (got {len(rows)})"
        )
    for row in rows:
        if len(row) != FEATURE_COUNT:
            raise ShapeError(f"each timestep must have {FEATURE_COUNT} features")

    return np.asarray(rows, dtype=np.float32)


async def run_sequence_analysis(
    backend: InferenceBackend,
    document: Any,
    age: int,
    analyzed_at: Optional[datetime] = None,
    strict_gas_bands: bool = False,
) -> PredictionAnalysis:
    """
    Normalize a sensor window, run the regressor and analyze its output.

    Backend failures are logged and re-raised; nothing is retried here.
    """
    window = normalize_sequence(document)
    logger.info("sequence_inference_started", timesteps=window.shape[0], age=age)

    try:
        raw_outputs = await backend.predict_sequence(window)
    except Exception as exc:
        logger.error("sequence_inference_failed", error=str(exc))
        raise

    outputs = _labeled(raw_outputs)
    for output in outputs:
        logger.debug("regressor_output", label=output.label, value=output.value)

    analysis = analyze_predictions(
        outputs,
        age,
        analyzed_at=analyzed_at,
        strict_gas_bands=strict_gas_bands,
    )
    logger.info(
        "sequence_inference_complete",
        outputs=len(outputs),
        global_risk=analysis.global_risk,
    )
    return analysis
