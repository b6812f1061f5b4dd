"""
monitor/errors.py

Error taxonomy raised by the risk evaluation engine and its boundary services.
The core never catches these; routers translate them into HTTP responses.
"""


class MonitorError(Exception):
    """Base class for all errors raised by the monitor package."""

    kind: str = "monitor_error"


class ShapeError(MonitorError):
    """Model output or sensor window does not have the expected shape."""

    kind = "shape_error"


class ValidationError(MonitorError, ValueError):
    """Input value is outside the domain the engine accepts."""

    kind = "validation_error"
