"""
monitor/services/activity.py

Capped, newest-first activity history shared by the HTTP surface.
The log is created by the composition root (monitor/main.py) and injected;
nothing in the risk engine reads or writes it.
"""

import collections
import itertools
from datetime import datetime, timezone
from typing import Callable, Optional, Union

import structlog

from monitor.constants import ACTIVITY_LOG_MAX_LEN
from monitor.schemas import ActivityEntry, DiagnosticResult, PredictionAnalysis

logger = structlog.get_logger(__name__)

Listener = Callable[[], None]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ActivityLog:
    """
    Append-only history capped at `max_len` entries.

    When full, appending evicts the oldest entry. Subscribers are called
    after every change.
    """

    def __init__(
        self,
        max_len: int = ACTIVITY_LOG_MAX_LEN,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if max_len < 1:
            raise ValueError("max_len must be at least 1")
        self._entries: collections.deque[ActivityEntry] = collections.deque(
            maxlen=max_len
        )
        self._latest: dict[str, Union[PredictionAnalysis, DiagnosticResult]] = {}
        self._listeners: list[Listener] = []
        self._ids = itertools.count(1)
        self._clock = clock

    @property
    def max_len(self) -> int:
        return self._entries.maxlen

    def __len__(self) -> int:
        return len(self._entries)

    def append(
        self,
        kind: str,
        title: str,
        result: Union[PredictionAnalysis, DiagnosticResult],
    ) -> ActivityEntry:
        """Record a new entry at the head of the history."""
        entry = ActivityEntry(
            id=next(self._ids),
            kind=kind,
            title=title,
            timestamp=self._clock(),
            result=result,
        )
        self._entries.appendleft(entry)
        self._latest[kind] = result
        logger.info("activity_recorded", kind=kind, title=title, size=len(self._entries))
        self._notify()
        return entry

    def record_prediction(self, analysis: PredictionAnalysis) -> ActivityEntry:
        return self.append(
            "prediction", f"Prevision: {analysis.global_risk.upper()}", analysis
        )

    def record_diagnostic(self, diagnostic: DiagnosticResult) -> ActivityEntry:
        return self.append("diagnostic", f"Diagnostic: {diagnostic.name}", diagnostic)

    def history(self) -> tuple[ActivityEntry, ...]:
        """Entries ordered newest first."""
        return tuple(self._entries)

    def latest_of_type(
        self, kind: str
    ) -> Optional[Union[PredictionAnalysis, DiagnosticResult]]:
        """Most recent result of `kind`, even if its entry has been evicted."""
        return self._latest.get(kind)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register `listener`; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()
