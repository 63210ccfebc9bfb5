"""Telemetry for weight system mutations."""

from __future__ import annotations

import logging
import random
from collections import defaultdict
from typing import Any, Callable, Dict, Hashable, List, Optional, Protocol

from .config import TelemetryConfig
from .types import TelemetryEvent, WeightEvent

LOGGER = logging.getLogger(__name__)


class TelemetrySink(Protocol):
    """Sink that handles telemetry events."""

    def handle(self, event: TelemetryEvent) -> None:  # pragma: no cover - protocol
        ...


class TelemetryPublisher:
    """Turn weight mutations into events and fan them out to sinks.

    Each event is forwarded with probability ``config.sample_rate``. A sink that
    raises is logged and skipped; the remaining sinks still receive the event.
    """

    def __init__(
        self,
        config: Optional[TelemetryConfig] = None,
        *,
        random_fn: Callable[[], float] = random.random,
    ) -> None:
        self.config = config or TelemetryConfig()
        self._random = random_fn
        self._sinks: List[TelemetrySink] = []

    def subscribe(self, sink: TelemetrySink) -> None:
        self._sinks.append(sink)

    def unsubscribe(self, sink: TelemetrySink) -> None:
        if sink in self._sinks:
            self._sinks.remove(sink)

    def item_added(self, item: Any, weight: float) -> None:
        self._publish(TelemetryEvent(event=WeightEvent.ITEM_ADDED, item=item, weight=weight))

    def item_removed(self, item: Any, weight: float) -> None:
        # weight is what the item held when it was removed
        self._publish(
            TelemetryEvent(event=WeightEvent.ITEM_REMOVED, item=item, weight=0.0, previous_weight=weight)
        )

    def weight_adjusted(self, item: Any, previous_weight: float, weight: float, success: bool) -> None:
        self._publish(
            TelemetryEvent(
                event=WeightEvent.WEIGHT_ADJUSTED,
                item=item,
                weight=weight,
                previous_weight=previous_weight,
                success=success,
            )
        )

    def _publish(self, event: TelemetryEvent) -> None:
        if not self.config.enabled:
            return
        if self._random() >= self.config.sample_rate:
            return
        for sink in list(self._sinks):
            try:
                sink.handle(event)
            except Exception:
                LOGGER.exception("Telemetry sink %s failed on %s", sink, event.event.value)


class LoggingTelemetrySink:
    """Log each mutation as ``<event> <item>: <before> -> <after>``."""

    def __init__(self, level: int = logging.INFO) -> None:
        self.level = level

    def handle(self, event: TelemetryEvent) -> None:
        outcome = ""
        if event.success is not None:
            outcome = " (success)" if event.success else " (failure)"
        LOGGER.log(
            self.level,
            "%s %r: %s -> %s%s",
            event.event.value,
            event.item,
            event.previous_weight,
            event.weight,
            outcome,
        )


class WeightHistorySink:
    """Keep every event and the weight trajectory of each item."""

    def __init__(self) -> None:
        self.events: list[TelemetryEvent] = []
        self._history: Dict[Hashable, List[float]] = defaultdict(list)

    def handle(self, event: TelemetryEvent) -> None:
        self.events.append(event)
        if event.event is not WeightEvent.ITEM_REMOVED:
            self._history[event.item].append(event.weight)

    def history(self, item: Hashable) -> List[float]:
        """Weights ``item`` has held, oldest first."""

        return list(self._history.get(item, ()))


__all__ = [
    "LoggingTelemetrySink",
    "TelemetryPublisher",
    "TelemetrySink",
    "WeightHistorySink",
]
