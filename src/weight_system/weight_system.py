"""Weighted random selection with feedback-driven weight adjustment."""

from __future__ import annotations

import logging
import random
from typing import Any, Callable, Dict, Generic, Hashable, Iterable, Iterator, List, Mapping, Optional, TypeVar, Union

from .config import WeightSystemConfig
from .telemetry import TelemetryPublisher
from .types import WeightedItem
from .utils import clamp, weighted_choice

LOGGER = logging.getLogger(__name__)

T = TypeVar("T", bound=Hashable)


class WeightSystem(Generic[T]):
    """Track item weights and draw items proportionally to them.

    Weights always stay within ``[min_weight, max_weight]``. The running total
    is updated by deltas rather than re-summed, and the average is refreshed
    after every mutation. None of the public operations raise: duplicate adds,
    removal of unknown items and adjustments of unknown items are no-ops or
    implicit inserts.
    """

    def __init__(
        self,
        config: Union[WeightSystemConfig, Mapping[str, Any], None] = None,
        *,
        random_fn: Callable[[], float] = random.random,
        telemetry: Optional[TelemetryPublisher] = None,
    ) -> None:
        if config is None:
            config = WeightSystemConfig()
        elif not isinstance(config, WeightSystemConfig):
            config = WeightSystemConfig.model_validate(config)
        self.config = config
        self._random = random_fn
        self._telemetry = telemetry
        self._weights: Dict[T, float] = {}
        self._min_weight = config.min_weight
        self._max_weight = config.max_weight
        self._total_weight = 0.0
        self._avg_weight = config.midpoint()

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------
    @property
    def min_weight(self) -> float:
        return self._min_weight

    @property
    def max_weight(self) -> float:
        return self._max_weight

    @property
    def total_weight(self) -> float:
        return self._total_weight

    @property
    def avg_weight(self) -> float:
        return self._avg_weight

    def __len__(self) -> int:
        return len(self._weights)

    def __contains__(self, item: object) -> bool:
        return item in self._weights

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._weights))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(items={len(self._weights)}, total={self._total_weight!r}, "
            f"min={self._min_weight!r}, max={self._max_weight!r})"
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def add_item(self, item: T, *, weight: Optional[float] = None) -> None:
        """Insert ``item``; defaults to the current average weight. Existing items are left untouched.

        The weight is clamped into the bounds; a NaN weight is stored as ``min_weight``.
        """

        if item in self._weights:
            return
        initial = self._avg_weight if weight is None else weight
        stored = clamp(initial, self._min_weight, self._max_weight)
        self._weights[item] = stored
        self._total_weight += stored
        self._update_avg_weight()
        if self._publisher is not None:
            self._publisher.item_added(item, stored)

    def add_items(self, items: Iterable[T], *, weight: Optional[float] = None) -> None:
        for item in items:
            self.add_item(item, weight=weight)

    def remove_item(self, item: T) -> None:
        if item not in self._weights:
            return
        weight = self._weights.pop(item)
        if self._weights:
            self._total_weight -= weight
        else:
            self._total_weight = 0.0
        self._update_avg_weight()
        if self._publisher is not None:
            self._publisher.item_removed(item, weight)

    def adjust_weight(self, item: T, success: bool) -> None:
        """Scale the weight of ``item`` up on success and down on failure.

        An unknown item counts as weight 0 and is inserted with the adjusted
        weight, clamped into the bounds.
        """

        old_weight = self._weights.get(item)
        if old_weight is None:
            LOGGER.debug("adjust_weight on unknown item %r; inserting it", item)
            old_weight = 0.0
        feedback = self.config.feedback
        if success:
            new_weight = min(old_weight * feedback.success_factor, self._max_weight)
        else:
            new_weight = max(old_weight * feedback.failure_factor, self._min_weight)
        new_weight = clamp(new_weight, self._min_weight, self._max_weight)
        self._weights[item] = new_weight
        self._total_weight += new_weight - old_weight
        self._update_avg_weight()
        if self._publisher is not None:
            self._publisher.weight_adjusted(item, old_weight, new_weight, success)

    def get_item(self) -> Optional[T]:
        """Draw an item with probability ``weight / total_weight``; ``None`` when empty."""

        return weighted_choice(self._weights.items(), self._total_weight, random_fn=self._random)

    def weight_of(self, item: T) -> Optional[float]:
        """Return the stored weight of ``item``, or ``None`` if it is not tracked."""

        return self._weights.get(item)

    def weights(self) -> Dict[T, float]:
        return dict(self._weights)

    def sorted_weights(self) -> List[WeightedItem[T]]:
        """Snapshot of all items ordered from highest to lowest weight."""

        entries = [WeightedItem(item=item, weight=weight) for item, weight in self._weights.items()]
        entries.sort(key=lambda entry: entry.weight, reverse=True)
        return entries

    def attach_telemetry(self, telemetry: Optional[TelemetryPublisher]) -> None:
        self._telemetry = telemetry

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _update_avg_weight(self) -> None:
        if self._weights:
            self._avg_weight = self._total_weight / len(self._weights)
        else:
            self._avg_weight = (self._min_weight + self._max_weight) / 2

    @property
    def _publisher(self) -> Optional[TelemetryPublisher]:
        if not self.config.telemetry_enabled:
            return None
        return self._telemetry


__all__ = ["WeightSystem"]
