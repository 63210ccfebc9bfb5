"""Common data types used across the weight system package."""

from __future__ import annotations

import time
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class WeightEvent(str, Enum):
    """Mutations a weight system reports to telemetry."""

    ITEM_ADDED = "item.added"
    ITEM_REMOVED = "item.removed"
    WEIGHT_ADJUSTED = "weight.adjusted"


class WeightedItem(BaseModel, Generic[T]):
    """Read-only pairing of an item with its weight at snapshot time."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    item: T
    weight: float


class TelemetryEvent(BaseModel):
    """A single weight system mutation."""

    model_config = ConfigDict(frozen=True)

    event: WeightEvent
    item: Any = None
    weight: float = Field(..., description="Weight stored for the item after the mutation.")
    previous_weight: float = Field(
        default=0.0,
        description="Weight before the mutation; 0 for items that were not stored.",
    )
    success: bool | None = Field(default=None, description="Feedback outcome for adjustments.")
    timestamp: float = Field(default_factory=time.time)

    @property
    def delta(self) -> float:
        return self.weight - self.previous_weight


__all__ = ["TelemetryEvent", "WeightEvent", "WeightedItem"]
