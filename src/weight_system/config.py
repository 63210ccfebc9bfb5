"""Configuration models for the weight system."""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field, PositiveFloat, ValidationInfo, field_validator

LOGGER = logging.getLogger(__name__)

DEFAULT_MIN_WEIGHT = 1.0
DEFAULT_MAX_WEIGHT = 1000.0


class FeedbackConfig(BaseModel):
    """Multiplicative factors applied on success/failure feedback."""

    success_factor: PositiveFloat = Field(
        default=1.1,
        description="Weight multiplier applied when an item reports success.",
    )
    failure_factor: PositiveFloat = Field(
        default=0.9,
        description="Weight multiplier applied when an item reports failure.",
    )


class TelemetryConfig(BaseModel):
    """Settings for a :class:`~weight_system.telemetry.TelemetryPublisher`."""

    enabled: bool = True
    sample_rate: float = Field(
        default=1.0,
        ge=0.0,
        le=1.0,
        description="Fraction of events forwarded to sinks.",
    )


class WeightSystemConfig(BaseModel):
    """Top-level configuration object for a weight system.

    Bounds are never rejected: ``min_weight`` is raised to at least 1 and
    ``max_weight`` to at least ``min_weight``.
    """

    model_config = ConfigDict(frozen=True)

    min_weight: float = Field(default=DEFAULT_MIN_WEIGHT, description="Lower bound for every weight.")
    max_weight: float = Field(default=DEFAULT_MAX_WEIGHT, description="Upper bound for every weight.")
    feedback: FeedbackConfig = Field(default_factory=FeedbackConfig)
    telemetry_enabled: bool = Field(
        default=True,
        description="Publish mutation events to an attached telemetry publisher.",
    )

    @field_validator("min_weight")
    @classmethod
    def _floor_min_weight(cls, value: float) -> float:
        normalized = max(DEFAULT_MIN_WEIGHT, value)
        if normalized != value:
            LOGGER.warning("min_weight %r below %s; clamped to %s", value, DEFAULT_MIN_WEIGHT, normalized)
        return normalized

    @field_validator("max_weight")
    @classmethod
    def _floor_max_weight(cls, value: float, info: ValidationInfo) -> float:
        minimum = info.data.get("min_weight", DEFAULT_MIN_WEIGHT)
        normalized = max(minimum, value)
        if normalized != value:
            LOGGER.warning("max_weight %r below min_weight %s; clamped to %s", value, minimum, normalized)
        return normalized

    def midpoint(self) -> float:
        """Return the average weight reported by an empty system."""

        return (self.min_weight + self.max_weight) / 2


__all__ = [
    "DEFAULT_MAX_WEIGHT",
    "DEFAULT_MIN_WEIGHT",
    "FeedbackConfig",
    "TelemetryConfig",
    "WeightSystemConfig",
]
