"""Public package interface for weight_system."""

from .config import FeedbackConfig, TelemetryConfig, WeightSystemConfig
from .telemetry import LoggingTelemetrySink, TelemetryPublisher, TelemetrySink, WeightHistorySink
from .types import TelemetryEvent, WeightEvent, WeightedItem
from .utils import clamp, weighted_choice
from .weight_system import WeightSystem

__all__ = [
    "FeedbackConfig",
    "LoggingTelemetrySink",
    "TelemetryConfig",
    "TelemetryEvent",
    "TelemetryPublisher",
    "TelemetrySink",
    "WeightEvent",
    "WeightHistorySink",
    "WeightSystem",
    "WeightSystemConfig",
    "WeightedItem",
    "clamp",
    "weighted_choice",
]
