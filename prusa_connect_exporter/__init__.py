"""Prometheus exporter for Prusa Connect printer telemetry."""

from .collector import PrusaConnectCollector
from .duration import DurationParseError, parse_duration
from .telemetry import (
    DecodeError,
    FetchError,
    TelemetryClient,
    TelemetryError,
    TelemetryRecord,
)
from .translator import METRICS, MetricSample, MetricSpec, translate

__all__ = [
    "DecodeError",
    "DurationParseError",
    "FetchError",
    "METRICS",
    "MetricSample",
    "MetricSpec",
    "PrusaConnectCollector",
    "TelemetryClient",
    "TelemetryError",
    "TelemetryRecord",
    "parse_duration",
    "translate",
]
