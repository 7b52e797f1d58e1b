"""Translation of telemetry records into gauge samples."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, List, Sequence

from .constants import METRIC_PREFIX
from .duration import parse_duration
from .telemetry import TelemetryRecord

LOGGER = logging.getLogger(__name__)

Extractor = Callable[[TelemetryRecord], float]


@dataclass(frozen=True, slots=True)
class MetricSample:
    name: str
    value: float


@dataclass(frozen=True, slots=True)
class MetricSpec:
    """A gauge exposed by the exporter.

    ``extractor`` returns the gauge value for a record, or raises
    :class:`ValueError` when the underlying field cannot be parsed.
    """

    name: str
    documentation: str
    extractor: Extractor


_INFINITY_LITERALS = {"inf", "infinity"}


def parse_plain_float(value: str) -> float:
    """Parse a bare decimal or scientific number.

    Unlike :func:`float`, surrounding whitespace, ``_`` digit separators and
    non-ASCII digits are rejected, and a finite literal too large for a float
    is an error rather than infinity.
    """

    if not value.isascii() or value != value.strip() or "_" in value:
        raise ValueError(f"invalid number {value!r}")
    number = float(value)
    if math.isinf(number) and value.lstrip("+-").lower() not in _INFINITY_LITERALS:
        raise ValueError(f"number {value!r} out of range")
    return number


def _print_duration(record: TelemetryRecord) -> float:
    return float(parse_duration(record.print_duration))


def _time_estimated(record: TelemetryRecord) -> float:
    return parse_plain_float(record.time_estimated)


METRICS: tuple[MetricSpec, ...] = (
    MetricSpec(
        f"{METRIC_PREFIX}_temp_nozzle",
        "Temperature of the print nozzle in celsius",
        lambda record: float(record.nozzle_temperature),
    ),
    MetricSpec(
        f"{METRIC_PREFIX}_temp_bed",
        "Temperature of the print bed in celsius",
        lambda record: float(record.bed_temperature),
    ),
    MetricSpec(
        f"{METRIC_PREFIX}_z_pozition",
        "Vertical pozition of the print head in millimeters",
        lambda record: float(record.z_position),
    ),
    MetricSpec(
        f"{METRIC_PREFIX}_printing_speed",
        "Printing speed as a percentage",
        lambda record: float(record.printing_speed),
    ),
    MetricSpec(
        f"{METRIC_PREFIX}_flow_factor",
        "Flow factor",
        lambda record: float(record.flow_factor),
    ),
    MetricSpec(
        f"{METRIC_PREFIX}_progress",
        "Print completeness as a percentage",
        lambda record: float(record.progress),
    ),
    MetricSpec(
        f"{METRIC_PREFIX}_print_duration",
        "Time passed since the current print job started in seconds",
        _print_duration,
    ),
    MetricSpec(
        f"{METRIC_PREFIX}_time_estimated",
        "Estimated time remaining of the current print job in seconds",
        _time_estimated,
    ),
)


def translate(
    record: TelemetryRecord, metrics: Sequence[MetricSpec] = METRICS
) -> List[MetricSample]:
    """Convert ``record`` into samples, in ``metrics`` order.

    A field that fails to parse drops only its own sample.
    """

    samples: List[MetricSample] = []
    for spec in metrics:
        try:
            value = spec.extractor(record)
        except (ValueError, OverflowError) as exc:
            LOGGER.debug("Skipping %s: %s", spec.name, exc)
            continue
        samples.append(MetricSample(spec.name, value))
    return samples
