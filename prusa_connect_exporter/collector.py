"""Prometheus collector bridging Prusa Connect telemetry."""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, Iterator, Sequence

from prometheus_client.core import GaugeMetricFamily
from prometheus_client.registry import Collector

from .telemetry import TelemetryClient, TelemetryError
from .translator import METRICS, MetricSpec, translate

LOGGER = logging.getLogger(__name__)


class PrusaConnectCollector(Collector):
    """Fetches one telemetry snapshot per scrape and exposes it as gauges.

    The collector is read-only after construction and may be collected from
    several threads at once. Upstream failures never propagate to the
    registry: the affected scrape simply yields no samples.
    """

    def __init__(
        self,
        client: TelemetryClient,
        *,
        metrics: Sequence[MetricSpec] = METRICS,
    ) -> None:
        self._client = client
        self._metrics: Dict[str, MetricSpec] = {spec.name: spec for spec in metrics}

    def describe(self) -> Iterator[GaugeMetricFamily]:
        for spec in self._metrics.values():
            yield GaugeMetricFamily(spec.name, spec.documentation)

    def collect(self) -> Iterator[GaugeMetricFamily]:
        """Fetch one snapshot and yield a gauge per parsed field.

        The fetch runs on a private event loop, so this must be called from a
        thread without a running loop (the server uses an executor). Called
        from a running loop, the scrape is logged and yields nothing.
        """

        try:
            asyncio.get_running_loop()
        except RuntimeError:
            pass
        else:
            LOGGER.error(
                "Collect called from a running event loop; use an executor thread"
            )
            return

        try:
            record = asyncio.run(self._client.fetch())
        except TelemetryError as exc:
            LOGGER.warning("Scrape of %s failed: %s", self._client.base_url, exc)
            return

        for sample in translate(record, tuple(self._metrics.values())):
            spec = self._metrics[sample.name]
            yield GaugeMetricFamily(
                spec.name, spec.documentation, value=sample.value
            )
