"""Main application entry-point for prusa-connect-exporter."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from prometheus_client import CollectorRegistry

from .collector import PrusaConnectCollector
from .config import AppConfig
from .logging import configure_logging
from .server import MetricsServer
from .telemetry import TelemetryClient

LOGGER = logging.getLogger(__name__)


class ExporterApp:
    """Owns the process-wide registry and the HTTP server."""

    def __init__(self, config: AppConfig) -> None:
        self._config = config
        self.registry = CollectorRegistry()
        self.registry.register(
            PrusaConnectCollector(TelemetryClient(config.prusa_connect.host))
        )
        self._server = MetricsServer(
            self.registry,
            config.exporter.listen_host,
            config.exporter.port,
            metrics_path=config.exporter.path,
        )
        self._shutdown_event: Optional[asyncio.Event] = None

    async def run(self) -> None:
        """Serve scrapes until :meth:`shutdown` is called or the task is cancelled."""

        self._shutdown_event = asyncio.Event()
        LOGGER.info(
            "Starting prusa-connect-exporter for %s", self._config.prusa_connect.host
        )
        await self._server.start()
        try:
            await self._shutdown_event.wait()
        except asyncio.CancelledError:
            LOGGER.info("prusa-connect-exporter received shutdown signal")
            raise
        finally:
            await self._server.stop()

    def shutdown(self) -> None:
        if self._shutdown_event is not None:
            self._shutdown_event.set()

    @classmethod
    def start(cls, config: AppConfig) -> None:
        configure_logging(config.logging)
        instance = cls(config)
        try:
            asyncio.run(instance.run())
        except KeyboardInterrupt:
            LOGGER.info("prusa-connect-exporter received shutdown signal")
