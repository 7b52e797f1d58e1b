"""HTTP scrape endpoint for the exporter."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Optional

from aiohttp import web
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest

from .constants import DEFAULT_METRICS_PATH

LOGGER = logging.getLogger(__name__)

_LANDING_PAGE = """<html>
<head><title>Prusa Connect Exporter</title></head>
<body>
<h1>Prusa Connect Exporter</h1>
<p><a href="{path}">Metrics</a></p>
</body>
</html>
"""


def create_app(
    registry: CollectorRegistry, metrics_path: str = DEFAULT_METRICS_PATH
) -> web.Application:
    """Build the aiohttp application serving ``metrics_path`` and a landing page."""

    async def handle_metrics(request: web.Request) -> web.Response:
        # Collectors fetch synchronously, keep them off the event loop.
        loop = asyncio.get_running_loop()
        body = await loop.run_in_executor(None, generate_latest, registry)
        return web.Response(body=body, headers={"Content-Type": CONTENT_TYPE_LATEST})

    async def handle_landing(request: web.Request) -> web.Response:
        return web.Response(
            text=_LANDING_PAGE.format(path=metrics_path), content_type="text/html"
        )

    app = web.Application()
    app.router.add_get(metrics_path, handle_metrics)
    if metrics_path != "/":
        app.router.add_get("/", handle_landing)
    return app


class MetricsServer:
    """Serves the registry over HTTP until stopped."""

    def __init__(
        self,
        registry: CollectorRegistry,
        host: str,
        port: int,
        *,
        metrics_path: str = DEFAULT_METRICS_PATH,
    ) -> None:
        self._registry = registry
        self._host = host
        self._port = port
        self._metrics_path = metrics_path
        self._runner: Optional[web.AppRunner] = None
        self._site: Optional[web.TCPSite] = None

    async def start(self) -> None:
        app = create_app(self._registry, self._metrics_path)

        self._runner = web.AppRunner(app)
        await self._runner.setup()
        self._site = web.TCPSite(self._runner, self._host, self._port)
        await self._site.start()
        LOGGER.info(
            "Metrics endpoint listening on http://%s:%s%s",
            self._host,
            self._port,
            self._metrics_path,
        )

    async def stop(self) -> None:
        with contextlib.suppress(Exception):
            if self._site is not None:
                await self._site.stop()
        if self._runner is not None:
            await self._runner.cleanup()
        self._site = None
        self._runner = None
