from typing import Any, Optional

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

SAMPLE_TELEMETRY = {
    "temp_nozzle": 210,
    "temp_bed": 60,
    "pos_z_mm": 12.5,
    "printing_speed": 100,
    "flow_factor": 95,
    "progress": 42,
    "print_dur": "2h 5m",
    "time_est": "1500",
}


@pytest.fixture
def telemetry_payload() -> dict[str, Any]:
    return dict(SAMPLE_TELEMETRY)


class FakePrusaConnect:
    """Configurable stand-in for the printer's ``/api/telemetry`` endpoint."""

    def __init__(self, server: TestServer) -> None:
        self._server = server
        self.payload: Any = dict(SAMPLE_TELEMETRY)
        self.status = 200
        self.raw_body: Optional[str] = None
        self.requests = 0

    @property
    def base_url(self) -> str:
        return str(self._server.make_url("/"))

    async def handle(self, request: web.Request) -> web.StreamResponse:
        self.requests += 1
        if self.raw_body is not None:
            return web.Response(
                status=self.status, text=self.raw_body, content_type="application/json"
            )
        return web.json_response(self.payload, status=self.status)


@pytest_asyncio.fixture
async def prusa_connect():
    app = web.Application()
    holder: list[FakePrusaConnect] = []

    async def handler(request: web.Request) -> web.StreamResponse:
        return await holder[0].handle(request)

    app.router.add_get("/api/telemetry", handler)

    async with TestServer(app) as server:
        fake = FakePrusaConnect(server)
        holder.append(fake)
        yield fake
