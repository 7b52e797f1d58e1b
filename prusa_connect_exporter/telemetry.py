"""Prusa Connect telemetry record and HTTP client."""

from __future__ import annotations

import asyncio
import logging
import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import aiohttp

from .constants import TELEMETRY_PATH

LOGGER = logging.getLogger(__name__)


class TelemetryError(RuntimeError):
    """Base class for failures while obtaining a telemetry snapshot."""


class FetchError(TelemetryError):
    """Raised when the HTTP exchange with the printer cannot complete."""


class DecodeError(TelemetryError):
    """Raised when the response body is not the expected JSON object."""


@dataclass(frozen=True, slots=True)
class TelemetryRecord:
    """One telemetry snapshot as reported by ``/api/telemetry``."""

    nozzle_temperature: int = 0
    bed_temperature: int = 0
    z_position: float = 0.0
    printing_speed: int = 0
    flow_factor: int = 0
    progress: int = 0
    print_duration: str = ""
    time_estimated: str = ""
    material: str = ""
    project_name: str = ""
    time_zone: str = ""

    @classmethod
    def from_payload(cls, payload: Any) -> "TelemetryRecord":
        """Build a record from a decoded JSON document.

        Unknown keys are ignored and missing or ``null`` keys fall back to the
        field's zero value. Values of the wrong JSON type raise
        :class:`DecodeError`.
        """

        if not isinstance(payload, Mapping):
            raise DecodeError(
                f"Expected a JSON object, got {type(payload).__name__}"
            )

        return cls(
            nozzle_temperature=_int_field(payload, "temp_nozzle"),
            bed_temperature=_int_field(payload, "temp_bed"),
            z_position=_float_field(payload, "pos_z_mm"),
            printing_speed=_int_field(payload, "printing_speed"),
            flow_factor=_int_field(payload, "flow_factor"),
            progress=_int_field(payload, "progress"),
            print_duration=_str_field(payload, "print_dur"),
            time_estimated=_str_field(payload, "time_est"),
            material=_str_field(payload, "material"),
            project_name=_str_field(payload, "project_name"),
            time_zone=_str_field(payload, "time_zone"),
        )


_INT_MIN = -(1 << 63)
_INT_MAX = (1 << 63) - 1


def _int_field(payload: Mapping[str, Any], key: str) -> int:
    value = payload.get(key)
    if value is None:
        return 0
    if isinstance(value, bool):
        raise DecodeError(f"Field {key!r} must be an integer, got boolean")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int):
        raise DecodeError(f"Field {key!r} must be an integer, got {value!r}")
    if not _INT_MIN <= value <= _INT_MAX:
        raise DecodeError(f"Field {key!r} is out of the 64-bit integer range")
    return value


def _float_field(payload: Mapping[str, Any], key: str) -> float:
    value = payload.get(key)
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DecodeError(f"Field {key!r} must be a number, got {value!r}")
    try:
        number = float(value)
    except OverflowError as exc:
        raise DecodeError(f"Field {key!r} is out of the float range") from exc
    if not math.isfinite(number):
        raise DecodeError(f"Field {key!r} must be a finite number, got {value!r}")
    return number


def _str_field(payload: Mapping[str, Any], key: str) -> str:
    value = payload.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(f"Field {key!r} must be a string, got {value!r}")
    return value


class TelemetryClient:
    """Fetches telemetry snapshots from a Prusa Connect host.

    Each :meth:`fetch` performs exactly one GET request. Without an injected
    session a fresh :class:`aiohttp.ClientSession` is opened and closed per
    call, so the client keeps no connection state between scrapes.
    """

    def __init__(
        self,
        base_url: str,
        *,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._session = session

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def url(self) -> str:
        return f"{self._base_url}{TELEMETRY_PATH}"

    async def fetch(self) -> TelemetryRecord:
        """Fetch and decode the current telemetry snapshot.

        Raises:
            FetchError: If the request fails or returns a non-success status.
            DecodeError: If the body is not a telemetry JSON object.
        """

        session = self._session
        owns_session = session is None
        if session is None:
            session = aiohttp.ClientSession()

        try:
            async with session.get(self.url) as response:
                response.raise_for_status()
                payload = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as exc:
            raise FetchError(f"Failed to get telemetry from {self.url}: {exc}") from exc
        except ValueError as exc:
            raise DecodeError(f"Failed to decode telemetry from {self.url}: {exc}") from exc
        finally:
            if owns_session:
                await session.close()

        record = TelemetryRecord.from_payload(payload)
        LOGGER.debug(
            "Telemetry from %s: project=%r material=%r progress=%s%%",
            self._base_url,
            record.project_name,
            record.material,
            record.progress,
        )
        return record
