"""Logging setup for the exporter process."""

from __future__ import annotations

import logging
from typing import List

from .config import LoggingConfig

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Loggers that emit one or more records per scrape.
SCRAPE_LOGGERS = (
    "aiohttp.access",
    "aiohttp.client",
    "prusa_connect_exporter.telemetry",
)


def configure_logging(config: LoggingConfig) -> None:
    """Replace the root handlers according to ``config``.

    Console output is always enabled; ``config.path`` adds a file handler.
    Per-scrape records (access log, upstream client, decoded telemetry) are
    shown at DEBUG when ``config.log_network`` is set and limited to warnings
    otherwise, so a frequently scraped exporter does not flood its log.
    """

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if config.path is not None:
        config.path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(config.path, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, config.level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
    logging.captureWarnings(True)

    scrape_level = logging.DEBUG if config.log_network else logging.WARNING
    for name in SCRAPE_LOGGERS:
        logging.getLogger(name).setLevel(scrape_level)
