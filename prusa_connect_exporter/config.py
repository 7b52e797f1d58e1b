"""Configuration loader for prusa-connect-exporter."""

from __future__ import annotations

import os
from configparser import ConfigParser
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from . import constants


class ConfigurationError(RuntimeError):
    """Raised when the exporter cannot start with the given configuration."""


@dataclass(slots=True)
class PrusaConnectConfig:
    host: str


@dataclass(slots=True)
class ExporterConfig:
    listen_host: str = constants.DEFAULT_LISTEN_HOST
    port: int = constants.DEFAULT_LISTEN_PORT
    path: str = constants.DEFAULT_METRICS_PATH


@dataclass(slots=True)
class LoggingConfig:
    level: str = constants.DEFAULT_LOG_LEVEL
    path: Optional[Path] = None
    log_network: bool = False


@dataclass(slots=True)
class AppConfig:
    prusa_connect: PrusaConnectConfig
    exporter: ExporterConfig
    logging: LoggingConfig
    raw: ConfigParser
    path: Optional[Path]


# (section, option) pairs that may be overridden from the environment.
_ENVIRONMENT_OVERRIDES = {
    constants.ENV_HOST: ("prusa_connect", "host"),
    constants.ENV_LISTEN_HOST: ("exporter", "listen_host"),
    constants.ENV_PORT: ("exporter", "port"),
    constants.ENV_PATH: ("exporter", "path"),
    constants.ENV_LOG_LEVEL: ("logging", "level"),
    constants.ENV_LOG_PATH: ("logging", "path"),
}


def load_config(
    path: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None
) -> AppConfig:
    """Load configuration, layering defaults, an optional file and the environment.

    Raises:
        ConfigurationError: If the Prusa Connect host is missing or the
            listen port is not a valid port number.
    """

    environment = os.environ if environ is None else environ

    parser = ConfigParser()
    parser.read_dict(
        {
            "prusa_connect": {},
            "exporter": {
                "listen_host": constants.DEFAULT_LISTEN_HOST,
                "port": str(constants.DEFAULT_LISTEN_PORT),
                "path": constants.DEFAULT_METRICS_PATH,
            },
            "logging": {
                "level": constants.DEFAULT_LOG_LEVEL,
                "log_network": "false",
            },
        }
    )

    source: Optional[Path] = None
    if path is not None and path.exists():
        parser.read(path)
        source = path

    for variable, (section, option) in _ENVIRONMENT_OVERRIDES.items():
        if variable in environment:
            parser.set(section, option, environment[variable])

    host = parser.get("prusa_connect", "host", fallback="").strip()
    if not host:
        raise ConfigurationError(
            f"Missing environment variable: {constants.ENV_HOST}"
        )

    try:
        port = parser.getint("exporter", "port")
    except ValueError as exc:
        raise ConfigurationError(
            f"Invalid exporter port: {parser.get('exporter', 'port')!r}"
        ) from exc
    if not 0 <= port <= 65535:
        raise ConfigurationError(f"Exporter port out of range: {port}")

    metrics_path = parser.get("exporter", "path").strip() or constants.DEFAULT_METRICS_PATH
    if not metrics_path.startswith("/"):
        metrics_path = "/" + metrics_path

    log_path_value = parser.get("logging", "path", fallback="").strip()

    return AppConfig(
        prusa_connect=PrusaConnectConfig(host=host),
        exporter=ExporterConfig(
            listen_host=parser.get("exporter", "listen_host"),
            port=port,
            path=metrics_path,
        ),
        logging=LoggingConfig(
            level=parser.get("logging", "level"),
            path=Path(log_path_value).expanduser() if log_path_value else None,
            log_network=parser.getboolean("logging", "log_network", fallback=False),
        ),
        raw=parser,
        path=source,
    )
