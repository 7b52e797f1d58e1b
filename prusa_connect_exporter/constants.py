"""Constants used across the prusa-connect-exporter package."""

from __future__ import annotations

APP_NAME = "prusa-connect-exporter"

TELEMETRY_PATH = "/api/telemetry"
METRIC_PREFIX = "prusa_connect"

DEFAULT_LISTEN_HOST = "0.0.0.0"
DEFAULT_LISTEN_PORT = 8080
DEFAULT_METRICS_PATH = "/metrics"
DEFAULT_LOG_LEVEL = "INFO"

ENV_HOST = "PRUSA_CONNECT_HOST"
ENV_LISTEN_HOST = "PRUSA_CONNECT_EXPORTER_LISTEN_HOST"
ENV_PORT = "PRUSA_CONNECT_EXPORTER_PORT"
ENV_PATH = "PRUSA_CONNECT_EXPORTER_PATH"
ENV_LOG_LEVEL = "PRUSA_CONNECT_EXPORTER_LOG_LEVEL"
ENV_LOG_PATH = "PRUSA_CONNECT_EXPORTER_LOG_PATH"
