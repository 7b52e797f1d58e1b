from pathlib import Path

import pytest

from prusa_connect_exporter.config import ConfigurationError, load_config


def test_load_config_defaults() -> None:
    config = load_config(environ={"PRUSA_CONNECT_HOST": "http://printer.local"})

    assert config.prusa_connect.host == "http://printer.local"
    assert config.exporter.listen_host == "0.0.0.0"
    assert config.exporter.port == 8080
    assert config.exporter.path == "/metrics"
    assert config.logging.level == "INFO"
    assert config.logging.path is None
    assert config.logging.log_network is False
    assert config.path is None


def test_load_config_requires_host() -> None:
    with pytest.raises(ConfigurationError, match="PRUSA_CONNECT_HOST"):
        load_config(environ={})


def test_load_config_rejects_blank_host() -> None:
    with pytest.raises(ConfigurationError):
        load_config(environ={"PRUSA_CONNECT_HOST": "  "})


def test_load_config_reads_environment() -> None:
    config = load_config(
        environ={
            "PRUSA_CONNECT_HOST": "http://10.0.0.5",
            "PRUSA_CONNECT_EXPORTER_PORT": "9200",
            "PRUSA_CONNECT_EXPORTER_PATH": "prusa",
            "PRUSA_CONNECT_EXPORTER_LOG_LEVEL": "DEBUG",
        }
    )

    assert config.exporter.port == 9200
    assert config.exporter.path == "/prusa"
    assert config.logging.level == "DEBUG"


@pytest.mark.parametrize("port", ["http", "70000", "-1"])
def test_load_config_rejects_invalid_port(port: str) -> None:
    with pytest.raises(ConfigurationError):
        load_config(
            environ={
                "PRUSA_CONNECT_HOST": "http://printer.local",
                "PRUSA_CONNECT_EXPORTER_PORT": port,
            }
        )


def test_load_config_file_with_environment_precedence(tmp_path: Path) -> None:
    config_path = tmp_path / "prusa-connect-exporter.cfg"
    config_path.write_text(
        """
[prusa_connect]
host = http://from-file

[exporter]
port = 9100
path = /scrape

[logging]
path = {log_path}
log_network = true
""".format(log_path=tmp_path / "exporter.log"),
        encoding="utf-8",
    )

    config = load_config(
        config_path, environ={"PRUSA_CONNECT_EXPORTER_PORT": "9300"}
    )

    assert config.path == config_path
    assert config.prusa_connect.host == "http://from-file"
    assert config.exporter.port == 9300
    assert config.exporter.path == "/scrape"
    assert config.logging.path == tmp_path / "exporter.log"
    assert config.logging.log_network is True


def test_load_config_ignores_missing_file(tmp_path: Path) -> None:
    config = load_config(
        tmp_path / "absent.cfg", environ={"PRUSA_CONNECT_HOST": "http://printer"}
    )

    assert config.prusa_connect.host == "http://printer"
    assert config.path is None
