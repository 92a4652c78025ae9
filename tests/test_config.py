"""Configuration and logging setup tests."""

import logging
from pathlib import Path

from vpniptable import config as config_module
from vpniptable.config import AppConfig, DEFAULT_STORAGE_PATH, get_config, set_config
from vpniptable.logging_config import (
    LOGGER_NAME,
    get_error_stats,
    setup_logging,
    track_error,
)


class TestAppConfig:
    """Environment driven settings."""

    def test_defaults(self, monkeypatch):
        for name in ("VPNIPTABLE_STORAGE", "VPNIPTABLE_LOG_LEVEL", "VPNIPTABLE_LOG_FILE", "VPNIPTABLE_SORT_EXPORTS"):
            monkeypatch.delenv(name, raising=False)
        config = AppConfig.from_env()
        assert config.storage_path == DEFAULT_STORAGE_PATH
        assert config.log_level == "WARNING"
        assert not config.log_to_file
        assert not config.sort_exports

    def test_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("VPNIPTABLE_STORAGE", str(tmp_path / "x.yaml"))
        monkeypatch.setenv("VPNIPTABLE_LOG_LEVEL", "debug")
        monkeypatch.setenv("VPNIPTABLE_SORT_EXPORTS", "yes")
        config = AppConfig.from_env()
        assert config.storage_path == tmp_path / "x.yaml"
        assert config.log_level == "DEBUG"
        assert config.sort_exports

    def test_export_filename(self):
        config = AppConfig()
        assert config.export_filename("csv") == "addresses.csv"
        assert config.export_filename("route") == "route_commands.txt"

    def test_set_and_get(self, monkeypatch):
        monkeypatch.setattr(config_module, "_config", None)
        custom = AppConfig(storage_path=Path("/tmp/custom.yaml"))
        set_config(custom)
        assert get_config() is custom


class TestLogging:
    """Logger setup and error tracking."""

    def test_file_logging(self, tmp_path):
        log_file = tmp_path / "logs" / "app.log"
        logger = setup_logging(level="DEBUG", log_file=log_file, enable_console=False)
        logging.getLogger(f"{LOGGER_NAME}.test").debug("hello")
        for handler in logger.handlers:
            handler.flush()
        assert "hello" in log_file.read_text()

    def test_track_error_counts(self):
        track_error("storage_corrupt", "bad")
        track_error("storage_corrupt", "bad again")
        assert get_error_stats() == {"storage_corrupt": 2}
