"""
Configuration management for vpniptable.

Loads settings from environment variables or a .env file.
"""

import os
from pathlib import Path
from dataclasses import dataclass

from dotenv import load_dotenv

# Check common locations for .env
for _env_path in (
    Path.home() / ".vpniptable" / ".env",
    Path.home() / ".config" / "vpniptable" / ".env",
    Path.cwd() / ".env",
):
    if _env_path.exists():
        load_dotenv(_env_path)
        break


DEFAULT_STORAGE_PATH = Path.home() / ".config" / "vpniptable" / "addresses.yaml"

_TRUE_VALUES = ("1", "true", "yes", "on")


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


@dataclass
class AppConfig:
    """Application settings."""

    # Persisted range list
    storage_path: Path = DEFAULT_STORAGE_PATH

    # Logging
    log_level: str = "WARNING"
    log_to_file: bool = False

    # Export
    sort_exports: bool = False
    csv_filename: str = "addresses.csv"
    route_filename: str = "route_commands.txt"

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load configuration from environment variables."""
        return cls(
            storage_path=Path(os.getenv("VPNIPTABLE_STORAGE", str(DEFAULT_STORAGE_PATH))).expanduser(),
            log_level=os.getenv("VPNIPTABLE_LOG_LEVEL", "WARNING").upper(),
            log_to_file=_env_flag("VPNIPTABLE_LOG_FILE"),
            sort_exports=_env_flag("VPNIPTABLE_SORT_EXPORTS"),
        )

    def export_filename(self, fmt: str) -> str:
        """Default file name for an export format."""
        return self.csv_filename if fmt == "csv" else self.route_filename


# Global config instance
_config: AppConfig | None = None


def get_config() -> AppConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def set_config(config: AppConfig) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config
