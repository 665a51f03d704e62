"""Configuration management for p4edit.

Two kinds of configuration live here: the JSON settings file that tunes the
service itself, and the `KEY=VALUE` P4CONFIG files that Perforce users drop
into their workspaces.
"""

import json
from pathlib import Path
from typing import Any

from p4edit.core.paths import get_config_path
from p4edit.core.types import ServiceConfig


class Config:
    """Settings file manager for p4edit."""

    def __init__(self, config_path: Path | None = None) -> None:
        """Initialize configuration manager.

        Args:
            config_path: Path to configuration file. If None, nothing is loaded.
        """
        self._config_path = config_path
        self._config_data: dict[str, Any] = {}

    @classmethod
    def from_file(cls, config_path: Path) -> "Config":
        """Load configuration from file.

        Args:
            config_path: Path to configuration file.

        Returns:
            Config instance with loaded configuration.
        """
        instance = cls(config_path)
        instance.load()
        return instance

    @classmethod
    def default(cls) -> "Config":
        """Load the settings file from the application data directory."""
        return cls.from_file(get_config_path())

    def load(self) -> None:
        """Load configuration from file."""
        if self._config_path is None or not self._config_path.exists():
            return

        with open(self._config_path, encoding="utf-8") as f:
            self._config_data = json.load(f)

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value.

        Args:
            key: Configuration key (supports dot notation).
            default: Default value if key not found.

        Returns:
            Configuration value.
        """
        keys = key.split(".")
        value = self._config_data
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def to_service_config(self) -> ServiceConfig:
        """Convert configuration to ServiceConfig.

        Keys missing from the file keep the ServiceConfig defaults.

        Returns:
            ServiceConfig instance.
        """
        p4_data = self.get("p4", {})
        overrides: dict[str, Any] = {}

        for key in ("program", "global_args", "config_filenames", "client_keys"):
            if key in p4_data:
                overrides[key] = p4_data[key]
        if "timeout" in p4_data:
            overrides["command_timeout"] = p4_data["timeout"]

        log_file = self.get("log_file")
        if log_file:
            overrides["log_file"] = Path(log_file).expanduser()

        return ServiceConfig(**overrides)

    @property
    def data(self) -> dict[str, Any]:
        """Get raw configuration data."""
        return self._config_data


def parse_config(content: str) -> dict[str, str]:
    """Parse P4CONFIG file content.

    Each line is split on its first `=`. Blank lines, `#` comments and lines
    without `=` are ignored. A key that appears twice keeps its last value.

    Args:
        content: File content.

    Returns:
        Mapping of keys to values.
    """
    settings: dict[str, str] = {}
    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        settings[key.strip()] = value.strip()
    return settings


def read_config_file(path: Path) -> dict[str, str]:
    """Read and parse a P4CONFIG file.

    Args:
        path: Path to the file.

    Returns:
        Parsed settings.

    Raises:
        OSError: If the file cannot be read.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    return parse_config(path.read_text(encoding="utf-8"))


def client_from_settings(
    settings: dict[str, str], keys: list[str] | tuple[str, ...]
) -> str | None:
    """Pick the client name out of parsed P4CONFIG settings.

    Args:
        settings: Parsed P4CONFIG settings.
        keys: Keys to look up, in priority order.

    Returns:
        First non-empty client value, or None.
    """
    for key in keys:
        value = settings.get(key)
        if value:
            return value
    return None
