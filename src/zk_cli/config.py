"""Persisted client configuration."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from zk_cli.client import DEFAULT_ADDR, DEFAULT_TIMEOUT

# Default configuration location
CONFIG_DIR = Path.home() / ".zk-cli"

LOG_LEVELS = ("debug", "info", "warning", "error")

# CLI key -> model field
CONFIG_KEYS = {
    "addr": "addr",
    "timeout": "timeout",
    "log-level": "log_level",
}


class CliConfig(BaseModel):
    """Connection and logging defaults."""

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    version: str = "1.0"
    addr: str = DEFAULT_ADDR
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    log_level: str = Field(default="warning", alias="logLevel")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.lower()
        if value not in LOG_LEVELS:
            raise ValueError(f"log level must be one of {', '.join(LOG_LEVELS)}")
        return value


class ConfigManager:
    """Loads and saves the configuration file."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize the config manager.

        Args:
            config_dir: Directory holding config.json. Defaults to ~/.zk-cli.

        Note:
            Prefer using factory methods `create()` or `create_default()` for construction.
        """
        self.config_dir = config_dir or CONFIG_DIR
        self.config_file = self.config_dir / "config.json"

    @classmethod
    def create(cls, config_dir: Path) -> ConfigManager:
        """Create a config manager with a custom directory."""
        return cls(config_dir=config_dir)

    @classmethod
    def create_default(cls) -> ConfigManager:
        """Create a config manager using ~/.zk-cli."""
        return cls()

    def load(self) -> CliConfig:
        """Load configuration from disk.

        Returns:
            Stored configuration, or defaults if no file exists.
        """
        if not self.config_file.exists():
            return CliConfig()

        data = json.loads(self.config_file.read_text())
        return CliConfig.model_validate(data)

    def save(self, config: CliConfig) -> None:
        """Save configuration to disk."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        data = config.model_dump(by_alias=True)
        self.config_file.write_text(json.dumps(data, indent=2))

    def set_value(self, key: str, value: str) -> CliConfig:
        """Update one setting and persist it.

        Args:
            key: One of ``addr``, ``timeout``, ``log-level``.
            value: New value as typed by the user.

        Returns:
            The updated configuration.

        Raises:
            ValueError: If the key is unknown or the value is invalid.
        """
        if key not in CONFIG_KEYS:
            raise ValueError(f"Unknown configuration key: {key}")

        config = self.load()
        try:
            setattr(config, CONFIG_KEYS[key], value)
        except ValidationError as e:
            raise ValueError(f"Invalid value for {key}: {value}") from e
        self.save(config)
        return config
