"""Settings file management."""

from __future__ import annotations

import logging
import pathlib
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from pathkit.errors import ConfigError

logger = logging.getLogger(__name__)

# Default settings location
CONFIG_DIR = pathlib.Path.home() / ".pathkit"
CONFIG_FILE_NAME = "config.yaml"

_TRUE_VALUES = {"true", "yes", "on", "1"}
_FALSE_VALUES = {"false", "no", "off", "0"}


class Settings(BaseModel):
    """User settings for pathkit."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    grammar: Literal["auto", "posix", "windows"] = "auto"
    case_sensitive: bool | None = Field(default=None, alias="caseSensitive")
    include_hidden: bool = Field(default=False, alias="includeHidden")
    log_level: str = Field(default="WARNING", alias="logLevel")

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value}")
        return level


def _parse_bool(key: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(f"Invalid value for {key}: {value!r} (expected true or false)")


class ConfigManager:
    """Loads and saves the settings file."""

    KEYS = ("grammar", "case-sensitive", "include-hidden", "log-level")

    def __init__(self, config_dir: pathlib.Path | None = None) -> None:
        """Initialize the config manager.

        Args:
            config_dir: Directory holding config.yaml. Defaults to ~/.pathkit.

        Note:
            Prefer using factory methods `create()` or `create_default()` for construction.
        """
        self.config_dir = config_dir or CONFIG_DIR
        self.config_file = self.config_dir / CONFIG_FILE_NAME

    @classmethod
    def create(cls, config_dir: pathlib.Path) -> ConfigManager:
        """Create a config manager for a custom directory.

        Args:
            config_dir: Directory holding config.yaml.

        Returns:
            Configured ConfigManager instance.
        """
        return cls(config_dir=config_dir)

    @classmethod
    def create_default(cls) -> ConfigManager:
        """Create a config manager for ~/.pathkit."""
        return cls()

    def load(self) -> Settings:
        """Load settings, falling back to defaults when no file exists.

        Returns:
            Parsed Settings.

        Raises:
            ConfigError: If the file is not valid YAML or fails validation.
        """
        if not self.config_file.exists():
            return Settings()

        try:
            data: Any = yaml.safe_load(self.config_file.read_text()) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read {self.config_file}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"{self.config_file} must contain a mapping")

        try:
            return Settings.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid settings in {self.config_file}: {e}") from e

    def save(self, settings: Settings) -> None:
        """Write settings to the config file.

        Args:
            settings: Settings to persist.
        """
        self.config_dir.mkdir(parents=True, exist_ok=True)
        data = settings.model_dump(by_alias=True)
        self.config_file.write_text(yaml.safe_dump(data, default_flow_style=False, sort_keys=False))
        logger.debug("Saved settings to %s", self.config_file)

    def set_value(self, key: str, value: str) -> Settings:
        """Update one setting from its command line spelling and save.

        Args:
            key: One of grammar, case-sensitive, include-hidden, log-level.
            value: New value as typed by the user.

        Returns:
            The updated Settings.

        Raises:
            ConfigError: If the key is unknown or the value invalid.
        """
        settings = self.load()
        updates: dict[str, Any]
        if key == "grammar":
            updates = {"grammar": value.strip().lower()}
        elif key == "case-sensitive":
            auto = value.strip().lower() in ("auto", "probe", "none")
            updates = {"case_sensitive": None if auto else _parse_bool(key, value)}
        elif key == "include-hidden":
            updates = {"include_hidden": _parse_bool(key, value)}
        elif key == "log-level":
            updates = {"log_level": value.strip().upper()}
        else:
            raise ConfigError(f"Unknown configuration key: {key}. Supported: {list(self.KEYS)}")

        try:
            updated = Settings.model_validate({**settings.model_dump(), **updates})
        except ValidationError as e:
            raise ConfigError(f"Invalid value for {key}: {value!r}") from e
        self.save(updated)
        return updated
