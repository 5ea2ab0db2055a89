"""
User configuration management for SafeFormatter.

Settings are resolved from several sources:
1. Environment variables (highest precedence)
2. Command-line provided config file
3. Config file in current directory
4. User's XDG config directory
5. Default values (lowest precedence)
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from safeformatter.config.models import ENV_PREFIX, UserConfigData
from safeformatter.core.errors import ConfigError
from safeformatter.core.structlog_logger import get_struct_logger


logger = get_struct_logger(__name__)


class UserConfig:
    """Loads and exposes user-specific settings."""

    def __init__(self, cli_config_path: str | Path | None = None) -> None:
        """
        Initialize the user configuration handler.

        Args:
            cli_config_path: Optional config file path provided via CLI

        Raises:
            ConfigError: If a config file cannot be parsed or validated
        """
        self._config_sources: dict[str, str] = {}
        self._loaded_path: Path | None = None
        self._cli_config_path = (
            Path(cli_config_path).expanduser().resolve() if cli_config_path else None
        )
        self._config_paths = self._generate_config_paths()
        self._load_config()

    def _generate_config_paths(self) -> list[Path]:
        """Generate a list of config paths to search in order of precedence."""
        config_paths = []

        if self._cli_config_path:
            config_paths.append(self._cli_config_path)

        config_paths.extend(
            [Path.cwd() / "safeformatter.yaml", Path.cwd() / ".safeformatter.yml"]
        )

        xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
        config_home = Path(xdg_config_home) if xdg_config_home else Path.home() / ".config"
        config_paths.extend(
            [
                config_home / "safeformatter" / "config.yaml",
                config_home / "safeformatter" / "config.yml",
            ]
        )

        return config_paths

    def _read_yaml(self, path: Path) -> dict[str, Any]:
        try:
            with path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to read config file {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        return data

    def _load_config(self) -> None:
        """Load configuration from the first config file found plus environment."""
        logger.debug(
            "config_search_paths", paths=[str(p) for p in self._config_paths]
        )

        if self._cli_config_path and not self._cli_config_path.exists():
            raise ConfigError(f"Config file not found: {self._cli_config_path}")

        config_data: dict[str, Any] = {}
        for path in self._config_paths:
            if path.is_file():
                config_data = self._read_yaml(path)
                self._loaded_path = path
                break

        try:
            self._config = UserConfigData(**config_data)
        except ValidationError as e:
            source = self._loaded_path or "environment"
            raise ConfigError(f"Invalid configuration in {source}: {e}") from e

        if self._loaded_path:
            logger.debug("config_loaded", path=str(self._loaded_path))
            for key in config_data:
                self._config_sources[key] = self._loaded_path.name
        else:
            logger.debug("config_defaults_used")

        for key in UserConfigData.model_fields:
            if f"{ENV_PREFIX}{key}".upper() in {k.upper() for k in os.environ}:
                self._config_sources[key] = "environment"

    @property
    def config(self) -> UserConfigData:
        return self._config

    @property
    def config_path(self) -> Path | None:
        """Path of the config file that was loaded, if any."""
        return self._loaded_path

    def get_source(self, key: str) -> str:
        """Where a setting came from: ``environment``, a file name or ``default``."""
        return self._config_sources.get(key, "default")

    def get_log_level_int(self) -> int:
        """Get the configured log level as a logging module constant."""
        return int(getattr(logging, self._config.log_level, logging.WARNING))

    def describe(self) -> list[tuple[str, Any, str]]:
        """Return ``(key, value, source)`` for every setting."""
        return [
            (key, getattr(self._config, key), self.get_source(key))
            for key in UserConfigData.model_fields
        ]


def create_user_config(cli_config_path: str | Path | None = None) -> UserConfig:
    """Factory function to create a UserConfig instance.

    Args:
        cli_config_path: Optional config file path provided via CLI

    Returns:
        Configured UserConfig instance
    """
    return UserConfig(cli_config_path=cli_config_path)
