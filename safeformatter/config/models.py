"""User configuration models."""

import os
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


ENV_PREFIX = "SAFEFORMATTER_"

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def default_log_dir() -> Path:
    """Desktop when present, otherwise the XDG state directory."""
    desktop = Path.home() / "Desktop"
    if desktop.is_dir():
        return desktop

    state_home = os.environ.get("XDG_STATE_HOME")
    base = Path(state_home) if state_home else Path.home() / ".local" / "state"
    return base / "safeformatter" / "logs"


class UserConfigData(BaseSettings):
    """User configuration with automatic environment variable support.

    Precedence order (highest to lowest):
    1. Environment variables
    2. Constructor arguments (config file data)
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: Any,
        env_settings: Any,
        dotenv_settings: Any,
        file_secret_settings: Any,
    ) -> tuple[Any, ...]:
        """Environment variables override file configuration."""
        return (env_settings, init_settings, dotenv_settings, file_secret_settings)

    log_level: str = Field(
        default="WARNING", description="Diagnostic log level for the console"
    )
    log_dir: Path = Field(
        default_factory=default_log_dir,
        description="Directory receiving the per-run SafeFormatter_*.log files",
    )
    diskpart_path: str = Field(
        default="diskpart.exe", description="Disk command interpreter to invoke"
    )
    script_dir: Path | None = Field(
        default=None,
        description="Directory for temporary command scripts (system temp if unset)",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        upper_v = v.strip().upper()
        if upper_v not in VALID_LOG_LEVELS:
            raise ValueError(f"Log level must be one of {list(VALID_LOG_LEVELS)}")
        return upper_v

    @field_validator("log_dir", mode="before")
    @classmethod
    def expand_log_dir(cls, v: Any) -> Path:
        if v is None or v == "":
            return default_log_dir()
        return Path(v).expanduser()

    @field_validator("script_dir", mode="before")
    @classmethod
    def expand_script_dir(cls, v: Any) -> Path | None:
        if v is None or v == "":
            return None
        return Path(v).expanduser()
