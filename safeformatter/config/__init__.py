"""Configuration for SafeFormatter."""

from .models import UserConfigData, default_log_dir
from .user_config import UserConfig, create_user_config


__all__ = ["UserConfig", "UserConfigData", "create_user_config", "default_log_dir"]
