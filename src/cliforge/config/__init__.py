"""User settings."""

from cliforge.config.loader import (
    get_home_config_path,
    get_local_config_path,
    load_settings,
    load_user_settings,
)
from cliforge.config.schema import DEFAULT_SETTINGS, Settings

__all__ = [
    "DEFAULT_SETTINGS",
    "Settings",
    "get_home_config_path",
    "get_local_config_path",
    "load_settings",
    "load_user_settings",
]
