"""Settings file loading and merging."""

import logging
from pathlib import Path

import yaml

from cliforge.config.schema import DEFAULT_SETTINGS, Settings

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.yaml"


def get_home_config_path() -> Path:
    """Get path to global config: ~/.cliforge/config.yaml."""
    return Path.home() / ".cliforge" / CONFIG_FILENAME


def get_local_config_path() -> Path:
    """Get path to local config: ./.cliforge/config.yaml."""
    return Path.cwd() / ".cliforge" / CONFIG_FILENAME


def load_yaml_config(path: Path) -> dict[str, object] | None:
    """Load a YAML config file, return None if not found, empty or malformed."""
    if not path.exists():
        return None
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.warning("Ignoring malformed config %s: %s", path, e)
        return None
    if not isinstance(data, dict):
        return None
    result: dict[str, object] = data
    return result


def load_user_settings() -> Settings:
    """Load settings from the config files only.

    Precedence (lowest to highest):
    1. Global config (~/.cliforge/config.yaml)
    2. Local config (./.cliforge/config.yaml)

    Fields no file sets stay None.
    """
    settings = Settings()

    for path in (get_home_config_path(), get_local_config_path()):
        data = load_yaml_config(path)
        if data:
            settings = settings.merge(Settings.from_dict(data))

    return settings


def load_settings() -> Settings:
    """Load effective settings: built-in defaults overlaid with the config files."""
    return DEFAULT_SETTINGS.merge(load_user_settings())
