"""Configuration module for loading settings and environment variables."""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from feedticker.core.errors import ConfigError
from feedticker.core.logger import logger

# Load environment variables from .env file
load_dotenv()

DEFAULT_SETTINGS: Dict[str, Any] = {
    "feed_limit": 10,
    "history_days": 30,
    "request_timeout": 15,
    "recent_prices": 5,
    "watchlist_path": None,
}

_INT_SETTINGS = ("feed_limit", "history_days", "request_timeout", "recent_prices")


def load_config(config_path: str | Path = "config.yaml") -> Dict[str, Any]:
    """
    Load configuration from the specified YAML file.

    Args:
        config_path (str | Path): Path to the configuration file. Defaults to "config.yaml".

    Returns:
        Dict[str, Any]: A dictionary containing the configuration settings.
    """
    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found at {config_path}")

    with open(config_file, "r", encoding="utf-8") as file:
        config_data = yaml.safe_load(file)

    if not config_data:
        raise ValueError(f"Configuration file {config_path} is empty or invalid.")

    return config_data


def load_settings(config_path: Optional[str | Path] = None) -> Dict[str, Any]:
    """
    Return ``DEFAULT_SETTINGS`` overlaid with the settings file, if one exists.

    The file is ``config_path``, else ``$FEEDTICKER_SETTINGS``, else
    ``config.yaml`` in the working directory. A missing file is not an error.

    Raises:
        ConfigError: If the file exists but is empty, unparsable, not a mapping,
            or holds a value of the wrong type.
    """
    path = Path(config_path or os.getenv("FEEDTICKER_SETTINGS", "config.yaml"))
    settings = dict(DEFAULT_SETTINGS)

    if not path.exists():
        logger.info(f"No settings file at {path}; using defaults")
        return settings

    try:
        data = load_config(path)
    except (ValueError, yaml.YAMLError) as exc:
        raise ConfigError(f"Invalid settings file {path}: {exc}", path=str(path)) from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Settings file {path} must contain a mapping", path=str(path))

    unknown = sorted(set(data) - set(DEFAULT_SETTINGS))
    if unknown:
        logger.warning(f"Ignoring unknown settings in {path}: {unknown}")

    settings.update({k: v for k, v in data.items() if k in DEFAULT_SETTINGS})

    for key in _INT_SETTINGS:
        value = settings[key]
        if not isinstance(value, int) or isinstance(value, bool):
            raise ConfigError(
                f"Setting '{key}' in {path} must be an integer, got {value!r}", path=str(path)
            )
    watchlist_path = settings["watchlist_path"]
    if watchlist_path is not None and not isinstance(watchlist_path, str):
        raise ConfigError(
            f"Setting 'watchlist_path' in {path} must be a path string, got {watchlist_path!r}",
            path=str(path),
        )

    logger.info(f"Loaded settings from {path}")
    return settings
