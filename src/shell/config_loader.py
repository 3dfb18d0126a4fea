"""Configuration Loader - Imperative Shell.

This module handles loading configuration from YAML files and
environment variables. All I/O is contained here.

Models (Config, MapSettings) are defined in src/core/config.py
to avoid information leakage between layers.
"""

import logging
import os
from datetime import tzinfo
from pathlib import Path
from typing import Any

import pytz
import yaml

from src.core.config import Config, MapSettings
from src.core.feed import USGS_FEED_BASE, parse_time_range


logger = logging.getLogger(__name__)


def _resolve_value(value: Any) -> Any:
    """Resolve a value that may be a ${VAR} environment placeholder.

    Args:
        value: Value to resolve

    Returns:
        Resolved value (placeholder kept if the variable is not set)
    """
    if not isinstance(value, str):
        return value

    if value.startswith("${") and value.endswith("}"):
        var_name = value[2:-1]
        env_value = os.environ.get(var_name)
        if env_value:
            return env_value
        logger.warning("Environment variable %s not set", var_name)

    return value


def _parse_map(data: dict[str, Any]) -> MapSettings:
    """Parse map settings from config data."""
    defaults = MapSettings()
    center = data.get("center", {})

    return MapSettings(
        center_latitude=float(center.get("latitude", defaults.center_latitude)),
        center_longitude=float(center.get("longitude", defaults.center_longitude)),
        zoom=int(data.get("zoom", defaults.zoom)),
        tile_url=_resolve_value(data.get("tile_url", defaults.tile_url)),
        attribution=data.get("attribution", defaults.attribution),
        snapshot_width=int(data.get("snapshot_width", defaults.snapshot_width)),
        snapshot_height=int(data.get("snapshot_height", defaults.snapshot_height)),
    )


def load_config_from_dict(data: dict[str, Any]) -> Config:
    """Load configuration from a dictionary.

    This is a pure-ish function (only env var expansion has side effects).

    Args:
        data: Configuration dictionary

    Returns:
        Parsed Config object

    Raises:
        ValueError: If the time range or a numeric field is invalid
    """
    defaults = Config()

    timezone_name = _resolve_value(data.get("display_timezone"))

    return Config(
        feed_base_url=_resolve_value(data.get("feed_base_url", USGS_FEED_BASE)),
        default_time_range=parse_time_range(
            data.get("default_time_range", defaults.default_time_range)
        ),
        request_timeout_seconds=int(
            data.get("request_timeout_seconds", defaults.request_timeout_seconds)
        ),
        display_timezone=timezone_name or None,
        output_dir=data.get("output_dir", defaults.output_dir),
        map=_parse_map(data.get("map", {})),
        allowed_origins=list(data.get("allowed_origins", defaults.allowed_origins)),
    )


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from a YAML file.

    This method performs file I/O.

    Args:
        config_path: Path to YAML config file.
                    If None, uses CONFIG_PATH env var or default.

    Returns:
        Parsed Config object

    Raises:
        yaml.YAMLError: If config file is invalid YAML
    """
    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH", "config/config.yaml")

    path = Path(config_path)

    logger.info("Loading configuration from %s", path)

    if not path.exists():
        logger.warning("Config file not found: %s, using defaults", path)
        return Config()

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.warning("Config file is empty, using defaults")
        return Config()

    config = load_config_from_dict(data)

    logger.info(
        "Loaded config: %s feed, timeout %ds",
        config.default_time_range.value,
        config.request_timeout_seconds,
    )

    return config


def load_config_from_env() -> Config:
    """Load configuration from environment variables.

    Useful for simple deployments without a YAML file.

    Environment variables:
        FEED_BASE_URL: Base URL of the summary feeds
        TIME_RANGE: Default time range (day, week, month)
        REQUEST_TIMEOUT: Feed request timeout in seconds
        DISPLAY_TIMEZONE: IANA timezone for event times
        TILE_URL: Map tile URL template

    Returns:
        Config object from environment
    """
    defaults = Config()
    map_settings = MapSettings()

    tile_url = os.environ.get("TILE_URL")
    if tile_url:
        map_settings.tile_url = tile_url

    return Config(
        feed_base_url=os.environ.get("FEED_BASE_URL", defaults.feed_base_url),
        default_time_range=parse_time_range(
            os.environ.get("TIME_RANGE", defaults.default_time_range.value)
        ),
        request_timeout_seconds=int(
            os.environ.get("REQUEST_TIMEOUT", str(defaults.request_timeout_seconds))
        ),
        display_timezone=os.environ.get("DISPLAY_TIMEZONE") or None,
        map=map_settings,
    )


def resolve_timezone(name: str | None) -> tzinfo | None:
    """Resolve the display timezone.

    Args:
        name: IANA timezone name, or None for host local time

    Returns:
        tzinfo, or None for host local time (also when the name is unknown)
    """
    if not name:
        return None

    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError:
        logger.warning("Unknown timezone %s, using local time", name)
        return None
