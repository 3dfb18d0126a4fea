"""Imperative Shell - I/O and side effects.

This module contains all code that interacts with external systems:
- USGS summary feed client (HTTP)
- Map and chart renderers (HTML, PNG, tile fetching)
- Configuration loading (environment/files)

Keep this layer thin and simple. All business logic should be in core.
"""

from src.shell.usgs_client import USGSFeedClient
from src.shell.map_renderer import FoliumMapRenderer
from src.shell.chart_renderer import ChartRenderer
from src.shell.static_map_client import StaticMapClient
from src.shell.config_loader import load_config, Config

__all__ = [
    "USGSFeedClient",
    "FoliumMapRenderer",
    "ChartRenderer",
    "StaticMapClient",
    "load_config",
    "Config",
]
