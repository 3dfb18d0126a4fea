"""USGS Feed Client - Imperative Shell.

This module handles HTTP communication with the USGS real-time summary
feeds. All I/O is contained here; parsing is in the core module.
"""

import logging
from typing import Any

import requests

from src.core.feed import USGS_FEED_BASE, TimeRange, build_feed_url


logger = logging.getLogger(__name__)


# Default timeout for feed requests (seconds)
DEFAULT_TIMEOUT = 30


class USGSFeedClient:
    """Client for fetching earthquake summary feeds from USGS.

    This is part of the imperative shell - it handles HTTP I/O.
    """

    def __init__(
        self,
        base_url: str = USGS_FEED_BASE,
        timeout: int = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize USGS feed client.

        Args:
            base_url: Summary feed base URL
            timeout: Request timeout in seconds
            session: HTTP session to reuse (a new one is created if not provided)
        """
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def feed_url(self, time_range: TimeRange) -> str:
        """Get the feed URL for a time range."""
        return build_feed_url(time_range, self.base_url)

    def fetch_feed(self, time_range: TimeRange) -> dict[str, Any]:
        """Fetch the summary feed for a time range.

        This method performs HTTP I/O.

        Args:
            time_range: Time window to fetch

        Returns:
            Raw GeoJSON FeatureCollection

        Raises:
            requests.RequestException: If the request fails, returns a
                non-success status, or the body is not valid JSON
            ValueError: If the body is JSON but not an object
        """
        url = self.feed_url(time_range)

        logger.info(
            "Fetching %s feed from USGS",
            time_range.feed_name,
            extra={"url": url},
        )

        response = self.session.get(url, timeout=self.timeout)
        response.raise_for_status()

        data = response.json()
        if not isinstance(data, dict):
            raise ValueError(
                f"Unexpected feed payload: expected object, got {type(data).__name__}"
            )

        features = data.get("features")
        count = len(features) if isinstance(features, list) else 0

        logger.info(
            "Fetched %d earthquakes from USGS %s feed",
            count,
            time_range.feed_name,
        )

        return data
