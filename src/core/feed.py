"""Feed selection - Pure functions.

Maps the dashboard's time-range selector onto USGS summary feed URLs.
The HTTP fetch itself is handled by the shell layer.
"""

from enum import Enum


# USGS real-time summary feeds (GeoJSON)
USGS_FEED_BASE = "https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary"


class TimeRange(str, Enum):
    """Time window selectable on the dashboard."""
    DAY = "day"
    WEEK = "week"
    MONTH = "month"

    @property
    def feed_name(self) -> str:
        """USGS summary feed name covering all magnitudes."""
        return f"all_{self.value}"

    @property
    def label(self) -> str:
        """Human-readable label for selectors."""
        return f"Past {self.value.capitalize()}"


def parse_time_range(value: str | TimeRange) -> TimeRange:
    """Parse a time range from user input.

    Pure function. Accepts "day" as well as the feed form "all_day",
    case-insensitive.

    Args:
        value: Time range string or TimeRange

    Returns:
        Matching TimeRange

    Raises:
        ValueError: If the value names no known time range
    """
    if isinstance(value, TimeRange):
        return value

    normalized = str(value).strip().lower()
    if normalized.startswith("all_"):
        normalized = normalized[len("all_"):]

    try:
        return TimeRange(normalized)
    except ValueError:
        valid = ", ".join(t.value for t in TimeRange)
        raise ValueError(
            f"Unknown time range: {value!r} (expected one of {valid})"
        ) from None


def build_feed_url(time_range: TimeRange, base_url: str = USGS_FEED_BASE) -> str:
    """Build the summary feed URL for a time range.

    Pure function.

    Args:
        time_range: Selected time window
        base_url: Feed base URL (without trailing feed name)

    Returns:
        Full GeoJSON feed URL
    """
    return f"{base_url.rstrip('/')}/{time_range.feed_name}.geojson"
