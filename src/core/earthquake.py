"""Earthquake data models and parsing - Pure functions.

This module handles parsing USGS summary-feed GeoJSON into typed Earthquake
objects. Malformed features are rejected instead of raising, so one bad
record never takes down a whole fetch.
All functions are pure with no side effects.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True)
class Earthquake:
    """Immutable earthquake data model.

    Attributes:
        id: Unique USGS event ID (opaque, used only for keying)
        magnitude: Earthquake magnitude, None when the feed omits it
        place: Human-readable location description
        time: Event timestamp (UTC), None when the feed omits it
        latitude: Epicenter latitude
        longitude: Epicenter longitude
        depth_km: Depth in kilometers (display-only)
        url: USGS event detail URL
    """
    id: str
    magnitude: float | None
    place: str
    time: datetime | None
    latitude: float
    longitude: float
    depth_km: float | None = None
    url: str = ""

    @property
    def coordinates(self) -> tuple[float, float]:
        """Return (latitude, longitude) tuple."""
        return (self.latitude, self.longitude)


@dataclass(frozen=True)
class RejectedFeature:
    """A feed feature that could not be parsed.

    Attributes:
        key: Feature ID, or "#<index>" when the feature has no ID
        reason: Why the feature was rejected
    """
    key: str
    reason: str


@dataclass(frozen=True)
class ParsedFeed:
    """Result of parsing a full feed response.

    Attributes:
        earthquakes: Valid earthquakes, in feed order
        rejected: Features that were skipped
    """
    earthquakes: tuple[Earthquake, ...]
    rejected: tuple[RejectedFeature, ...] = ()


def _optional_float(value: Any) -> float | None:
    """Convert a feed value to float, keeping None as None."""
    if value is None:
        return None
    return float(value)


def _display_float(value: Any) -> float | None:
    """Convert a display-only value to float, falling back to None."""
    try:
        return _optional_float(value)
    except (TypeError, ValueError):
        return None


def _display_text(value: Any, fallback: str) -> str:
    """Keep a display-only string, falling back when it is not text."""
    if isinstance(value, str) and value:
        return value
    return fallback


def _display_time(value: Any) -> datetime | None:
    """Convert USGS epoch milliseconds to UTC, falling back to None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError):
        return None


def _has_id(feature: dict[str, Any]) -> bool:
    return feature.get("id") not in (None, "")


def _required_coordinate(value: Any, name: str) -> float:
    """Convert a coordinate to a finite float or raise ValueError."""
    coordinate = float(value)
    if not math.isfinite(coordinate):
        raise ValueError(f"{name} is not finite")
    return coordinate


def validate_feature(feature: Any) -> str | None:
    """Check a GeoJSON feature for the fields every event needs.

    Pure function.

    Args:
        feature: GeoJSON feature from the USGS feed

    Returns:
        Rejection reason, or None if the feature can be parsed
    """
    if not isinstance(feature, dict):
        return "feature is not an object"

    if not _has_id(feature):
        return "missing id"

    geometry = feature.get("geometry") or {}
    if not isinstance(geometry, dict):
        return "geometry is not an object"

    coords = geometry.get("coordinates") or []
    if not isinstance(coords, (list, tuple)) or len(coords) < 2:
        return "missing coordinates"

    properties = feature.get("properties")
    if properties is not None and not isinstance(properties, dict):
        return "properties is not an object"

    return None


def parse_earthquake(feature: dict[str, Any]) -> Earthquake | None:
    """Parse a single GeoJSON feature into an Earthquake.

    Pure function: takes raw dict, returns typed Earthquake or None if invalid.
    An absent magnitude is kept as None; consumers choose their own default.

    Args:
        feature: GeoJSON feature dict from the USGS feed

    Returns:
        Earthquake object or None if parsing fails
    """
    if validate_feature(feature) is not None:
        return None

    try:
        props = feature.get("properties") or {}
        coords = feature["geometry"]["coordinates"]

        return Earthquake(
            id=str(feature["id"]),
            magnitude=_optional_float(props.get("mag")),
            place=_display_text(props.get("place"), "Unknown location"),
            time=_display_time(props.get("time")),
            longitude=_required_coordinate(coords[0], "longitude"),
            latitude=_required_coordinate(coords[1], "latitude"),
            depth_km=_display_float(coords[2]) if len(coords) > 2 else None,
            url=_display_text(props.get("url"), ""),
        )
    except (KeyError, TypeError, ValueError, OverflowError, OSError):
        return None


def parse_feed(geojson: dict[str, Any]) -> ParsedFeed:
    """Parse a USGS GeoJSON FeatureCollection.

    Pure function: keeps feed order, collects rejected features so the
    caller can log them.

    Args:
        geojson: Full GeoJSON FeatureCollection from the USGS feed

    Returns:
        ParsedFeed with valid earthquakes and rejected features
    """
    features = geojson.get("features") or []
    earthquakes: list[Earthquake] = []
    rejected: list[RejectedFeature] = []

    for index, feature in enumerate(features):
        key = f"#{index}"
        if isinstance(feature, dict) and _has_id(feature):
            key = str(feature["id"])

        reason = validate_feature(feature)
        if reason is not None:
            rejected.append(RejectedFeature(key=key, reason=reason))
            continue

        earthquake = parse_earthquake(feature)
        if earthquake is None:
            rejected.append(RejectedFeature(key=key, reason="invalid field value"))
            continue

        earthquakes.append(earthquake)

    return ParsedFeed(earthquakes=tuple(earthquakes), rejected=tuple(rejected))


def parse_earthquakes(geojson: dict[str, Any]) -> list[Earthquake]:
    """Parse USGS GeoJSON response into list of Earthquakes.

    Pure function: filters out invalid features, returns valid earthquakes
    in feed order.

    Args:
        geojson: Full GeoJSON FeatureCollection from the USGS feed

    Returns:
        List of valid Earthquake objects
    """
    return list(parse_feed(geojson).earthquakes)
