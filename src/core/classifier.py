"""Marker classification - Pure functions.

Maps an earthquake magnitude to the visual encoding of its map marker
(severity tier, color, size). The actual drawing is handled by the shell
layer.
"""

import math
from dataclasses import dataclass
from enum import Enum


class Color(str, Enum):
    """Colors shared by map markers and chart bars."""
    GREEN = "green"
    ORANGE = "orange"
    RED = "red"


class SeverityTier(str, Enum):
    """Marker severity tiers, ordered from least to most severe."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def color(self) -> Color:
        """Marker color for this tier."""
        return _TIER_COLORS[self]


_TIER_COLORS = {
    SeverityTier.LOW: Color.GREEN,
    SeverityTier.MEDIUM: Color.ORANGE,
    SeverityTier.HIGH: Color.RED,
}

# Markers for events without a usable magnitude are drawn as if M1.
# Note this differs from the histogram, which counts them as M0.
DEFAULT_MARKER_MAGNITUDE = 1.0

MEDIUM_THRESHOLD = 3.0
HIGH_THRESHOLD = 5.0

PIXELS_PER_MAGNITUDE = 4.0
MIN_MARKER_SIZE_PX = 8.0


@dataclass(frozen=True)
class MarkerStyle:
    """Immutable visual encoding for one map marker.

    Attributes:
        tier: Severity tier the magnitude falls in
        color: Marker fill color
        size_px: Marker diameter in pixels
    """
    tier: SeverityTier
    color: Color
    size_px: float


def effective_marker_magnitude(magnitude: float | None) -> float:
    """Resolve the magnitude a marker is drawn with.

    Pure function. Absent and non-finite values (NaN, +/-inf) fall back to
    DEFAULT_MARKER_MAGNITUDE, which keeps them in the low tier.
    """
    if magnitude is None or not math.isfinite(magnitude):
        return DEFAULT_MARKER_MAGNITUDE
    return float(magnitude)


def get_severity_tier(magnitude: float | None) -> SeverityTier:
    """Get the marker severity tier for a magnitude.

    Pure function.

    Args:
        magnitude: Earthquake magnitude, or None if absent

    Returns:
        LOW below 3, MEDIUM from 3 up to 5, HIGH from 5
    """
    value = effective_marker_magnitude(magnitude)
    if value >= HIGH_THRESHOLD:
        return SeverityTier.HIGH
    elif value >= MEDIUM_THRESHOLD:
        return SeverityTier.MEDIUM
    return SeverityTier.LOW


def get_marker_color(magnitude: float | None) -> Color:
    """Get marker color for a magnitude.

    Pure function.
    """
    return get_severity_tier(magnitude).color


def get_marker_size(magnitude: float | None) -> float:
    """Get marker size in pixels.

    Pure function. Scales linearly with magnitude with an 8px floor so
    small earthquakes stay visible.
    """
    value = effective_marker_magnitude(magnitude)
    return max(value * PIXELS_PER_MAGNITUDE, MIN_MARKER_SIZE_PX)


def classify(magnitude: float | None) -> MarkerStyle:
    """Classify a magnitude into its marker style.

    Pure function. Total over every float and None.

    Args:
        magnitude: Earthquake magnitude, or None if absent

    Returns:
        MarkerStyle with tier, color and size set
    """
    tier = get_severity_tier(magnitude)
    return MarkerStyle(
        tier=tier,
        color=tier.color,
        size_px=get_marker_size(magnitude),
    )
