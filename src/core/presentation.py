"""Presentation view models - Pure functions.

This module turns earthquakes and histograms into the plain data the
renderers draw: map markers with popups, and bar chart series.
All functions are pure with no side effects.
"""

import html
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Any, Iterable

from src.core.classifier import MarkerStyle, classify, effective_marker_magnitude
from src.core.earthquake import Earthquake
from src.core.histogram import Histogram
from src.core.state import DashboardState


CHART_TITLE = "Magnitude Distribution"
CHART_DATASET_LABEL = "Number of Earthquakes"

MARKER_BORDER_COLOR = "gold"
MARKER_OPACITY = 0.8

UNKNOWN_TIME = "Unknown time"
UNKNOWN_DEPTH = "Unknown"


@dataclass(frozen=True)
class MarkerView:
    """Everything a map renderer needs for one marker.

    Attributes:
        id: Earthquake ID (stable marker key)
        latitude: Marker latitude
        longitude: Marker longitude
        style: Classified marker style
        place: Location label
        magnitude: Magnitude shown in the popup (the one the marker is drawn with)
        depth_km: Depth in kilometers, None if unknown
        local_time: Event time formatted in the display timezone
        url: USGS event detail URL
    """
    id: str
    latitude: float
    longitude: float
    style: MarkerStyle
    place: str
    magnitude: float
    depth_km: float | None
    local_time: str
    url: str = ""


@dataclass(frozen=True)
class ChartData:
    """Bar chart series for the magnitude histogram."""
    title: str
    dataset_label: str
    labels: list[str]
    counts: list[int]
    colors: list[str]


def format_local_time(time: datetime | None, tz: tzinfo | None = None) -> str:
    """Format an event time in the display timezone.

    Pure function (with tz=None the host's local timezone is used).

    Args:
        time: Event time (timezone-aware), or None
        tz: Display timezone

    Returns:
        Formatted time string
    """
    if time is None:
        return UNKNOWN_TIME
    local = time.astimezone(tz)
    return local.strftime("%Y-%m-%d %H:%M:%S %Z").strip()


def build_marker(earthquake: Earthquake, tz: tzinfo | None = None) -> MarkerView:
    """Build the map marker for an earthquake.

    Pure function.
    """
    return MarkerView(
        id=earthquake.id,
        latitude=earthquake.latitude,
        longitude=earthquake.longitude,
        style=classify(earthquake.magnitude),
        place=earthquake.place,
        magnitude=effective_marker_magnitude(earthquake.magnitude),
        depth_km=earthquake.depth_km,
        local_time=format_local_time(earthquake.time, tz),
        url=earthquake.url,
    )


def build_markers(
    earthquakes: Iterable[Earthquake],
    tz: tzinfo | None = None,
) -> list[MarkerView]:
    """Build map markers for a snapshot of earthquakes, keeping order.

    Pure function.
    """
    return [build_marker(e, tz) for e in earthquakes]


def format_marker_icon_html(style: MarkerStyle) -> str:
    """Format the HTML of a circular marker icon.

    Pure function.
    """
    size = f"{style.size_px:g}"
    return (
        f'<div style="background: {style.color.value}; '
        f"border: 2px solid {MARKER_BORDER_COLOR}; border-radius: 50%; "
        f"width: {size}px; height: {size}px; opacity: {MARKER_OPACITY};\"></div>"
    )


def format_popup_html(marker: MarkerView) -> str:
    """Format the popup shown when a marker is clicked.

    Pure function. All feed-provided text is HTML-escaped.
    """
    depth = UNKNOWN_DEPTH if marker.depth_km is None else f"{marker.depth_km:g} km"
    lines = [
        f"<strong>Location:</strong> {html.escape(marker.place)}",
        f"<strong>Magnitude:</strong> {marker.magnitude:g}",
        f"<strong>Depth:</strong> {depth}",
        f"<strong>Time:</strong> {html.escape(marker.local_time)}",
    ]
    if marker.url:
        lines.append(
            f'<a href="{html.escape(marker.url, quote=True)}" '
            f'target="_blank">View on USGS</a>'
        )
    return "<br>".join(lines)


def build_chart_data(histogram: Histogram) -> ChartData:
    """Build the bar chart series for a histogram.

    Pure function.
    """
    return ChartData(
        title=CHART_TITLE,
        dataset_label=CHART_DATASET_LABEL,
        labels=histogram.labels,
        counts=histogram.counts,
        colors=[c.value for c in histogram.colors],
    )


def marker_to_dict(marker: MarkerView) -> dict[str, Any]:
    """Convert a MarkerView to a JSON-serializable dict."""
    return {
        "id": marker.id,
        "latitude": marker.latitude,
        "longitude": marker.longitude,
        "tier": marker.style.tier.value,
        "color": marker.style.color.value,
        "size_px": marker.style.size_px,
        "place": marker.place,
        "magnitude": marker.magnitude,
        "depth_km": marker.depth_km,
        "local_time": marker.local_time,
        "url": marker.url,
    }


def histogram_to_dict(histogram: Histogram) -> dict[str, Any]:
    """Convert a Histogram to a JSON-serializable dict."""
    return {
        "bins": [
            {"label": b.label, "count": b.count, "color": b.color.value}
            for b in histogram.bins
        ],
        "total": histogram.total,
    }


def state_summary(state: DashboardState) -> dict[str, Any]:
    """Summarize the dashboard state for API responses and logs."""
    return {
        "time_range": state.time_range.value,
        "request_id": state.request_id,
        "status": state.status.value,
        "count": len(state.earthquakes),
        "message": state.message,
    }
