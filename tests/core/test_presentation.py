"""Unit tests for presentation view models.

All functions are pure, so tests need no mocks.
"""

from datetime import datetime, timedelta, timezone

import pytest

from src.core.classifier import Color, SeverityTier, classify
from src.core.earthquake import Earthquake, parse_feed
from src.core.feed import TimeRange
from src.core.histogram import aggregate
from src.core.presentation import (
    CHART_DATASET_LABEL,
    CHART_TITLE,
    MarkerView,
    build_chart_data,
    build_marker,
    build_markers,
    format_local_time,
    format_marker_icon_html,
    format_popup_html,
    histogram_to_dict,
    marker_to_dict,
    state_summary,
)
from src.core.state import FeedLoaded, TimeRangeSelected, initial_state, reduce


PST = timezone(timedelta(hours=-8), name="PST")


@pytest.fixture
def sample_earthquake():
    """Create a sample earthquake for testing."""
    return Earthquake(
        id="us12345",
        magnitude=4.5,
        place="10km NE of San Francisco, CA",
        time=datetime(2023, 12, 19, 16, 0, 0, tzinfo=timezone.utc),
        latitude=37.7749,
        longitude=-122.4194,
        depth_km=10.5,
        url="https://earthquake.usgs.gov/earthquakes/eventpage/us12345",
    )


class TestFormatLocalTime:
    """Tests for format_local_time()."""

    def test_converts_to_display_timezone(self, sample_earthquake):
        assert format_local_time(sample_earthquake.time, PST) == "2023-12-19 08:00:00 PST"

    def test_utc(self, sample_earthquake):
        assert format_local_time(sample_earthquake.time, timezone.utc) == "2023-12-19 16:00:00 UTC"

    def test_missing_time(self):
        assert format_local_time(None, PST) == "Unknown time"


class TestBuildMarker:
    """Tests for build_marker()."""

    def test_builds_marker(self, sample_earthquake):
        marker = build_marker(sample_earthquake, PST)

        assert marker.id == "us12345"
        assert marker.latitude == 37.7749
        assert marker.longitude == -122.4194
        assert marker.style == classify(4.5)
        assert marker.magnitude == 4.5
        assert marker.depth_km == 10.5
        assert marker.local_time == "2023-12-19 08:00:00 PST"

    def test_absent_magnitude_shows_marker_default(self, sample_earthquake):
        eq = Earthquake(
            id="x", magnitude=None, place="P", time=None, latitude=0.0, longitude=0.0,
        )
        marker = build_marker(eq)

        assert marker.magnitude == 1.0
        assert marker.style.color == Color.GREEN
        assert marker.style.size_px == 8

    def test_build_markers_keeps_order(self, sample_earthquake):
        other = Earthquake(
            id="z", magnitude=6.1, place="Z", time=None, latitude=1.0, longitude=1.0,
        )
        markers = build_markers([other, sample_earthquake], PST)

        assert [m.id for m in markers] == ["z", "us12345"]
        assert markers[0].style.tier == SeverityTier.HIGH


class TestFormatMarkerIconHtml:
    """Tests for format_marker_icon_html()."""

    def test_contains_color_and_size(self):
        html = format_marker_icon_html(classify(3.0))

        assert "background: orange" in html
        assert "width: 12px" in html
        assert "height: 12px" in html
        assert "border: 2px solid gold" in html
        assert "opacity: 0.8" in html


class TestFormatPopupHtml:
    """Tests for format_popup_html()."""

    def test_contains_display_fields(self, sample_earthquake):
        popup = format_popup_html(build_marker(sample_earthquake, PST))

        assert "<strong>Location:</strong> 10km NE of San Francisco, CA" in popup
        assert "<strong>Magnitude:</strong> 4.5" in popup
        assert "<strong>Depth:</strong> 10.5 km" in popup
        assert "<strong>Time:</strong> 2023-12-19 08:00:00 PST" in popup
        assert "View on USGS" in popup

    def test_escapes_place(self):
        marker = MarkerView(
            id="x",
            latitude=0.0,
            longitude=0.0,
            style=classify(1.0),
            place="<script>alert(1)</script>",
            magnitude=1.0,
            depth_km=None,
            local_time="Unknown time",
        )
        popup = format_popup_html(marker)

        assert "<script>" not in popup
        assert "&lt;script&gt;" in popup
        assert "<strong>Depth:</strong> Unknown" in popup
        assert "View on USGS" not in popup

    def test_feed_with_bad_display_fields_renders(self):
        feed = parse_feed({"features": [{
            "id": "a",
            "properties": {"mag": 3.4, "place": 12345, "time": "garbage", "url": 7},
            "geometry": {"coordinates": [10.0, 20.0, 5.0]},
        }]})

        popup = format_popup_html(build_marker(feed.earthquakes[0], PST))

        assert "<strong>Location:</strong> Unknown location" in popup
        assert "<strong>Time:</strong> Unknown time" in popup
        assert "View on USGS" not in popup


class TestBuildChartData:
    """Tests for build_chart_data()."""

    def test_builds_series(self):
        chart = build_chart_data(aggregate([]))

        assert chart.title == CHART_TITLE == "Magnitude Distribution"
        assert chart.dataset_label == CHART_DATASET_LABEL == "Number of Earthquakes"
        assert chart.labels == ["<2", "2-2.9", "3-3.9", "4-4.9", "5-5.9", "6+"]
        assert chart.counts == [0] * 6
        assert chart.colors == ["green", "green", "orange", "orange", "red", "red"]


class TestSerialization:
    """Tests for the JSON helpers."""

    def test_marker_to_dict(self, sample_earthquake):
        data = marker_to_dict(build_marker(sample_earthquake, PST))

        assert data["id"] == "us12345"
        assert data["tier"] == "medium"
        assert data["color"] == "orange"
        assert data["size_px"] == pytest.approx(18.0)
        assert data["depth_km"] == 10.5

    def test_histogram_to_dict(self, sample_earthquake):
        data = histogram_to_dict(aggregate([sample_earthquake]))

        assert data["total"] == 1
        assert data["bins"][3] == {"label": "4-4.9", "count": 1, "color": "orange"}
        assert len(data["bins"]) == 6

    def test_state_summary(self, sample_earthquake):
        state = reduce(initial_state(), TimeRangeSelected(TimeRange.WEEK))
        state = reduce(state, FeedLoaded(state.request_id, (sample_earthquake,)))

        assert state_summary(state) == {
            "time_range": "week",
            "request_id": 1,
            "status": "ready",
            "count": 1,
            "message": None,
        }
