"""Tests for marker classification - Pure functions.

These are fast unit tests with no mocks needed since they test pure functions.
"""

import math

import pytest

from src.core.classifier import (
    Color,
    MarkerStyle,
    SeverityTier,
    classify,
    effective_marker_magnitude,
    get_marker_color,
    get_marker_size,
    get_severity_tier,
)


class TestGetMarkerColor:
    """Tests for get_marker_color()."""

    def test_low_magnitude_is_green(self):
        assert get_marker_color(0.5) == Color.GREEN
        assert get_marker_color(2.99) == Color.GREEN

    def test_medium_magnitude_is_orange(self):
        assert get_marker_color(3) == Color.ORANGE
        assert get_marker_color(4.99) == Color.ORANGE

    def test_high_magnitude_is_red(self):
        assert get_marker_color(5) == Color.RED
        assert get_marker_color(9.1) == Color.RED

    def test_negative_magnitude_is_green(self):
        assert get_marker_color(-1.2) == Color.GREEN

    def test_color_values_are_css_names(self):
        assert get_marker_color(1).value == "green"
        assert get_marker_color(4).value == "orange"
        assert get_marker_color(6).value == "red"


class TestGetSeverityTier:
    """Tests for get_severity_tier()."""

    def test_tiers(self):
        assert get_severity_tier(2.9) == SeverityTier.LOW
        assert get_severity_tier(3.0) == SeverityTier.MEDIUM
        assert get_severity_tier(5.0) == SeverityTier.HIGH

    def test_tier_colors(self):
        assert SeverityTier.LOW.color == Color.GREEN
        assert SeverityTier.MEDIUM.color == Color.ORANGE
        assert SeverityTier.HIGH.color == Color.RED


class TestGetMarkerSize:
    """Tests for get_marker_size()."""

    def test_small_magnitudes_hit_the_floor(self):
        assert get_marker_size(0.5) == 8
        assert get_marker_size(2.0) == 8
        assert get_marker_size(-3.0) == 8

    def test_size_scales_linearly_above_floor(self):
        assert get_marker_size(3) == 12
        assert get_marker_size(10) == 40

    def test_size_never_below_floor(self):
        for tenths in range(-20, 100):
            assert get_marker_size(tenths / 10) >= 8


class TestAbsentAndNonFinite:
    """Absent and non-finite magnitudes are drawn as M1."""

    def test_absent_defaults_to_one(self):
        assert effective_marker_magnitude(None) == 1.0

    def test_absent_is_green_with_minimum_size(self):
        style = classify(None)

        assert style.color == Color.GREEN
        assert style.size_px == 8

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_non_finite_is_low_tier(self, value):
        style = classify(value)

        assert style.tier == SeverityTier.LOW
        assert style.color == Color.GREEN
        assert style.size_px == 8


class TestClassify:
    """Tests for classify()."""

    def test_returns_marker_style(self):
        style = classify(4.2)

        assert isinstance(style, MarkerStyle)
        assert style.tier == SeverityTier.MEDIUM
        assert style.color == Color.ORANGE
        assert style.size_px == pytest.approx(16.8)

    @pytest.mark.parametrize("magnitude,color,size", [
        (0.5, Color.GREEN, 8),
        (2.99, Color.GREEN, 11.96),
        (3, Color.ORANGE, 12),
        (4.99, Color.ORANGE, 19.96),
        (5, Color.RED, 20),
        (10, Color.RED, 40),
    ])
    def test_color_and_size(self, magnitude, color, size):
        style = classify(magnitude)

        assert style.color == color
        assert style.size_px == pytest.approx(size)

    def test_style_is_immutable(self):
        style = classify(3.0)
        with pytest.raises(AttributeError):
            style.size_px = 1
