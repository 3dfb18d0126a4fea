"""Functional Core - Pure functions with no side effects.

This module contains all business logic as pure functions:
- Earthquake feed parsing
- Marker classification (color, size)
- Magnitude histogram aggregation
- Dashboard state transitions
- Presentation view models

All functions here are deterministic and have no I/O.
"""

from src.core.earthquake import Earthquake, ParsedFeed, parse_earthquakes, parse_feed
from src.core.classifier import Color, MarkerStyle, SeverityTier, classify
from src.core.histogram import MAGNITUDE_BINS, Histogram, aggregate, bin_for_magnitude
from src.core.feed import TimeRange, build_feed_url, parse_time_range
from src.core.state import DashboardState, FeedStatus, initial_state, reduce
from src.core.presentation import MarkerView, build_chart_data, build_markers

__all__ = [
    # Earthquake
    "Earthquake",
    "ParsedFeed",
    "parse_earthquakes",
    "parse_feed",
    # Classifier
    "Color",
    "MarkerStyle",
    "SeverityTier",
    "classify",
    # Histogram
    "MAGNITUDE_BINS",
    "Histogram",
    "aggregate",
    "bin_for_magnitude",
    # Feed
    "TimeRange",
    "build_feed_url",
    "parse_time_range",
    # State
    "DashboardState",
    "FeedStatus",
    "initial_state",
    "reduce",
    # Presentation
    "MarkerView",
    "build_chart_data",
    "build_markers",
]
