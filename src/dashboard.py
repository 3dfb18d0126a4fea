"""Dashboard - Wires Functional Core and Imperative Shell.

This module coordinates the flow of data between the pure functional
core and the I/O-performing shell components. It owns the current
DashboardState and advances it only through the core reducer.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from src.core.config import Config
from src.core.earthquake import ParsedFeed, RejectedFeature, parse_feed
from src.core.feed import TimeRange
from src.core.histogram import Histogram, aggregate
from src.core.presentation import ChartData, MarkerView, build_chart_data, build_markers
from src.core.state import (
    Action,
    DashboardState,
    FeedFailed,
    FeedLoaded,
    FeedStatus,
    TimeRangeSelected,
    initial_state,
    is_stale,
    reduce,
)
from src.shell.chart_renderer import ChartImageResult, ChartRenderer
from src.shell.config_loader import resolve_timezone
from src.shell.map_renderer import FoliumMapRenderer
from src.shell.static_map_client import MapImageResult, StaticMapClient
from src.shell.usgs_client import USGSFeedClient


logger = logging.getLogger(__name__)


MAP_FILENAME = "map.html"
CHART_FILENAME = "chart.png"
SNAPSHOT_FILENAME = "snapshot.png"


@dataclass
class RenderResult:
    """Files written by a dashboard render.

    Attributes:
        state: Dashboard state that was rendered
        map_path: Interactive map HTML, None if not written
        chart_path: Histogram chart PNG, None if not written
        snapshot_path: Static map PNG, None if not requested or failed
        errors: Any errors that occurred
    """
    state: DashboardState
    map_path: Path | None = None
    chart_path: Path | None = None
    snapshot_path: Path | None = None
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """Returns True if the feed loaded and every file was written."""
        return self.state.status != FeedStatus.ERROR and not self.errors

    @property
    def summary(self) -> str:
        """Human-readable summary of the render."""
        state = self.state
        if state.message:
            return f"{state.time_range.label}: {state.message}"
        return f"{state.time_range.label}: {len(state.earthquakes)} earthquakes"


class Dashboard:
    """Coordinates feed loading, state and rendering.

    This class wires together:
    - USGS feed client (fetches earthquake data)
    - Core functions (parsing, state reducer, classification, histogram)
    - Renderers (interactive map, chart, static snapshot)
    """

    def __init__(
        self,
        config: Config | None = None,
        feed_client: USGSFeedClient | None = None,
        map_renderer: FoliumMapRenderer | None = None,
        chart_renderer: ChartRenderer | None = None,
        static_map_client: StaticMapClient | None = None,
    ) -> None:
        """Initialize dashboard with configuration.

        Args:
            config: Application configuration (defaults if not provided)
            feed_client: USGS feed client (created if not provided)
            map_renderer: Interactive map renderer (created if not provided)
            chart_renderer: Chart renderer (created if not provided)
            static_map_client: Static map client (created if not provided)
        """
        self.config = config or Config()
        self.feed_client = feed_client or USGSFeedClient(
            base_url=self.config.feed_base_url,
            timeout=self.config.request_timeout_seconds,
        )
        self.map_renderer = map_renderer or FoliumMapRenderer(self.config.map)
        self.chart_renderer = chart_renderer or ChartRenderer()
        self.static_map_client = static_map_client or StaticMapClient(self.config.map)
        self.timezone = resolve_timezone(self.config.display_timezone)

        self._state = initial_state(self.config.default_time_range)
        self.last_rejected: tuple[RejectedFeature, ...] = ()

    @property
    def state(self) -> DashboardState:
        return self._state

    def dispatch(self, action: Action) -> DashboardState:
        """Apply an action through the core reducer."""
        self._state = reduce(self._state, action)
        return self._state

    def begin_request(self, time_range: TimeRange) -> int:
        """Select a time range and return the new request ID.

        Any request still in flight for an earlier selection becomes stale.
        """
        state = self.dispatch(TimeRangeSelected(time_range))
        logger.info(
            "Selected %s (request %d)",
            time_range.label,
            state.request_id,
        )
        return state.request_id

    def _fetch(self, time_range: TimeRange) -> ParsedFeed:
        """Fetch and parse the feed for a time range."""
        geojson = self.feed_client.fetch_feed(time_range)

        # Pure core function
        parsed = parse_feed(geojson)

        for rejected in parsed.rejected:
            logger.warning(
                "Skipping malformed feature %s: %s",
                rejected.key,
                rejected.reason,
            )

        return parsed

    def complete_request(self, request_id: int, time_range: TimeRange) -> DashboardState:
        """Fetch the feed for a request and apply the outcome.

        Args:
            request_id: ID returned by begin_request()
            time_range: Time range the request was issued for

        Returns:
            Dashboard state after the outcome is applied
        """
        if is_stale(self._state, request_id):
            logger.info("Skipping superseded request %d", request_id)
            return self._state

        try:
            parsed = self._fetch(time_range)
        except Exception as e:
            logger.error("Failed to fetch %s feed: %s", time_range.feed_name, e)
            return self.dispatch(FeedFailed(request_id=request_id, error=str(e)))

        if is_stale(self._state, request_id):
            logger.info("Discarding stale response for request %d", request_id)
            return self._state

        self.last_rejected = parsed.rejected

        state = self.dispatch(FeedLoaded(
            request_id=request_id,
            earthquakes=parsed.earthquakes,
        ))

        logger.info(
            "Loaded %d earthquakes (%d skipped) for %s",
            len(state.earthquakes),
            len(parsed.rejected),
            time_range.label,
        )

        return state

    def select_time_range(self, time_range: TimeRange) -> DashboardState:
        """Select a time range and load its feed."""
        request_id = self.begin_request(time_range)
        return self.complete_request(request_id, time_range)

    def refresh(self) -> DashboardState:
        """Reload the feed for the current time range."""
        return self.select_time_range(self._state.time_range)

    def markers(self) -> list[MarkerView]:
        """Build map markers for the loaded earthquakes."""
        return build_markers(self._state.earthquakes, self.timezone)

    def histogram(self) -> Histogram:
        """Build the magnitude histogram for the loaded earthquakes."""
        return aggregate(self._state.earthquakes)

    def chart_data(self) -> ChartData:
        """Build the chart series for the loaded earthquakes."""
        return build_chart_data(self.histogram())

    def render_map_html(self) -> str:
        """Render the interactive map as an HTML document."""
        return self.map_renderer.render_html(self.markers())

    def render_chart(self) -> ChartImageResult:
        """Render the magnitude histogram chart."""
        return self.chart_renderer.render(self.chart_data())

    def render_snapshot(self) -> MapImageResult:
        """Render a static map snapshot of all markers."""
        return self.static_map_client.generate_snapshot(self.markers())

    def render_to_directory(
        self,
        output_dir: str | Path,
        include_snapshot: bool = False,
    ) -> RenderResult:
        """Write the dashboard's map and chart to a directory.

        Nothing is written while the feed is in an error state.

        Args:
            output_dir: Directory to write into (created if missing)
            include_snapshot: Also write a static PNG snapshot

        Returns:
            RenderResult with written paths and errors
        """
        result = RenderResult(state=self._state)

        if self._state.status == FeedStatus.ERROR:
            logger.warning("Not rendering: %s", self._state.message)
            return result

        directory = Path(output_dir)
        directory.mkdir(parents=True, exist_ok=True)

        result.map_path = self.map_renderer.save(self.markers(), directory / MAP_FILENAME)

        chart = self.render_chart()
        if chart.success and chart.image_bytes:
            result.chart_path = directory / CHART_FILENAME
            result.chart_path.write_bytes(chart.image_bytes)
        else:
            result.errors.append(f"Failed to render chart: {chart.error}")

        if include_snapshot:
            snapshot = self.render_snapshot()
            if snapshot.success and snapshot.image_bytes:
                result.snapshot_path = directory / SNAPSHOT_FILENAME
                result.snapshot_path.write_bytes(snapshot.image_bytes)
            else:
                result.errors.append(f"Failed to render snapshot: {snapshot.error}")

        return result
