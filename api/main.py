"""Quake Visualizer API - FastAPI dashboard service.

Serves the earthquake dashboard over HTTP: marker and histogram data as
JSON, the clustered map as HTML, and the magnitude chart as PNG.
Each request loads the selected USGS summary feed fresh; nothing is cached.
"""

import logging
import os

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, Response
from pydantic import BaseModel

from src.core.config import Config, validate_config
from src.core.feed import TimeRange, parse_time_range
from src.core.presentation import histogram_to_dict, marker_to_dict, state_summary
from src.core.state import DashboardState, FeedStatus
from src.dashboard import Dashboard
from src.shell.config_loader import load_config, load_config_from_env

log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _get_config() -> Config:
    """Load configuration from file or environment."""
    if os.environ.get("CONFIG_PATH"):
        return load_config(os.environ["CONFIG_PATH"])
    elif os.environ.get("FEED_BASE_URL") or os.environ.get("TIME_RANGE"):
        return load_config_from_env()
    return load_config()


def _log_config_validation(config: Config) -> None:
    """Log config validation problems at startup."""
    validation = validate_config(config)
    for warning in validation.warnings:
        logger.warning("Config %s: %s", warning.field, warning.message)
    for error in validation.critical_errors:
        logger.error("Config %s: %s", error.field, error.message)


config = _get_config()
_log_config_validation(config)

app = FastAPI(
    title="Quake Visualizer API",
    description="Earthquake map and magnitude distribution from the USGS summary feeds",
    version="1.0.0",
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.allowed_origins,
    allow_credentials=False,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],
)


# ===== Response Models =====

class MarkerOut(BaseModel):
    id: str
    latitude: float
    longitude: float
    tier: str
    color: str
    size_px: float
    place: str
    magnitude: float
    depth_km: float | None = None
    local_time: str
    url: str = ""


class HistogramBinOut(BaseModel):
    label: str
    count: int
    color: str


class HistogramOut(BaseModel):
    bins: list[HistogramBinOut]
    total: int


class StateSummary(BaseModel):
    time_range: str
    request_id: int
    status: str
    count: int
    message: str | None = None


class EarthquakesResponse(StateSummary):
    markers: list[MarkerOut]
    skipped: int


class HistogramResponse(StateSummary):
    histogram: HistogramOut


class TimeRangeOption(BaseModel):
    value: str
    label: str
    feed: str


class TimeRangesResponse(BaseModel):
    time_ranges: list[TimeRangeOption]
    default: str


# ===== Dependencies =====

def get_dashboard() -> Dashboard:
    """Create a dashboard for one request."""
    return Dashboard(config)


def _parse_range(value: str | None) -> TimeRange:
    """Parse the range query parameter or raise 400."""
    if value is None:
        return config.default_time_range
    try:
        return parse_time_range(value)
    except ValueError as e:
        raise HTTPException(
            status_code=400,
            detail={"error": str(e), "available": [t.value for t in TimeRange]},
        )


def _load(dashboard: Dashboard, value: str | None) -> DashboardState:
    """Load the feed for the requested range or raise 502."""
    state = dashboard.select_time_range(_parse_range(value))

    if state.status == FeedStatus.ERROR:
        raise HTTPException(status_code=502, detail=state.message)

    return state


# ===== Public Endpoints =====

@app.get("/api/earthquakes", response_model=EarthquakesResponse)
async def get_earthquakes(
    range: str | None = Query(default=None),
    dashboard: Dashboard = Depends(get_dashboard),
):
    """Get map markers for the selected time range."""
    state = _load(dashboard, range)

    return {
        **state_summary(state),
        "markers": [marker_to_dict(m) for m in dashboard.markers()],
        "skipped": len(dashboard.last_rejected),
    }


@app.get("/api/histogram", response_model=HistogramResponse)
async def get_histogram(
    range: str | None = Query(default=None),
    dashboard: Dashboard = Depends(get_dashboard),
):
    """Get the magnitude histogram for the selected time range."""
    state = _load(dashboard, range)

    return {
        **state_summary(state),
        "histogram": histogram_to_dict(dashboard.histogram()),
    }


@app.get("/api/time-ranges", response_model=TimeRangesResponse)
async def get_time_ranges():
    """List the selectable time ranges."""
    return {
        "time_ranges": [
            {"value": t.value, "label": t.label, "feed": t.feed_name}
            for t in TimeRange
        ],
        "default": config.default_time_range.value,
    }


@app.get("/map", response_class=HTMLResponse)
async def get_map(
    range: str | None = Query(default=None),
    dashboard: Dashboard = Depends(get_dashboard),
):
    """Get the clustered interactive map as an HTML page."""
    _load(dashboard, range)
    return HTMLResponse(dashboard.render_map_html())


@app.get("/chart.png")
async def get_chart(
    range: str | None = Query(default=None),
    dashboard: Dashboard = Depends(get_dashboard),
):
    """Get the magnitude distribution chart as a PNG image."""
    _load(dashboard, range)

    result = dashboard.render_chart()
    if not result.success or not result.image_bytes:
        logger.error("Failed to render chart: %s", result.error)
        raise HTTPException(status_code=500, detail="Failed to render chart")

    return Response(content=result.image_bytes, media_type="image/png")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.environ.get("PORT", "8080")))
