"""Dashboard state - Pure reducer.

The dashboard's state (selected time range, loaded earthquakes, status
message) is an immutable value. Every change goes through reduce(), which
makes transitions testable without any rendering or I/O.

Each time-range selection gets a new request ID. Feed responses carry the
ID they were issued for, and responses for a superseded selection are
dropped, so a slow earlier fetch can never overwrite a newer one.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Union

from src.core.earthquake import Earthquake
from src.core.feed import TimeRange


NO_EARTHQUAKES_MESSAGE = "No earthquakes recorded in the selected time range."
FETCH_FAILED_PREFIX = "Failed to fetch earthquake data"


class FeedStatus(str, Enum):
    """Lifecycle of the current feed request."""
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    EMPTY = "empty"
    ERROR = "error"


@dataclass(frozen=True)
class DashboardState:
    """Immutable dashboard state.

    Attributes:
        time_range: Currently selected time window
        request_id: ID of the latest request (0 before the first selection)
        status: Status of the latest request
        earthquakes: Loaded earthquakes (empty unless READY)
        message: User-visible status message for EMPTY and ERROR
    """
    time_range: TimeRange = TimeRange.DAY
    request_id: int = 0
    status: FeedStatus = FeedStatus.IDLE
    earthquakes: tuple[Earthquake, ...] = ()
    message: str | None = None

    @property
    def has_error(self) -> bool:
        return self.status == FeedStatus.ERROR

    @property
    def is_loading(self) -> bool:
        return self.status == FeedStatus.LOADING


@dataclass(frozen=True)
class TimeRangeSelected:
    """User picked a time range; starts a new request."""
    time_range: TimeRange


@dataclass(frozen=True)
class FeedLoaded:
    """Feed fetch for a request completed."""
    request_id: int
    earthquakes: tuple[Earthquake, ...]


@dataclass(frozen=True)
class FeedFailed:
    """Feed fetch for a request failed."""
    request_id: int
    error: str


Action = Union[TimeRangeSelected, FeedLoaded, FeedFailed]


def initial_state(time_range: TimeRange = TimeRange.DAY) -> DashboardState:
    """Create the state before any request was made."""
    return DashboardState(time_range=time_range)


def is_stale(state: DashboardState, request_id: int) -> bool:
    """Check whether a response belongs to a superseded request.

    Pure function.
    """
    return request_id != state.request_id or state.status != FeedStatus.LOADING


def format_fetch_error(error: str) -> str:
    """Build the user-visible message for a failed fetch."""
    if not error:
        return FETCH_FAILED_PREFIX
    return f"{FETCH_FAILED_PREFIX}: {error}"


def reduce(state: DashboardState, action: Action) -> DashboardState:
    """Apply an action to the dashboard state.

    Pure function.

    Args:
        state: Current state
        action: Action to apply

    Returns:
        New state (or the same state if the action is stale)

    Raises:
        TypeError: If the action type is unknown
    """
    if isinstance(action, TimeRangeSelected):
        return replace(
            state,
            time_range=action.time_range,
            request_id=state.request_id + 1,
            status=FeedStatus.LOADING,
            earthquakes=(),
            message=None,
        )

    if isinstance(action, FeedLoaded):
        if is_stale(state, action.request_id):
            return state

        earthquakes = tuple(action.earthquakes)
        if not earthquakes:
            return replace(
                state,
                status=FeedStatus.EMPTY,
                earthquakes=(),
                message=NO_EARTHQUAKES_MESSAGE,
            )

        return replace(
            state,
            status=FeedStatus.READY,
            earthquakes=earthquakes,
            message=None,
        )

    if isinstance(action, FeedFailed):
        if is_stale(state, action.request_id):
            return state

        return replace(
            state,
            status=FeedStatus.ERROR,
            earthquakes=(),
            message=format_fetch_error(action.error),
        )

    raise TypeError(f"Unknown action: {action!r}")
