"""Tests for the dashboard state reducer - Pure functions.

State transitions are tested in isolation, without any fetching or
rendering.
"""

import pytest

from src.core.earthquake import Earthquake
from src.core.feed import TimeRange
from src.core.state import (
    NO_EARTHQUAKES_MESSAGE,
    DashboardState,
    FeedFailed,
    FeedLoaded,
    FeedStatus,
    TimeRangeSelected,
    initial_state,
    is_stale,
    reduce,
)


@pytest.fixture
def earthquakes():
    """Two sample earthquakes."""
    return (
        Earthquake(id="a", magnitude=2.0, place="A", time=None, latitude=1.0, longitude=2.0),
        Earthquake(id="b", magnitude=5.5, place="B", time=None, latitude=3.0, longitude=4.0),
    )


@pytest.fixture
def loading_state():
    """State after the first selection of the day feed."""
    return reduce(initial_state(), TimeRangeSelected(TimeRange.DAY))


class TestInitialState:
    """Tests for initial_state()."""

    def test_defaults(self):
        state = initial_state()

        assert state.time_range == TimeRange.DAY
        assert state.request_id == 0
        assert state.status == FeedStatus.IDLE
        assert state.earthquakes == ()
        assert state.message is None

    def test_custom_time_range(self):
        assert initial_state(TimeRange.WEEK).time_range == TimeRange.WEEK


class TestTimeRangeSelected:
    """Tests for selecting a time range."""

    def test_starts_loading(self, loading_state):
        assert loading_state.status == FeedStatus.LOADING
        assert loading_state.is_loading
        assert loading_state.request_id == 1

    def test_request_id_increases(self, loading_state):
        state = reduce(loading_state, TimeRangeSelected(TimeRange.WEEK))
        state = reduce(state, TimeRangeSelected(TimeRange.MONTH))

        assert state.request_id == 3
        assert state.time_range == TimeRange.MONTH

    def test_clears_previous_events_and_message(self, loading_state, earthquakes):
        loaded = reduce(loading_state, FeedLoaded(1, earthquakes))
        failed = reduce(reduce(loaded, TimeRangeSelected(TimeRange.DAY)), FeedFailed(2, "boom"))

        state = reduce(failed, TimeRangeSelected(TimeRange.WEEK))

        assert state.earthquakes == ()
        assert state.message is None

    def test_does_not_mutate_input(self):
        state = initial_state()
        reduce(state, TimeRangeSelected(TimeRange.WEEK))

        assert state.request_id == 0
        assert state.status == FeedStatus.IDLE


class TestFeedLoaded:
    """Tests for applying a completed fetch."""

    def test_sets_ready_with_events(self, loading_state, earthquakes):
        state = reduce(loading_state, FeedLoaded(1, earthquakes))

        assert state.status == FeedStatus.READY
        assert state.earthquakes == earthquakes
        assert state.message is None

    def test_empty_result_is_distinct_from_error(self, loading_state):
        state = reduce(loading_state, FeedLoaded(1, ()))

        assert state.status == FeedStatus.EMPTY
        assert state.message == NO_EARTHQUAKES_MESSAGE
        assert not state.has_error

    def test_stores_events_as_tuple(self, loading_state, earthquakes):
        state = reduce(loading_state, FeedLoaded(1, list(earthquakes)))
        assert isinstance(state.earthquakes, tuple)

    def test_stale_response_is_ignored(self, loading_state, earthquakes):
        newer = reduce(loading_state, TimeRangeSelected(TimeRange.WEEK))

        state = reduce(newer, FeedLoaded(1, earthquakes))

        assert state is newer
        assert state.status == FeedStatus.LOADING

    def test_duplicate_response_is_ignored(self, loading_state, earthquakes):
        loaded = reduce(loading_state, FeedLoaded(1, earthquakes))

        state = reduce(loaded, FeedLoaded(1, ()))

        assert state is loaded


class TestFeedFailed:
    """Tests for applying a failed fetch."""

    def test_sets_error_and_clears_events(self, loading_state):
        state = reduce(loading_state, FeedFailed(1, "503 Server Error"))

        assert state.status == FeedStatus.ERROR
        assert state.has_error
        assert state.earthquakes == ()
        assert state.message == "Failed to fetch earthquake data: 503 Server Error"

    def test_blank_error_message(self, loading_state):
        state = reduce(loading_state, FeedFailed(1, ""))
        assert state.message == "Failed to fetch earthquake data"

    def test_stale_failure_does_not_overwrite_newer_result(self, loading_state, earthquakes):
        newer = reduce(loading_state, TimeRangeSelected(TimeRange.MONTH))
        loaded = reduce(newer, FeedLoaded(2, earthquakes))

        state = reduce(loaded, FeedFailed(1, "timeout"))

        assert state is loaded
        assert state.status == FeedStatus.READY


class TestIsStale:
    """Tests for is_stale()."""

    def test_current_loading_request_is_not_stale(self, loading_state):
        assert not is_stale(loading_state, 1)

    def test_older_request_is_stale(self, loading_state):
        assert is_stale(loading_state, 0)

    def test_completed_request_is_stale(self, loading_state):
        done = reduce(loading_state, FeedLoaded(1, ()))
        assert is_stale(done, 1)


class TestUnknownAction:
    def test_raises_type_error(self):
        with pytest.raises(TypeError):
            reduce(DashboardState(), "refresh")
