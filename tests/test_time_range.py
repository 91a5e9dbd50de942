"""Tests for the absolute and relative time-range filters."""

from cutline_analytics.analytics.time_range import filter_time_range
from cutline_analytics.domain.enums import SizeCategory, TimeRangeKey
from cutline_analytics.domain.event import DetectionEvent
from cutline_analytics.domain.params import FilterParams


def _event(offset: int, ts: str | None = None, n: int = 0) -> DetectionEvent:
    return DetectionEvent(
        id=f"EVT-{n:04d}",
        time_offset=offset,
        absolute_timestamp=ts,
        size=SizeCategory.MEDIUM,
        confidence=0.9,
        source="Cutting Table 1",
    )


_ABSOLUTE_SET = [
    _event(0, "2024-01-01T10:00:00Z", 1),
    _event(60, "2024-01-01T10:05:00Z", 2),
    _event(120, None, 3),
]


class TestAbsoluteMode:
    def test_bounds_select_inner_event(self) -> None:
        params = FilterParams(date_from="2024-01-01T10:01:00Z", date_to="2024-01-01T10:10:00Z")
        kept = filter_time_range(_ABSOLUTE_SET, params)
        assert [e.id for e in kept] == ["EVT-0002"]

    def test_bounds_are_inclusive(self) -> None:
        params = FilterParams(date_from="2024-01-01T10:00:00Z", date_to="2024-01-01T10:05:00Z")
        kept = filter_time_range(_ABSOLUTE_SET, params)
        assert [e.id for e in kept] == ["EVT-0001", "EVT-0002"]

    def test_missing_upper_bound_is_open(self) -> None:
        kept = filter_time_range(_ABSOLUTE_SET, FilterParams(date_from="2024-01-01T10:01:00Z"))
        assert [e.id for e in kept] == ["EVT-0002"]

    def test_unparseable_bound_is_open(self) -> None:
        params = FilterParams(date_from="not a date", date_to="2024-01-01T10:02:00Z")
        kept = filter_time_range(_ABSOLUTE_SET, params)
        assert [e.id for e in kept] == ["EVT-0001"]

    def test_events_without_timestamp_always_excluded(self) -> None:
        params = FilterParams(date_from="garbage", date_to="also garbage")
        kept = filter_time_range(_ABSOLUTE_SET, params)
        assert [e.id for e in kept] == ["EVT-0001", "EVT-0002"]

    def test_event_with_unparseable_timestamp_excluded(self) -> None:
        events = [_event(0, "yesterday-ish", 1), _event(0, "2024-01-01T10:03:00Z", 2)]
        kept = filter_time_range(events, FilterParams(date_to="2024-01-01T11:00:00Z"))
        assert [e.id for e in kept] == ["EVT-0002"]

    def test_naive_bound_treated_as_utc(self) -> None:
        params = FilterParams(date_from="2024-01-01T10:01:00", date_to="2024-01-01T10:10:00")
        kept = filter_time_range(_ABSOLUTE_SET, params)
        assert [e.id for e in kept] == ["EVT-0002"]

    def test_absolute_overrides_relative(self) -> None:
        params = FilterParams(time_range="5m", date_from="2024-01-01T09:00:00Z")
        kept = filter_time_range(_ABSOLUTE_SET, params)
        assert [e.id for e in kept] == ["EVT-0001", "EVT-0002"]

    def test_empty_bounds_fall_back_to_relative(self) -> None:
        params = FilterParams(date_from="", date_to="")
        assert not params.absolute_mode
        assert len(filter_time_range(_ABSOLUTE_SET, params)) == 3

    def test_whitespace_bound_selects_absolute_mode(self) -> None:
        params = FilterParams(date_from=" ")
        assert params.absolute_mode
        assert [e.id for e in filter_time_range(_ABSOLUTE_SET, params)] == ["EVT-0001", "EVT-0002"]


class TestRelativeMode:
    def test_all_is_identity(self) -> None:
        events = [_event(o, n=i) for i, o in enumerate([0, 500, 3599])]
        assert filter_time_range(events, FilterParams(time_range=TimeRangeKey.ALL)) == events

    def test_trailing_window_anchored_on_max_offset(self) -> None:
        events = [_event(o, n=i) for i, o in enumerate([0, 1000, 1499, 1500, 1800])]
        kept = filter_time_range(events, FilterParams(time_range="5m"))
        assert [e.time_offset for e in kept] == [1500, 1800]

    def test_window_lower_bound_clamped_at_zero(self) -> None:
        events = [_event(o, n=i) for i, o in enumerate([0, 120, 240])]
        kept = filter_time_range(events, FilterParams(time_range="10m"))
        assert len(kept) == 3

    def test_sparse_session_narrows_window(self) -> None:
        # Max offset is 20 minutes in, so "last 60 min" keeps everything up to it
        events = [_event(o, n=i) for i, o in enumerate([0, 600, 1200])]
        kept = filter_time_range(events, FilterParams(time_range="60m"))
        assert len(kept) == 3

    def test_empty_input(self) -> None:
        assert filter_time_range([], FilterParams(time_range="30m")) == []

    def test_unknown_range_is_no_filter(self) -> None:
        events = [_event(o, n=i) for i, o in enumerate([0, 3000])]
        params = FilterParams(time_range="15m")
        assert params.time_range == TimeRangeKey.ALL
        assert filter_time_range(events, params) == events
