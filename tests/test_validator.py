"""Tests for the EventValidator."""

import pytest

from cutline_analytics.domain.enums import SizeCategory
from cutline_analytics.domain.event import DetectionEvent
from cutline_analytics.ingest.validator import EventValidator


def _record(**overrides) -> dict:
    """Return a valid raw feed record, with optional overrides."""
    base = {
        "id": "EVT-0042",
        "time": "00:12:30",
        "size": "Large",
        "confidence": 0.93,
        "source": "Cutting Table 2",
    }
    base.update(overrides)
    return base


@pytest.fixture
def validator() -> EventValidator:
    return EventValidator(default_source="Cutting Table 1", default_confidence=0.9)


class TestNormalization:
    def test_valid_record_parses(self, validator: EventValidator) -> None:
        [event] = validator.validate([_record()])
        assert event.id == "EVT-0042"
        assert event.time_offset == 750
        assert event.size == SizeCategory.LARGE
        assert event.confidence == 0.93
        assert event.source == "Cutting Table 2"
        assert event.absolute_timestamp is None

    def test_missing_time_defaults_to_zero(self, validator: EventValidator) -> None:
        raw = _record()
        del raw["time"]
        [event] = validator.validate([raw])
        assert event.time_offset == 0

    def test_malformed_time_defaults_to_zero(self, validator: EventValidator) -> None:
        [event] = validator.validate([_record(time="12:30")])
        assert event.time_offset == 0

    def test_missing_confidence_defaults(self, validator: EventValidator) -> None:
        raw = _record()
        del raw["confidence"]
        [event] = validator.validate([raw])
        assert event.confidence == 0.9

    def test_non_numeric_confidence_defaults(self, validator: EventValidator) -> None:
        [event] = validator.validate([_record(confidence="high")])
        assert event.confidence == 0.9

    def test_numeric_string_confidence_accepted(self, validator: EventValidator) -> None:
        [event] = validator.validate([_record(confidence="0.81")])
        assert event.confidence == pytest.approx(0.81)

    def test_missing_source_defaults(self, validator: EventValidator) -> None:
        raw = _record()
        del raw["source"]
        [event] = validator.validate([raw])
        assert event.source == "Cutting Table 1"

    def test_missing_id_uses_position(self, validator: EventValidator) -> None:
        first = _record()
        second = _record()
        del second["id"]
        events = validator.validate([first, second])
        assert events[1].id == "EVT-0002"

    def test_position_counts_dropped_records(self, validator: EventValidator) -> None:
        bad = _record(size="Huge")
        good = _record()
        del good["id"]
        [event] = validator.validate([bad, good])
        assert event.id == "EVT-0002"

    @pytest.mark.parametrize("alias", ["timestamp", "datetime", "dateTime"])
    def test_timestamp_aliases(self, validator: EventValidator, alias: str) -> None:
        [event] = validator.validate([_record(**{alias: "2024-01-01T10:00:00Z"})])
        assert event.absolute_timestamp == "2024-01-01T10:00:00Z"

    def test_input_not_mutated(self, validator: EventValidator) -> None:
        raw = _record()
        snapshot = dict(raw)
        validator.validate([raw])
        assert raw == snapshot

    def test_event_is_immutable(self, validator: EventValidator) -> None:
        [event] = validator.validate([_record()])
        with pytest.raises(Exception):
            event.size = SizeCategory.XL


class TestRejection:
    def test_unknown_size_dropped(self, validator: EventValidator) -> None:
        events = validator.validate([_record(size="Huge"), _record()])
        assert len(events) == 1
        assert all(e.size != "Huge" for e in events)

    def test_size_is_case_sensitive(self, validator: EventValidator) -> None:
        assert validator.validate([_record(size="large")]) == []

    def test_missing_size_dropped(self, validator: EventValidator) -> None:
        raw = _record()
        del raw["size"]
        assert validator.validate([raw]) == []

    def test_non_object_record_dropped(self, validator: EventValidator) -> None:
        assert validator.validate(["Large", 7, None]) == []

    def test_stats_track_accept_and_reject(self, validator: EventValidator) -> None:
        validator.validate([_record(), _record(size="Huge"), _record(size="XL")])
        assert validator.stats.to_dict() == {"accepted_count": 2, "rejected_count": 1}


class TestDetectionEvent:
    def test_time_renders_hms(self) -> None:
        event = DetectionEvent(
            id="EVT-0001", time_offset=3725, size=SizeCategory.SMALL,
            confidence=0.8, source="x",
        )
        assert event.time == "01:02:05"

    def test_confidence_out_of_range_rejected(self) -> None:
        with pytest.raises(Exception):
            DetectionEvent(id="a", time_offset=0, size=SizeCategory.SMALL, confidence=1.2, source="x")

    def test_negative_offset_rejected(self) -> None:
        with pytest.raises(Exception):
            DetectionEvent(id="a", time_offset=-1, size=SizeCategory.SMALL, confidence=0.5, source="x")
