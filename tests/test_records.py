"""Tests for store record conversion."""

from datetime import date, datetime

import pytest

from calgrid.domain.models import DEFAULT_CALENDAR_COLOR, Calendar, Event
from calgrid.exceptions import CalgridError, RecordError
from calgrid.store.records import (
    calendar_from_record,
    calendar_to_record,
    event_from_record,
    event_to_record,
)


class TestCalendarRecords:
    """Calendar record conversion."""

    def test_full_record(self):
        """All settings are read from the record."""
        calendar = calendar_from_record({
            "id": "work",
            "name": "Work",
            "description": "Office",
            "color": "#34A853",
            "skip_weekends": True,
            "created_at": "2024-01-01T00:00:00Z",
        })
        assert calendar == Calendar("work", "Work", "Office", "#34A853", True)

    def test_defaults(self):
        """Missing color and weekend rule fall back to defaults."""
        calendar = calendar_from_record({"id": 7, "name": "Home", "color": None})
        assert calendar.id == "7"
        assert calendar.color == DEFAULT_CALENDAR_COLOR
        assert calendar.skip_weekends is False

    def test_missing_id(self):
        """A calendar without an id is rejected."""
        with pytest.raises(RecordError, match="missing 'id'"):
            calendar_from_record({"name": "Nameless"})

    def test_to_record(self):
        """Outgoing records carry the editable settings only."""
        record = calendar_to_record(Calendar("work", "Work", color="#EA4335", skip_weekends=True))
        assert record == {
            "name": "Work",
            "description": "",
            "color": "#EA4335",
            "skip_weekends": True,
        }


class TestEventRecords:
    """Event record conversion."""

    def test_basic_record(self):
        """Dates and lengths are parsed from their wire forms."""
        event = event_from_record({
            "id": 12,
            "calendar_id": 3,
            "title": "Build",
            "start_date": "2024-01-19",
            "length": "4",
        })
        assert event.id == "12"
        assert event.calendar_id == "3"
        assert event.start_date == date(2024, 1, 19)
        assert event.length_days == 4
        assert event.skip_weekends is None

    def test_timestamp_start_date(self):
        """Timestamps are cut down to their day."""
        event = event_from_record({"id": "1", "start_date": "2024-01-19T08:30:00Z"})
        assert event.start_date == date(2024, 1, 19)

    def test_date_objects_accepted(self):
        """Already-parsed dates and datetimes are accepted."""
        assert event_from_record(
            {"id": "1", "start_date": datetime(2024, 1, 19, 9, 0)}
        ).start_date == date(2024, 1, 19)
        assert event_from_record(
            {"id": "2", "start_date": date(2024, 1, 20)}
        ).start_date == date(2024, 1, 20)

    def test_missing_length_is_unset(self):
        """Records without a length leave it unset."""
        assert event_from_record({"id": "1", "start_date": "2024-01-19"}).length_days is None

    def test_event_overrides(self):
        """Per-event weekend rule and color are read when present."""
        event = event_from_record({
            "id": "1",
            "start_date": "2024-01-19",
            "skip_weekends": False,
            "color": "#8E24AA",
        })
        assert event.skip_weekends is False
        assert event.color == "#8E24AA"

    def test_joins_calendar(self):
        """The owning calendar's settings fill unset event settings."""
        calendar = Calendar("work", color="#4285F4", skip_weekends=True)
        event = event_from_record(
            {"id": "1", "calendar_id": "work", "start_date": "2024-01-19"}, calendar
        )
        assert event.skip_weekends is True
        assert event.color == "#4285F4"

    @pytest.mark.parametrize(
        "record, message",
        [
            ({"start_date": "2024-01-19"}, "missing 'id'"),
            ({"id": "1"}, "missing 'start_date'"),
            ({"id": "1", "start_date": ""}, "missing 'start_date'"),
            ({"id": "1", "start_date": "19/01/2024"}, "Invalid start_date"),
            ({"id": "1", "start_date": "2024-01-19", "length": "long"}, "Invalid length"),
        ],
    )
    def test_malformed_records(self, record, message):
        """Malformed records raise a recoverable error carrying the record."""
        with pytest.raises(RecordError, match=message) as exc_info:
            event_from_record(record)
        assert exc_info.value.record is record
        assert isinstance(exc_info.value, CalgridError)

    def test_to_record(self):
        """Outgoing records use ISO dates and the effective length."""
        event = Event("1", date(2024, 1, 19), None, calendar_id="work", title="Build")
        assert event_to_record(event) == {
            "calendar_id": "work",
            "title": "Build",
            "description": "Build",
            "start_date": "2024-01-19",
            "length": 1,
        }


class TestRecordShape:
    """Records that are not JSON objects."""

    @pytest.mark.parametrize("record", [1, "work", ["id", "1"], None])
    def test_calendar_record_must_be_object(self, record):
        """A calendar record of the wrong type raises a RecordError."""
        with pytest.raises(RecordError, match="Calendar record must be an object"):
            calendar_from_record(record)

    @pytest.mark.parametrize("record", [1, "e1", ["id", "1"], None])
    def test_event_record_must_be_object(self, record):
        """An event record of the wrong type raises a RecordError."""
        with pytest.raises(RecordError, match="Event record must be an object"):
            event_from_record(record)
