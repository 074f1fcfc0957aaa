"""Tests for lane assignment."""

from datetime import timedelta

import pytest

from calgrid.domain.models import DateRange, Event, ResolvedSpan, Slot
from calgrid.exceptions import LaneCollisionError, LayoutInvariantError
from calgrid.layout import lane_assigner
from calgrid.layout.date_range import expand_date_range
from calgrid.layout.lane_assigner import LaneAssigner
from calgrid.layout.orderer import EventOrderer
from calgrid.layout.span_resolver import SpanResolver


def assign(events, start, end):
    """Run ordering, resolution and lane assignment."""
    ordered = EventOrderer().order(events)
    spans = SpanResolver().resolve_all(ordered)
    return LaneAssigner().assign(spans, DateRange(start, end))


def ids(bucket):
    """Lane contents of a bucket, None for placeholders."""
    return [slot.event_id for slot in bucket]


class TestLaneAssigner:
    """Tests for LaneAssigner."""

    def test_every_day_gets_a_bucket(self, monday, week):
        """Days without events still appear, with empty buckets."""
        buckets = assign([], monday, week[-1])
        assert list(buckets) == week
        assert all(len(bucket) == 0 for bucket in buckets.values())

    def test_multi_day_event_keeps_lane(self, monday, week):
        """A three-day event stays in lane 0 across its span."""
        buckets = assign([Event("e1", week[1], 3)], monday, week[-1])

        assert [buckets[d].lane_of("e1") for d in week[1:4]] == [0, 0, 0]
        assert buckets[monday].lane_of("e1") is None
        assert buckets[week[4]].lane_of("e1") is None

    def test_overlapping_events_take_next_lane(self, monday, week):
        """An event starting during another takes the next free lane."""
        events = [Event("long", monday, 4), Event("later", week[2], 3)]
        buckets = assign(events, monday, week[-1])

        assert ids(buckets[week[2]]) == ["long", "later"]
        assert ids(buckets[week[3]]) == ["long", "later"]
        # long has ended, later keeps lane 1 behind a placeholder
        assert ids(buckets[week[4]]) == [None, "later"]

    def test_new_event_fills_placeholder(self, monday, week):
        """A starting event takes a placeholder lane before growing the row."""
        events = [
            Event("x", monday, 2),        # Mon-Tue, lane 0
            Event("y", week[1], 3),       # Tue-Thu, lane 1
            Event("z", week[2], 1),       # Wed, fills lane 0
        ]
        buckets = assign(events, monday, week[-1])

        assert ids(buckets[week[1]]) == ["x", "y"]
        assert ids(buckets[week[2]]) == ["z", "y"]
        assert ids(buckets[week[3]]) == [None, "y"]

    def test_trailing_placeholders_dropped(self, monday, week):
        """Lanes past the last occupied one are not kept."""
        events = [Event("long", monday, 5), Event("short", monday, 2)]
        buckets = assign(events, monday, week[-1])

        assert ids(buckets[week[1]]) == ["long", "short"]
        assert ids(buckets[week[2]]) == ["long"]
        assert ids(buckets[week[5]]) == []

    def test_span_flags(self, monday, week):
        """Start, middle and end flags follow the day within the span."""
        buckets = assign([Event("e1", week[1], 3)], monday, week[-1])

        tue, wed, thu = (buckets[d][0] for d in week[1:4])
        assert (tue.is_span_start, tue.is_span_middle, tue.is_span_end) == (True, False, False)
        assert (wed.is_span_start, wed.is_span_middle, wed.is_span_end) == (False, True, False)
        assert (thu.is_span_start, thu.is_span_middle, thu.is_span_end) == (False, False, True)

    def test_event_started_before_range(self, monday, week):
        """An event begun before the range gets a lane on the first visible day."""
        saturday_before = monday - timedelta(days=2)
        events = [Event("early", saturday_before, 4), Event("mon", monday, 1)]
        buckets = assign(events, monday, week[-1])

        assert ids(buckets[monday]) == ["early", "mon"]
        first = buckets[monday][0]
        assert not first.is_span_start
        assert first.is_span_middle
        assert buckets[week[1]][0].is_span_end

    def test_events_outside_range_ignored(self, monday, week):
        """Events entirely before or after the range produce no slots."""
        events = [
            Event("before", monday - timedelta(days=10), 3),
            Event("after", week[-1] + timedelta(days=1), 3),
        ]
        buckets = assign(events, monday, week[-1])
        assert all(len(bucket) == 0 for bucket in buckets.values())

    def test_weekend_skipping_event_covers_weekend_days(self, monday, week):
        """A business-day span still occupies the weekend days it crosses."""
        friday = week[4]
        buckets = assign(
            [Event("e1", friday, 2, skip_weekends=True)],
            monday,
            monday + timedelta(days=7),
        )

        assert [buckets[d].lane_of("e1") for d in week[4:]] == [0, 0, 0]
        assert buckets[monday + timedelta(days=7)][0].is_span_end

    def test_buckets_are_immutable_tuples(self, monday, week):
        """Each day's slots are frozen once built."""
        buckets = assign([Event("e1", monday, 2)], monday, week[-1])
        assert isinstance(buckets[monday].slots, tuple)

    def test_empty_range(self, monday):
        """A reversed range yields no buckets."""
        buckets = assign([Event("e1", monday, 2)], monday, monday - timedelta(days=1))
        assert buckets == {}

    def test_days_come_from_range_expansion(self, monday, week, monkeypatch):
        """The assigner lays out exactly the days the range expands to."""
        calls = []

        def recording_expand(start, end):
            calls.append((start, end))
            return expand_date_range(start, end)

        monkeypatch.setattr(lane_assigner, "expand_date_range", recording_expand)
        buckets = assign([Event("e1", monday, 2)], monday, week[-1])

        assert calls == [(monday, week[-1])]
        assert list(buckets) == week


class TestLaneAssignerInvariants:
    """Contract violations raise instead of producing a bad layout."""

    def test_same_id_twice_on_a_day_raises(self, monday):
        """Spans sharing an id on one day are an engine bug."""
        span = ResolvedSpan(Event("dup", monday, 1), monday)
        with pytest.raises(LayoutInvariantError):
            LaneAssigner().assign([span, span], DateRange(monday, monday))

    def test_placing_into_occupied_lane_raises(self, monday):
        """Placing an event onto another event's lane is a collision."""
        slots = [Slot.occupied("a", True, True)]

        with pytest.raises(LaneCollisionError) as exc_info:
            LaneAssigner._place(slots, 0, Slot.occupied("b", True, True), monday)

        assert exc_info.value.lane == 0
        assert exc_info.value.existing_id == "a"
        assert exc_info.value.incoming_id == "b"

    def test_placing_pads_with_placeholders(self, monday):
        """Placing past the end pads the gap with empty slots."""
        slots = []
        LaneAssigner._place(slots, 2, Slot.occupied("a", True, True), monday)
        assert [slot.is_empty for slot in slots] == [True, True, False]
