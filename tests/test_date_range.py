"""Tests for date range helpers."""

from datetime import date, timedelta

from calgrid.domain.models import Event
from calgrid.domain.policies import DefaultBusinessDayPolicy
from calgrid.layout.date_range import expand_date_range, visible_range
from calgrid.layout.span_resolver import SpanResolver


class TestExpandDateRange:
    """Tests for expand_date_range."""

    def test_inclusive(self, monday, week):
        """Both ends are included."""
        assert expand_date_range(monday, week[-1]) == week

    def test_single_day(self, monday):
        """A range of one day lists that day."""
        assert expand_date_range(monday, monday) == [monday]

    def test_reversed(self, monday):
        """An end before the start gives no days."""
        assert expand_date_range(monday, monday - timedelta(days=1)) == []

    def test_crosses_month_and_leap_day(self):
        """Days roll over month ends, including leap days."""
        days = expand_date_range(date(2024, 2, 28), date(2024, 3, 1))
        assert days == [date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 1)]


class TestVisibleRange:
    """Tests for visible_range."""

    def test_padding_around_events(self, monday):
        """The window spans all events plus padding on both sides."""
        events = [Event("a", monday, 3), Event("b", monday + timedelta(days=10), 1)]

        window = visible_range(events, padding_days=2)

        assert window.start == monday - timedelta(days=2)
        assert window.end == monday + timedelta(days=12)

    def test_business_day_end_used(self, monday):
        """The window reaches the business-day end of an event."""
        friday = monday + timedelta(days=4)
        window = visible_range([Event("a", friday, 2, skip_weekends=True)], padding_days=0)
        assert window.end == monday + timedelta(days=7)

    def test_custom_resolver(self):
        """A resolver with another weekend rule changes the end."""
        saturday = date(2024, 1, 20)
        resolver = SpanResolver(DefaultBusinessDayPolicy(count_weekend_start=True))

        window = visible_range(
            [Event("a", saturday, 1, skip_weekends=True)], padding_days=0, resolver=resolver
        )

        assert window.end == saturday

    def test_no_events_centers_on_today(self, monday):
        """Without events the window surrounds the reference day."""
        window = visible_range([], padding_days=7, today=monday)
        assert window.num_days == 15
        assert window.contains(monday)


class TestCalendarLimits:
    """Ranges and windows at the ends of the supported dates."""

    def test_range_ending_on_date_max(self):
        """Expanding up to date.max stops on the last day."""
        days = expand_date_range(date.max - timedelta(days=2), date.max)
        assert days[-1] == date.max
        assert len(days) == 3

    def test_range_starting_on_date_min(self):
        """Expanding from date.min includes the first day."""
        assert expand_date_range(date.min, date.min + timedelta(days=1))[0] == date.min

    def test_padding_clamped(self):
        """Padding past either end of the calendar is clamped."""
        events = [Event("a", date.min, 1), Event("b", date.max, 1)]
        window = visible_range(events, padding_days=7)
        assert (window.start, window.end) == (date.min, date.max)

    def test_padding_clamped_without_events(self):
        """The window around today is clamped too."""
        window = visible_range([], padding_days=7, today=date.max)
        assert window.end == date.max
        assert window.start == date.max - timedelta(days=7)
