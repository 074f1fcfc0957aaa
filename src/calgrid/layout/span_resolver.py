"""Span resolution for events.

This module computes the effective end date of each event, either as a
plain run of calendar days or by counting business days only.
"""

from datetime import date, timedelta
from typing import Iterable, Mapping, Optional

from calgrid.domain.models import Calendar, Event, ResolvedSpan
from calgrid.domain.policies import BusinessDayPolicy, DefaultBusinessDayPolicy


class SpanResolver:
    """Resolves events to the inclusive span of days they occupy.

    The weekend rule comes from the event when it sets one, then from its
    calendar, and is off otherwise. Lengths below one day are clamped.

    Example:
        >>> resolver = SpanResolver()
        >>> span = resolver.resolve(Event("e1", date(2024, 1, 12), 2, skip_weekends=True))
        >>> span.end_date
        datetime.date(2024, 1, 15)
    """

    def __init__(self, business_day_policy: Optional[BusinessDayPolicy] = None):
        self.business_day_policy = business_day_policy or DefaultBusinessDayPolicy()

    def resolve(self, event: Event, calendar: Optional[Calendar] = None) -> ResolvedSpan:
        """Resolve one event.

        Args:
            event: The event to resolve.
            calendar: Owning calendar, used when the event leaves the
                weekend rule unset.

        Returns:
            ResolvedSpan with the event's end date.
        """
        length = event.effective_length
        if self._skips_weekends(event, calendar):
            end_date = self.business_days_end_date(event.start_date, length)
        else:
            end_date = self._add_days(event.start_date, length - 1)
        return ResolvedSpan(event=event, end_date=end_date)

    def resolve_all(
        self,
        events: Iterable[Event],
        calendars: Optional[Mapping[str, Calendar]] = None,
    ) -> list[ResolvedSpan]:
        """Resolve events, preserving their order."""
        calendars = calendars or {}
        return [
            self.resolve(event, calendars.get(event.calendar_id))
            for event in events
        ]

    def business_days_end_date(self, start: date, business_days: int) -> date:
        """Walk forward from start until enough business days are consumed.

        Whole weeks are skipped in one step when the policy has a fixed
        number of business days per week, so long spans stay cheap. Ends
        past the last representable day are clamped to ``date.max``.

        Args:
            start: First day of the event.
            business_days: Number of business days the event lasts.

        Returns:
            The last business day counted.
        """
        policy = self.business_day_policy
        remaining = max(1, business_days)
        if policy.counts_start_day(start):
            remaining -= 1

        current = start
        per_week = policy.business_days_per_week()
        if per_week and remaining > per_week:
            # Leave at least one business day for the walk so it ends on one
            weeks = (remaining - 1) // per_week
            current = self._add_days(current, 7 * weeks)
            remaining -= weeks * per_week

        while remaining > 0:
            if current == date.max:
                return current
            current += timedelta(days=1)
            if policy.is_business_day(current):
                remaining -= 1
        return current

    @staticmethod
    def _add_days(day: date, days: int) -> date:
        try:
            return day + timedelta(days=days)
        except OverflowError:
            return date.max

    @staticmethod
    def _skips_weekends(event: Event, calendar: Optional[Calendar]) -> bool:
        if event.skip_weekends is not None:
            return event.skip_weekends
        if calendar is not None:
            return calendar.skip_weekends
        return False
