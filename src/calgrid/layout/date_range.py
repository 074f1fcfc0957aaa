"""Date range expansion and visible window calculation."""

from datetime import date, timedelta
from typing import Iterable, Optional

from calgrid.domain.models import DateRange, Event
from calgrid.layout.span_resolver import SpanResolver


def expand_date_range(start: date, end: date) -> list[date]:
    """List every day from start to end, inclusive.

    Args:
        start: First day of the range.
        end: Last day of the range.

    Returns:
        Ordered list of days. Empty if end precedes start.
    """
    return list(DateRange(start, end))


def shift_clamped(day: date, days: int) -> date:
    """Move a day by a number of days, stopping at date.min or date.max."""
    try:
        return day + timedelta(days=days)
    except OverflowError:
        return date.max if days > 0 else date.min


def visible_range(
    events: Iterable[Event],
    padding_days: int = 7,
    today: Optional[date] = None,
    resolver: Optional[SpanResolver] = None,
) -> DateRange:
    """Derive a padded window that shows every event in full.

    The window runs from the earliest start to the latest resolved end,
    widened by ``padding_days`` on both sides and clamped to the supported
    date range. With no events it is centered on today.

    Args:
        events: Events to show, already joined with calendar settings.
        padding_days: Days added before and after the events.
        today: Reference day used when there are no events.
        resolver: Span resolver for business-day aware end dates.
    """
    resolver = resolver or SpanResolver()

    spans = [resolver.resolve(event) for event in events]
    if not spans:
        center = today or date.today()
        return DateRange(shift_clamped(center, -padding_days), shift_clamped(center, padding_days))

    earliest = min(span.start_date for span in spans)
    latest = max(span.end_date for span in spans)
    return DateRange(shift_clamped(earliest, -padding_days), shift_clamped(latest, padding_days))
