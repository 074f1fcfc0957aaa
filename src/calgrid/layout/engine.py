"""Main layout engine interface.

This module provides the high-level LayoutEngine class that runs the full
pipeline: joining calendar settings, ordering, span resolution, and lane
assignment.
"""

import logging
from collections import Counter
from datetime import date
from typing import Iterable, Mapping, Optional

from calgrid.config import LayoutConfig
from calgrid.domain.models import Calendar, DateRange, DayBucketMap, Event
from calgrid.domain.policies import BusinessDayPolicy, DefaultBusinessDayPolicy
from calgrid.exceptions import LayoutInvariantError
from calgrid.layout.date_range import visible_range
from calgrid.layout.lane_assigner import LaneAssigner
from calgrid.layout.orderer import EventOrderer
from calgrid.layout.span_resolver import SpanResolver
from calgrid.validation.validator import LayoutValidator

logger = logging.getLogger(__name__)


class LayoutEngine:
    """High-level engine for laying out events on a day grid.

    Every call recomputes the layout from scratch and has no side effects,
    so the same input always yields an equal DayBucketMap.

    Example:
        >>> engine = LayoutEngine()
        >>> layout = engine.compute_layout(events, date(2024, 1, 15), date(2024, 1, 21))
        >>> layout[date(2024, 1, 16)].lane_of("e1")
        0
    """

    def __init__(
        self,
        config: Optional[LayoutConfig] = None,
        business_day_policy: Optional[BusinessDayPolicy] = None,
    ):
        """Initialize engine with configuration.

        Args:
            config: Layout configuration.
            business_day_policy: Policy for business-day spans. Built from
                the config when not given.
        """
        self.config = config or LayoutConfig()
        self.business_day_policy = business_day_policy or DefaultBusinessDayPolicy(
            count_weekend_start=self.config.count_weekend_start,
        )

        self.orderer = EventOrderer()
        self.resolver = SpanResolver(self.business_day_policy)
        self.assigner = LaneAssigner()
        self.validator = LayoutValidator(self.business_day_policy)

    def compute_layout(
        self,
        events: Iterable[Event],
        start: date,
        end: date,
        calendars: Optional[Mapping[str, Calendar]] = None,
    ) -> DayBucketMap:
        """Compute the layout of events over a range of days.

        Args:
            events: Events to lay out.
            start: First visible day.
            end: Last visible day. A range ending before it starts yields
                an empty map.
            calendars: Dict mapping calendar IDs to calendars, used to fill
                unset event settings.

        Returns:
            DayBucketMap covering every day of the range.
        """
        date_range = DateRange(start, end)
        joined = self._join(events, calendars)
        if date_range.is_empty:
            logger.debug("Empty range %s..%s, nothing to lay out", start, end)
            return DayBucketMap(date_range=date_range)

        ordered = self.orderer.order(joined)
        spans = self.resolver.resolve_all(ordered)
        buckets = self.assigner.assign(spans, date_range)
        layout = DayBucketMap(date_range=date_range, buckets=buckets)

        logger.debug(
            "Laid out %d events over %d days using %d lanes",
            len(ordered),
            date_range.num_days,
            layout.max_lanes,
        )

        if self.config.validate_output:
            result = self.validator.validate(layout, ordered, start, end)
            if not result.is_valid:
                raise LayoutInvariantError(
                    "Layout failed validation: "
                    + "; ".join(str(error) for error in result.errors)
                )

        return layout

    def compute_layout_with_stats(
        self,
        events: Iterable[Event],
        start: date,
        end: date,
        calendars: Optional[Mapping[str, Calendar]] = None,
    ) -> tuple[DayBucketMap, dict]:
        """Compute a layout and return statistics.

        Returns:
            Tuple of (layout, stats_dict).
        """
        events = list(events)
        layout = self.compute_layout(events, start, end, calendars)
        stats = self._calculate_stats(layout, events)
        return layout, stats

    def visible_window(
        self,
        events: Iterable[Event],
        calendars: Optional[Mapping[str, Calendar]] = None,
        today: Optional[date] = None,
    ) -> DateRange:
        """Padded range showing every event, using the configured padding."""
        return visible_range(
            self._join(events, calendars),
            padding_days=self.config.padding_days,
            today=today,
            resolver=self.resolver,
        )

    @staticmethod
    def _join(
        events: Iterable[Event],
        calendars: Optional[Mapping[str, Calendar]],
    ) -> list[Event]:
        if not calendars:
            return list(events)
        return [event.with_calendar(calendars.get(event.calendar_id)) for event in events]

    def _calculate_stats(self, layout: DayBucketMap, events: list[Event]) -> dict:
        """Calculate layout statistics."""
        unique_ids = {event.id for event in events}
        visible_ids = set()
        empty_slots = 0
        per_day = Counter()

        for day, bucket in layout.items():
            ids = bucket.event_ids()
            visible_ids.update(ids)
            per_day[day] = len(ids)
            empty_slots += bucket.empty_count

        busiest = per_day.most_common(1)

        return {
            "total_events": len(unique_ids),
            "visible_events": len(visible_ids),
            "hidden_events": len(unique_ids - visible_ids),
            "total_days": len(layout),
            "max_lanes": layout.max_lanes,
            "empty_slots": empty_slots,
            "busiest_day": busiest[0][0] if busiest and busiest[0][1] else None,
            "events_per_day": dict(per_day),
        }
