"""Lane assignment for multi-day events.

This module walks the visible days in order and builds each day's slot
list so that an event keeps the lane it was given on its first visible day
for its whole span. Empty placeholders keep later lanes aligned with lanes
claimed on earlier days.
"""

import logging
from datetime import date
from typing import Sequence

from calgrid.domain.models import DateRange, DayBucket, ResolvedSpan, Slot
from calgrid.exceptions import LaneCollisionError, LayoutInvariantError
from calgrid.layout.date_range import expand_date_range

logger = logging.getLogger(__name__)

_EMPTY = Slot.empty()


class LaneAssigner:
    """Assigns every visible event a stable lane across its span.

    Spans must be supplied in the global priority order. On each day, events
    already placed on an earlier day go back to their recorded lane; an
    event seen for the first time takes the lowest lane that is past the
    end of the day's list or holds a placeholder.

    Example:
        >>> assigner = LaneAssigner()
        >>> buckets = assigner.assign(ordered_spans, DateRange(monday, sunday))
        >>> buckets[tuesday].lane_of("e1")
        0
    """

    def assign(
        self,
        spans: Sequence[ResolvedSpan],
        date_range: DateRange,
    ) -> dict[date, DayBucket]:
        """Build the slot list for every day of the range.

        Args:
            spans: Resolved spans in priority order.
            date_range: Days to lay out.

        Returns:
            Dict mapping each day of the range, in order, to its bucket.
        """
        visible = [span for span in spans if span.overlaps(date_range)]
        if len(visible) < len(spans):
            logger.debug(
                "%d of %d events fall outside %s..%s",
                len(spans) - len(visible),
                len(spans),
                date_range.start,
                date_range.end,
            )

        first_lane_of: dict[str, int] = {}
        buckets: dict[date, DayBucket] = {}

        for day in expand_date_range(date_range.start, date_range.end):
            slots: list[Slot] = []
            placed: set[str] = set()

            for span in visible:
                if not span.contains(day):
                    continue
                event_id = span.event.id
                if event_id in placed:
                    raise LayoutInvariantError(
                        f"Event {event_id!r} placed twice on {day}"
                    )

                lane = first_lane_of.get(event_id)
                if lane is None:
                    # First visible day: today is the start, or the event
                    # began before the range
                    lane = self._first_free_lane(slots)
                    first_lane_of[event_id] = lane

                slot = Slot.occupied(
                    event_id,
                    is_span_start=day == span.start_date,
                    is_span_end=day == span.end_date,
                )
                self._place(slots, lane, slot, day)
                placed.add(event_id)

            buckets[day] = DayBucket(day=day, slots=self._trim(slots))

        return buckets

    @staticmethod
    def _first_free_lane(slots: list[Slot]) -> int:
        """Lowest lane holding a placeholder, or the end of the list."""
        for lane, slot in enumerate(slots):
            if slot.is_empty:
                return lane
        return len(slots)

    @staticmethod
    def _place(slots: list[Slot], lane: int, slot: Slot, day: date) -> None:
        """Put a slot at a lane, padding with placeholders as needed."""
        while len(slots) <= lane:
            slots.append(_EMPTY)
        existing = slots[lane]
        if not existing.is_empty:
            raise LaneCollisionError(day, lane, existing.event_id, slot.event_id)
        slots[lane] = slot

    @staticmethod
    def _trim(slots: list[Slot]) -> tuple[Slot, ...]:
        """Freeze the slots, dropping trailing placeholders."""
        end = len(slots)
        while end > 0 and slots[end - 1].is_empty:
            end -= 1
        return tuple(slots[:end])
