"""Deterministic processing order for events."""

import logging
from typing import Iterable

from calgrid.domain.models import Event

logger = logging.getLogger(__name__)


class EventOrderer:
    """Sorts events into the priority order used for lane assignment.

    Events are ordered by start date, then by length with longer events
    first so that large events anchor the lowest lanes. Remaining ties keep
    input order. When the same id appears more than once, the last
    occurrence replaces the earlier ones.
    """

    def order(self, events: Iterable[Event]) -> list[Event]:
        """Order events for lane assignment.

        Args:
            events: Events in any order.

        Returns:
            De-duplicated events in priority order.
        """
        latest: dict[str, tuple[int, Event]] = {}
        for position, event in enumerate(events):
            if event.id in latest:
                logger.warning(
                    "Duplicate event id %r in input, keeping the last occurrence",
                    event.id,
                )
            latest[event.id] = (position, event)

        ranked = sorted(
            latest.values(),
            key=lambda item: (
                item[1].start_date,
                -item[1].effective_length,
                item[0],
            ),
        )
        return [event for _, event in ranked]
