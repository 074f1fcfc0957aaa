"""Caller-owned store of calendars and events.

The store keeps the current event set between layout runs and tells its
subscribers after every mutation, so a view can recompute its layout.
It is owned by whoever creates it. There is no process-wide instance.
"""

import logging
from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import Callable, Iterable, Optional

from calgrid.domain.models import Calendar, Event
from calgrid.exceptions import UnknownEventError
from calgrid.store.records import calendar_from_record, event_from_record

logger = logging.getLogger(__name__)


class ChangeKind(Enum):
    """Kinds of store mutation reported to subscribers."""

    CALENDAR_ADDED = "calendar_added"
    CALENDAR_UPDATED = "calendar_updated"
    EVENT_ADDED = "event_added"
    EVENT_UPDATED = "event_updated"
    EVENT_MOVED = "event_moved"
    EVENT_DELETED = "event_deleted"
    RELOADED = "reloaded"


@dataclass(frozen=True)
class StoreChange:
    """Notification sent to subscribers after a mutation.

    Attributes:
        kind: What changed.
        item_id: ID of the affected event or calendar, if any.
    """

    kind: ChangeKind
    item_id: Optional[str] = None


Subscriber = Callable[[StoreChange], None]


class Subscription:
    """Handle returned by ``EventStore.subscribe``."""

    def __init__(self, store: "EventStore", callback: Subscriber):
        self._store = store
        self.callback = callback
        self.active = True

    def cancel(self) -> None:
        """Stop receiving notifications. Safe to call more than once."""
        if self.active:
            self._store._unsubscribe(self)
            self.active = False


class EventStore:
    """In-memory set of calendars and events with change notification.

    Example:
        >>> store = EventStore()
        >>> store.add_calendar(Calendar("work", skip_weekends=True))
        >>> subscription = store.subscribe(lambda change: print(change.kind))
        >>> store.add_event(Event("e1", date(2024, 1, 15), 3, calendar_id="work"))
        ChangeKind.EVENT_ADDED
    """

    def __init__(self):
        self._calendars: dict[str, Calendar] = {}
        self._events: dict[str, Event] = {}
        self._subscriptions: list[Subscription] = []

    # Subscriptions

    def subscribe(self, callback: Subscriber) -> Subscription:
        """Register a callback for change notifications."""
        subscription = Subscription(self, callback)
        self._subscriptions.append(subscription)
        return subscription

    def _unsubscribe(self, subscription: Subscription) -> None:
        self._subscriptions = [s for s in self._subscriptions if s is not subscription]

    def _notify(self, kind: ChangeKind, item_id: Optional[str] = None) -> None:
        change = StoreChange(kind=kind, item_id=item_id)
        for subscription in list(self._subscriptions):
            try:
                subscription.callback(change)
            except Exception:
                # One failing view must not stop the others from refreshing
                logger.exception("Subscriber failed handling %s", change)

    # Calendars

    @property
    def calendars(self) -> dict[str, Calendar]:
        """Dict mapping calendar IDs to calendars (a copy)."""
        return dict(self._calendars)

    def get_calendar(self, calendar_id: str) -> Calendar:
        try:
            return self._calendars[calendar_id]
        except KeyError:
            raise UnknownEventError(f"Unknown calendar id: {calendar_id}") from None

    def add_calendar(self, calendar: Calendar) -> Calendar:
        """Add or replace a calendar."""
        kind = (
            ChangeKind.CALENDAR_UPDATED
            if calendar.id in self._calendars
            else ChangeKind.CALENDAR_ADDED
        )
        self._calendars[calendar.id] = calendar
        self._notify(kind, calendar.id)
        return calendar

    # Events

    def events(self, calendar_id: Optional[str] = None) -> list[Event]:
        """Stored events, optionally limited to one calendar."""
        if calendar_id is None:
            return list(self._events.values())
        return [e for e in self._events.values() if e.calendar_id == calendar_id]

    def get_event(self, event_id: str) -> Event:
        try:
            return self._events[event_id]
        except KeyError:
            raise UnknownEventError(f"Unknown event id: {event_id}") from None

    def add_event(self, event: Event) -> Event:
        """Add an event. An existing event with the same id is replaced."""
        if event.id in self._events:
            logger.info("Event %s already stored, replacing it", event.id)
        self._events[event.id] = event
        self._notify(ChangeKind.EVENT_ADDED, event.id)
        return event

    def update_event(self, event: Event) -> Event:
        """Replace a stored event."""
        self.get_event(event.id)
        self._events[event.id] = event
        self._notify(ChangeKind.EVENT_UPDATED, event.id)
        return event

    def move_event(self, event_id: str, new_start: date) -> Event:
        """Give an event a new start date, as a drag-and-drop would."""
        moved = self.get_event(event_id).moved_to(new_start)
        self._events[event_id] = moved
        self._notify(ChangeKind.EVENT_MOVED, event_id)
        return moved

    def resize_event(self, event_id: str, length_days: int) -> Event:
        """Change an event's length in days."""
        resized = replace(self.get_event(event_id), length_days=length_days)
        self._events[event_id] = resized
        self._notify(ChangeKind.EVENT_UPDATED, event_id)
        return resized

    def delete_event(self, event_id: str) -> None:
        self.get_event(event_id)
        del self._events[event_id]
        self._notify(ChangeKind.EVENT_DELETED, event_id)

    def load_records(
        self,
        calendar_records: Iterable[dict],
        event_records: Iterable[dict],
    ) -> None:
        """Replace the store contents with records from the backend.

        Subscribers are notified once after the whole load.

        Raises:
            RecordError: If a record is malformed. The store is left
                unchanged in that case.
        """
        calendars = {}
        for record in calendar_records:
            calendar = calendar_from_record(record)
            calendars[calendar.id] = calendar

        events = {}
        for record in event_records:
            event = event_from_record(record)
            events[event.id] = event

        self._calendars = calendars
        self._events = events
        logger.debug("Loaded %d calendars and %d events", len(calendars), len(events))
        self._notify(ChangeKind.RELOADED)

    def snapshot(self, calendar_id: Optional[str] = None) -> tuple[Event, ...]:
        """Immutable view of the events joined with their calendar settings."""
        return tuple(
            event.with_calendar(self._calendars.get(event.calendar_id))
            for event in self.events(calendar_id)
        )
