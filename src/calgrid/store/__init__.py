"""Event store and record conversion."""

from calgrid.store.event_store import (
    ChangeKind,
    EventStore,
    StoreChange,
    Subscription,
)
from calgrid.store.records import (
    calendar_from_record,
    calendar_to_record,
    event_from_record,
    event_to_record,
)

__all__ = [
    # Store
    "ChangeKind",
    "EventStore",
    "StoreChange",
    "Subscription",
    # Records
    "calendar_from_record",
    "calendar_to_record",
    "event_from_record",
    "event_to_record",
]
