"""Domain models for the calendar layout engine.

This module contains the core data structures used throughout the layout
pipeline: calendars and their events as supplied by the event store, the
resolved span of an event, and the per-day slot grid produced as output.
"""

from dataclasses import dataclass, field, replace
from datetime import date, timedelta
from typing import Iterator, Mapping, Optional

# Fallback color the store uses for calendars without one
DEFAULT_CALENDAR_COLOR = "#cccccc"

# Predefined palette offered when creating calendars
CALENDAR_COLORS = [
    "#4285F4",  # Blue
    "#EA4335",  # Red
    "#FBBC05",  # Yellow
    "#34A853",  # Green
    "#8E24AA",  # Purple
    "#F6BF26",  # Gold
    "#0B8043",  # Dark Green
    "#D50000",  # Bright Red
    "#3F51B5",  # Indigo
    "#039BE5",  # Light Blue
]


@dataclass(frozen=True)
class Calendar:
    """Calendar-level settings shared by all of its events.

    Attributes:
        id: Unique identifier for the calendar.
        name: Display name.
        description: Free-form description.
        color: Display color applied to events without their own.
        skip_weekends: If True, event lengths count business days only.
    """

    id: str
    name: str = ""
    description: str = ""
    color: str = DEFAULT_CALENDAR_COLOR
    skip_weekends: bool = False


@dataclass(frozen=True)
class Event:
    """A calendar event as handed to the layout engine.

    ``length_days`` and ``skip_weekends`` use ``None`` to mean "not set":
    the length then defaults to one day and the weekend rule to the owning
    calendar's setting.

    Attributes:
        id: Opaque identifier, unique within one layout computation.
        start_date: First day of the event.
        length_days: Number of days the event spans.
        calendar_id: ID of the owning calendar.
        skip_weekends: Per-event override of the calendar weekend rule.
        color: Optional display color.
        title: Short title shown on the first day of the span.
        description: Longer description.
    """

    id: str
    start_date: date
    length_days: Optional[int] = None
    calendar_id: Optional[str] = None
    skip_weekends: Optional[bool] = None
    color: Optional[str] = None
    title: str = ""
    description: str = ""

    @property
    def effective_length(self) -> int:
        """Length in days, defaulted and clamped to at least 1."""
        if self.length_days is None:
            return 1
        return max(1, self.length_days)

    def with_calendar(self, calendar: Optional[Calendar]) -> "Event":
        """Return a copy with unset settings filled from the calendar."""
        if calendar is None:
            return self
        return replace(
            self,
            skip_weekends=(
                calendar.skip_weekends
                if self.skip_weekends is None
                else self.skip_weekends
            ),
            color=self.color if self.color is not None else calendar.color,
        )

    def moved_to(self, new_start: date) -> "Event":
        """Return a copy of this event starting on a different day."""
        return replace(self, start_date=new_start)


@dataclass(frozen=True)
class DateRange:
    """Inclusive range of calendar days.

    A range whose end precedes its start is valid and contains no days.
    """

    start: date
    end: date

    @property
    def is_empty(self) -> bool:
        return self.end < self.start

    @property
    def num_days(self) -> int:
        """Number of days in the range."""
        if self.is_empty:
            return 0
        return (self.end - self.start).days + 1

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def __iter__(self) -> Iterator[date]:
        if self.is_empty:
            return
        current = self.start
        while True:
            yield current
            # stop before stepping past date.max
            if current == self.end:
                return
            current += timedelta(days=1)


@dataclass(frozen=True)
class ResolvedSpan:
    """An event together with its effective end date.

    Derived on every layout run and never cached, since the length and
    weekend settings may change between runs.

    Attributes:
        event: The source event.
        end_date: Last day the event occupies (inclusive).
    """

    event: Event
    end_date: date

    @property
    def start_date(self) -> date:
        return self.event.start_date

    @property
    def num_days(self) -> int:
        """Calendar days covered, weekends included."""
        return (self.end_date - self.start_date).days + 1

    def contains(self, day: date) -> bool:
        """Check if a day falls within the span."""
        return self.start_date <= day <= self.end_date

    def overlaps(self, date_range: DateRange) -> bool:
        """Check if any day of the span falls within the range."""
        return self.start_date <= date_range.end and date_range.start <= self.end_date


@dataclass(frozen=True)
class Slot:
    """One lane position within a day.

    A slot is either occupied by an event or an empty placeholder kept so
    that later lanes line up with lanes established on earlier days.

    Attributes:
        event_id: ID of the occupying event, or None for a placeholder.
        is_span_start: True on the first day of the event.
        is_span_end: True on the last day of the event.
        is_span_middle: True on days strictly inside the span.
    """

    event_id: Optional[str] = None
    is_span_start: bool = False
    is_span_end: bool = False
    is_span_middle: bool = False

    @classmethod
    def empty(cls) -> "Slot":
        """Create a placeholder slot."""
        return cls()

    @classmethod
    def occupied(cls, event_id: str, is_span_start: bool, is_span_end: bool) -> "Slot":
        """Create a slot for an event on one day of its span."""
        return cls(
            event_id=event_id,
            is_span_start=is_span_start,
            is_span_end=is_span_end,
            is_span_middle=not is_span_start and not is_span_end,
        )

    @property
    def is_empty(self) -> bool:
        return self.event_id is None

    def __repr__(self) -> str:
        if self.is_empty:
            return "Slot(empty)"
        flags = "".join(
            flag
            for flag, is_set in (
                ("S", self.is_span_start),
                ("M", self.is_span_middle),
                ("E", self.is_span_end),
            )
            if is_set
        )
        return f"Slot({self.event_id}, {flags})"


@dataclass(frozen=True)
class DayBucket:
    """Ordered lane slots for one calendar day.

    Attributes:
        day: The calendar day.
        slots: Slots indexed by lane.
    """

    day: date
    slots: tuple[Slot, ...] = ()

    def __len__(self) -> int:
        return len(self.slots)

    def __iter__(self) -> Iterator[Slot]:
        return iter(self.slots)

    def __getitem__(self, lane: int) -> Slot:
        return self.slots[lane]

    def lane_of(self, event_id: str) -> Optional[int]:
        """Get the lane an event occupies on this day, if any."""
        for lane, slot in enumerate(self.slots):
            if slot.event_id == event_id:
                return lane
        return None

    def event_ids(self) -> list[str]:
        """IDs of occupying events, in lane order."""
        return [slot.event_id for slot in self.slots if not slot.is_empty]

    @property
    def occupied_count(self) -> int:
        return sum(1 for slot in self.slots if not slot.is_empty)

    @property
    def empty_count(self) -> int:
        return sum(1 for slot in self.slots if slot.is_empty)


@dataclass(frozen=True)
class DayBucketMap(Mapping[date, DayBucket]):
    """Layout output: every day of the requested range mapped to its bucket.

    Days are kept in range order. A day with no events maps to an empty
    bucket; an empty range yields an empty map.

    Attributes:
        date_range: The range the layout was computed for.
        buckets: Dict mapping days to their buckets.
    """

    date_range: DateRange
    buckets: dict[date, DayBucket] = field(default_factory=dict)

    def __getitem__(self, day: date) -> DayBucket:
        return self.buckets[day]

    def __iter__(self) -> Iterator[date]:
        return iter(self.buckets)

    def __len__(self) -> int:
        return len(self.buckets)

    def __hash__(self) -> int:
        return hash((self.date_range, tuple(self.buckets.items())))

    @property
    def days(self) -> list[date]:
        """All days of the layout in order."""
        return list(self.buckets)

    @property
    def max_lanes(self) -> int:
        """Widest bucket in the layout."""
        return max((len(bucket) for bucket in self.buckets.values()), default=0)

    def lane_of(self, event_id: str, day: date) -> Optional[int]:
        """Get an event's lane on a day, or None if it is not shown there."""
        bucket = self.buckets.get(day)
        if bucket is None:
            return None
        return bucket.lane_of(event_id)

    def days_of(self, event_id: str) -> list[date]:
        """Days on which an event appears, in order."""
        return [
            day for day, bucket in self.buckets.items()
            if bucket.lane_of(event_id) is not None
        ]
