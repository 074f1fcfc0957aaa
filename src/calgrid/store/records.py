"""Conversion between event-store records and domain objects.

Records are the JSON-shaped dicts the calendar backend exchanges:

    calendar: {"id", "name", "description", "color", "skip_weekends", ...}
    event:    {"id", "calendar_id", "title", "description", "start_date", "length", ...}

``start_date`` is an ISO ``YYYY-MM-DD`` string.
"""

from datetime import date, datetime
from typing import Optional

from calgrid.domain.models import DEFAULT_CALENDAR_COLOR, Calendar, Event
from calgrid.exceptions import RecordError


def _required(record: dict, key: str, kind: str):
    value = record.get(key)
    if value is None or value == "":
        raise RecordError(f"{kind} record is missing {key!r}", record)
    return value


def _parse_date(value, record: dict) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError as exc:
        raise RecordError(f"Invalid start_date {value!r}", record) from exc


def _parse_length(value, record: dict) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise RecordError(f"Invalid length {value!r}", record) from exc


def _check_record(record, kind: str) -> None:
    if not isinstance(record, dict):
        raise RecordError(f"{kind} record must be an object, got {type(record).__name__}", record)


def calendar_from_record(record: dict) -> Calendar:
    """Build a Calendar from a store record.

    Missing color and weekend settings fall back to the store defaults.
    """
    _check_record(record, "Calendar")
    return Calendar(
        id=str(_required(record, "id", "Calendar")),
        name=record.get("name") or "",
        description=record.get("description") or "",
        color=record.get("color") or DEFAULT_CALENDAR_COLOR,
        skip_weekends=bool(record.get("skip_weekends") or False),
    )


def calendar_to_record(calendar: Calendar) -> dict:
    """Build the settings record sent when creating or updating a calendar."""
    return {
        "name": calendar.name,
        "description": calendar.description,
        "color": calendar.color,
        "skip_weekends": calendar.skip_weekends,
    }


def event_from_record(record: dict, calendar: Optional[Calendar] = None) -> Event:
    """Build an Event from a store record.

    Args:
        record: Event record from the store.
        calendar: Owning calendar whose color and weekend rule are joined
            onto the event.

    Returns:
        The event, with calendar settings applied when a calendar is given.
    """
    _check_record(record, "Event")
    event = Event(
        id=str(_required(record, "id", "Event")),
        start_date=_parse_date(_required(record, "start_date", "Event"), record),
        length_days=_parse_length(record.get("length"), record),
        calendar_id=(
            str(record["calendar_id"]) if record.get("calendar_id") is not None else None
        ),
        skip_weekends=(
            bool(record["skip_weekends"]) if record.get("skip_weekends") is not None else None
        ),
        color=record.get("color") or None,
        title=record.get("title") or "",
        description=record.get("description") or "",
    )
    return event.with_calendar(calendar)


def event_to_record(event: Event) -> dict:
    """Build the record sent when creating or updating an event."""
    return {
        "calendar_id": event.calendar_id,
        "title": event.title,
        "description": event.description or event.title,
        "start_date": event.start_date.isoformat(),
        "length": event.effective_length,
    }
