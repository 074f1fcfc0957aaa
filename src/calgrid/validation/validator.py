"""Validation module for verifying layout correctness.

This module checks a computed layout against the events it was built from:
every visible day of an event holds exactly one slot for it, that slot sits
in the same lane on every day, and its span flags match the day.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Iterable, Mapping, Optional

from calgrid.domain.models import Calendar, DateRange, DayBucketMap, Event, ResolvedSpan
from calgrid.domain.policies import BusinessDayPolicy
from calgrid.layout.orderer import EventOrderer
from calgrid.layout.span_resolver import SpanResolver


class ValidationErrorType(Enum):
    """Types of validation errors."""

    MISSING_DAY = "missing_day"
    UNEXPECTED_DAY = "unexpected_day"
    MISSING_EVENT = "missing_event"
    DUPLICATE_EVENT = "duplicate_event"
    LANE_CHANGED = "lane_changed"
    WRONG_SPAN_FLAGS = "wrong_span_flags"
    OUTSIDE_SPAN = "outside_span"
    UNKNOWN_EVENT = "unknown_event"
    TRAILING_EMPTY = "trailing_empty"


@dataclass
class ValidationError:
    """A single validation error."""

    error_type: ValidationErrorType
    message: str
    event_id: Optional[str] = None
    day: Optional[date] = None
    details: dict = field(default_factory=dict)

    def __str__(self) -> str:
        parts = [f"[{self.error_type.value}]"]
        if self.event_id:
            parts.append(f"Event {self.event_id}:")
        parts.append(self.message)
        if self.day is not None:
            parts.append(f"({self.day.isoformat()})")
        return " ".join(parts)


@dataclass
class ValidationResult:
    """Result of validating a layout."""

    is_valid: bool
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_error(self, error: ValidationError) -> None:
        """Add an error and mark as invalid."""
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str) -> None:
        """Add a warning (doesn't affect validity)."""
        self.warnings.append(warning)

    def errors_of_type(self, error_type: ValidationErrorType) -> list[ValidationError]:
        return [e for e in self.errors if e.error_type == error_type]


class LayoutValidator:
    """Validates layouts against the lane invariants.

    Example:
        >>> validator = LayoutValidator()
        >>> result = validator.validate(layout, events, start, end)
        >>> if not result.is_valid:
        ...     for error in result.errors:
        ...         print(error)
    """

    def __init__(self, business_day_policy: Optional[BusinessDayPolicy] = None):
        self.resolver = SpanResolver(business_day_policy)
        self.orderer = EventOrderer()

    def validate(
        self,
        layout: DayBucketMap,
        events: Iterable[Event],
        start: date,
        end: date,
        calendars: Optional[Mapping[str, Calendar]] = None,
    ) -> ValidationResult:
        """Validate a complete layout.

        Args:
            layout: The layout to validate.
            events: Events the layout was computed from.
            start: First day of the requested range.
            end: Last day of the requested range.
            calendars: Dict mapping calendar IDs to calendars.

        Returns:
            ValidationResult with is_valid flag and any errors.
        """
        result = ValidationResult(is_valid=True)
        date_range = DateRange(start, end)
        calendars = calendars or {}

        events = self.orderer.order(events)
        spans = {
            event.id: self.resolver.resolve(event, calendars.get(event.calendar_id))
            for event in events
        }

        self._validate_days(layout, date_range, result)
        for span in spans.values():
            self._validate_span(layout, span, date_range, result)
        self._validate_buckets(layout, spans, result)

        return result

    def _validate_days(
        self,
        layout: DayBucketMap,
        date_range: DateRange,
        result: ValidationResult,
    ) -> None:
        """Check that the layout covers exactly the requested days."""
        expected = list(date_range)
        expected_set = set(expected)

        for day in expected:
            if day not in layout:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.MISSING_DAY,
                        message="Day in range has no bucket",
                        day=day,
                    )
                )

        for day in layout:
            if day not in expected_set:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.UNEXPECTED_DAY,
                        message="Bucket for a day outside the range",
                        day=day,
                    )
                )

    def _validate_span(
        self,
        layout: DayBucketMap,
        span: ResolvedSpan,
        date_range: DateRange,
        result: ValidationResult,
    ) -> None:
        """Check coverage, lane stability and flags for one event."""
        event_id = span.event.id
        lanes_seen: dict[int, date] = {}

        for day in date_range:
            if not span.contains(day) or day not in layout:
                continue

            bucket = layout[day]
            matches = [
                (lane, slot) for lane, slot in enumerate(bucket)
                if slot.event_id == event_id
            ]

            if not matches:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.MISSING_EVENT,
                        message="Event has no slot on a day of its span",
                        event_id=event_id,
                        day=day,
                    )
                )
                continue

            if len(matches) > 1:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.DUPLICATE_EVENT,
                        message=f"Event occupies {len(matches)} lanes",
                        event_id=event_id,
                        day=day,
                        details={"lanes": [lane for lane, _ in matches]},
                    )
                )

            lane, slot = matches[0]
            lanes_seen.setdefault(lane, day)

            is_start = day == span.start_date
            is_end = day == span.end_date
            if (
                slot.is_span_start != is_start
                or slot.is_span_end != is_end
                or slot.is_span_middle != (not is_start and not is_end)
            ):
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.WRONG_SPAN_FLAGS,
                        message="Span start/middle/end flags do not match the day",
                        event_id=event_id,
                        day=day,
                    )
                )

        if len(lanes_seen) > 1:
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.LANE_CHANGED,
                    message=f"Event moves between lanes {sorted(lanes_seen)}",
                    event_id=event_id,
                    day=max(lanes_seen.values()),
                    details={"lanes": sorted(lanes_seen)},
                )
            )

    def _validate_buckets(
        self,
        layout: DayBucketMap,
        spans: dict[str, ResolvedSpan],
        result: ValidationResult,
    ) -> None:
        """Check every slot references a known event inside its span."""
        for day, bucket in layout.items():
            for slot in bucket:
                if slot.is_empty:
                    continue
                span = spans.get(slot.event_id)
                if span is None:
                    result.add_error(
                        ValidationError(
                            error_type=ValidationErrorType.UNKNOWN_EVENT,
                            message="Slot references an event not in the input",
                            event_id=slot.event_id,
                            day=day,
                        )
                    )
                elif not span.contains(day):
                    result.add_error(
                        ValidationError(
                            error_type=ValidationErrorType.OUTSIDE_SPAN,
                            message="Slot placed outside the event's span",
                            event_id=slot.event_id,
                            day=day,
                        )
                    )

            if len(bucket) and bucket[-1].is_empty:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.TRAILING_EMPTY,
                        message="Bucket ends with a placeholder slot",
                        day=day,
                    )
                )

            if bucket.empty_count:
                result.add_warning(
                    f"{day.isoformat()}: {bucket.empty_count} placeholder slot(s)"
                )
