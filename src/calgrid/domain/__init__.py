"""Domain models and calendar rules for event layout."""

from calgrid.domain.models import (
    CALENDAR_COLORS,
    DEFAULT_CALENDAR_COLOR,
    Calendar,
    DateRange,
    DayBucket,
    DayBucketMap,
    Event,
    ResolvedSpan,
    Slot,
)
from calgrid.domain.policies import (
    BusinessDayPolicy,
    DefaultBusinessDayPolicy,
)

__all__ = [
    # Models
    "CALENDAR_COLORS",
    "DEFAULT_CALENDAR_COLOR",
    "Calendar",
    "DateRange",
    "DayBucket",
    "DayBucketMap",
    "Event",
    "ResolvedSpan",
    "Slot",
    # Policies
    "BusinessDayPolicy",
    "DefaultBusinessDayPolicy",
]
