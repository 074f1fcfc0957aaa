"""Policy definitions for span rules.

Policies hold the calendar rules the layout depends on, kept separate from
the layout pipeline so they can be tested and swapped independently.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

SATURDAY = 5
SUNDAY = 6


class BusinessDayPolicy(ABC):
    """Abstract base class for business-day rules."""

    @abstractmethod
    def is_business_day(self, day: date) -> bool:
        """Check if a day counts toward a business-day length."""
        pass

    @abstractmethod
    def counts_start_day(self, start: date) -> bool:
        """Check if the start day consumes one unit of an event's length.

        Args:
            start: First day of the event.

        Returns:
            True if the start day is counted.
        """
        pass

    def business_days_per_week(self) -> Optional[int]:
        """Business days in any seven consecutive days, if that is fixed.

        Policies with irregular rules such as holidays return None, which
        makes span resolution walk day by day.
        """
        return None


@dataclass
class DefaultBusinessDayPolicy(BusinessDayPolicy):
    """Default business-day policy implementation.

    Business days are Monday through Friday. A start day that falls on a
    weekend does not count toward the length unless
    ``count_weekend_start`` is set, in which case the start day is always
    counted.
    """

    weekend_days: frozenset[int] = field(
        default_factory=lambda: frozenset({SATURDAY, SUNDAY})
    )
    count_weekend_start: bool = False

    def __post_init__(self):
        self.weekend_days = frozenset(self.weekend_days)
        if len(self.weekend_days & set(range(7))) == 7:
            raise ValueError("At least one weekday must be a business day")

    def is_business_day(self, day: date) -> bool:
        return day.weekday() not in self.weekend_days

    def business_days_per_week(self) -> Optional[int]:
        return 7 - len(self.weekend_days & set(range(7)))

    def counts_start_day(self, start: date) -> bool:
        if self.count_weekend_start:
            return True
        return self.is_business_day(start)
