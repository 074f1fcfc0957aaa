"""Exception hierarchy for calgrid.

Malformed input from the event store is reported with recoverable errors.
Broken layout invariants indicate an engine bug and are never expected
during normal operation.
"""

from typing import Optional


class CalgridError(Exception):
    """Base class for all calgrid errors."""


class RecordError(CalgridError):
    """A calendar or event record from the store could not be converted."""

    def __init__(self, message: str, record: Optional[dict] = None):
        super().__init__(message)
        self.record = record


class UnknownEventError(CalgridError, KeyError):
    """An event or calendar id was not found in the store."""

    def __str__(self) -> str:
        # KeyError would otherwise wrap the message in quotes
        return str(self.args[0]) if self.args else ""


class LayoutInvariantError(CalgridError):
    """The lane layout broke one of its structural invariants."""


class LaneCollisionError(LayoutInvariantError):
    """Two events were assigned the same lane on the same day."""

    def __init__(self, day, lane: int, existing_id: str, incoming_id: str):
        super().__init__(
            f"Lane {lane} on {day} already holds event {existing_id!r}, "
            f"cannot place {incoming_id!r}"
        )
        self.day = day
        self.lane = lane
        self.existing_id = existing_id
        self.incoming_id = incoming_id
