"""Layout pipeline for placing events into day lanes."""

from calgrid.layout.date_range import expand_date_range, visible_range
from calgrid.layout.lane_assigner import LaneAssigner
from calgrid.layout.orderer import EventOrderer
from calgrid.layout.span_resolver import SpanResolver

__all__ = [
    # Date ranges
    "expand_date_range",
    "visible_range",
    # Pipeline stages
    "EventOrderer",
    "LaneAssigner",
    "SpanResolver",
]
