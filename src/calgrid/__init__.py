"""Deterministic lane layout for multi-day calendar events."""

from calgrid.config import LayoutConfig
from calgrid.layout.engine import LayoutEngine

__version__ = "0.1.0"

__all__ = [
    "LayoutConfig",
    "LayoutEngine",
]
