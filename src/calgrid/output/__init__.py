"""Output generation for layouts."""

from calgrid.output.debug_generator import DebugGenerator

__all__ = [
    "DebugGenerator",
]
