"""Validation module for verifying layout correctness."""

from calgrid.validation.validator import (
    LayoutValidator,
    ValidationError,
    ValidationErrorType,
    ValidationResult,
)

__all__ = [
    "LayoutValidator",
    "ValidationError",
    "ValidationErrorType",
    "ValidationResult",
]
