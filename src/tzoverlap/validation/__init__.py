"""Validation module for city lists and meeting selections."""

from tzoverlap.validation.validator import (
    CityValidator,
    ValidationError,
    ValidationErrorType,
    ValidationResult,
)

__all__ = [
    "CityValidator",
    "ValidationError",
    "ValidationErrorType",
    "ValidationResult",
]
