"""Validation module for city lists and meeting selections.

Cities come from user input and storage, so they are checked here before
they reach the engine, which assumes valid timezones and hours.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from tzoverlap.domain.models import SLOTS_PER_DAY, City, check_decimal_hour


class ValidationErrorType(Enum):
    """Types of validation errors."""

    HOURS_OUT_OF_RANGE = "hours_out_of_range"
    UNKNOWN_TIMEZONE = "unknown_timezone"
    MISSING_COUNTRY_CODE = "missing_country_code"
    DUPLICATE_CITY_ID = "duplicate_city_id"
    SLOT_OUT_OF_RANGE = "slot_out_of_range"


@dataclass
class ValidationError:
    """A single validation error."""

    error_type: ValidationErrorType
    message: str
    city_id: Optional[str] = None
    details: dict = field(default_factory=dict)

    def __str__(self) -> str:
        parts = [f"[{self.error_type.value}]"]
        if self.city_id:
            parts.append(f"City {self.city_id}:")
        parts.append(self.message)
        return " ".join(parts)


@dataclass
class ValidationResult:
    """Result of a validation run."""

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


class CityValidator:
    """Validates cities and selections before they reach the engine.

    Example:
        >>> validator = CityValidator()
        >>> result = validator.validate(cities)
        >>> if not result.is_valid:
        ...     for error in result.errors:
        ...         print(error)
    """

    def validate(self, cities: Sequence[City]) -> ValidationResult:
        """Validate a city list.

        Args:
            cities: Cities to check.

        Returns:
            ValidationResult with all errors and warnings found.
        """
        result = ValidationResult(is_valid=True)

        seen_ids = set()
        for city in cities:
            if city.id in seen_ids:
                result.add_error(ValidationError(
                    error_type=ValidationErrorType.DUPLICATE_CITY_ID,
                    message="City ID is used more than once",
                    city_id=city.id,
                ))
            seen_ids.add(city.id)
            self._validate_city(city, result)

        return result

    def validate_selection(self, selection_start: int, selection_end: int) -> ValidationResult:
        """Validate raw slot bounds for a meeting selection."""
        result = ValidationResult(is_valid=True)
        for name, slot in (("start", selection_start), ("end", selection_end)):
            if not 0 <= slot < SLOTS_PER_DAY:
                result.add_error(ValidationError(
                    error_type=ValidationErrorType.SLOT_OUT_OF_RANGE,
                    message=f"Selection {name} slot {slot} outside [0, {SLOTS_PER_DAY})",
                    details={"slot": slot},
                ))
        return result

    def _validate_city(self, city: City, result: ValidationResult) -> None:
        """Check a single city's fields."""
        for name, value in (("work_start", city.work_start), ("work_end", city.work_end)):
            try:
                check_decimal_hour(value, name)
            except ValueError as e:
                result.add_error(ValidationError(
                    error_type=ValidationErrorType.HOURS_OUT_OF_RANGE,
                    message=str(e),
                    city_id=city.id,
                    details={name: value},
                ))

        if city.work_start == city.work_end:
            result.add_warning(
                f"City {city.id}: working window {city.work_start}-{city.work_end} "
                "is empty, so it never counts as working"
            )

        try:
            ZoneInfo(city.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            result.add_error(ValidationError(
                error_type=ValidationErrorType.UNKNOWN_TIMEZONE,
                message=f"Unknown timezone {city.timezone!r}",
                city_id=city.id,
            ))

        if not city.country_code:
            result.add_error(ValidationError(
                error_type=ValidationErrorType.MISSING_COUNTRY_CODE,
                message="No country code, holidays cannot be checked",
                city_id=city.id,
            ))

