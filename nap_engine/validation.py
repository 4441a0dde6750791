"""Completeness checks for canonical NAP records."""
from __future__ import annotations

from typing import List

from .models import NAPData, ValidationResult
from .normalize import parse_domain


class InvalidCanonicalRecordError(ValueError):
    """Raised when a canonical record is missing data required for an audit."""

    def __init__(self, errors: List[str]) -> None:
        self.errors = list(errors)
        super().__init__("Invalid canonical NAP record: " + "; ".join(self.errors))


def validate_nap(nap: NAPData) -> ValidationResult:
    """Collect blocking errors and advisory warnings without raising."""

    result = ValidationResult()

    if not (nap.name.preferred or "").strip():
        result.errors.append("Business name is required")

    if not nap.addresses:
        result.errors.append("At least one address is required")
    for index, address in enumerate(nap.addresses, start=1):
        for attribute, label in (
            ("street1", "Street address"),
            ("city", "City"),
            ("state", "State"),
            ("zip", "ZIP code"),
        ):
            if not (getattr(address, attribute) or "").strip():
                result.errors.append(f"Address {index}: {label} is required")

    if not nap.phones:
        result.errors.append("At least one phone number is required")
    else:
        primary_count = sum(1 for phone in nap.phones if phone.is_primary)
        if primary_count == 0:
            result.warnings.append("No primary phone number designated")
        elif primary_count > 1:
            result.warnings.append("Multiple primary phone numbers designated")

    if not nap.website:
        result.warnings.append("Website URL is recommended")
    elif parse_domain(nap.website) is None:
        result.errors.append("Invalid website URL format")

    if nap.hours is None:
        result.warnings.append("Business hours are recommended for local SEO")

    return result


def require_valid_nap(nap: NAPData) -> ValidationResult:
    """Validate ``nap`` and raise :class:`InvalidCanonicalRecordError` on errors."""

    result = validate_nap(nap)
    if not result.valid:
        raise InvalidCanonicalRecordError(result.errors)
    return result


__all__ = ["InvalidCanonicalRecordError", "require_valid_nap", "validate_nap"]
