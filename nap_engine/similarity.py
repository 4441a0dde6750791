"""Field level similarity scores on a 0-100 scale."""
from __future__ import annotations

import math
from typing import Optional, Union

from rapidfuzz.distance import Levenshtein

from .models import Address, NAPField
from .normalize import extract_domain, normalize_address, normalize_name, normalize_phone

MAX_SCORE = 100
AREA_CODE_SCORE = 50
_AREA_CODE_LENGTH = 3


def round_score(value: float) -> int:
    """Round half away from zero for the non-negative scores used here."""

    return int(math.floor(value + 0.5))


def levenshtein_distance(first: str, second: str) -> int:
    """Minimum number of single character edits turning ``first`` into ``second``."""

    return Levenshtein.distance(first, second)


def _edit_similarity(first: str, second: str) -> int:
    if first == second:
        return MAX_SCORE
    longest = max(len(first), len(second))
    distance = levenshtein_distance(first, second)
    return max(0, round_score((1 - distance / longest) * MAX_SCORE))


def compare_names(first: Optional[str], second: Optional[str]) -> int:
    """Similarity of two business names after normalisation."""

    return _edit_similarity(normalize_name(first), normalize_name(second))


def compare_addresses(
    first: Union[Address, str, None], second: Union[Address, str, None]
) -> int:
    """Similarity of two addresses after abbreviation normalisation."""

    return _edit_similarity(normalize_address(first), normalize_address(second))


def compare_phones(first: Optional[str], second: Optional[str]) -> int:
    """100 for the same number, 50 when only the area code matches, else 0."""

    first_digits = normalize_phone(first)
    second_digits = normalize_phone(second)
    if first_digits == second_digits:
        return MAX_SCORE
    if (
        len(first_digits) >= _AREA_CODE_LENGTH
        and first_digits[:_AREA_CODE_LENGTH] == second_digits[:_AREA_CODE_LENGTH]
    ):
        return AREA_CODE_SCORE
    return 0


def compare_websites(first: Optional[str], second: Optional[str]) -> int:
    """Websites only match on their domain; there is no partial credit."""

    return MAX_SCORE if extract_domain(first) == extract_domain(second) else 0


def compare_field(
    nap_field: NAPField,
    found: Union[Address, str, None],
    expected: Union[Address, str, None],
) -> int:
    """Dispatch to the comparison rule for ``nap_field``."""

    if nap_field is NAPField.NAME:
        return compare_names(found, expected)  # type: ignore[arg-type]
    if nap_field is NAPField.ADDRESS:
        return compare_addresses(found, expected)
    if nap_field is NAPField.PHONE:
        return compare_phones(found, expected)  # type: ignore[arg-type]
    if nap_field is NAPField.WEBSITE:
        return compare_websites(found, expected)  # type: ignore[arg-type]
    raise ValueError(f"Unsupported NAP field: {nap_field!r}")


__all__ = [
    "AREA_CODE_SCORE",
    "MAX_SCORE",
    "compare_addresses",
    "compare_field",
    "compare_names",
    "compare_phones",
    "compare_websites",
    "levenshtein_distance",
    "round_score",
]
