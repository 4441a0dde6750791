"""Per-citation consistency analysis against a canonical NAP record."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from .config import DEFAULT_WEIGHTS, ScoringWeights
from .models import AnalyzedCitation, NAPCitation, NAPData, NAPField, NAPIssue, Severity
from .normalize import format_address, format_phone
from .similarity import MAX_SCORE, compare_field, round_score

LOGGER = logging.getLogger(__name__)

CRITICAL_NAME_BELOW = 70
CRITICAL_ADDRESS_BELOW = 70
MAJOR_ADDRESS_BELOW = 90
CRITICAL_PHONE_BELOW = 50

_DESCRIPTIONS = {
    (NAPField.NAME, Severity.CRITICAL): "Business name significantly different",
    (NAPField.NAME, Severity.MAJOR): "Minor name variation detected",
    (NAPField.ADDRESS, Severity.CRITICAL): "Address significantly different",
    (NAPField.ADDRESS, Severity.MAJOR): "Address formatting inconsistency",
    (NAPField.ADDRESS, Severity.MINOR): "Address formatting inconsistency",
    (NAPField.PHONE, Severity.CRITICAL): "Phone number is different",
    (NAPField.PHONE, Severity.MAJOR): "Phone formatting inconsistency",
    (NAPField.WEBSITE, Severity.CRITICAL): "Website URL points to different domain",
}


@dataclass(frozen=True, slots=True)
class FieldComparison:
    """Score of one citation field together with the values that were compared."""

    field: NAPField
    expected: str
    found: str
    score: int


def classify_severity(nap_field: NAPField, score: int) -> Optional[Severity]:
    """Return the severity of a field score, or ``None`` when it is fully consistent."""

    if score >= MAX_SCORE:
        return None
    if nap_field is NAPField.NAME:
        return Severity.CRITICAL if score < CRITICAL_NAME_BELOW else Severity.MAJOR
    if nap_field is NAPField.ADDRESS:
        if score < CRITICAL_ADDRESS_BELOW:
            return Severity.CRITICAL
        if score < MAJOR_ADDRESS_BELOW:
            return Severity.MAJOR
        return Severity.MINOR
    if nap_field is NAPField.PHONE:
        return Severity.CRITICAL if score < CRITICAL_PHONE_BELOW else Severity.MAJOR
    if nap_field is NAPField.WEBSITE:
        return Severity.CRITICAL
    raise ValueError(f"Unsupported NAP field: {nap_field!r}")


def describe_issue(nap_field: NAPField, severity: Severity) -> str:
    return _DESCRIPTIONS[(nap_field, severity)]


def compare_citation_fields(citation: NAPCitation, canonical: NAPData) -> List[FieldComparison]:
    """Score every field for which both sides supply evidence.

    Address is compared against the primary address only. Website is only
    compared when the citation lists one.
    """

    comparisons = [
        FieldComparison(
            field=NAPField.NAME,
            expected=canonical.name.preferred,
            found=citation.name,
            score=compare_field(NAPField.NAME, citation.name, canonical.name.preferred),
        )
    ]

    primary_address = canonical.primary_address
    if primary_address is not None:
        comparisons.append(
            FieldComparison(
                field=NAPField.ADDRESS,
                expected=format_address(primary_address),
                found=citation.address,
                score=compare_field(NAPField.ADDRESS, citation.address, primary_address),
            )
        )

    primary_phone = canonical.primary_phone
    if primary_phone is not None:
        comparisons.append(
            FieldComparison(
                field=NAPField.PHONE,
                expected=primary_phone.formatted or format_phone(primary_phone.raw),
                found=citation.phone,
                score=compare_field(NAPField.PHONE, citation.phone, primary_phone.raw),
            )
        )

    if citation.website:
        comparisons.append(
            FieldComparison(
                field=NAPField.WEBSITE,
                expected=canonical.website,
                found=citation.website,
                score=compare_field(NAPField.WEBSITE, citation.website, canonical.website),
            )
        )

    return comparisons


def weighted_score(comparisons: List[FieldComparison], weights: ScoringWeights) -> int:
    """Weighted mean of the compared fields; absent fields carry no weight."""

    total_weight = 0
    weighted_sum = 0
    for comparison in comparisons:
        weight = weights.weight_for(comparison.field)
        weighted_sum += comparison.score * weight
        total_weight += weight
    if total_weight == 0:
        return MAX_SCORE
    return round_score(weighted_sum / total_weight)


def analyze_citation(
    citation: NAPCitation,
    canonical: NAPData,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> AnalyzedCitation:
    """Compare one citation with the canonical record and score it."""

    comparisons = compare_citation_fields(citation, canonical)
    issues: List[NAPIssue] = []
    for comparison in comparisons:
        severity = classify_severity(comparison.field, comparison.score)
        if severity is None:
            continue
        issues.append(
            NAPIssue(
                field=comparison.field,
                expected=comparison.expected,
                found=comparison.found,
                severity=severity,
                description=describe_issue(comparison.field, severity),
            )
        )

    score = weighted_score(comparisons, weights)
    LOGGER.debug(
        "Citation from %s scored %s with %s issue(s)", citation.source, score, len(issues)
    )
    return AnalyzedCitation.from_citation(citation, score, tuple(issues))


__all__ = [
    "FieldComparison",
    "analyze_citation",
    "classify_severity",
    "compare_citation_fields",
    "describe_issue",
    "weighted_score",
]
