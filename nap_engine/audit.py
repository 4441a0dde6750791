"""Fold analyzed citations into a single audit result."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from .config import DEFAULT_SETTINGS, AuditSettings
from .models import AnalyzedCitation, NAPAuditResult, NAPData, NAPField
from .normalize import format_address, format_phone
from .similarity import MAX_SCORE, round_score

LOGGER = logging.getLogger(__name__)

# Fixed for predictable output; this is not a severity ranking.
RECOMMENDATION_FIELDS = (NAPField.NAME, NAPField.ADDRESS, NAPField.PHONE)

MANAGEMENT_SERVICE_RECOMMENDATION = (
    "Consider using a citation management service to fix inconsistencies at scale"
)


def overall_score(citations: Sequence[AnalyzedCitation]) -> int:
    """Mean consistency score; an empty audit is vacuously consistent."""

    if not citations:
        return MAX_SCORE
    total = sum(citation.consistency_score for citation in citations)
    return round_score(total / len(citations))


def field_recommendation(nap_field: NAPField, affected: int, canonical: NAPData) -> Optional[str]:
    """One consolidated recommendation for every citation flagged on ``nap_field``."""

    if nap_field is NAPField.NAME:
        return f'Update business name on {affected} listing(s) to exactly: "{canonical.name.preferred}"'
    if nap_field is NAPField.ADDRESS:
        primary_address = canonical.primary_address
        if primary_address is None:
            return None
        return (
            f"Correct address inconsistencies on {affected} listing(s). "
            f'Use: "{format_address(primary_address)}"'
        )
    if nap_field is NAPField.PHONE:
        primary_phone = canonical.primary_phone
        if primary_phone is None:
            return None
        display = primary_phone.formatted or format_phone(primary_phone.raw)
        return f"Update phone number on {affected} listing(s) to: {display}"
    return None


def build_recommendations(
    citations: Sequence[AnalyzedCitation],
    canonical: NAPData,
    score: int,
    settings: AuditSettings = DEFAULT_SETTINGS,
) -> List[str]:
    recommendations: List[str] = []
    for nap_field in RECOMMENDATION_FIELDS:
        affected = sum(1 for citation in citations if citation.has_issue(nap_field))
        if not affected:
            continue
        recommendation = field_recommendation(nap_field, affected, canonical)
        if recommendation:
            recommendations.append(recommendation)

    if score < settings.management_service_threshold:
        recommendations.append(MANAGEMENT_SERVICE_RECOMMENDATION)
    return recommendations


def generate_audit_result(
    citations: Sequence[AnalyzedCitation],
    canonical: NAPData,
    settings: AuditSettings = DEFAULT_SETTINGS,
    audited_at: Optional[datetime] = None,
) -> NAPAuditResult:
    """Summarise analyzed citations into an immutable :class:`NAPAuditResult`."""

    citations = tuple(citations)
    score = overall_score(citations)
    consistent = sum(1 for citation in citations if citation.consistency_score >= settings.consistent_threshold)
    with_issues = sum(1 for citation in citations if citation.issues)

    result = NAPAuditResult(
        overall_score=score,
        total_citations=len(citations),
        consistent_citations=consistent,
        issues_found=with_issues,
        citations=citations,
        recommendations=tuple(build_recommendations(citations, canonical, score, settings)),
        audited_at=audited_at or datetime.now(timezone.utc),
    )
    LOGGER.info(
        "Audited %s citation(s): overall score %s, %s consistent, %s with issues",
        result.total_citations,
        result.overall_score,
        result.consistent_citations,
        result.issues_found,
    )
    return result


__all__ = [
    "MANAGEMENT_SERVICE_RECOMMENDATION",
    "RECOMMENDATION_FIELDS",
    "build_recommendations",
    "field_recommendation",
    "generate_audit_result",
    "overall_score",
]
