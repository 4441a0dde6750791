"""Audit orchestrator that validates, analyzes, and aggregates citations."""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Callable, Iterable, List, Optional

from ..analyzer import analyze_citation
from ..audit import generate_audit_result
from ..config import DEFAULT_SETTINGS, AuditSettings, ScoringWeights
from ..models import AnalyzedCitation, NAPAuditResult, NAPCitation, NAPData
from ..validation import require_valid_nap

LOGGER = logging.getLogger(__name__)

AnalyzeFunction = Callable[[NAPCitation, NAPData, ScoringWeights], AnalyzedCitation]


class AuditOrchestrator:
    """Runs a full NAP audit for one canonical record and its citations."""

    def __init__(
        self,
        settings: AuditSettings = DEFAULT_SETTINGS,
        *,
        analyze_function: AnalyzeFunction = analyze_citation,
        concurrent: bool = False,
        max_workers: Optional[int] = None,
    ) -> None:
        self._settings = settings
        self._analyze_function = analyze_function
        self._concurrent = concurrent
        self._max_workers = max_workers

    @property
    def settings(self) -> AuditSettings:
        return self._settings

    def audit(
        self,
        canonical: NAPData,
        citations: Iterable[NAPCitation],
        *,
        audited_at: Optional[datetime] = None,
    ) -> NAPAuditResult:
        """Validate ``canonical`` and audit every citation against it.

        Raises :class:`~nap_engine.validation.InvalidCanonicalRecordError`
        before any comparison when the canonical record is incomplete.
        """

        validation = require_valid_nap(canonical)
        for warning in validation.warnings:
            LOGGER.warning("Canonical record for %s: %s", canonical.name.preferred, warning)

        analyzed = self.analyze(canonical, citations)
        return generate_audit_result(analyzed, canonical, self._settings, audited_at=audited_at)

    def analyze(self, canonical: NAPData, citations: Iterable[NAPCitation]) -> List[AnalyzedCitation]:
        """Analyze citations in input order, optionally on a thread pool."""

        citation_list = list(citations)
        weights = self._settings.weights
        if not self._concurrent or len(citation_list) <= 1:
            return [self._analyze_function(citation, canonical, weights) for citation in citation_list]

        LOGGER.debug("Analyzing %s citations concurrently", len(citation_list))
        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            return list(
                executor.map(lambda citation: self._analyze_function(citation, canonical, weights), citation_list)
            )
