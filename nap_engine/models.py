"""Data models shared by the normalizer, analyzer, aggregator, and exporters."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class NAPField(str, Enum):
    """Identity fields compared between a citation and the canonical record."""

    NAME = "name"
    ADDRESS = "address"
    PHONE = "phone"
    WEBSITE = "website"


class Severity(str, Enum):
    CRITICAL = "critical"
    MAJOR = "major"
    MINOR = "minor"


class PhoneType(str, Enum):
    MAIN = "main"
    MOBILE = "mobile"
    FAX = "fax"
    TOLL_FREE = "toll_free"
    LOCAL = "local"


# --- Canonical Record Models ---

@dataclass(slots=True)
class BusinessName:
    """Business name with its legal form and historical variations."""

    legal: str
    preferred: str
    dba: Optional[str] = None
    variations: List[str] = field(default_factory=list)


@dataclass(slots=True)
class Address:
    """Physical address with structured components."""

    street1: str
    city: str
    state: str
    zip: str
    country: str = "US"
    street2: Optional[str] = None
    neighborhood: Optional[str] = None
    county: Optional[str] = None


@dataclass(slots=True)
class PhoneNumber:
    raw: str
    formatted: str = ""
    type: PhoneType = PhoneType.MAIN
    is_primary: bool = False


@dataclass(slots=True)
class DayHours:
    """Opening hours for a single day in ``HH:MM`` notation."""

    open: str
    close: str
    breaks: List[Tuple[str, str]] = field(default_factory=list)


@dataclass(slots=True)
class HolidayHours:
    """Special hours for a date; ``hours`` of ``None`` means closed."""

    date: str
    hours: Optional[DayHours] = None
    name: Optional[str] = None


@dataclass(slots=True)
class BusinessHours:
    regular: Dict[str, DayHours] = field(default_factory=dict)
    timezone: str = "UTC"
    holidays: List[HolidayHours] = field(default_factory=list)


@dataclass(slots=True)
class NAPData:
    """Authoritative business identity used as ground truth for an audit.

    The engine never mutates instances of this class; callers own them.
    """

    name: BusinessName
    addresses: List[Address] = field(default_factory=list)
    phones: List[PhoneNumber] = field(default_factory=list)
    website: str = ""
    email: Optional[str] = None
    hours: Optional[BusinessHours] = None

    @property
    def primary_address(self) -> Optional[Address]:
        """The first address, which is treated as the primary location."""

        return self.addresses[0] if self.addresses else None

    @property
    def primary_phone(self) -> Optional[PhoneNumber]:
        """The phone flagged primary, falling back to the first phone."""

        for phone in self.phones:
            if phone.is_primary:
                return phone
        return self.phones[0] if self.phones else None


# --- Citation Models ---

@dataclass(slots=True)
class NAPCitation:
    """A business listing discovered on a third-party directory."""

    source: str
    url: str = ""
    name: str = ""
    address: str = ""
    phone: str = ""
    website: Optional[str] = None
    last_checked: Optional[datetime] = None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "url": self.url,
            "name": self.name,
            "address": self.address,
            "phone": self.phone,
            "website": self.website,
            "lastChecked": _isoformat(self.last_checked),
        }


@dataclass(frozen=True, slots=True)
class NAPIssue:
    """A single discrepancy between a citation field and the canonical record."""

    field: NAPField
    expected: str
    found: str
    severity: Severity
    description: str

    def as_dict(self) -> Dict[str, Any]:
        return {
            "field": self.field.value,
            "expected": self.expected,
            "found": self.found,
            "severity": self.severity.value,
            "description": self.description,
        }


@dataclass(frozen=True, slots=True)
class AnalyzedCitation:
    """A citation annotated with its consistency score and issues."""

    source: str
    url: str
    name: str
    address: str
    phone: str
    website: Optional[str]
    last_checked: Optional[datetime]
    consistency_score: int
    issues: Tuple[NAPIssue, ...] = ()

    @classmethod
    def from_citation(
        cls, citation: NAPCitation, consistency_score: int, issues: Tuple[NAPIssue, ...]
    ) -> "AnalyzedCitation":
        return cls(
            source=citation.source,
            url=citation.url,
            name=citation.name,
            address=citation.address,
            phone=citation.phone,
            website=citation.website,
            last_checked=citation.last_checked,
            consistency_score=consistency_score,
            issues=tuple(issues),
        )

    def has_issue(self, nap_field: NAPField) -> bool:
        return any(issue.field is nap_field for issue in self.issues)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "url": self.url,
            "name": self.name,
            "address": self.address,
            "phone": self.phone,
            "website": self.website,
            "lastChecked": _isoformat(self.last_checked),
            "consistencyScore": self.consistency_score,
            "issues": [issue.as_dict() for issue in self.issues],
        }


@dataclass(frozen=True, slots=True)
class NAPAuditResult:
    """Aggregate outcome of auditing a set of citations."""

    overall_score: int
    total_citations: int
    consistent_citations: int
    issues_found: int
    citations: Tuple[AnalyzedCitation, ...]
    recommendations: Tuple[str, ...]
    audited_at: datetime

    def as_dict(self) -> Dict[str, Any]:
        return {
            "overallScore": self.overall_score,
            "totalCitations": self.total_citations,
            "consistentCitations": self.consistent_citations,
            "issuesFound": self.issues_found,
            "citations": [citation.as_dict() for citation in self.citations],
            "recommendations": list(self.recommendations),
            "auditedAt": self.audited_at.isoformat(),
        }


@dataclass(slots=True)
class ValidationResult:
    """Blocking errors and advisory warnings for a canonical record."""

    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


__all__ = [
    "Address",
    "AnalyzedCitation",
    "BusinessHours",
    "BusinessName",
    "DayHours",
    "HolidayHours",
    "NAPAuditResult",
    "NAPCitation",
    "NAPData",
    "NAPField",
    "NAPIssue",
    "PhoneNumber",
    "PhoneType",
    "Severity",
    "ValidationResult",
]
