"""Name/Address/Phone consistency engine for local business citations."""

from . import models  # noqa: F401
from .analyzer import analyze_citation, classify_severity
from .audit import generate_audit_result
from .config import AuditSettings, ConfigurationError, ScoringWeights
from .models import (
    Address,
    AnalyzedCitation,
    BusinessHours,
    BusinessName,
    DayHours,
    HolidayHours,
    NAPAuditResult,
    NAPCitation,
    NAPData,
    NAPField,
    NAPIssue,
    PhoneNumber,
    PhoneType,
    Severity,
    ValidationResult,
)
from .normalize import (
    extract_domain,
    format_address,
    format_phone,
    normalize_address,
    normalize_name,
    normalize_phone,
)
from .orchestrator import AuditOrchestrator
from .schema import generate_schema_org_nap
from .similarity import compare_addresses, compare_names, compare_phones, compare_websites
from .validation import InvalidCanonicalRecordError, require_valid_nap, validate_nap

__all__ = [
    "Address",
    "AnalyzedCitation",
    "AuditOrchestrator",
    "AuditSettings",
    "BusinessHours",
    "BusinessName",
    "ConfigurationError",
    "DayHours",
    "HolidayHours",
    "InvalidCanonicalRecordError",
    "NAPAuditResult",
    "NAPCitation",
    "NAPData",
    "NAPField",
    "NAPIssue",
    "PhoneNumber",
    "PhoneType",
    "ScoringWeights",
    "Severity",
    "ValidationResult",
    "analyze_citation",
    "classify_severity",
    "compare_addresses",
    "compare_names",
    "compare_phones",
    "compare_websites",
    "extract_domain",
    "format_address",
    "format_phone",
    "generate_audit_result",
    "generate_schema_org_nap",
    "normalize_address",
    "normalize_name",
    "normalize_phone",
    "require_valid_nap",
    "validate_nap",
    "ingestion",
    "orchestrator",
]
