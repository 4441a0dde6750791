"""Export utilities for NAP audit results."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, List, MutableMapping, Optional, Union

import pandas as pd

from ..models import AnalyzedCitation, NAPAuditResult, NAPIssue, Severity
from .loaders import UnsupportedFileTypeError

PathLike = Union[str, Path]

_SEVERITY_ORDER = (Severity.CRITICAL, Severity.MAJOR, Severity.MINOR)


def export_audit_result(
    result: NAPAuditResult,
    path: PathLike,
    *,
    sheet_name: str = "Citations",
    exporter_kwargs: Optional[MutableMapping[str, object]] = None,
) -> Path:
    """Write an audit result to CSV/TSV, Excel, or JSON depending on the suffix."""

    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    suffix = output_path.suffix.lower()

    if suffix == ".json":
        output_path.write_text(json.dumps(result.as_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
        return output_path

    exporter_kwargs = dict(exporter_kwargs or {})
    dataframe = citations_to_dataframe(result.citations)

    if suffix in {".csv", ".tsv"}:
        if suffix == ".tsv":
            exporter_kwargs.setdefault("sep", "\t")
        dataframe.to_csv(output_path, index=False, **exporter_kwargs)
        return output_path

    if suffix in {".xlsx", ".xlsm"}:
        engine = exporter_kwargs.pop("engine", None) or "openpyxl"
        with pd.ExcelWriter(output_path, engine=engine) as writer:
            dataframe.to_excel(writer, index=False, sheet_name=sheet_name, **exporter_kwargs)
            summary_to_dataframe(result).to_excel(writer, index=False, sheet_name="Summary")
        return output_path

    raise UnsupportedFileTypeError(f"Unsupported export file extension: {suffix}")


def citations_to_dataframe(citations: Iterable[AnalyzedCitation]) -> pd.DataFrame:
    """One row per analyzed citation with its issues flattened into text."""

    columns = [
        "source",
        "url",
        "name",
        "address",
        "phone",
        "website",
        "last_checked",
        "consistency_score",
        "issue_count",
        "worst_severity",
        "issues",
    ]
    records = [_citation_to_row(citation) for citation in citations]
    return pd.DataFrame(records, columns=columns)


def summary_to_dataframe(result: NAPAuditResult) -> pd.DataFrame:
    rows: List[dict] = [
        {"metric": "overall_score", "value": result.overall_score},
        {"metric": "total_citations", "value": result.total_citations},
        {"metric": "consistent_citations", "value": result.consistent_citations},
        {"metric": "issues_found", "value": result.issues_found},
        {"metric": "audited_at", "value": result.audited_at.isoformat()},
    ]
    rows.extend({"metric": "recommendation", "value": text} for text in result.recommendations)
    return pd.DataFrame(rows, columns=["metric", "value"])


def _citation_to_row(citation: AnalyzedCitation) -> dict:
    return {
        "source": citation.source,
        "url": citation.url,
        "name": citation.name,
        "address": citation.address,
        "phone": citation.phone,
        "website": citation.website or "",
        "last_checked": citation.last_checked.isoformat() if citation.last_checked else "",
        "consistency_score": citation.consistency_score,
        "issue_count": len(citation.issues),
        "worst_severity": _worst_severity(citation.issues),
        "issues": "; ".join(_format_issue(issue) for issue in citation.issues),
    }


def _worst_severity(issues: Iterable[NAPIssue]) -> str:
    present = {issue.severity for issue in issues}
    for severity in _SEVERITY_ORDER:
        if severity in present:
            return severity.value
    return ""


def _format_issue(issue: NAPIssue) -> str:
    return f'{issue.field.value} [{issue.severity.value}]: {issue.description} ("{issue.found}" -> "{issue.expected}")'


__all__ = ["citations_to_dataframe", "export_audit_result", "summary_to_dataframe"]
