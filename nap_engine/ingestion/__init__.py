"""Loading canonical records and citations, and exporting audit results."""

from .exporters import citations_to_dataframe, export_audit_result, summary_to_dataframe
from .loaders import (
    RecordFormatError,
    UnsupportedFileTypeError,
    canonical_from_mapping,
    citations_from_records,
    load_canonical_record,
    load_citations,
)

__all__ = [
    "RecordFormatError",
    "UnsupportedFileTypeError",
    "canonical_from_mapping",
    "citations_from_records",
    "citations_to_dataframe",
    "export_audit_result",
    "load_canonical_record",
    "load_citations",
    "summary_to_dataframe",
]
