"""Utilities for loading canonical records and citation spreadsheets."""
from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, MutableMapping, Optional, Sequence, Union

import pandas as pd

from ..config import ConfigurationError, load_configuration
from ..models import (
    Address,
    BusinessHours,
    BusinessName,
    DayHours,
    HolidayHours,
    NAPCitation,
    NAPData,
    PhoneNumber,
    PhoneType,
)
from ..normalize import format_phone, normalize_phone

LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]

_CITATION_FIELD_SYNONYMS: Mapping[str, Sequence[str]] = {
    "source": ("source", "directory", "site", "platform"),
    "url": ("url", "listing_url", "citation_url", "link"),
    "name": ("name", "business_name", "company"),
    "address": ("address", "full_address", "street_address"),
    "phone": ("phone", "phone_number", "telephone"),
    "website": ("website", "website_url", "homepage"),
    "last_checked": ("last_checked", "lastchecked", "checked_at"),
}


class UnsupportedFileTypeError(ValueError):
    """Raised when an unsupported file format is passed to the loader."""


class RecordFormatError(ValueError):
    """Raised when a canonical record document cannot be converted."""


# --- Canonical Records ---

def load_canonical_record(path: PathLike) -> NAPData:
    """Load a canonical NAP record from a JSON or YAML document."""

    file_path = Path(path)
    if not file_path.exists():
        raise RecordFormatError(f"Canonical record file '{file_path}' was not found")
    try:
        document = load_configuration(file_path)
    except ConfigurationError as exc:
        raise RecordFormatError(f"Canonical record '{file_path}' could not be read: {exc}") from exc
    return canonical_from_mapping(document)


def canonical_from_mapping(data: Mapping[str, Any]) -> NAPData:
    """Convert a parsed document into :class:`NAPData`.

    Keys may use the camelCase wire names (``isPrimary``) or snake_case.
    """

    addresses = [_address_from_mapping(item) for item in _get_list(data, "addresses")]
    phones = [_phone_from_mapping(item) for item in _get_list(data, "phones")]
    hours_data = data.get("hours")

    return NAPData(
        name=_name_from_value(data.get("name")),
        addresses=addresses,
        phones=phones,
        website=_clean_text(data.get("website")) or "",
        email=_clean_text(data.get("email")),
        hours=_hours_from_mapping(hours_data) if hours_data else None,
    )


def _name_from_value(value: Any) -> BusinessName:
    if isinstance(value, str):
        text = value.strip()
        return BusinessName(legal=text, preferred=text)
    if not isinstance(value, Mapping):
        raise RecordFormatError("Canonical record requires a 'name' mapping or string")
    variations = value.get("variations") or []
    return BusinessName(
        legal=_clean_text(value.get("legal")) or "",
        preferred=_clean_text(value.get("preferred")) or "",
        dba=_clean_text(value.get("dba")),
        variations=[str(item) for item in variations],
    )


def _address_from_mapping(value: Any) -> Address:
    if not isinstance(value, Mapping):
        raise RecordFormatError(f"Address entries must be mappings, got {type(value).__name__}")
    return Address(
        street1=_clean_text(_get(value, "street1", "street_1")) or "",
        street2=_clean_text(_get(value, "street2", "street_2")),
        city=_clean_text(value.get("city")) or "",
        state=_clean_text(value.get("state")) or "",
        zip=_clean_text(_get(value, "zip", "postal_code", "postalCode")) or "",
        country=(_clean_text(value.get("country")) or "US").upper(),
        neighborhood=_clean_text(value.get("neighborhood")),
        county=_clean_text(value.get("county")),
    )


def _phone_from_mapping(value: Any) -> PhoneNumber:
    if isinstance(value, (str, int)):
        value = {"raw": str(value)}
    if not isinstance(value, Mapping):
        raise RecordFormatError(f"Phone entries must be mappings or strings, got {type(value).__name__}")

    formatted = _clean_text(value.get("formatted"))
    raw = normalize_phone(_clean_text(value.get("raw")) or formatted)
    type_value = _clean_text(value.get("type")) or PhoneType.MAIN.value
    try:
        phone_type = PhoneType(type_value.lower())
    except ValueError as exc:
        raise RecordFormatError(f"Unknown phone type '{type_value}'") from exc

    return PhoneNumber(
        raw=raw,
        formatted=formatted or format_phone(raw),
        type=phone_type,
        is_primary=bool(_get(value, "is_primary", "isPrimary")),
    )


def _hours_from_mapping(value: Any) -> BusinessHours:
    if not isinstance(value, Mapping):
        raise RecordFormatError("'hours' must be a mapping")
    regular_data = value.get("regular") or {}
    if not isinstance(regular_data, Mapping):
        raise RecordFormatError(f"'hours.regular' must map days to hours, got {type(regular_data).__name__}")
    regular = {
        str(day).lower(): _day_hours_from_mapping(day_hours)
        for day, day_hours in regular_data.items()
        if day_hours
    }
    holiday_data = value.get("holidays") or []
    if isinstance(holiday_data, (str, Mapping)):
        raise RecordFormatError("'hours.holidays' must be a list")
    holidays = []
    for holiday in holiday_data:
        if not isinstance(holiday, Mapping):
            raise RecordFormatError(f"Holiday entries must be mappings, got {type(holiday).__name__}")
        hours = holiday.get("hours")
        holidays.append(
            HolidayHours(
                date=str(holiday.get("date", "")),
                hours=None if hours in (None, "closed") else _day_hours_from_mapping(hours),
                name=_clean_text(holiday.get("name")),
            )
        )
    return BusinessHours(regular=regular, timezone=_clean_text(value.get("timezone")) or "UTC", holidays=holidays)


def _day_hours_from_mapping(value: Any) -> DayHours:
    if not isinstance(value, Mapping):
        raise RecordFormatError(f"Day hours must be mappings, got {type(value).__name__}")
    breaks = []
    for item in value.get("breaks") or []:
        if not isinstance(item, Mapping) or "start" not in item or "end" not in item:
            raise RecordFormatError("Breaks must be mappings with 'start' and 'end'")
        breaks.append((str(item["start"]), str(item["end"])))
    return DayHours(open=str(value.get("open", "")), close=str(value.get("close", "")), breaks=breaks)


# --- Citations ---

def load_citations(
    path: PathLike,
    *,
    column_mapping: Optional[Mapping[str, str]] = None,
    sheet_name: Union[str, int, None] = 0,
    loader_kwargs: Optional[MutableMapping[str, Any]] = None,
) -> List[NAPCitation]:
    """Load discovered citations from a spreadsheet or JSON file.

    Parameters
    ----------
    path:
        Path to the CSV/TSV/XLSX/JSON file to be loaded.
    column_mapping:
        Optional mapping of :class:`NAPCitation` field names to column names.
        Unmapped fields are resolved through a table of common synonyms.
    sheet_name:
        Sheet selector passed to :func:`pandas.read_excel`. Ignored for other
        formats.
    loader_kwargs:
        Extra keyword arguments forwarded to :func:`pandas.read_csv` or
        :func:`pandas.read_excel`.
    """

    dataframe = _read_dataframe(path, sheet_name=sheet_name, loader_kwargs=loader_kwargs)
    mapping = dict(column_mapping or {})
    columns = {field: _resolve_column(field, dataframe.columns, mapping) for field in _CITATION_FIELD_SYNONYMS}

    citations: List[NAPCitation] = []
    for index, row in dataframe.iterrows():
        if _row_is_empty(row):
            LOGGER.debug("Skipping empty citation row %s", index)
            continue
        citations.append(_row_to_citation(row, columns))
    return citations


def citations_from_records(records: Iterable[Mapping[str, Any]]) -> List[NAPCitation]:
    """Convert already parsed citation mappings (for example a request body)."""

    dataframe = pd.DataFrame(list(records), dtype=object)
    columns = {field: _resolve_column(field, dataframe.columns, {}) for field in _CITATION_FIELD_SYNONYMS}
    return [_row_to_citation(row, columns) for _, row in dataframe.iterrows() if not _row_is_empty(row)]


def _read_dataframe(
    path: PathLike,
    *,
    sheet_name: Union[str, int, None] = 0,
    loader_kwargs: Optional[MutableMapping[str, Any]] = None,
) -> pd.DataFrame:
    loader_kwargs = dict(loader_kwargs or {})
    path_obj = Path(path)
    suffix = path_obj.suffix.lower()

    if suffix in {".csv", ".tsv"}:
        if suffix == ".tsv":
            loader_kwargs.setdefault("sep", "\t")
        loader_kwargs.setdefault("dtype", str)
        return pd.read_csv(path_obj, **loader_kwargs)

    if suffix in {".xls", ".xlsx", ".xlsm", ".xlsb"}:
        loader_kwargs.setdefault("dtype", str)
        engine = loader_kwargs.pop("engine", None) or "openpyxl"
        return pd.read_excel(path_obj, sheet_name=sheet_name, engine=engine, **loader_kwargs)

    if suffix == ".json":
        records = json.loads(path_obj.read_text(encoding="utf-8"))
        if isinstance(records, Mapping):
            records = records.get("citations", [])
        return pd.DataFrame(list(records), dtype=object)

    raise UnsupportedFileTypeError(f"Unsupported file extension: {path_obj.suffix}")


def _normalise_key(value: Any) -> str:
    return str(value).strip().lower().replace(" ", "_")


def _resolve_column(field: str, available_columns: Iterable[Any], mapping: Mapping[str, str]) -> Optional[str]:
    if field in mapping:
        return mapping[field]

    normalised = {_normalise_key(column): column for column in available_columns}
    for synonym in _CITATION_FIELD_SYNONYMS[field]:
        if synonym in normalised:
            return normalised[synonym]
    return None


def _row_to_citation(row: pd.Series, columns: Mapping[str, Optional[str]]) -> NAPCitation:
    values = {
        field: _clean_text(row[column]) if column is not None and column in row else None
        for field, column in columns.items()
    }
    return NAPCitation(
        source=values["source"] or "unknown",
        url=values["url"] or "",
        name=values["name"] or "",
        address=values["address"] or "",
        phone=values["phone"] or "",
        website=values["website"],
        last_checked=_parse_timestamp(values["last_checked"]),
    )


def _row_is_empty(row: pd.Series) -> bool:
    return all(_is_missing(value) or (isinstance(value, str) and not value.strip()) for value in row.values)


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    timestamp = pd.to_datetime(value, errors="coerce")
    if pd.isna(timestamp):
        LOGGER.debug("Ignoring unparsable timestamp %r", value)
        return None
    return timestamp.to_pydatetime()


def _get(mapping: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in mapping:
            return mapping[key]
    return None


def _get_list(mapping: Mapping[str, Any], key: str) -> List[Any]:
    value = mapping.get(key) or []
    if isinstance(value, (str, Mapping)):
        return [value]
    return list(value)


def _is_missing(value: Any) -> bool:
    if isinstance(value, (list, tuple, dict)):
        return False
    return bool(pd.isna(value))


def _clean_text(value: Any) -> Optional[str]:
    if value is None or _is_missing(value):
        return None
    text = str(value).strip()
    return text or None


__all__ = [
    "RecordFormatError",
    "UnsupportedFileTypeError",
    "canonical_from_mapping",
    "citations_from_records",
    "load_canonical_record",
    "load_citations",
]
