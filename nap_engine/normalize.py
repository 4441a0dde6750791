"""Canonicalisation helpers that turn raw NAP strings into comparable forms."""
from __future__ import annotations

import re
from typing import Optional, Tuple, Union
from urllib.parse import urlsplit

from .models import Address

PHONE_FORMATS = ("us", "international")
ADDRESS_LAYOUTS = ("single", "multi")

_WHITESPACE_RE = re.compile(r"\s+")
_PUNCTUATION_RE = re.compile(r"[^\w\s]")
_NON_DIGIT_RE = re.compile(r"[^0-9]")
_CORPORATE_SUFFIX_RE = re.compile(
    r"(?:^|\s)(?:inc|llc|ltd|corp|co|company|incorporated|limited)$"
)

# Multi-word directions come before their single-word prefixes.
_ADDRESS_ABBREVIATIONS: Tuple[Tuple[str, str], ...] = (
    # street types
    ("street", "st"),
    ("avenue", "ave"),
    ("boulevard", "blvd"),
    ("drive", "dr"),
    ("road", "rd"),
    ("lane", "ln"),
    ("court", "ct"),
    ("place", "pl"),
    ("circle", "cir"),
    ("highway", "hwy"),
    ("parkway", "pkwy"),
    # unit types
    ("suite", "ste"),
    ("apartment", "apt"),
    ("unit", "#"),
    ("building", "bldg"),
    ("floor", "fl"),
    # directions
    ("northeast", "ne"),
    ("northwest", "nw"),
    ("southeast", "se"),
    ("southwest", "sw"),
    ("north", "n"),
    ("south", "s"),
    ("east", "e"),
    ("west", "w"),
)
_ADDRESS_PATTERNS = tuple(
    (re.compile(rf"\b{word}\b"), abbreviation) for word, abbreviation in _ADDRESS_ABBREVIATIONS
)


def _collapse_whitespace(value: str) -> str:
    return _WHITESPACE_RE.sub(" ", value).strip()


def normalize_name(name: Optional[str]) -> str:
    """Lower-case a business name and drop punctuation and corporate suffixes.

    ``"Acme Dental, LLC"`` and ``"acme dental"`` both normalise to
    ``"acme dental"``. Suffixes are stripped until none remain so that the
    function is idempotent (``"Acme Inc. Co"`` becomes ``"acme"``).
    """

    text = _PUNCTUATION_RE.sub("", (name or "").lower())
    text = _collapse_whitespace(text)
    while True:
        stripped = _CORPORATE_SUFFIX_RE.sub("", text).strip()
        if stripped == text:
            return text
        text = stripped


def normalize_address(address: Union[Address, str, None]) -> str:
    """Return a lower-case address with USPS style abbreviations applied."""

    if isinstance(address, Address):
        text = format_address(address)
    else:
        text = address or ""

    text = _collapse_whitespace(text.lower().replace(".", ""))
    for pattern, abbreviation in _ADDRESS_PATTERNS:
        text = pattern.sub(abbreviation, text)
    return _collapse_whitespace(text)


def normalize_phone(phone: Optional[str]) -> str:
    """Strip a phone number down to its digits, dropping a leading US ``1``.

    Numbers of any other length are returned as bare digits rather than being
    rejected.
    """

    digits = _NON_DIGIT_RE.sub("", phone or "")
    if len(digits) == 11 and digits.startswith("1"):
        return digits[1:]
    return digits


def try_format_phone(phone: Optional[str], fmt: str = "us") -> Optional[str]:
    """Format a 10 digit number, returning ``None`` when it cannot be formatted."""

    if fmt not in PHONE_FORMATS:
        raise ValueError(f"Unsupported phone format '{fmt}'. Supported formats: {PHONE_FORMATS}")

    digits = normalize_phone(phone)
    if len(digits) != 10:
        return None

    area, exchange, line = digits[:3], digits[3:6], digits[6:]
    if fmt == "us":
        return f"({area}) {exchange}-{line}"
    return f"+1 {area}-{exchange}-{line}"


def format_phone(phone: str, fmt: str = "us") -> str:
    """Format a phone number for display, or return it unchanged if it is not 10 digits."""

    formatted = try_format_phone(phone, fmt)
    if formatted is None:
        return phone
    return formatted


def format_address(address: Address, layout: str = "single") -> str:
    """Render a structured address on one line or as two lines."""

    if layout not in ADDRESS_LAYOUTS:
        raise ValueError(f"Unsupported address layout '{layout}'. Supported layouts: {ADDRESS_LAYOUTS}")

    streets = ", ".join(part for part in (address.street1, address.street2) if part)
    locality = f"{address.city}, {address.state} {address.zip}"
    if layout == "multi":
        return "\n".join([streets, locality])
    return ", ".join(part for part in (streets, locality) if part)


def parse_domain(url: Optional[str]) -> Optional[str]:
    """Return the host of an absolute URL without a leading ``www.``.

    ``None`` signals that the value is not a parsable absolute URL.
    """

    text = (url or "").strip()
    try:
        parsed = urlsplit(text)
        hostname = parsed.hostname
    except ValueError:
        return None
    if not parsed.scheme or not hostname:
        return None
    hostname = hostname.lower()
    if hostname.startswith("www."):
        hostname = hostname[len("www."):]
    return hostname


def extract_domain(url: Optional[str]) -> str:
    """Domain used for website comparison; unparsable values are used verbatim."""

    domain = parse_domain(url)
    if domain is None:
        return (url or "").strip().lower()
    return domain


__all__ = [
    "ADDRESS_LAYOUTS",
    "PHONE_FORMATS",
    "extract_domain",
    "format_address",
    "format_phone",
    "normalize_address",
    "normalize_name",
    "normalize_phone",
    "parse_domain",
    "try_format_phone",
]
