import pytest

from nap_engine.models import Address
from nap_engine.normalize import (
    extract_domain,
    format_address,
    format_phone,
    normalize_address,
    normalize_name,
    normalize_phone,
    parse_domain,
    try_format_phone,
)

NAME_SAMPLES = [
    "Acme Dental, LLC",
    "  ACME   Dental Inc. ",
    "Acme Inc. Co",
    "Acme Dental Company, Inc",
    "Smith & Co.",
    "Taco",
    "",
    "!!!",
    "Joe's Pizza, Ltd.",
    "inc",
]

ADDRESS_SAMPLES = [
    "123 North Main Street, Suite 200",
    "500 Northeast Parkway Apt. 4",
    "nort.h 1st st.",
    "Unit 5 Building B Floor 2",
    "   ",
    "77 Westfield Road",
]


def test_normalize_name_strips_suffix_and_punctuation() -> None:
    assert normalize_name("Acme Dental, LLC") == "acme dental"
    assert normalize_name("  ACME   Dental Inc. ") == "acme dental"
    assert normalize_name("Joe's Pizza, Ltd.") == "joes pizza"


def test_normalize_name_only_strips_whole_word_suffixes() -> None:
    assert normalize_name("Taco") == "taco"
    assert normalize_name("Disco Limited") == "disco"


def test_normalize_name_strips_stacked_suffixes() -> None:
    assert normalize_name("Acme Inc. Co") == "acme"


def test_normalize_name_handles_missing_values() -> None:
    assert normalize_name("") == ""
    assert normalize_name(None) == ""


@pytest.mark.parametrize("value", NAME_SAMPLES)
def test_normalize_name_is_idempotent(value: str) -> None:
    once = normalize_name(value)
    assert normalize_name(once) == once


def test_normalize_address_applies_abbreviations() -> None:
    assert normalize_address("123 North Main Street, Suite 200") == "123 n main st, ste 200"
    assert normalize_address("500 Northeast Parkway Apt. 4") == "500 ne pkwy apt 4"
    assert normalize_address("Unit 5 Building B Floor 2") == "# 5 bldg b fl 2"


def test_normalize_address_matches_whole_words_only() -> None:
    assert normalize_address("77 Westfield Road") == "77 westfield rd"


def test_normalize_address_formats_structured_addresses() -> None:
    address = Address(
        street1="123 Main Street",
        street2="Suite 100",
        city="Springfield",
        state="IL",
        zip="62701",
    )

    assert normalize_address(address) == "123 main st, ste 100, springfield, il 62701"


@pytest.mark.parametrize("value", ADDRESS_SAMPLES)
def test_normalize_address_is_idempotent(value: str) -> None:
    once = normalize_address(value)
    assert normalize_address(once) == once


def test_normalize_phone() -> None:
    assert normalize_phone("(555) 123-4567") == "5551234567"
    assert normalize_phone("+1 555 123 4567") == "5551234567"
    assert normalize_phone("123-45") == "12345"
    assert normalize_phone("21234567890") == "21234567890"
    assert normalize_phone(None) == ""


def test_format_phone_styles() -> None:
    assert format_phone("5551234567") == "(555) 123-4567"
    assert format_phone("1-555-123-4567", "international") == "+1 555-123-4567"


def test_format_phone_returns_original_when_not_ten_digits() -> None:
    assert format_phone("ext. 12345") == "ext. 12345"
    assert try_format_phone("ext. 12345") is None


def test_format_phone_rejects_unknown_format() -> None:
    with pytest.raises(ValueError):
        format_phone("5551234567", "e164")


def test_format_address_layouts() -> None:
    address = Address(
        street1="123 Main Street",
        street2="Suite 100",
        city="Springfield",
        state="IL",
        zip="62701",
    )

    assert format_address(address) == "123 Main Street, Suite 100, Springfield, IL 62701"
    assert format_address(address, "multi") == "123 Main Street, Suite 100\nSpringfield, IL 62701"

    with pytest.raises(ValueError):
        format_address(address, "vertical")


def test_extract_domain_ignores_scheme_www_and_path() -> None:
    assert extract_domain("https://www.acmedental.com") == "acmedental.com"
    assert extract_domain("http://acmedental.com/contact") == "acmedental.com"
    assert extract_domain("HTTPS://WWW.AcmeDental.com:8443/x") == "acmedental.com"


def test_extract_domain_falls_back_to_raw_value() -> None:
    assert parse_domain("AcmeDental.com ") is None
    assert extract_domain("AcmeDental.com ") == "acmedental.com"
    assert parse_domain("http://[::1") is None
    assert extract_domain("http://[::1") == "http://[::1"
