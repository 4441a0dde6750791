import dataclasses

from nap_engine.models import Address, PhoneNumber
from nap_engine.schema import generate_schema_org_nap


def test_schema_projection_uses_primary_address_and_phone(canonical) -> None:
    assert generate_schema_org_nap(canonical) == {
        "name": "Acme Dental, LLC",
        "address": {
            "@type": "PostalAddress",
            "streetAddress": "123 Main Street, Suite 100",
            "addressLocality": "Springfield",
            "addressRegion": "IL",
            "postalCode": "62701",
            "addressCountry": "US",
        },
        "telephone": "+1 555-123-4567",
        "url": "https://www.acmedental.com",
    }


def test_schema_projection_without_street2_or_primary_flag(canonical) -> None:
    record = dataclasses.replace(
        canonical,
        addresses=[Address(street1="9 Elm Road", city="Shelbyville", state="IL", zip="62565")],
        phones=[PhoneNumber(raw="15550001111"), PhoneNumber(raw="5552223333")],
    )

    schema = generate_schema_org_nap(record)

    assert schema["address"]["streetAddress"] == "9 Elm Road"
    assert schema["telephone"] == "+1 555-000-1111"


def test_schema_projection_keeps_unformattable_phone(canonical) -> None:
    record = dataclasses.replace(canonical, phones=[PhoneNumber(raw="12345", is_primary=True)])

    assert generate_schema_org_nap(record)["telephone"] == "12345"


def test_schema_projection_is_total(canonical) -> None:
    record = dataclasses.replace(canonical, addresses=[], phones=[])

    schema = generate_schema_org_nap(record)

    assert schema["address"] == {"@type": "PostalAddress"}
    assert schema["telephone"] == ""
