from __future__ import annotations

import pytest

from nap_engine.models import (
    Address,
    BusinessHours,
    BusinessName,
    DayHours,
    NAPCitation,
    NAPData,
    PhoneNumber,
    PhoneType,
)


@pytest.fixture()
def canonical() -> NAPData:
    return NAPData(
        name=BusinessName(legal="Acme Dental, LLC", preferred="Acme Dental, LLC", dba="Acme Dental"),
        addresses=[
            Address(
                street1="123 Main Street",
                street2="Suite 100",
                city="Springfield",
                state="IL",
                zip="62701",
            ),
            Address(street1="9 Elm Road", city="Shelbyville", state="IL", zip="62565"),
        ],
        phones=[
            PhoneNumber(raw="5550000000", formatted="(555) 000-0000", type=PhoneType.FAX),
            PhoneNumber(raw="5551234567", formatted="(555) 123-4567", is_primary=True),
        ],
        website="https://www.acmedental.com",
        hours=BusinessHours(
            regular={"monday": DayHours(open="09:00", close="17:00")},
            timezone="America/Chicago",
        ),
    )


@pytest.fixture()
def consistent_citation() -> NAPCitation:
    return NAPCitation(
        source="Yelp",
        url="https://www.yelp.com/biz/acme-dental",
        name="acme dental",
        address="123 Main St., Ste 100, Springfield, IL 62701",
        phone="555.123.4567",
        website="http://acmedental.com/contact",
    )
