"""Projection of the canonical record into schema.org NAP properties."""
from __future__ import annotations

from typing import Any, Dict

from .models import NAPData
from .normalize import format_phone


def generate_schema_org_nap(nap: NAPData) -> Dict[str, Any]:
    """Return ``name``, ``address``, ``telephone`` and ``url`` for structured data.

    Uses the primary address and the primary (or first) phone. Missing values
    become empty strings so the projection never fails.
    """

    address = nap.primary_address
    phone = nap.primary_phone

    postal_address: Dict[str, Any] = {"@type": "PostalAddress"}
    if address is not None:
        street = f"{address.street1}, {address.street2}" if address.street2 else address.street1
        postal_address.update(
            {
                "streetAddress": street,
                "addressLocality": address.city,
                "addressRegion": address.state,
                "postalCode": address.zip,
                "addressCountry": address.country,
            }
        )

    return {
        "name": nap.name.preferred,
        "address": postal_address,
        "telephone": format_phone(phone.raw, "international") if phone is not None else "",
        "url": nap.website,
    }


__all__ = ["generate_schema_org_nap"]
