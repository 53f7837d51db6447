"""
Verification record shapes and insert payload builders.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from core.places import PlaceDetails


@dataclass(frozen=True)
class VerificationFilter:
    verification_mode: str | None = None
    connection_type: str | None = None

    def as_filters(self) -> dict[str, str]:
        filters: dict[str, str] = {}
        if self.verification_mode:
            filters["verification_mode"] = self.verification_mode
        if self.connection_type:
            filters["connection_type"] = self.connection_type
        return filters


@dataclass(frozen=True)
class BusinessAddress:
    business_name: str | None
    address: str | None
    street_number: str | None
    city: str | None
    postal_code: str | None
    state: str | None
    country: str | None
    lat: float | None
    lon: float | None

    @classmethod
    def from_details(cls, details: PlaceDetails) -> "BusinessAddress":
        return cls(
            business_name=details.name,
            address=details.address.address,
            street_number=details.address.street_number,
            city=details.address.city,
            postal_code=details.address.postal_code,
            state=details.address.state,
            country=details.address.country,
            lat=details.lat,
            lon=details.lng,
        )


def business_row(details: PlaceDetails) -> dict[str, Any]:
    return {
        "place_id": details.place_id,
        "name": details.name,
        "street_number": details.address.street_number,
        "address": details.address.address,
        "city": details.address.city,
        "state": details.address.state,
        "postal_code": details.address.postal_code,
        "country": details.address.country,
        "lat": details.lat,
        "lon": details.lng,
    }


def profile_row(verification: dict[str, Any]) -> dict[str, Any]:
    return {
        "auth_id": verification.get("auth_id"),
        "email": verification.get("verification_email"),
    }
