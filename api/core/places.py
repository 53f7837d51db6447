"""
Google Places details client.

Used endpoint:
- GET /maps/api/place/details/json?fields=...&place_id=...&key=...
      -> {"result": {"address_components": [...], "geometry": {...}, ...}, "status": "OK"}

Lookups never raise: any failure is logged and reported as `None`, which
callers treat as "no details available".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

DETAILS_PATH = "/maps/api/place/details/json"
DETAILS_FIELDS = (
    "geometry",
    "address_components",
    "international_phone_number",
    "website",
    "business_status",
    "name",
)

# Component type -> (PlaceAddress attribute, which name to keep).
# Order matters: the first type a component carries decides where it goes.
_COMPONENT_FIELDS: tuple[tuple[str, str, str], ...] = (
    ("locality", "city", "long_name"),
    ("administrative_area_level_1", "state", "short_name"),
    ("country", "country", "long_name"),
    ("postal_code", "postal_code", "long_name"),
    ("route", "address", "long_name"),
    ("street_number", "street_number", "long_name"),
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlaceAddress:
    street_number: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None


@dataclass(frozen=True)
class PlaceDetails:
    place_id: str
    name: str | None
    address: PlaceAddress = field(default_factory=PlaceAddress)
    location: dict[str, float] = field(default_factory=dict)
    business_status: str | None = None
    international_phone_number: str | None = None
    website: str | None = None

    @property
    def lat(self) -> float | None:
        return self.location.get("lat")

    @property
    def lng(self) -> float | None:
        return self.location.get("lng")


def reduce_address_components(components: Any) -> PlaceAddress:
    """
    Fold Places `address_components` into a flat address.

    Unknown component types are skipped; a partial address is fine.
    """
    values: dict[str, str] = {}
    if not isinstance(components, list):
        return PlaceAddress()

    for component in components:
        if not isinstance(component, dict):
            continue
        types = component.get("types") or []
        for component_type, attr, name_key in _COMPONENT_FIELDS:
            if component_type in types:
                values[attr] = component.get(name_key)
                break

    return PlaceAddress(**values)


def parse_details(place_id: str, data: dict[str, Any]) -> PlaceDetails | None:
    result = data.get("result")
    if not isinstance(result, dict):
        return None

    geometry = result.get("geometry") or {}
    location = geometry.get("location") if isinstance(geometry, dict) else None

    return PlaceDetails(
        place_id=place_id,
        name=result.get("name"),
        address=reduce_address_components(result.get("address_components")),
        location=dict(location) if isinstance(location, dict) else {},
        business_status=result.get("business_status"),
        international_phone_number=result.get("international_phone_number"),
        website=result.get("website"),
    )


class PlacesClient:
    def __init__(
        self,
        *,
        api_key: str,
        base_url: str = "https://maps.googleapis.com",
        timeout_s: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = (base_url or "").strip().rstrip("/")
        self.timeout_s = timeout_s
        self._transport = transport

    async def get_details(self, place_id: str) -> PlaceDetails | None:
        place_id = (place_id or "").strip()
        if not place_id:
            return None

        params = {
            "fields": ",".join(DETAILS_FIELDS),
            "place_id": place_id,
            "key": self.api_key,
        }
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout_s,
                transport=self._transport,
            ) as client:
                resp = await client.get(DETAILS_PATH, params=params)
        except httpx.HTTPError as exc:
            logger.warning("place_details_request_failed place_id=%s error=%s", place_id, exc)
            return None

        if resp.status_code != 200:
            logger.warning(
                "place_details_bad_status place_id=%s status=%s body=%s",
                place_id,
                resp.status_code,
                resp.text[:300],
            )
            return None

        try:
            data = resp.json()
        except ValueError:
            logger.warning("place_details_invalid_json place_id=%s", place_id)
            return None

        if not isinstance(data, dict):
            return None

        details = parse_details(place_id, data)
        if details is None:
            logger.info("place_details_empty place_id=%s api_status=%s", place_id, data.get("status"))
        return details
