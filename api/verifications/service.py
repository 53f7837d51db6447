"""
Business-verification workflow.

A verification is a pending claim that a person represents a business.
Accepting one turns it into three rows:

1) a business (built from Places details)
2) a profile for the submitter
3) a business_connection linking the two

and then deletes the pending verification. Each step commits on its own;
there is no transaction around the sequence and nothing is rolled back when
a later step fails. Rows created before a failure are logged as orphaned.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import asdict
from typing import Any

from auth.schemas import Caller
from auth.service import IdentityLookup, require_caller
from core.casing import keys_to_camel
from core.errors import ExternalUnavailable, InvalidArgument, StoreError
from core.places import PlaceDetails, PlacesClient
from core.store import RecordStore, StoreResult

from . import repository, schemas

logger = logging.getLogger(__name__)


def _require_verification_id(value: Any) -> str:
    if value is None:
        raise InvalidArgument("verificationId is required.")
    # Row ids arrive as JSON strings or integers; anything else is rejected.
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise InvalidArgument("verificationId must be a string or an integer.")
    verification_id = str(value).strip()
    if not verification_id:
        raise InvalidArgument("verificationId is required.")
    return verification_id


def _check_insert(res: StoreResult, default_message: str) -> dict[str, Any]:
    if not res.ok or not isinstance(res.data, dict):
        message = res.error.message if res.error is not None else ""
        raise StoreError(message or default_message)
    return res.data


class VerificationService:
    def __init__(
        self,
        *,
        store: RecordStore,
        places: PlacesClient,
        identity: IdentityLookup,
        list_filter: schemas.VerificationFilter | None = None,
    ) -> None:
        self.store = store
        self.places = places
        self.identity = identity
        self.list_filter = list_filter or schemas.VerificationFilter()

    async def _fetch(self, verification_id: str) -> dict[str, Any]:
        res = await repository.get_verification(self.store, verification_id)
        if res.error is not None:
            raise StoreError(res.error.message or "Error fetching verification")
        rows = res.data or []
        if not rows:
            raise StoreError("Verification not found")
        return rows[0]

    async def _details(self, place_id: str | None) -> PlaceDetails:
        details = await self.places.get_details(place_id or "")
        # A listed website is what marks a place as a real, operating business.
        if details is None or not details.website:
            raise ExternalUnavailable("Business details are unavailable.")
        return details

    async def list_verifications(self, caller: Caller | None) -> list[dict[str, Any]]:
        """
        Verifications that have a submitter, each tagged with `user_email`.

        `user_email` is the *caller's* email on every row, not the
        submitter's.
        """
        caller = require_caller(caller)

        res = await repository.list_verifications(self.store, self.list_filter.as_filters())
        if res.error is not None:
            raise StoreError("Error fetching verifications")

        rows = [row for row in (res.data or []) if row.get("auth_id")]
        if not rows:
            return []

        # TODO: confirm with product whether this should be each row's submitter email.
        user_email = await self.identity.get_email(caller.uid)
        return [{**row, "user_email": user_email} for row in rows]

    async def get_verification(self, caller: Caller | None, verification_id: Any) -> dict[str, Any]:
        caller = require_caller(caller)
        verification_id = _require_verification_id(verification_id)

        verification = await self._fetch(verification_id)
        details = await self._details(verification.get("place_id"))
        user_email = await self.identity.get_email(caller.uid)

        enriched = {
            **verification,
            "address": asdict(schemas.BusinessAddress.from_details(details)),
            "user_email": user_email,
        }
        return keys_to_camel(enriched)

    async def accept_verification(self, caller: Caller | None, verification_id: Any) -> dict[str, Any]:
        require_caller(caller)
        verification_id = _require_verification_id(verification_id)

        verification = await self._fetch(verification_id)
        details = await self._details(verification.get("place_id"))

        business_res, profile_res = await asyncio.gather(
            repository.insert_business(self.store, schemas.business_row(details)),
            repository.insert_profile(self.store, schemas.profile_row(verification)),
        )
        created: dict[str, Any] = {}
        if isinstance(business_res.data, dict):
            created["business_id"] = business_res.data.get("id")
        if isinstance(profile_res.data, dict):
            created["profile_id"] = profile_res.data.get("id")

        try:
            business = _check_insert(business_res, "Error creating business")
            profile = _check_insert(profile_res, "Error creating profile")

            connection_res = await repository.insert_business_connection(
                self.store,
                business_id=business.get("id"),
                profile_id=profile.get("id"),
            )
            connection = _check_insert(connection_res, "Error creating business connection")
            created["business_connection_id"] = connection.get("id")

            delete_res = await repository.delete_verification(self.store, verification_id)
            if delete_res.error is not None:
                raise StoreError(delete_res.error.message or "Error deleting verification")
        except StoreError:
            if created:
                logger.warning(
                    "verification_accept_incomplete id=%s orphaned=%s",
                    verification_id,
                    created,
                )
            raise

        logger.info(
            "verification_accepted id=%s place_id=%s business_id=%s profile_id=%s",
            verification_id,
            details.place_id,
            created.get("business_id"),
            created.get("profile_id"),
        )
        return keys_to_camel(connection)

    async def decline_verification(self, caller: Caller | None, verification_id: Any) -> None:
        require_caller(caller)
        verification_id = _require_verification_id(verification_id)

        res = await repository.delete_verification(self.store, verification_id)
        if res.error is not None:
            raise StoreError(res.error.message or "Error deleting verification")

        logger.info("verification_declined id=%s", verification_id)
        return None
