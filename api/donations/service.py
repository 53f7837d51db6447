"""
Queue-pin callback.

The donation queue calls back with the pin it was configured with. A matching
pin releases the donation (`claimed_by` is cleared). A wrong pin is dropped
silently so probing callers learn nothing about the pin.
"""

from __future__ import annotations

import logging
import secrets
from typing import Any

from pydantic import ValidationError

from core.errors import StoreError
from core.store import RecordStore

from . import schemas

DONATIONS = "donations"

logger = logging.getLogger(__name__)


class QueuePinService:
    def __init__(self, *, store: RecordStore, queue_pin: str) -> None:
        self.store = store
        self.queue_pin = (queue_pin or "").strip()

    def _pin_matches(self, candidate: str | int | None) -> bool:
        if not self.queue_pin or candidate is None:
            return False
        return secrets.compare_digest(str(candidate).encode("utf-8"), self.queue_pin.encode("utf-8"))

    async def handle_body(self, body: Any) -> bool:
        """
        Parse a raw callback body and handle it. A body that does not parse
        is treated like a wrong pin.
        """
        if not isinstance(body, dict):
            logger.warning("queue_pin_rejected reason=body_not_object")
            return False
        try:
            payload = schemas.QueuePinCallbackRequest.model_validate(body)
        except ValidationError:
            logger.warning("queue_pin_rejected reason=unparseable_body")
            return False
        return await self.handle(payload)

    async def handle(self, payload: schemas.QueuePinCallbackRequest) -> bool:
        """
        Return True when the donation was released.
        """
        donation_id = str(payload.donation_id).strip() if payload.donation_id is not None else ""

        if not self._pin_matches(payload.queue_pin):
            logger.warning("queue_pin_rejected donation_id=%s", donation_id or None)
            return False
        if not donation_id:
            logger.warning("queue_pin_missing_donation_id")
            return False

        res = await self.store.update(DONATIONS, {"claimed_by": None}, {"id": donation_id})
        if res.error is not None:
            raise StoreError(res.error.message or "Error releasing donation")

        logger.info("queue_pin_accepted donation_id=%s", donation_id)
        return True
