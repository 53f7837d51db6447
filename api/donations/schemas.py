"""
Donation queue callback payload.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class QueuePinCallbackRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    donation_id: str | int | None = Field(default=None, alias="donationId")
    queue_pin: str | int | None = Field(default=None, alias="queuePin")
