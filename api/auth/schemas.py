"""
Auth schemas.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class Caller(BaseModel):
    """
    Identity resolved from the bearer token of an inbound call.
    """

    uid: str = Field(..., min_length=1)
    email: str | None = None
