"""
Caller resolution and identity lookup.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from core.errors import AuthenticationRequired, StoreError
from core.store import RecordStore

from . import repository, schemas, security

logger = logging.getLogger(__name__)


def caller_from_access_token(access_token: str, *, secret: str, algorithm: str) -> schemas.Caller:
    try:
        payload = security.decode_access_token(access_token, secret=secret, algorithm=algorithm)
    except security.AuthSecurityError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
        ) from exc

    subject = str(payload.get("sub") or "").strip()
    if not subject:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid access token subject.",
        )

    email = payload.get("email")
    return schemas.Caller(uid=subject, email=str(email) if email else None)


def require_caller(caller: schemas.Caller | None) -> schemas.Caller:
    if caller is None or not caller.uid:
        raise AuthenticationRequired()
    return caller


class IdentityLookup:
    """
    Resolves a caller uid to the stored user record.
    """

    def __init__(self, store: RecordStore) -> None:
        self.store = store

    async def get_user(self, uid: str) -> dict:
        res = await repository.get_user_by_id(self.store, uid)
        if res.error is not None:
            raise StoreError("Error fetching user")
        rows = res.data or []
        if not rows:
            logger.warning("identity_lookup_missing uid=%s", uid)
            raise StoreError("User not found")
        return rows[0]

    async def get_email(self, uid: str) -> str | None:
        user = await self.get_user(uid)
        email = user.get("email")
        return str(email) if email else None
