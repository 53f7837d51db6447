"""
Auth dependencies for callable routes.

A missing Authorization header resolves to `None` so each operation can
report the callable "failed-precondition" error itself. A header that is
present but malformed or carries an invalid token is rejected here with 401.
"""

from __future__ import annotations

from fastapi import Depends, Header, HTTPException, status

from core.config import Settings
from core.dependencies import get_settings, get_store
from core.store import RecordStore

from . import schemas, service


def _extract_bearer_token(authorization: str) -> str:
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid Authorization header format.",
        )

    scheme, token = parts[0].strip().lower(), parts[1].strip()
    if scheme != "bearer" or not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization must be: Bearer <token>.",
        )
    return token


async def get_current_caller(
    authorization: str | None = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> schemas.Caller | None:
    if not (authorization or "").strip():
        return None
    token = _extract_bearer_token(authorization)
    return service.caller_from_access_token(
        token,
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )


def get_identity_lookup(store: RecordStore = Depends(get_store)) -> service.IdentityLookup:
    return service.IdentityLookup(store)
