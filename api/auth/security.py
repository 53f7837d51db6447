"""
Access-token helpers (HS256 JWT).

Tokens are issued by the identity provider; this service only verifies them.
`build_access_token` exists for local tooling and tests.
"""

from __future__ import annotations

import time
from typing import Any

import jwt


class AuthSecurityError(RuntimeError):
    pass


def now_epoch_s() -> int:
    return int(time.time())


def build_access_token(
    *,
    uid: str,
    secret: str,
    algorithm: str = "HS256",
    email: str | None = None,
    expires_in_s: int = 15 * 60,
) -> str:
    issued_at = now_epoch_s()
    payload: dict[str, Any] = {
        "sub": str(uid),
        "type": "access",
        "iat": issued_at,
        "exp": issued_at + expires_in_s,
    }
    if email:
        payload["email"] = email
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_access_token(token: str, *, secret: str, algorithm: str = "HS256") -> dict[str, Any]:
    raw = (token or "").strip()
    if not raw:
        raise AuthSecurityError("Access token is empty.")

    try:
        payload = jwt.decode(raw, secret, algorithms=[algorithm])
    except jwt.InvalidTokenError as exc:
        raise AuthSecurityError("Invalid access token.") from exc

    token_type = str(payload.get("type") or "").strip().lower()
    if token_type != "access":
        raise AuthSecurityError("Token is not an access token.")

    return payload
