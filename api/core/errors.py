"""
Callable error taxonomy.

Services raise these; `api/main.py` turns them into the callable error
envelope: {"error": {"status": "INVALID_ARGUMENT", "message": "..."}}.
"""

from __future__ import annotations

from typing import Any


class CallableError(RuntimeError):
    kind = "internal"
    http_status = 500
    default_message = "Internal error."

    def __init__(self, message: str | None = None) -> None:
        self.message = (message or "").strip() or self.default_message
        super().__init__(self.message)

    @property
    def status(self) -> str:
        return self.kind.upper().replace("-", "_")

    def to_payload(self) -> dict[str, Any]:
        return {"error": {"status": self.status, "message": self.message}}


class AuthenticationRequired(CallableError):
    kind = "failed-precondition"
    http_status = 400
    default_message = "The function must be called while authenticated."


class InvalidArgument(CallableError):
    kind = "invalid-argument"
    http_status = 400
    default_message = "Invalid argument."


class StoreError(CallableError):
    kind = "internal"
    http_status = 500
    default_message = "Error accessing the database."


class ExternalUnavailable(CallableError):
    kind = "unavailable"
    http_status = 503
    default_message = "Business details are unavailable."
