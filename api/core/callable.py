"""
Callable-function wire protocol.

Request body:  {"data": {...}}        (data may be omitted or null)
Success body:  {"result": <any JSON>}
Error body:    {"error": {"status": "INVALID_ARGUMENT", "message": "..."}}
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import Body, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .errors import CallableError, InvalidArgument

logger = logging.getLogger(__name__)


class CallableRequest(BaseModel):
    data: Any = None

    @classmethod
    def from_body(cls, body: Any) -> "CallableRequest":
        if isinstance(body, dict):
            return cls(data=body.get("data"))
        return cls()

    def payload(self) -> dict[str, Any]:
        # Anything but a JSON object carries no arguments.
        return self.data if isinstance(self.data, dict) else {}


async def get_callable_request(body: Any = Body(default=None)) -> CallableRequest:
    """
    Accept any JSON body so the caller check in each operation runs before
    the arguments are looked at.
    """
    return CallableRequest.from_body(body)


def callable_result(value: Any) -> dict[str, Any]:
    return {"result": value}


async def callable_error_handler(request: Request, exc: CallableError) -> JSONResponse:
    if exc.http_status >= 500:
        logger.error("callable_failed path=%s status=%s message=%s", request.url.path, exc.status, exc.message)
    else:
        logger.info("callable_rejected path=%s status=%s message=%s", request.url.path, exc.status, exc.message)
    return JSONResponse(status_code=exc.http_status, content=exc.to_payload())


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Only a body that is not valid JSON gets this far.
    return await callable_error_handler(request, InvalidArgument("Request body is not valid JSON."))
