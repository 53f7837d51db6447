"""
Donation queue HTTP callback (unauthenticated).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response

from core.config import Settings
from core.dependencies import get_settings, get_store
from core.store import RecordStore

from .service import QueuePinService

router = APIRouter()


def get_queue_pin_service(
    settings: Settings = Depends(get_settings),
    store: RecordStore = Depends(get_store),
) -> QueuePinService:
    return QueuePinService(store=store, queue_pin=settings.queue_pin)


@router.post("/queuePinCallback")
async def queue_pin_callback(
    request: Request,
    service: QueuePinService = Depends(get_queue_pin_service),
) -> Response:
    # The body is read by hand so malformed input gets the same empty
    # response as a wrong pin.
    try:
        body = await request.json()
    except ValueError:
        body = None
    await service.handle_body(body)
    return Response(status_code=200)
