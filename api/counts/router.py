"""
Count callable endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from auth import dependencies as auth_dependencies
from auth.schemas import Caller
from core.callable import CallableRequest, callable_result, get_callable_request
from core.dependencies import get_store
from core.store import RecordStore

from .service import CountService

router = APIRouter()


def get_count_service(store: RecordStore = Depends(get_store)) -> CountService:
    return CountService(store)


@router.post("/getCounts")
async def get_counts(
    request: CallableRequest = Depends(get_callable_request),
    caller: Caller | None = Depends(auth_dependencies.get_current_caller),
    service: CountService = Depends(get_count_service),
) -> dict:
    return callable_result(await service.get_counts(caller))
