"""
Profile callable endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from auth import dependencies as auth_dependencies
from auth.schemas import Caller
from core.callable import CallableRequest, callable_result, get_callable_request
from core.dependencies import get_store
from core.store import RecordStore

from .service import ProfileService

router = APIRouter()


def get_profile_service(store: RecordStore = Depends(get_store)) -> ProfileService:
    return ProfileService(store)


@router.post("/getProfiles")
async def get_profiles(
    request: CallableRequest = Depends(get_callable_request),
    caller: Caller | None = Depends(auth_dependencies.get_current_caller),
    service: ProfileService = Depends(get_profile_service),
) -> dict:
    return callable_result(await service.list_profiles(caller))
