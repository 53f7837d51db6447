"""
Verification callable endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from auth import dependencies as auth_dependencies
from auth.schemas import Caller
from auth.service import IdentityLookup
from core.callable import CallableRequest, callable_result, get_callable_request
from core.config import Settings
from core.dependencies import get_places, get_settings, get_store
from core.places import PlacesClient
from core.store import RecordStore

from . import schemas
from .service import VerificationService

router = APIRouter()


def get_verification_service(
    settings: Settings = Depends(get_settings),
    store: RecordStore = Depends(get_store),
    places: PlacesClient = Depends(get_places),
    identity: IdentityLookup = Depends(auth_dependencies.get_identity_lookup),
) -> VerificationService:
    return VerificationService(
        store=store,
        places=places,
        identity=identity,
        list_filter=schemas.VerificationFilter(
            verification_mode=settings.verification_list_mode or None,
            connection_type=settings.verification_list_connection_type or None,
        ),
    )


@router.post("/getVerifications")
async def get_verifications(
    request: CallableRequest = Depends(get_callable_request),
    caller: Caller | None = Depends(auth_dependencies.get_current_caller),
    service: VerificationService = Depends(get_verification_service),
) -> dict:
    return callable_result(await service.list_verifications(caller))


@router.post("/getVerification")
async def get_verification(
    request: CallableRequest = Depends(get_callable_request),
    caller: Caller | None = Depends(auth_dependencies.get_current_caller),
    service: VerificationService = Depends(get_verification_service),
) -> dict:
    verification_id = request.payload().get("verificationId")
    return callable_result(await service.get_verification(caller, verification_id))


@router.post("/acceptVerification")
async def accept_verification(
    request: CallableRequest = Depends(get_callable_request),
    caller: Caller | None = Depends(auth_dependencies.get_current_caller),
    service: VerificationService = Depends(get_verification_service),
) -> dict:
    verification_id = request.payload().get("verificationId")
    return callable_result(await service.accept_verification(caller, verification_id))


@router.post("/declineVerification")
async def decline_verification(
    request: CallableRequest = Depends(get_callable_request),
    caller: Caller | None = Depends(auth_dependencies.get_current_caller),
    service: VerificationService = Depends(get_verification_service),
) -> dict:
    verification_id = request.payload().get("verificationId")
    return callable_result(await service.decline_verification(caller, verification_id))
