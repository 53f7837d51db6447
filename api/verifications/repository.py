"""
Verification persistence helpers (via the record store gateway).
"""

from __future__ import annotations

from typing import Any, Mapping

from core.store import RecordStore, StoreResult

VERIFICATIONS = "verifications"
BUSINESSES = "businesses"
PROFILES = "profiles"
BUSINESS_CONNECTIONS = "business_connections"

ADMIN_CONNECTION = "admin"


async def list_verifications(store: RecordStore, filters: Mapping[str, Any] | None = None) -> StoreResult:
    return await store.select(VERIFICATIONS, filters or None)


async def get_verification(store: RecordStore, verification_id: str) -> StoreResult:
    return await store.select(VERIFICATIONS, {"id": verification_id})


async def insert_business(store: RecordStore, row: Mapping[str, Any]) -> StoreResult:
    return await store.insert(BUSINESSES, row)


async def insert_profile(store: RecordStore, row: Mapping[str, Any]) -> StoreResult:
    return await store.insert(PROFILES, row)


async def insert_business_connection(
    store: RecordStore,
    *,
    business_id: Any,
    profile_id: Any,
    connection_type: str = ADMIN_CONNECTION,
) -> StoreResult:
    return await store.insert(
        BUSINESS_CONNECTIONS,
        {
            "business_id": business_id,
            "profile_id": profile_id,
            "connection_type": connection_type,
        },
        embed=(BUSINESSES, PROFILES),
    )


async def delete_verification(store: RecordStore, verification_id: str) -> StoreResult:
    return await store.delete(VERIFICATIONS, {"id": verification_id})
