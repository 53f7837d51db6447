"""
Identity persistence helpers.
"""

from __future__ import annotations

from core.store import RecordStore, StoreResult

USERS_TABLE = "users"


async def get_user_by_id(store: RecordStore, uid: str) -> StoreResult:
    return await store.select(USERS_TABLE, {"id": uid})
