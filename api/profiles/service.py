from __future__ import annotations

from auth.schemas import Caller
from auth.service import require_caller
from core.errors import StoreError
from core.store import RecordStore

PROFILES = "profiles"


class ProfileService:
    def __init__(self, store: RecordStore) -> None:
        self.store = store

    async def list_profiles(self, caller: Caller | None) -> list[dict]:
        require_caller(caller)

        res = await self.store.select(PROFILES)
        if res.error is not None:
            raise StoreError("Error fetching profiles")
        return list(res.data or [])
