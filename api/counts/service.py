"""
Row counts for the admin dashboard.
"""

from __future__ import annotations

import asyncio
from dataclasses import asdict, dataclass

from auth.schemas import Caller
from auth.service import require_caller
from core.errors import StoreError
from core.store import RecordStore

# (table, title) in the order the dashboard shows them.
COUNTED_TABLES: tuple[tuple[str, str], ...] = (
    ("businesses", "Businesses"),
    ("verifications", "Verifications"),
    ("profiles", "Profiles"),
    ("donations", "Donations"),
    ("items", "Items"),
)


@dataclass(frozen=True)
class CountEntry:
    title: str
    count: int | None


class CountService:
    def __init__(self, store: RecordStore) -> None:
        self.store = store

    async def get_counts(self, caller: Caller | None) -> list[dict]:
        require_caller(caller)

        results = await asyncio.gather(
            *(self.store.select(table, head=True) for table, _ in COUNTED_TABLES)
        )
        if any(res.error is not None for res in results):
            raise StoreError("Error fetching counts")

        return [
            asdict(CountEntry(title=title, count=res.count))
            for (_, title), res in zip(COUNTED_TABLES, results)
        ]
