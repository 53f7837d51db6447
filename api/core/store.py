"""
Record store gateway over the asyncpg pool.

Mirrors the hosted-store contract the handlers were written against:
every call returns a `StoreResult` carrying rows, a count, an HTTP-like
status and an error. Query failures are reported in `StoreResult.error`
rather than raised, so callers decide how to surface them.

Rows are rendered with `to_jsonb(...)`, so values come back JSON-shaped
(timestamps as ISO strings, numerics as numbers).

Filters are column -> value equality. Values are always bound as parameters;
table names are allowlisted and column names must be plain identifiers.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping

import asyncpg

from . import db

TABLES = frozenset(
    {
        "businesses",
        "business_connections",
        "donations",
        "items",
        "profiles",
        "users",
        "verifications",
    }
)

# (table, embedded table) -> foreign key column on `table`.
RELATIONS: dict[tuple[str, str], str] = {
    ("business_connections", "businesses"): "business_id",
    ("business_connections", "profiles"): "profile_id",
}

_IDENTIFIER_RE = re.compile(r"^[a-z_][a-z0-9_]*$")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreErrorInfo:
    message: str
    code: str | None = None


@dataclass(frozen=True)
class StoreResult:
    data: Any = None
    count: int | None = None
    status: int = 200
    error: StoreErrorInfo | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and 200 <= self.status <= 299


def _ident(name: str) -> str:
    if not _IDENTIFIER_RE.match(name or ""):
        raise ValueError(f"Invalid identifier: {name!r}")
    return f'"{name}"'


def _table(name: str) -> str:
    if name not in TABLES:
        raise ValueError(f"Unknown table: {name!r}")
    return _ident(name)


def _where(
    filters: Mapping[str, Any] | None,
    *,
    alias: str,
    first_param: int = 1,
) -> tuple[str, list[Any]]:
    """
    Build ` WHERE ...` for equality filters.

    Columns are compared as text so one code path works for integer, uuid and
    text keys alike.
    """
    if not filters:
        return "", []

    clauses: list[str] = []
    args: list[Any] = []
    for column, value in filters.items():
        if value is None:
            clauses.append(f"{alias}.{_ident(column)} IS NULL")
            continue
        args.append(str(value))
        clauses.append(f"{alias}.{_ident(column)}::text = ${first_param + len(args) - 1}")
    return " WHERE " + " AND ".join(clauses), args


def _status_for(exc: Exception) -> int:
    code = str(getattr(exc, "sqlstate", "") or "")
    if code in {"23505", "23503"}:
        return 409
    if code.startswith("23") or code.startswith("22"):
        return 400
    if code == "42P01":
        return 404
    return 500


def _failure(table: str, operation: str, exc: Exception) -> StoreResult:
    message = str(exc).strip() or exc.__class__.__name__
    code = getattr(exc, "sqlstate", None)
    logger.warning("store_%s_failed table=%s code=%s error=%s", operation, table, code, message)
    return StoreResult(status=_status_for(exc), error=StoreErrorInfo(message=message, code=code))


def _rows(records: Iterable[asyncpg.Record]) -> list[dict[str, Any]]:
    return [json.loads(record["row"]) for record in records]


class RecordStore:
    def __init__(self, pool: Callable[[], asyncpg.Pool] = db.pool) -> None:
        self._pool = pool

    async def select(
        self,
        table: str,
        filters: Mapping[str, Any] | None = None,
        *,
        head: bool = False,
    ) -> StoreResult:
        """
        Select rows matching `filters`.

        With `head=True` only an exact row count is returned (no data).
        """
        target = _table(table)
        where, args = _where(filters, alias="t")
        pool = self._pool()

        try:
            if head:
                count = await pool.fetchval(f"SELECT count(*) FROM {target} AS t{where}", *args)
                return StoreResult(count=int(count or 0), status=200)

            records = await pool.fetch(
                f"SELECT to_jsonb(t)::text AS row FROM {target} AS t{where}",
                *args,
            )
        except (asyncpg.PostgresError, asyncpg.InterfaceError) as exc:
            return _failure(table, "select", exc)

        rows = _rows(records)
        return StoreResult(data=rows, count=len(rows), status=200)

    async def insert(
        self,
        table: str,
        row: Mapping[str, Any],
        *,
        embed: Iterable[str] = (),
    ) -> StoreResult:
        """
        Insert one row and return it.

        `embed` names related tables (see `RELATIONS`); each referenced row is
        attached to the result under the related table's name.
        """
        target = _table(table)
        if not row:
            raise ValueError("Insert payload is empty.")
        columns = ", ".join(_ident(column) for column in row)

        joined = "to_jsonb(inserted)"
        for index, related in enumerate(embed):
            fk = RELATIONS.get((table, related))
            if fk is None:
                raise ValueError(f"No relation from {table!r} to {related!r}.")
            alias = f"e{index}"
            joined += (
                f" || jsonb_build_object('{related}', "
                f"(SELECT to_jsonb({alias}) FROM {_table(related)} AS {alias} "
                f"WHERE {alias}.\"id\" = inserted.{_ident(fk)}))"
            )

        sql = f"""
            WITH inserted AS (
                INSERT INTO {target} ({columns})
                SELECT {columns} FROM jsonb_populate_record(NULL::{target}, $1::jsonb)
                RETURNING *
            )
            SELECT ({joined})::text AS row
            FROM inserted
        """
        pool = self._pool()
        try:
            record = await pool.fetchrow(sql, json.dumps(dict(row)))
        except (asyncpg.PostgresError, asyncpg.InterfaceError) as exc:
            return _failure(table, "insert", exc)

        if record is None:
            return StoreResult(status=500, error=StoreErrorInfo(message=f"Insert into {table} returned no row."))
        return StoreResult(data=json.loads(record["row"]), count=1, status=201)

    async def update(
        self,
        table: str,
        patch: Mapping[str, Any],
        filters: Mapping[str, Any],
    ) -> StoreResult:
        target = _table(table)
        if not patch:
            raise ValueError("Update patch is empty.")
        if not filters:
            raise ValueError("Refusing to update without a filter.")

        assignments = ", ".join(f"{_ident(column)} = r.{_ident(column)}" for column in patch)
        where, args = _where(filters, alias="t", first_param=2)
        sql = f"""
            UPDATE {target} AS t
            SET {assignments}
            FROM jsonb_populate_record(NULL::{target}, $1::jsonb) AS r
            {where}
            RETURNING to_jsonb(t)::text AS row
        """
        pool = self._pool()
        try:
            records = await pool.fetch(sql, json.dumps(dict(patch)), *args)
        except (asyncpg.PostgresError, asyncpg.InterfaceError) as exc:
            return _failure(table, "update", exc)

        rows = _rows(records)
        return StoreResult(data=rows, count=len(rows), status=200)

    async def delete(self, table: str, filters: Mapping[str, Any]) -> StoreResult:
        """
        Delete rows matching `filters`.

        Matching nothing is reported as an error so callers can surface it.
        """
        target = _table(table)
        if not filters:
            raise ValueError("Refusing to delete without a filter.")

        where, args = _where(filters, alias="t")
        pool = self._pool()
        try:
            records = await pool.fetch(
                f"DELETE FROM {target} AS t{where} RETURNING to_jsonb(t)::text AS row",
                *args,
            )
        except (asyncpg.PostgresError, asyncpg.InterfaceError) as exc:
            return _failure(table, "delete", exc)

        rows = _rows(records)
        if not rows:
            return StoreResult(
                count=0,
                status=404,
                error=StoreErrorInfo(message=f"No rows in {table} matched the filter."),
            )
        return StoreResult(data=rows, count=len(rows), status=200)
