"""
Contact persistence (raw SQL).
"""

from __future__ import annotations

import asyncio
from typing import Any

from core.db import Database, WriteResult
from core.validation import CONTACT_SORT_FIELDS, SORT_ORDERS

CONTACT_COLUMNS = "id, name, email, message, created_at"


def build_list_statements(
    *,
    search: str | None,
    sort_field: str,
    sort_order: str,
    limit: int,
    offset: int,
) -> tuple[str, list[Any], str, list[Any]]:
    """
    Compose the paged data query and the matching count query.

    Returns (data_sql, data_args, count_sql, count_args). Both share the same
    WHERE clause; only the data query is ordered and paged. The ORDER BY
    column and direction come from a fixed allow-list, never from raw input.
    """
    if sort_field not in CONTACT_SORT_FIELDS:
        raise ValueError(f"Unsupported sort field: {sort_field!r}")
    if sort_order not in SORT_ORDERS:
        raise ValueError(f"Unsupported sort order: {sort_order!r}")

    filters: list[str] = []
    args: list[Any] = []

    term = (search or "").strip()
    if term:
        args.append(f"%{term}%")
        n = len(args)
        filters.append(f"(name ILIKE ${n} OR email ILIKE ${n} OR message ILIKE ${n})")

    where = f" WHERE {' AND '.join(filters)}" if filters else ""
    order = f"ORDER BY {sort_field} {sort_order.upper()}"
    if sort_field != "id":
        # Keep pages stable when the sort column has ties.
        order += f", id {sort_order.upper()}"

    data_sql = (
        f"SELECT {CONTACT_COLUMNS} FROM contact{where} {order} "
        f"LIMIT ${len(args) + 1} OFFSET ${len(args) + 2}"
    )
    count_sql = f"SELECT COUNT(*) AS total FROM contact{where}"
    return data_sql, [*args, limit, offset], count_sql, list(args)


class ContactRepository:
    def __init__(self, db: Database) -> None:
        self.db = db

    async def create(self, *, name: str, email: str, message: str) -> WriteResult:
        return await self.db.write_one(
            f"""
            INSERT INTO contact (name, email, message)
            VALUES ($1, $2, $3)
            RETURNING {CONTACT_COLUMNS}
            """,
            name,
            email,
            message,
        )

    async def list_page(
        self,
        *,
        search: str | None,
        sort_field: str,
        sort_order: str,
        limit: int,
        offset: int,
    ) -> tuple[list[dict], int]:
        data_sql, data_args, count_sql, count_args = build_list_statements(
            search=search,
            sort_field=sort_field,
            sort_order=sort_order,
            limit=limit,
            offset=offset,
        )
        rows, count_row = await asyncio.gather(
            self.db.fetch_all(data_sql, *data_args),
            self.db.fetch_one(count_sql, *count_args),
        )
        total = int(count_row["total"]) if count_row is not None else 0
        return rows, total

    async def get(self, contact_id: int) -> dict | None:
        return await self.db.fetch_one(
            f"""
            SELECT {CONTACT_COLUMNS}
            FROM contact
            WHERE id = $1
            """,
            contact_id,
        )

    async def replace(self, contact_id: int, *, name: str, email: str, message: str) -> WriteResult:
        return await self.db.write_one(
            f"""
            UPDATE contact
            SET name = $1, email = $2, message = $3
            WHERE id = $4
            RETURNING {CONTACT_COLUMNS}
            """,
            name,
            email,
            message,
            contact_id,
        )

    async def delete(self, contact_id: int) -> WriteResult:
        return await self.db.write_one(
            """
            DELETE FROM contact
            WHERE id = $1
            RETURNING id, name
            """,
            contact_id,
        )
