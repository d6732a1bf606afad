"""
Async database access (raw SQL) using asyncpg.

`Database` owns a connection pool. The app creates one in its lifespan (see
`api/main.py`) and hands it to request handlers through
`core.dependencies.get_db`, so tests can pass their own.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import json
import logging
import ssl
from dataclasses import dataclass
from enum import Enum
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

logger = logging.getLogger(__name__)


class StorageErrorKind(str, Enum):
    CONFLICT = "conflict"
    FAILURE = "failure"


@dataclass(frozen=True)
class WriteResult:
    """
    Outcome of an INSERT/UPDATE/DELETE ... RETURNING statement.

    `row` is None either when nothing matched or when `error` is set.
    """

    row: dict[str, Any] | None = None
    error: StorageErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def _ssl_context(mode: str) -> ssl.SSLContext | None:
    if mode != "require":
        return None
    # Hosted Postgres (Supabase & co.) terminates TLS with certs we don't pin.
    ctx = ssl.create_default_context()
    ctx.check_hostname = False
    ctx.verify_mode = ssl.CERT_NONE
    return ctx


async def _init_connection(conn: asyncpg.Connection) -> None:
    # Decode json/jsonb columns (projects.stats) into Python objects.
    for type_name in ("json", "jsonb"):
        await conn.set_type_codec(
            type_name,
            encoder=json.dumps,
            decoder=json.loads,
            schema="pg_catalog",
        )


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


class Database:
    def __init__(self, pool: asyncpg.Pool) -> None:
        self._pool = pool

    @classmethod
    async def connect(
        cls,
        dsn: str,
        *,
        ssl_mode: str = "disable",
        min_size: int = 1,
        max_size: int = 5,
        command_timeout: float = 30,
    ) -> "Database":
        pool = await asyncpg.create_pool(
            dsn=sanitize_database_url(dsn),
            min_size=min_size,
            max_size=max_size,
            command_timeout=command_timeout,
            ssl=_ssl_context(ssl_mode),
            init=_init_connection,
        )
        return cls(pool)

    async def close(self) -> None:
        await self._pool.close()

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        row = await self._pool.fetchrow(sql, *args)
        return _record_to_dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        rows = await self._pool.fetch(sql, *args)
        return [_record_to_dict(r) for r in rows]

    async def fetch_value(self, sql: str, *args: Any) -> Any:
        return await self._pool.fetchval(sql, *args)

    async def execute(self, sql: str, *args: Any) -> None:
        """
        Run a statement (INSERT/UPDATE/DELETE/DDL). No result returned.
        """
        await self._pool.execute(sql, *args)

    async def write_one(self, sql: str, *args: Any) -> WriteResult:
        """
        Run a write statement with RETURNING and classify storage errors.

        Unique-constraint violations come back as CONFLICT; any other
        database error is logged and comes back as FAILURE.
        """
        try:
            row = await self.fetch_one(sql, *args)
        except asyncpg.UniqueViolationError as exc:
            logger.info("Unique constraint violated: %s", getattr(exc, "constraint_name", None) or exc)
            return WriteResult(error=StorageErrorKind.CONFLICT)
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError):
            logger.exception("Write statement failed")
            return WriteResult(error=StorageErrorKind.FAILURE)
        return WriteResult(row=row)

    async def ping(self) -> bool:
        try:
            return await self.fetch_value("SELECT 1") == 1
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError):
            logger.warning("Database ping failed", exc_info=True)
            return False
