"""
db/postgres.py
What this file does:
- Owns the asyncpg connection pool for the case table.
- Decides the TLS policy from the connection string (hosted DB -> TLS without
  certificate verification, local DB -> plain connection).
- Exposes parameterized execute/fetch helpers; driver errors propagate.

The pool is opened on startup when Postgres is up, otherwise on the first
query, so the process serves /health even while the database is down.
"""

from __future__ import annotations

import asyncio
import ssl
from typing import Any, List, Optional, Union

import asyncpg

LOCAL_MARKERS = ("localhost", "127.0.0.1")


def ssl_for_dsn(dsn: str) -> Union[bool, ssl.SSLContext]:
    if any(marker in dsn for marker in LOCAL_MARKERS):
        return False
    ctx = ssl.create_default_context()
    ctx.check_hostname = False
    ctx.verify_mode = ssl.CERT_NONE
    return ctx


class Database:
    def __init__(self, dsn: str, min_size: int = 1, max_size: int = 10):
        self._dsn = dsn
        self._min_size = min_size
        self._max_size = max_size
        self._lock = asyncio.Lock()
        self.pool: Optional[asyncpg.Pool] = None

    async def connect(self) -> asyncpg.Pool:
        async with self._lock:
            if self.pool is None:
                self.pool = await asyncpg.create_pool(
                    dsn=self._dsn,
                    min_size=self._min_size,
                    max_size=self._max_size,
                    ssl=ssl_for_dsn(self._dsn),
                )
            return self.pool

    async def close(self) -> None:
        if self.pool is not None:
            await self.pool.close()
            self.pool = None

    async def _get_pool(self) -> asyncpg.Pool:
        if self.pool is not None:
            return self.pool
        return await self.connect()

    async def execute(self, query: str, *args: Any) -> str:
        return await (await self._get_pool()).execute(query, *args)

    async def fetch(self, query: str, *args: Any) -> List[asyncpg.Record]:
        return await (await self._get_pool()).fetch(query, *args)

    async def fetchrow(self, query: str, *args: Any) -> Optional[asyncpg.Record]:
        return await (await self._get_pool()).fetchrow(query, *args)
