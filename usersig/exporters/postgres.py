"""PostgreSQL exporter for verification audit records."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import asyncpg

from .base import Exporter

if TYPE_CHECKING:
    from ..audit import AuditRecord


INSERT_SQL = """
INSERT INTO usersig_verifications (
    audit_id,
    sdkappid,
    identifier,
    valid,
    reason,
    message,
    issued_at,
    expire,
    has_userbuf,
    checked_at
)
VALUES (
    $1::uuid, $2, $3, $4, $5, $6, $7, $8, $9, $10
)
"""


class PostgresExporter(Exporter):
    """Exporter that persists audit records into PostgreSQL using ``asyncpg``."""

    def __init__(
        self,
        dsn: Optional[str] = None,
        *,
        pool: Optional[asyncpg.Pool] = None,
        min_size: int = 1,
        max_size: int = 10,
    ) -> None:
        self._dsn = dsn
        self._pool = pool
        self._min_size = min_size
        self._max_size = max_size

    async def connect(self) -> None:
        """Initialize a connection pool if one was not supplied."""
        if self._pool is not None:
            return
        if not self._dsn:
            raise ValueError("Either `dsn` or `pool` must be provided for PostgresExporter.")

        self._pool = await asyncpg.create_pool(
            dsn=self._dsn,
            min_size=self._min_size,
            max_size=self._max_size,
        )

    async def export(self, record: "AuditRecord") -> None:
        """Insert one verification record."""
        if self._pool is None:
            await self.connect()

        assert self._pool is not None
        payload = record.to_dict()

        async with self._pool.acquire() as conn:
            await conn.execute(
                INSERT_SQL,
                payload["audit_id"],
                payload["sdkappid"],
                payload["identifier"],
                payload["valid"],
                payload["reason"],
                payload["message"],
                payload["issued_at"],
                payload["expire"],
                payload["has_userbuf"],
                payload["checked_at"],
            )

    async def close(self) -> None:
        """Close the underlying pool if it exists."""
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
