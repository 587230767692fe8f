"""Redis-backed persistence gateway."""

from __future__ import annotations

import asyncio
import logging
import os
import ssl
from typing import Any

import redis.asyncio as redis

logger = logging.getLogger(__name__)


class RedisGateway:
    """PersistenceGateway over a Redis server.

    The connection is opened lazily. When Redis is unreachable, reads
    return None and writes/deletes return False; the caller's in-memory
    state keeps working.
    """

    def __init__(self, redis_url: str | None = None) -> None:
        """Initialize the gateway.

        Args:
            redis_url: Connection URL (defaults to $REDIS_URL, then localhost)
        """
        self._redis_url = redis_url or os.environ.get("REDIS_URL", "redis://localhost:6379/0")
        self._client: redis.Redis | None = None
        self._connect_lock = asyncio.Lock()

    @staticmethod
    def _tls_kwargs(redis_url: str) -> dict[str, Any]:
        """Build TLS keyword arguments when using rediss:// URLs."""
        if not redis_url.startswith("rediss://"):
            return {}

        cert_path = os.environ.get("REDIS_TLS_CERT_PATH")
        if cert_path:
            ssl_ctx = ssl.create_default_context(cafile=cert_path)
        else:
            ssl_ctx = ssl.create_default_context()
        ssl_ctx.check_hostname = True
        ssl_ctx.verify_mode = ssl.CERT_REQUIRED
        return {"ssl": ssl_ctx}

    async def _ensure_client(self) -> redis.Redis | None:
        """Get or create the async Redis client.

        Concurrent first calls share one connection attempt.
        """
        if self._client is not None:
            return self._client
        async with self._connect_lock:
            if self._client is not None:
                return self._client
            client = redis.from_url(  # type: ignore[no-untyped-call]
                self._redis_url,
                decode_responses=True,
                **self._tls_kwargs(self._redis_url),
            )
            try:
                await client.ping()
            except (redis.ConnectionError, redis.TimeoutError) as exc:
                logger.warning("Redis unavailable at %s: %s", self._redis_url, exc)
                await client.aclose()
                return None
            self._client = client
        return self._client

    async def get(self, key: str) -> str | None:
        """Get value by key."""
        client = await self._ensure_client()
        if client is None:
            return None
        result = await client.get(key)
        return str(result) if result is not None else None

    async def set(self, key: str, value: str) -> bool:
        """Store a serialized value."""
        client = await self._ensure_client()
        if client is None:
            return False
        return bool(await client.set(key, value))

    async def delete(self, key: str) -> bool:
        """Delete key."""
        client = await self._ensure_client()
        if client is None:
            return False
        return bool(await client.delete(key))

    async def close(self) -> None:
        """Close the underlying connection pool."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
