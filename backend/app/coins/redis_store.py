"""Redis-backed cache store."""

from __future__ import annotations

import asyncio
import logging

from redis import Redis, RedisError

from .errors import CacheError
from .interface import CacheStore

logger = logging.getLogger(__name__)


class RedisCacheStore(CacheStore):
    """CacheStore backed by a shared Redis instance.

    The redis client is synchronous; calls run in a worker thread so the event
    loop keeps serving requests while Redis answers.
    """

    def __init__(self, url: str, password: str | None = None, client: Redis | None = None) -> None:
        if client is None:
            client = Redis.from_url(url, password=password)
        self._client = client

    async def get(self, key: str) -> str | bytes | None:
        # Values come back as raw bytes; deserialize_snapshot decodes them
        try:
            return await asyncio.to_thread(self._client.get, key)
        except RedisError as e:
            raise CacheError("get", str(e)) from e

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        try:
            await asyncio.to_thread(self._client.setex, key, ttl_seconds, value)
        except RedisError as e:
            raise CacheError("set", str(e)) from e

    async def close(self) -> None:
        try:
            await asyncio.to_thread(self._client.close)
        except RedisError as e:
            logger.warning("Redis close failed: %s", e)
