"""
Redis event log storage.

Each log uses two keys:

    <prefix>:<log>:docs   hash, field = index, value = JSON document
    <prefix>:<log>:order  sorted set, member = index, score = index

Range reads, the highest index and the size all come from the sorted set,
so no key scans or client-side sorting are needed.
"""

from __future__ import annotations

import json
from typing import Any

import redis.asyncio as redis

from feeledger.storage.base import StorageBackend

DEFAULT_REDIS_URL = "redis://localhost:6379/0"


class RedisStorage(StorageBackend):
    """Event logs kept in Redis, shared between processes."""

    name = "redis"

    def __init__(
        self,
        redis_url: str | None = None,
        prefix: str = "feeledger",
        client: redis.Redis | None = None,
    ) -> None:
        """
        Args:
            redis_url: Connection URL (defaults to a local server)
            prefix: Namespace for every key this backend writes
            client: Existing client to use instead of connecting lazily
        """
        self._redis_url = redis_url or DEFAULT_REDIS_URL
        self._prefix = prefix
        self._client = client

    @property
    def redis_url(self) -> str:
        return self._redis_url

    def _get_client(self) -> redis.Redis:
        if self._client is None:
            self._client = redis.from_url(self._redis_url, decode_responses=True)
        return self._client

    def _docs_key(self, log: str) -> str:
        return f"{self._prefix}:{log}:docs"

    def _order_key(self, log: str) -> str:
        return f"{self._prefix}:{log}:order"

    async def save(self, log: str, index: int, document: dict[str, Any]) -> None:
        client = self._get_client()
        async with client.pipeline(transaction=True) as pipe:
            pipe.hset(self._docs_key(log), str(index), json.dumps(document))
            pipe.zadd(self._order_key(log), {str(index): index})
            await pipe.execute()

    async def get(self, log: str, index: int) -> dict[str, Any] | None:
        raw = await self._get_client().hget(self._docs_key(log), str(index))
        return None if raw is None else json.loads(raw)

    async def query(
        self,
        log: str,
        start: int = 0,
        stop: int | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        client = self._get_client()
        upper = "+inf" if stop is None else f"({stop}"
        if limit is None:
            members = await client.zrangebyscore(self._order_key(log), start, upper)
        else:
            members = await client.zrangebyscore(
                self._order_key(log), start, upper, start=0, num=limit
            )
        if not members:
            return []

        raw_documents = await client.hmget(self._docs_key(log), members)
        return [json.loads(raw) for raw in raw_documents if raw is not None]

    async def last_index(self, log: str) -> int | None:
        top = await self._get_client().zrange(self._order_key(log), -1, -1, withscores=True)
        if not top:
            return None
        _, score = top[0]
        return int(score)

    async def count(self, log: str) -> int:
        return await self._get_client().zcard(self._order_key(log))

    async def clear(self, log: str) -> int:
        client = self._get_client()
        removed = await client.zcard(self._order_key(log))
        await client.delete(self._docs_key(log), self._order_key(log))
        return removed
