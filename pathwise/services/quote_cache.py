# pathwise/services/quote_cache.py
"""
Optional Redis cache for upstream market-data payloads.

With REDIS_URL unset every call is a no-op miss, so the app and tests run
without a Redis server. Cache errors are logged and treated as misses.
"""
import json
import logging
from typing import Any, Optional

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from pathwise.core.config import settings

logger = logging.getLogger(__name__)


class QuoteCache:
    def __init__(self, url: Optional[str] = None, ttl: Optional[int] = None):
        self._url = url if url is not None else settings.REDIS_URL
        self._ttl = ttl or settings.STOCK_CACHE_TTL_SEC
        self._client = None

    @property
    def enabled(self) -> bool:
        return bool(self._url)

    def _get_client(self):
        if self._client is None:
            self._client = aioredis.from_url(self._url, decode_responses=True)
        return self._client

    async def get(self, key: str) -> Optional[Any]:
        if not self.enabled:
            return None
        try:
            val = await self._get_client().get(key)
        except RedisError as exc:
            logger.warning("Quote cache read failed for %s: %s", key, exc)
            return None
        if val is None:
            return None
        try:
            return json.loads(val)
        except ValueError:
            logger.warning("Quote cache entry %s is not valid JSON; ignoring", key)
            return None

    async def set(self, key: str, value: Any) -> None:
        if not self.enabled:
            return
        try:
            await self._get_client().set(key, json.dumps(value), ex=self._ttl)
        except RedisError as exc:
            logger.warning("Quote cache write failed for %s: %s", key, exc)


cache = QuoteCache()
